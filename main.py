import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from realme.core.config import CORS_ORIGINS, LOG_LEVEL
from realme.core.database import Base, engine, register_models
from realme.flows import routes as flows_router
from realme.system import routes as system_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Realme API",
    version="1.0.0",
    description="Backend for Realme: AI flows for journaling, planning, assessment and organization insights.",
)

# CORS config
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(flows_router.router)
app.include_router(system_router.router)


# DB Tables
@app.on_event("startup")
def create_tables():
    register_models()
    Base.metadata.create_all(bind=engine)
