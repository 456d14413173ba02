import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from realme.core import config
from realme.core.database import get_db
from realme.system.schemas import HealthResponse, StoredRecordResponse
from realme.wellness.models import KeyValueEntry

router = APIRouter(prefix="/system", tags=["System"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse, summary="Service and database health")
def health_route(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return HealthResponse(status="ok", database="ok")


@router.get("/debug/records", response_model=List[StoredRecordResponse])
def get_stored_records_route(db: Session = Depends(get_db)):
    if not config.ENABLE_DEBUG_ROUTES:
        raise HTTPException(status_code=404, detail="Not Found")
    entries = db.query(KeyValueEntry).order_by(KeyValueEntry.key).all()
    return [
        StoredRecordResponse(key=entry.key, size=len(entry.value), updated_at=entry.updated_at)
        for entry in entries
    ]
