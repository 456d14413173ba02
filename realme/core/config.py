import os
from dotenv import load_dotenv

load_dotenv()  # Load from .env file

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./realme.db")

# OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_CHAT_MODEL = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
OPENAI_MAX_TOKENS = int(os.getenv("OPENAI_MAX_TOKENS", "2048"))

# Flow retry policy
FLOW_MAX_ATTEMPTS = int(os.getenv("FLOW_MAX_ATTEMPTS", "3"))
FLOW_RETRY_DELAY_SECONDS = float(os.getenv("FLOW_RETRY_DELAY_SECONDS", "1.0"))

# Wellness store
STORAGE_KEY_PREFIX = os.getenv("STORAGE_KEY_PREFIX", "realme")

# HTTP
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
ENABLE_DEBUG_ROUTES = os.getenv("ENABLE_DEBUG_ROUTES", "false").lower() in ("1", "true", "yes")
