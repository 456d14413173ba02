from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    database: str


class StoredRecordResponse(BaseModel):
    key: str
    size: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
