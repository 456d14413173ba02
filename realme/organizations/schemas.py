from typing import Any, Dict, List
from pydantic import BaseModel

from realme.wellness.schemas import Identity


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class OrganizationInsightsRequest(BaseSchema):
    identity: Identity
    members: List[Dict[str, Any]] = []
