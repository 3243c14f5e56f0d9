from datetime import datetime

from pydantic import BaseModel


class StringRequest(BaseModel):
    """Request schema for creating/analyzing a string."""
    value: str


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: datetime
    version: str
