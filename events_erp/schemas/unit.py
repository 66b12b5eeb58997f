"""
Events ERP - Unit Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .base import RequestSchema


class UnitCreate(RequestSchema):
    name: str = Field(..., min_length=1, max_length=255)


class UnitResponse(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
