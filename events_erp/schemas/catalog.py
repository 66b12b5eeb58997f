"""
Events ERP - Catalog Schemas (operadores e serviços)
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .base import RequestSchema


class OperatorCreate(RequestSchema):
    name: str = Field(..., min_length=1, max_length=255)


class OperatorResponse(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ServiceCreate(RequestSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class ServiceResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
