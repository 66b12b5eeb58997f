"""
Events ERP - User Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from events_erp.models.user import UserRole
from .base import NormalizedEmail, RequestSchema


class UserCreate(RequestSchema):
    name: str = Field(..., min_length=1, max_length=255)
    email: NormalizedEmail
    password: str = Field(..., min_length=6)
    role: UserRole
    unit_id: Optional[str] = None


class UserUpdate(RequestSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[NormalizedEmail] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[UserRole] = None
    unit_id: Optional[str] = None


class ProfileUpdate(RequestSchema):
    """Autoatendimento: papel e unidade não são alteráveis aqui"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[NormalizedEmail] = None
    password: Optional[str] = Field(None, min_length=6)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    unit_id: Optional[str] = None
    unit_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
