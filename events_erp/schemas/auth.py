"""
Events ERP - Auth Schemas
"""
from pydantic import BaseModel, Field

from .base import NormalizedEmail


class LoginRequest(BaseModel):
    email: NormalizedEmail
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    access_token: str
    token_type: str = "bearer"
    user: dict
