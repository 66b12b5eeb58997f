"""
Events ERP - Event Schemas
"""
from decimal import Decimal
from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, List
from datetime import datetime

from events_erp.models.event import EventStatus
from .base import RequestSchema, UTCDatetime
from .transaction import TransactionResponse


class EventCreate(RequestSchema):
    name: str = Field(..., min_length=1, max_length=255)
    event_code: Optional[str] = Field(None, max_length=50)
    start_date: UTCDatetime
    end_date: UTCDatetime
    location: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    budget: Decimal = Field(Decimal("0"), ge=0, max_digits=14, decimal_places=2)
    # Só é considerado quando quem cria é MASTER
    unit_id: Optional[str] = None
    project: str = Field(..., min_length=1, max_length=255)
    action: str = Field(..., min_length=1, max_length=255)
    responsible_unit: str = Field(..., min_length=1, max_length=255)
    responsible_email: EmailStr
    responsible_phone: str = Field(..., min_length=1, max_length=50)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdate(RequestSchema):
    """Atualização parcial. unit_id não é aceito: a unidade é fixa após a criação."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    event_code: Optional[str] = Field(None, max_length=50)
    start_date: Optional[UTCDatetime] = None
    end_date: Optional[UTCDatetime] = None
    location: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    budget: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    status: Optional[EventStatus] = None
    cancellation_reason: Optional[str] = None
    project: Optional[str] = Field(None, min_length=1, max_length=255)
    action: Optional[str] = Field(None, min_length=1, max_length=255)
    responsible_unit: Optional[str] = Field(None, min_length=1, max_length=255)
    responsible_email: Optional[EmailStr] = None
    responsible_phone: Optional[str] = Field(None, min_length=1, max_length=50)


class EventSummaryResponse(BaseModel):
    budget: float
    spent: float
    income: float
    balance: float


class EventResponse(BaseModel):
    id: str
    name: str
    event_code: Optional[str] = None
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None
    description: Optional[str] = None
    budget: float = 0
    status: str
    cancellation_reason: Optional[str] = None
    project: Optional[str] = None
    action: Optional[str] = None
    responsible_unit: Optional[str] = None
    responsible_email: Optional[str] = None
    responsible_phone: Optional[str] = None
    user_id: str
    unit_id: Optional[str] = None
    unit_name: Optional[str] = None
    summary: EventSummaryResponse
    transactions: List[TransactionResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
