"""
Events ERP - Transaction Schemas
"""
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from events_erp.models.transaction import TransactionType, TransactionStatus
from .base import RequestSchema, UTCDatetime


class TransactionCreate(RequestSchema):
    description: str = Field(..., min_length=1, max_length=500)
    amount: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
    type: TransactionType = TransactionType.EXPENSE
    status: TransactionStatus = TransactionStatus.QUOTATION
    quantity: int = Field(1, ge=1)
    requisition_num: Optional[str] = Field(None, max_length=50)
    service_order_num: Optional[str] = Field(None, max_length=50)
    delivery_date: Optional[UTCDatetime] = None
    event_id: str
    requisition_id: Optional[str] = None


class TransactionUpdate(RequestSchema):
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    quantity: Optional[int] = Field(None, ge=1)
    requisition_num: Optional[str] = Field(None, max_length=50)
    service_order_num: Optional[str] = Field(None, max_length=50)
    delivery_date: Optional[UTCDatetime] = None
    requisition_id: Optional[str] = None


class TransactionResponse(BaseModel):
    id: str
    description: str
    amount: float
    type: str
    status: str
    quantity: int
    total: float
    requisition_num: Optional[str] = None
    service_order_num: Optional[str] = None
    delivery_date: Optional[datetime] = None
    event_id: str
    requisition_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
