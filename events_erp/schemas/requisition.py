"""
Events ERP - Requisition Schemas
"""
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from .base import RequestSchema
from .transaction import TransactionResponse


class RequisitionCreate(RequestSchema):
    # O número é gerado pelo servidor
    event_id: str


class RequisitionResponse(BaseModel):
    id: str
    number: int
    event_id: str
    transactions: List[TransactionResponse] = []
    total: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
