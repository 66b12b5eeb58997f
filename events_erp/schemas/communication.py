"""
Events ERP - Communication Item Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from events_erp.models.communication import CommunicationStatus
from .base import RequestSchema, UTCDatetime
from .catalog import OperatorResponse, ServiceResponse


class CommunicationItemCreate(RequestSchema):
    """Usado também no PUT: a atualização reenvia o item completo"""
    event_id: str
    service_id: str
    operator_id: Optional[str] = None
    delivery_date: UTCDatetime
    quantity: int = Field(1, ge=1)
    status: CommunicationStatus


class CommunicationItemResponse(BaseModel):
    id: str
    event_id: str
    service_id: str
    service: Optional[ServiceResponse] = None
    operator_id: Optional[str] = None
    operator: Optional[OperatorResponse] = None
    delivery_date: datetime
    quantity: int
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
