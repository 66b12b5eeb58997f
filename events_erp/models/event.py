"""
Events ERP - Event Model
Evento planejado com orçamento e ciclo de vida
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from events_erp.database import Base


class EventStatus(str, enum.Enum):
    """Status do ciclo de vida do evento"""
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class Event(Base):
    """Modelo de Evento"""
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False, index=True)
    event_code = Column(String(50))
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    location = Column(String(255))
    description = Column(Text)
    budget = Column(Numeric(14, 2), nullable=False, default=0)

    status = Column(String(20), nullable=False, default=EventStatus.OPEN.value, index=True)
    cancellation_reason = Column(Text)

    # Dados descritivos
    project = Column(String(255), nullable=False)
    action = Column(String(255), nullable=False)
    responsible_unit = Column(String(255), nullable=False)
    responsible_email = Column(String(255), nullable=False)
    responsible_phone = Column(String(50), nullable=False)

    # Dono e unidade (fixos após a criação)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    unit_id = Column(String(36), ForeignKey("units.id"), nullable=True, index=True)
    unit = relationship("Unit", lazy="selectin")

    transactions = relationship(
        "Transaction",
        lazy="selectin",
        cascade="all, delete",
        order_by="Transaction.created_at",
    )
    requisitions = relationship(
        "Requisition",
        back_populates="event",
        cascade="all, delete",
    )
    communication_items = relationship("CommunicationItem", cascade="all, delete")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        from events_erp.services.finance import summarize_event

        return {
            "id": self.id,
            "name": self.name,
            "event_code": self.event_code,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "location": self.location,
            "description": self.description,
            "budget": float(self.budget) if self.budget is not None else 0.0,
            "status": self.status,
            "cancellation_reason": self.cancellation_reason,
            "project": self.project,
            "action": self.action,
            "responsible_unit": self.responsible_unit,
            "responsible_email": self.responsible_email,
            "responsible_phone": self.responsible_phone,
            "user_id": self.user_id,
            "unit_id": self.unit_id,
            "unit_name": self.unit.name if self.unit else None,
            "summary": summarize_event(self).to_dict(),
            "transactions": [t.to_dict() for t in self.transactions],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
