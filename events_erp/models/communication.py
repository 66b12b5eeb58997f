"""
Events ERP - Communication Item Model
Solicitações de comunicação/marketing de um evento
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from events_erp.database import Base


class CommunicationStatus(str, enum.Enum):
    AGUARDANDO = "AGUARDANDO"
    EM_ATENDIMENTO = "EM_ATENDIMENTO"
    CRIACAO = "CRIACAO"
    APROVADO = "APROVADO"
    REPROVADO = "REPROVADO"


class CommunicationItem(Base):
    """Modelo de item de comunicação"""
    __tablename__ = "communication_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_communication_items_quantity_positive"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)

    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    service = relationship("Service", lazy="selectin")

    operator_id = Column(String(36), ForeignKey("operators.id"), nullable=True)
    operator = relationship("Operator", lazy="selectin")

    delivery_date = Column(DateTime, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    status = Column(String(20), nullable=False, default=CommunicationStatus.AGUARDANDO.value)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "event_id": self.event_id,
            "service_id": self.service_id,
            "service": self.service.to_dict() if self.service else None,
            "operator_id": self.operator_id,
            "operator": self.operator.to_dict() if self.operator else None,
            "delivery_date": self.delivery_date.isoformat() if self.delivery_date else None,
            "quantity": self.quantity,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
