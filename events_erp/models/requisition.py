"""
Events ERP - Requisition Model
Agrupamento de lançamentos sob um número de requisição
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey
from sqlalchemy.orm import relationship

from events_erp.database import Base


class Requisition(Base):
    """Modelo de requisição"""
    __tablename__ = "requisitions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Número sorteado em [100000, 999999], único em todo o sistema
    number = Column(Integer, unique=True, nullable=False, index=True)

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    event = relationship("Event", back_populates="requisitions")

    # Excluir a requisição exclui os lançamentos dela
    transactions = relationship(
        "Transaction",
        lazy="selectin",
        cascade="all, delete",
        order_by="Transaction.created_at",
    )

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        from events_erp.services.finance import requisition_total

        return {
            "id": self.id,
            "number": self.number,
            "event_id": self.event_id,
            "transactions": [t.to_dict() for t in self.transactions],
            "total": float(requisition_total(self.transactions)),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
