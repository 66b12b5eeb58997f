"""
Events ERP - Transaction Model
Lançamentos (receitas e despesas) de um evento
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Numeric, ForeignKey, CheckConstraint

from events_erp.database import Base


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionStatus(str, enum.Enum):
    QUOTATION = "QUOTATION"
    APPROVED = "APPROVED"
    PRODUCTION = "PRODUCTION"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


class Transaction(Base):
    """Modelo de lançamento"""
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_transactions_quantity_positive"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    description = Column(String(500), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    type = Column(String(10), nullable=False, default=TransactionType.EXPENSE.value)
    status = Column(String(20), nullable=False, default=TransactionStatus.QUOTATION.value, index=True)
    quantity = Column(Integer, nullable=False, default=1)

    # Campos legados em texto livre
    requisition_num = Column(String(50))
    service_order_num = Column(String(50))

    delivery_date = Column(DateTime)

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    requisition_id = Column(String(36), ForeignKey("requisitions.id", ondelete="CASCADE"), nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def total(self):
        """Valor do lançamento ponderado pela quantidade"""
        return (self.amount or 0) * (self.quantity or 1)

    def to_dict(self):
        return {
            "id": self.id,
            "description": self.description,
            "amount": float(self.amount) if self.amount is not None else 0.0,
            "type": self.type,
            "status": self.status,
            "quantity": self.quantity,
            "total": float(self.total),
            "requisition_num": self.requisition_num,
            "service_order_num": self.service_order_num,
            "delivery_date": self.delivery_date.isoformat() if self.delivery_date else None,
            "event_id": self.event_id,
            "requisition_id": self.requisition_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
