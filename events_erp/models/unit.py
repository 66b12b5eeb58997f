"""
Events ERP - Unit Model
Unidades administrativas da organização
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime

from events_erp.database import Base


class Unit(Base):
    """Divisão organizacional que delimita a visibilidade de eventos e usuários"""
    __tablename__ = "units"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), unique=True, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
