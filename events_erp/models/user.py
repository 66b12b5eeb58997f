"""
Events ERP - User Model
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from events_erp.database import Base


class UserRole(str, enum.Enum):
    """Papéis, do mais ao menos privilegiado"""
    MASTER = "MASTER"
    MANAGER = "MANAGER"
    STANDARD = "STANDARD"
    OBSERVER = "OBSERVER"


class User(Base):
    """Modelo de usuário"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.STANDARD.value)

    unit_id = Column(String(36), ForeignKey("units.id"), nullable=True, index=True)
    unit = relationship("Unit", lazy="selectin")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        # Nunca expõe o hash da senha
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "unit_id": self.unit_id,
            "unit_name": self.unit.name if self.unit else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
