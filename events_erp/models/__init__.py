from .unit import Unit
from .user import User, UserRole
from .event import Event, EventStatus
from .transaction import Transaction, TransactionType, TransactionStatus
from .requisition import Requisition
from .catalog import Operator, Service
from .communication import CommunicationItem, CommunicationStatus

__all__ = [
    "Unit",
    "User",
    "UserRole",
    "Event",
    "EventStatus",
    "Transaction",
    "TransactionType",
    "TransactionStatus",
    "Requisition",
    "Operator",
    "Service",
    "CommunicationItem",
    "CommunicationStatus"
]
