from .auth import LoginRequest, LoginResponse
from .unit import UnitCreate, UnitResponse
from .user import UserCreate, UserUpdate, ProfileUpdate, UserResponse
from .event import EventCreate, EventUpdate, EventResponse, EventSummaryResponse
from .transaction import TransactionCreate, TransactionUpdate, TransactionResponse
from .requisition import RequisitionCreate, RequisitionResponse
from .catalog import OperatorCreate, OperatorResponse, ServiceCreate, ServiceResponse
from .communication import CommunicationItemCreate, CommunicationItemResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "UnitCreate",
    "UnitResponse",
    "UserCreate",
    "UserUpdate",
    "ProfileUpdate",
    "UserResponse",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "EventSummaryResponse",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "RequisitionCreate",
    "RequisitionResponse",
    "OperatorCreate",
    "OperatorResponse",
    "ServiceCreate",
    "ServiceResponse",
    "CommunicationItemCreate",
    "CommunicationItemResponse"
]
