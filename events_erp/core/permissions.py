"""
Events ERP - Authorization Policy

Política única de acesso por papel e unidade, usada por todos os routers:

- MASTER enxerga e altera tudo.
- MANAGER e STANDARD leem e escrevem dentro do seu escopo.
- OBSERVER apenas lê dentro do seu escopo.

Escopo: recursos cujo evento pertence à unidade do usuário; se o usuário não
tem unidade, apenas os eventos criados por ele.
"""
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import true

from events_erp.models import User, UserRole, Event, EventStatus

logger = logging.getLogger(__name__)

WRITER_ROLES = (UserRole.MASTER.value, UserRole.MANAGER.value, UserRole.STANDARD.value)
TRANSITION_ROLES = (UserRole.MASTER.value, UserRole.MANAGER.value)
CATALOG_ROLES = (UserRole.MASTER.value, UserRole.MANAGER.value)


def forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def in_scope(user: User, unit_id: Optional[str], owner_id: Optional[str]) -> bool:
    """Decide se o usuário alcança um recurso com a unidade/dono informados"""
    if user.role == UserRole.MASTER.value:
        return True
    if user.unit_id:
        return unit_id == user.unit_id
    return owner_id is not None and owner_id == user.id


def event_scope_filter(user: User):
    """Cláusula WHERE equivalente a in_scope() para listagens de eventos"""
    if user.role == UserRole.MASTER.value:
        return true()
    if user.unit_id:
        return Event.unit_id == user.unit_id
    return Event.user_id == user.id


def ensure_event_scope(user: User, event: Event, resource: str = "Event") -> None:
    """403 se o evento (ou recurso filho dele) está fora do escopo do usuário"""
    if in_scope(user, event.unit_id, event.user_id):
        return
    logger.info(f"Acesso negado: {user.email} ({user.role}) -> {resource} do evento {event.id}")
    if user.unit_id:
        raise forbidden(f"Access denied: {resource} belongs to another unit")
    raise forbidden("Access denied")


def ensure_can_write(user: User, resource: str) -> None:
    """Observadores são somente leitura"""
    if user.role not in WRITER_ROLES:
        raise forbidden(f"Observers cannot modify {resource}")


def ensure_event_unlocked(user: User, event: Event, resource: str = "event") -> None:
    """Evento concluído só aceita alterações de um MASTER"""
    if event.status == EventStatus.COMPLETED.value and user.role != UserRole.MASTER.value:
        raise forbidden(f"Event is completed: only MASTER can modify its {resource}")


def authorize_event_write(user: User, event: Event, resource: str = "event") -> None:
    """Checagem completa para criar/alterar/excluir algo ligado a um evento"""
    ensure_can_write(user, resource)
    ensure_event_scope(user, event, resource.capitalize())
    ensure_event_unlocked(user, event, resource)


def ensure_role(user: User, *roles: str, detail: str = "Access denied: insufficient permissions") -> None:
    if user.role not in roles:
        logger.info(f"Acesso negado por papel: {user.email} ({user.role}) requer {roles}")
        raise forbidden(detail)
