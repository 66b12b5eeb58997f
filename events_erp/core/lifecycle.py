"""
Events ERP - Event Lifecycle

Máquina de estados do evento, validada no servidor:

    OPEN -> IN_PROGRESS
    IN_PROGRESS -> PAUSED | COMPLETED | CANCELED
    PAUSED -> IN_PROGRESS | COMPLETED | CANCELED
    COMPLETED -> IN_PROGRESS   (somente MASTER)
    CANCELED -> IN_PROGRESS    (somente MASTER, reabertura)

Apenas MASTER e MANAGER mudam status. Cancelar exige motivo, que fica gravado
até o evento ser reaberto.
"""
import logging
from typing import Optional

from fastapi import HTTPException, status

from events_erp.models import User, UserRole, Event, EventStatus
from events_erp.core.permissions import TRANSITION_ROLES, forbidden

logger = logging.getLogger(__name__)

OPEN = EventStatus.OPEN.value
IN_PROGRESS = EventStatus.IN_PROGRESS.value
PAUSED = EventStatus.PAUSED.value
COMPLETED = EventStatus.COMPLETED.value
CANCELED = EventStatus.CANCELED.value

TRANSITIONS = {
    OPEN: {IN_PROGRESS},
    IN_PROGRESS: {PAUSED, COMPLETED, CANCELED},
    PAUSED: {IN_PROGRESS, COMPLETED, CANCELED},
    COMPLETED: set(),
    CANCELED: set(),
}

# Transições extras reservadas ao MASTER
MASTER_TRANSITIONS = {
    COMPLETED: {IN_PROGRESS},
    CANCELED: {IN_PROGRESS},
}


def allowed_transitions(user: User, current: str) -> set:
    """Status para os quais o usuário pode levar um evento em `current`"""
    if user.role not in TRANSITION_ROLES:
        return set()
    targets = set(TRANSITIONS.get(current, set()))
    if user.role == UserRole.MASTER.value:
        targets |= MASTER_TRANSITIONS.get(current, set())
    return targets


def check_transition(user: User, current: str, target: str, reason: Optional[str] = None) -> None:
    """Levanta HTTPException se a transição current -> target não é permitida"""
    if user.role not in TRANSITION_ROLES:
        raise forbidden("Only MASTER or MANAGER can change event status")

    if target not in allowed_transitions(user, current):
        if target in MASTER_TRANSITIONS.get(current, set()):
            raise forbidden(f"Only MASTER can move an event from {current} to {target}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status transition: {current} -> {target}"
        )

    if target == CANCELED and not (reason or "").strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="cancellation_reason is required to cancel an event"
        )


def ensure_fields_editable(user: User, event: Event) -> None:
    """Edição de campos: bloqueada em CANCELED, e em COMPLETED para não-MASTER"""
    if event.status == CANCELED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Canceled event must be reopened before it can be edited"
        )
    if event.status == COMPLETED and user.role != UserRole.MASTER.value:
        raise forbidden("Event is completed: only MASTER can edit it")


def apply_event_update(user: User, event: Event, changes: dict) -> Event:
    """
    Aplica uma atualização parcial (campos e/ou status) a um evento.

    Os campos são avaliados contra o status anterior à transição pedida no
    mesmo request.
    """
    changes = dict(changes)
    target = changes.pop("status", None)
    reason = changes.pop("cancellation_reason", None)

    if changes:
        ensure_fields_editable(user, event)

    transition = target is not None and target != event.status
    if transition:
        check_transition(user, event.status, target, reason)

    for field, value in changes.items():
        setattr(event, field, value)

    if transition:
        previous = event.status
        event.status = target
        if target == CANCELED:
            event.cancellation_reason = reason.strip()
        elif previous == CANCELED:
            event.cancellation_reason = None
        logger.info(f"Evento {event.id}: {previous} -> {target} por {user.email}")

    return event
