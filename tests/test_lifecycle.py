"""Testes da máquina de estados do evento (sem HTTP)"""
import pytest
from fastapi import HTTPException

from events_erp.core.lifecycle import allowed_transitions, apply_event_update, check_transition
from events_erp.models import Event, User, UserRole


def make_user(role: UserRole) -> User:
    return User(id=f"{role.value.lower()}-id", email=f"{role.value.lower()}@sebrae.com.br", role=role.value)


def make_event(status: str, reason: str = None) -> Event:
    return Event(id="event-id", name="Evento", status=status, cancellation_reason=reason)


MASTER = make_user(UserRole.MASTER)
MANAGER = make_user(UserRole.MANAGER)
STANDARD = make_user(UserRole.STANDARD)
OBSERVER = make_user(UserRole.OBSERVER)


@pytest.mark.parametrize("current, expected", [
    ("OPEN", {"IN_PROGRESS"}),
    ("IN_PROGRESS", {"PAUSED", "COMPLETED", "CANCELED"}),
    ("PAUSED", {"IN_PROGRESS", "COMPLETED", "CANCELED"}),
    ("COMPLETED", set()),
    ("CANCELED", set()),
])
def test_manager_transitions(current, expected):
    assert allowed_transitions(MANAGER, current) == expected


def test_master_can_reopen():
    assert allowed_transitions(MASTER, "COMPLETED") == {"IN_PROGRESS"}
    assert allowed_transitions(MASTER, "CANCELED") == {"IN_PROGRESS"}


@pytest.mark.parametrize("user", [STANDARD, OBSERVER])
def test_other_roles_have_no_transitions(user):
    assert allowed_transitions(user, "OPEN") == set()
    with pytest.raises(HTTPException) as exc:
        check_transition(user, "OPEN", "IN_PROGRESS")
    assert exc.value.status_code == 403


@pytest.mark.parametrize("current, target", [
    ("OPEN", "COMPLETED"),
    ("OPEN", "PAUSED"),
    ("PAUSED", "OPEN"),
    ("COMPLETED", "CANCELED"),
    ("CANCELED", "COMPLETED"),
])
def test_illegal_transitions_are_400(current, target):
    with pytest.raises(HTTPException) as exc:
        check_transition(MASTER, current, target, reason="motivo")
    assert exc.value.status_code == 400


def test_manager_cannot_reopen_completed_event():
    with pytest.raises(HTTPException) as exc:
        check_transition(MANAGER, "COMPLETED", "IN_PROGRESS")
    assert exc.value.status_code == 403


def test_cancel_without_reason_is_400():
    with pytest.raises(HTTPException) as exc:
        check_transition(MANAGER, "PAUSED", "CANCELED", reason="")
    assert exc.value.status_code == 400


def test_cancel_stores_trimmed_reason():
    event = make_event("IN_PROGRESS")

    apply_event_update(MANAGER, event, {"status": "CANCELED", "cancellation_reason": "  Chuva forte  "})

    assert event.status == "CANCELED"
    assert event.cancellation_reason == "Chuva forte"


def test_reopen_clears_reason():
    event = make_event("CANCELED", reason="Chuva forte")

    apply_event_update(MASTER, event, {"status": "IN_PROGRESS"})

    assert event.status == "IN_PROGRESS"
    assert event.cancellation_reason is None


def test_fields_are_judged_before_transition():
    # Editar e concluir no mesmo request é permitido para o MANAGER
    event = make_event("IN_PROGRESS")

    apply_event_update(MANAGER, event, {"name": "Final", "status": "COMPLETED"})

    assert event.name == "Final"
    assert event.status == "COMPLETED"


def test_completed_fields_are_master_only():
    event = make_event("COMPLETED")

    with pytest.raises(HTTPException) as exc:
        apply_event_update(MANAGER, event, {"name": "Outro"})
    assert exc.value.status_code == 403

    apply_event_update(MASTER, event, {"name": "Outro"})
    assert event.name == "Outro"


def test_canceled_fields_are_locked_even_for_master():
    event = make_event("CANCELED", reason="x")

    with pytest.raises(HTTPException) as exc:
        apply_event_update(MASTER, event, {"name": "Outro"})
    assert exc.value.status_code == 400


def test_same_status_is_not_a_transition():
    event = make_event("OPEN")

    apply_event_update(STANDARD, event, {"status": "OPEN", "location": "Boa Vista"})

    assert event.status == "OPEN"
    assert event.location == "Boa Vista"
