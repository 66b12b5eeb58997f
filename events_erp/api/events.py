"""
Events ERP - Events API
CRUD de eventos com escopo por unidade e ciclo de vida
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.orm import selectinload

from events_erp.database import get_db
from events_erp.models import Event, EventStatus, Unit, User, UserRole
from events_erp.schemas import EventCreate, EventUpdate, EventResponse
from events_erp.api.auth import get_current_user
from events_erp.core.lifecycle import apply_event_update
from events_erp.core.permissions import (
    ensure_can_write,
    ensure_event_scope,
    ensure_event_unlocked,
    event_scope_filter
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])

# Campos opcionais que podem ser limpos com null numa atualização
NULLABLE_FIELDS = {"event_code", "location", "description"}


async def load_event(db: AsyncSession, event_id: str) -> Optional[Event]:
    result = await db.execute(
        select(Event)
        .options(selectinload(Event.transactions), selectinload(Event.unit))
        .where(Event.id == event_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_event_or_404(db: AsyncSession, event_id: str) -> Event:
    event = await load_event(db, event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )
    return event


@router.get("", response_model=List[EventResponse])
async def list_events(
    search: Optional[str] = Query(None),
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    unit_id: Optional[str] = Query(None, alias="unitId"),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Lista os eventos visíveis para o usuário"""
    query = (
        select(Event)
        .options(selectinload(Event.transactions), selectinload(Event.unit))
        .where(event_scope_filter(user))
    )

    if search:
        query = query.where(
            or_(
                Event.name.ilike(f"%{search}%"),
                Event.event_code.ilike(f"%{search}%"),
                Event.project.ilike(f"%{search}%")
            )
        )

    if status_filter:
        query = query.where(Event.status == status_filter.value)

    # Filtro por unidade só amplia algo para o MASTER; os demais já estão restritos
    if unit_id:
        query = query.where(Event.unit_id == unit_id)

    # Sem limit, devolve todos os eventos do escopo
    query = query.order_by(Event.start_date.asc()).offset(skip)
    if limit:
        query = query.limit(limit)

    result = await db.execute(query)
    events = result.scalars().all()

    return [e.to_dict() for e in events]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Retorna um evento com lançamentos e resumo financeiro"""
    event = await get_event_or_404(db, event_id)
    ensure_event_scope(user, event)
    return event.to_dict()


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: EventCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Cria novo evento (sempre em OPEN)"""
    ensure_can_write(user, "events")

    data = request.model_dump(exclude={"unit_id"})

    # Não-MASTER cria sempre na própria unidade
    unit_id = user.unit_id
    if user.role == UserRole.MASTER.value and request.unit_id:
        result = await db.execute(select(Unit).where(Unit.id == request.unit_id))
        if not result.scalar_one_or_none():
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Unit not found"
            )
        unit_id = request.unit_id

    event = Event(
        **data,
        status=EventStatus.OPEN.value,
        user_id=user.id,
        unit_id=unit_id,
    )
    db.add(event)
    await db.commit()

    logger.info(f"Evento criado: {event.name} ({event.id}) por {user.email}")

    event = await load_event(db, event.id)
    return event.to_dict()


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    request: EventUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Atualização parcial, incluindo transições de status"""
    ensure_can_write(user, "events")

    event = await get_event_or_404(db, event_id)
    ensure_event_scope(user, event)

    update_data = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }

    start_date = update_data.get("start_date", event.start_date)
    end_date = update_data.get("end_date", event.end_date)
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date"
        )

    apply_event_update(user, event, update_data)
    await db.commit()

    event = await load_event(db, event.id)
    return event.to_dict()


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Remove o evento com lançamentos, requisições e itens de comunicação"""
    ensure_can_write(user, "events")

    event = await get_event_or_404(db, event_id)
    ensure_event_scope(user, event)
    ensure_event_unlocked(user, event)

    await db.delete(event)
    await db.commit()

    logger.info(f"Evento removido: {event_id} por {user.email}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
