"""
Events ERP - Communications API
Solicitações de comunicação/marketing vinculadas a eventos
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from events_erp.database import get_db
from events_erp.models import CommunicationItem, Operator, Service, User, UserRole
from events_erp.schemas import CommunicationItemCreate, CommunicationItemResponse
from events_erp.api.auth import get_current_user
from events_erp.api.events import get_event_or_404
from events_erp.core.permissions import authorize_event_write, ensure_can_write, ensure_event_scope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/communications", tags=["Communications"])


async def get_item_or_404(db: AsyncSession, item_id: str) -> CommunicationItem:
    result = await db.execute(
        select(CommunicationItem)
        .options(selectinload(CommunicationItem.service), selectinload(CommunicationItem.operator))
        .where(CommunicationItem.id == item_id)
        .execution_options(populate_existing=True)
    )
    item = result.scalar_one_or_none()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Communication item not found"
        )
    return item


async def check_references(db: AsyncSession, request: CommunicationItemCreate, user: User) -> None:
    """Serviço obrigatório; operador obrigatório quando quem grava é MASTER"""
    result = await db.execute(select(Service.id).where(Service.id == request.service_id))
    if result.first() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service not found"
        )

    if request.operator_id:
        result = await db.execute(select(Operator.id).where(Operator.id == request.operator_id))
        if result.first() is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Operator not found"
            )
    elif user.role == UserRole.MASTER.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="operator_id is required for MASTER"
        )


@router.get("", response_model=List[CommunicationItemResponse])
async def list_items(
    event_id: str = Query(..., alias="eventId"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Lista os itens de comunicação de um evento (entrega mais recente primeiro)"""
    event = await get_event_or_404(db, event_id)
    ensure_event_scope(user, event, "Communication item")

    result = await db.execute(
        select(CommunicationItem)
        .options(selectinload(CommunicationItem.service), selectinload(CommunicationItem.operator))
        .where(CommunicationItem.event_id == event_id)
        .order_by(CommunicationItem.delivery_date.desc())
    )
    return [item.to_dict() for item in result.scalars().all()]


@router.get("/{item_id}", response_model=CommunicationItemResponse)
async def get_item(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    item = await get_item_or_404(db, item_id)
    event = await get_event_or_404(db, item.event_id)
    ensure_event_scope(user, event, "Communication item")
    return item.to_dict()


@router.post("", response_model=CommunicationItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    request: CommunicationItemCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Cria item de comunicação"""
    ensure_can_write(user, "communication items")
    event = await get_event_or_404(db, request.event_id)
    authorize_event_write(user, event, "communication items")
    await check_references(db, request, user)

    item = CommunicationItem(**request.model_dump())
    db.add(item)
    await db.commit()

    item = await get_item_or_404(db, item.id)
    return item.to_dict()


@router.put("/{item_id}", response_model=CommunicationItemResponse)
async def update_item(
    item_id: str,
    request: CommunicationItemCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Atualiza item de comunicação (reenvio completo)"""
    ensure_can_write(user, "communication items")
    item = await get_item_or_404(db, item_id)
    event = await get_event_or_404(db, item.event_id)
    authorize_event_write(user, event, "communication items")

    if request.event_id != item.event_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Communication item cannot be moved to another event"
        )
    await check_references(db, request, user)

    for field, value in request.model_dump(exclude={"event_id"}).items():
        setattr(item, field, value)

    await db.commit()

    item = await get_item_or_404(db, item.id)
    return item.to_dict()


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    ensure_can_write(user, "communication items")
    item = await get_item_or_404(db, item_id)
    event = await get_event_or_404(db, item.event_id)
    authorize_event_write(user, event, "communication items")

    await db.delete(item)
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
