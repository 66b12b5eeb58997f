"""
Events ERP - Requisitions API
Requisições numeradas que agrupam lançamentos de um evento
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from events_erp.database import get_db
from events_erp.models import Requisition, User
from events_erp.schemas import RequisitionCreate, RequisitionResponse
from events_erp.api.auth import get_current_user
from events_erp.api.events import get_event_or_404
from events_erp.core.permissions import authorize_event_write, ensure_can_write, ensure_event_scope
from events_erp.services import create_numbered_requisition, RequisitionNumberExhausted

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/requisitions", tags=["Requisitions"])


async def get_requisition_or_404(db: AsyncSession, requisition_id: str) -> Requisition:
    result = await db.execute(
        select(Requisition)
        .options(selectinload(Requisition.transactions))
        .where(Requisition.id == requisition_id)
        .execution_options(populate_existing=True)
    )
    requisition = result.scalar_one_or_none()
    if not requisition:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Requisition not found"
        )
    return requisition


@router.get("", response_model=List[RequisitionResponse])
async def list_requisitions(
    event_id: str = Query(..., alias="eventId"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Lista as requisições de um evento (maior número primeiro)"""
    event = await get_event_or_404(db, event_id)
    ensure_event_scope(user, event, "Requisition")

    result = await db.execute(
        select(Requisition)
        .options(selectinload(Requisition.transactions))
        .where(Requisition.event_id == event_id)
        .order_by(Requisition.number.desc())
    )
    return [r.to_dict() for r in result.scalars().all()]


@router.get("/{requisition_id}", response_model=RequisitionResponse)
async def get_requisition(
    requisition_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Retorna uma requisição com seus lançamentos e total"""
    requisition = await get_requisition_or_404(db, requisition_id)
    event = await get_event_or_404(db, requisition.event_id)
    ensure_event_scope(user, event, "Requisition")
    return requisition.to_dict()


@router.post("", response_model=RequisitionResponse, status_code=status.HTTP_201_CREATED)
async def create_requisition(
    request: RequisitionCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Cria requisição com número gerado pelo servidor"""
    ensure_can_write(user, "requisitions")
    event = await get_event_or_404(db, request.event_id)
    authorize_event_write(user, event, "requisitions")

    try:
        requisition = await create_numbered_requisition(db, event.id)
    except RequisitionNumberExhausted:
        logger.error(f"Sem números de requisição livres para o evento {event.id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not allocate a requisition number"
        )

    await db.commit()
    logger.info(f"Requisição {requisition.number} criada no evento {event.id}")

    requisition = await get_requisition_or_404(db, requisition.id)
    return requisition.to_dict()


@router.delete("/{requisition_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_requisition(
    requisition_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Remove a requisição e os lançamentos vinculados a ela"""
    ensure_can_write(user, "requisitions")
    requisition = await get_requisition_or_404(db, requisition_id)
    event = await get_event_or_404(db, requisition.event_id)
    authorize_event_write(user, event, "requisitions")

    removed = len(requisition.transactions)
    await db.delete(requisition)
    await db.commit()

    logger.info(f"Requisição {requisition.number} removida com {removed} lançamento(s)")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
