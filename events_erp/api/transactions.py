"""
Events ERP - Transactions API
Lançamentos de receitas e despesas de um evento
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from events_erp.database import get_db
from events_erp.models import Transaction, Requisition, User
from events_erp.schemas import TransactionCreate, TransactionUpdate, TransactionResponse
from events_erp.api.auth import get_current_user
from events_erp.api.events import get_event_or_404
from events_erp.core.permissions import authorize_event_write, ensure_can_write, ensure_event_scope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"])

NULLABLE_FIELDS = {"requisition_num", "service_order_num", "delivery_date", "requisition_id"}


async def get_transaction_or_404(db: AsyncSession, transaction_id: str) -> Transaction:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id)
    )
    transaction = result.scalar_one_or_none()
    if not transaction:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transaction not found"
        )
    return transaction


async def check_requisition(db: AsyncSession, requisition_id: str, event_id: str) -> None:
    """A requisição precisa existir e pertencer ao mesmo evento"""
    result = await db.execute(
        select(Requisition).where(Requisition.id == requisition_id)
    )
    requisition = result.scalar_one_or_none()
    if not requisition:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Requisition not found"
        )
    if requisition.event_id != event_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Requisition belongs to another event"
        )


@router.get("", response_model=List[TransactionResponse])
async def list_transactions(
    event_id: str = Query(..., alias="eventId"),
    requisition_id: Optional[str] = Query(None, alias="requisitionId"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Lista os lançamentos de um evento"""
    event = await get_event_or_404(db, event_id)
    ensure_event_scope(user, event, "Transaction")

    query = select(Transaction).where(Transaction.event_id == event_id)
    if requisition_id:
        query = query.where(Transaction.requisition_id == requisition_id)

    result = await db.execute(query.order_by(Transaction.created_at))
    return [t.to_dict() for t in result.scalars().all()]


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Retorna um lançamento"""
    transaction = await get_transaction_or_404(db, transaction_id)
    event = await get_event_or_404(db, transaction.event_id)
    ensure_event_scope(user, event, "Transaction")
    return transaction.to_dict()


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    request: TransactionCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Cria lançamento num evento"""
    ensure_can_write(user, "transactions")
    event = await get_event_or_404(db, request.event_id)
    authorize_event_write(user, event, "transactions")

    if request.requisition_id:
        await check_requisition(db, request.requisition_id, event.id)

    transaction = Transaction(**request.model_dump())
    db.add(transaction)
    await db.commit()
    await db.refresh(transaction)

    return transaction.to_dict()


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str,
    request: TransactionUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Atualização parcial de lançamento"""
    ensure_can_write(user, "transactions")
    transaction = await get_transaction_or_404(db, transaction_id)
    event = await get_event_or_404(db, transaction.event_id)
    authorize_event_write(user, event, "transactions")

    update_data = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }

    if update_data.get("requisition_id"):
        await check_requisition(db, update_data["requisition_id"], event.id)

    for field, value in update_data.items():
        setattr(transaction, field, value)

    await db.commit()
    await db.refresh(transaction)

    return transaction.to_dict()


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Remove lançamento"""
    ensure_can_write(user, "transactions")
    transaction = await get_transaction_or_404(db, transaction_id)
    event = await get_event_or_404(db, transaction.event_id)
    authorize_event_write(user, event, "transactions")

    await db.delete(transaction)
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
