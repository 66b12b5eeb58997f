"""
Events ERP - Operators API
Catálogo global de operadores (pessoas/agências que atendem comunicação)
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from events_erp.database import get_db
from events_erp.models import Operator, CommunicationItem, User
from events_erp.schemas import OperatorCreate, OperatorResponse
from events_erp.api.auth import get_current_user, require_roles
from events_erp.core.permissions import CATALOG_ROLES

router = APIRouter(prefix="/operators", tags=["Operators"])


async def get_operator_or_404(db: AsyncSession, operator_id: str) -> Operator:
    result = await db.execute(select(Operator).where(Operator.id == operator_id))
    operator = result.scalar_one_or_none()
    if not operator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Operator not found"
        )
    return operator


async def ensure_unique_name(db: AsyncSession, name: str, exclude_id: str = None) -> None:
    query = select(Operator.id).where(Operator.name == name)
    if exclude_id:
        query = query.where(Operator.id != exclude_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Operator already exists"
        )


@router.get("", response_model=List[OperatorResponse])
async def list_operators(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Lista operadores por nome"""
    result = await db.execute(select(Operator).order_by(Operator.name))
    return [o.to_dict() for o in result.scalars().all()]


@router.get("/{operator_id}", response_model=OperatorResponse)
async def get_operator(
    operator_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    operator = await get_operator_or_404(db, operator_id)
    return operator.to_dict()


@router.post("", response_model=OperatorResponse, status_code=status.HTTP_201_CREATED)
async def create_operator(
    request: OperatorCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_roles(*CATALOG_ROLES))
):
    await ensure_unique_name(db, request.name)

    operator = Operator(name=request.name)
    db.add(operator)
    await db.commit()
    await db.refresh(operator)

    return operator.to_dict()


@router.put("/{operator_id}", response_model=OperatorResponse)
async def update_operator(
    operator_id: str,
    request: OperatorCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_roles(*CATALOG_ROLES))
):
    operator = await get_operator_or_404(db, operator_id)
    await ensure_unique_name(db, request.name, exclude_id=operator.id)

    operator.name = request.name
    await db.commit()
    await db.refresh(operator)

    return operator.to_dict()


@router.delete("/{operator_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_operator(
    operator_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_roles(*CATALOG_ROLES))
):
    operator = await get_operator_or_404(db, operator_id)

    result = await db.execute(
        select(CommunicationItem.id).where(CommunicationItem.operator_id == operator.id).limit(1)
    )
    if result.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Operator is assigned to communication items"
        )

    await db.delete(operator)
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
