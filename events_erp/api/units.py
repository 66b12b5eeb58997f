"""
Events ERP - Units API
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from events_erp.database import get_db
from events_erp.models import Unit, User, UserRole
from events_erp.schemas import UnitCreate, UnitResponse
from events_erp.api.auth import get_current_user, require_roles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/units", tags=["Units"])


@router.get("", response_model=List[UnitResponse])
async def list_units(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Lista unidades (usado para escolher unidade em formulários)"""
    result = await db.execute(select(Unit).order_by(Unit.name))
    return [u.to_dict() for u in result.scalars().all()]


@router.get("/{unit_id}", response_model=UnitResponse)
async def get_unit(
    unit_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    result = await db.execute(select(Unit).where(Unit.id == unit_id))
    unit = result.scalar_one_or_none()
    if not unit:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unit not found"
        )
    return unit.to_dict()


@router.post("", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
async def create_unit(
    request: UnitCreate,
    db: AsyncSession = Depends(get_db),
    master: User = Depends(require_roles(UserRole.MASTER.value))
):
    """Cria unidade (apenas MASTER)"""
    result = await db.execute(select(Unit).where(Unit.name == request.name))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unit already exists"
        )

    unit = Unit(name=request.name)
    db.add(unit)
    await db.commit()
    await db.refresh(unit)

    logger.info(f"Unidade criada: {unit.name} por {master.email}")
    return unit.to_dict()
