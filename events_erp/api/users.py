"""
Events ERP - Users API
Gestão de usuários (MASTER) e perfil do próprio usuário
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from events_erp.database import get_db
from events_erp.models import User, UserRole, Unit, Event
from events_erp.schemas import UserCreate, UserUpdate, ProfileUpdate, UserResponse
from events_erp.api.auth import get_current_user, require_roles
from events_erp.core import get_password_hash

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

require_master = require_roles(UserRole.MASTER.value)


async def load_user(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


async def ensure_email_available(db: AsyncSession, email: str, exclude_id: str = None) -> None:
    query = select(User.id).where(User.email == email)
    if exclude_id:
        query = query.where(User.id != exclude_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )


async def ensure_unit_exists(db: AsyncSession, unit_id: str) -> None:
    result = await db.execute(select(Unit.id).where(Unit.id == unit_id))
    if result.first() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unit not found"
        )


def _apply_password(update_data: dict) -> dict:
    if "password" in update_data:
        update_data["password_hash"] = get_password_hash(update_data.pop("password"))
    return update_data


# /profile precisa vir antes de /{user_id}
@router.put("/profile", response_model=UserResponse)
async def update_profile(
    request: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Atualiza nome, email e senha do próprio usuário"""
    update_data = request.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in update_data and update_data["email"] != current_user.email:
        await ensure_email_available(db, update_data["email"], exclude_id=current_user.id)

    for field, value in _apply_password(update_data).items():
        setattr(current_user, field, value)

    await db.commit()

    user = await load_user(db, current_user.id)
    return user.to_dict()


@router.get("", response_model=List[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_db),
    master: User = Depends(require_master)
):
    """Lista usuários (apenas MASTER)"""
    result = await db.execute(select(User).order_by(User.name))
    return [u.to_dict() for u in result.scalars().all()]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    master: User = Depends(require_master)
):
    user = await load_user(db, user_id)
    return user.to_dict()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: UserCreate,
    db: AsyncSession = Depends(get_db),
    master: User = Depends(require_master)
):
    """Cria usuário (apenas MASTER)"""
    await ensure_email_available(db, request.email)
    if request.unit_id:
        await ensure_unit_exists(db, request.unit_id)

    user = User(
        name=request.name,
        email=request.email,
        password_hash=get_password_hash(request.password),
        role=request.role,
        unit_id=request.unit_id or None,
    )
    db.add(user)
    await db.commit()

    logger.info(f"Usuário criado: {user.email} ({user.role}) por {master.email}")

    user = await load_user(db, user.id)
    return user.to_dict()


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UserUpdate,
    db: AsyncSession = Depends(get_db),
    master: User = Depends(require_master)
):
    """Atualiza qualquer campo de um usuário (apenas MASTER)"""
    user = await load_user(db, user_id)

    update_data = request.model_dump(exclude_unset=True)
    # unit_id pode ser limpo com null; os demais campos ignoram null
    update_data = {
        field: value for field, value in update_data.items()
        if value is not None or field == "unit_id"
    }

    # O MASTER não troca o próprio papel
    if user.id == master.id and update_data.get("role", user.role) != user.role:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot change your own role"
        )

    if "email" in update_data and update_data["email"] != user.email:
        await ensure_email_available(db, update_data["email"], exclude_id=user.id)
    if update_data.get("unit_id"):
        await ensure_unit_exists(db, update_data["unit_id"])

    for field, value in _apply_password(update_data).items():
        setattr(user, field, value)

    await db.commit()

    user = await load_user(db, user.id)
    return user.to_dict()


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    master: User = Depends(require_master)
):
    """Remove usuário (apenas MASTER, nunca a si mesmo)"""
    if master.id == user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete yourself"
        )

    user = await load_user(db, user_id)

    result = await db.execute(select(Event.id).where(Event.user_id == user.id).limit(1))
    if result.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User owns events and cannot be deleted"
        )

    await db.delete(user)
    await db.commit()

    logger.info(f"Usuário removido: {user.email} por {master.email}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
