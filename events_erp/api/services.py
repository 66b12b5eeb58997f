"""
Events ERP - Services API
Catálogo global de tipos de serviço de comunicação
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from events_erp.database import get_db
from events_erp.models import Service, CommunicationItem, User
from events_erp.schemas import ServiceCreate, ServiceResponse
from events_erp.api.auth import get_current_user, require_roles
from events_erp.core.permissions import CATALOG_ROLES

router = APIRouter(prefix="/services", tags=["Services"])


async def get_service_or_404(db: AsyncSession, service_id: str) -> Service:
    result = await db.execute(select(Service).where(Service.id == service_id))
    service = result.scalar_one_or_none()
    if not service:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service not found"
        )
    return service


async def ensure_unique_name(db: AsyncSession, name: str, exclude_id: str = None) -> None:
    query = select(Service.id).where(Service.name == name)
    if exclude_id:
        query = query.where(Service.id != exclude_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Service already exists"
        )


@router.get("", response_model=List[ServiceResponse])
async def list_services(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Lista serviços por nome"""
    result = await db.execute(select(Service).order_by(Service.name))
    return [s.to_dict() for s in result.scalars().all()]


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    service = await get_service_or_404(db, service_id)
    return service.to_dict()


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    request: ServiceCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_roles(*CATALOG_ROLES))
):
    await ensure_unique_name(db, request.name)

    service = Service(**request.model_dump())
    db.add(service)
    await db.commit()
    await db.refresh(service)

    return service.to_dict()


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    request: ServiceCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_roles(*CATALOG_ROLES))
):
    service = await get_service_or_404(db, service_id)
    await ensure_unique_name(db, request.name, exclude_id=service.id)

    for field, value in request.model_dump().items():
        setattr(service, field, value)

    await db.commit()
    await db.refresh(service)

    return service.to_dict()


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_roles(*CATALOG_ROLES))
):
    service = await get_service_or_404(db, service_id)

    result = await db.execute(
        select(CommunicationItem.id).where(CommunicationItem.service_id == service.id).limit(1)
    )
    if result.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Service is used by communication items"
        )

    await db.delete(service)
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
