"""
Events ERP - Auth API
Login, sessão e dependências de autenticação
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from slowapi import Limiter
from slowapi.util import get_remote_address

from events_erp.database import get_db
from events_erp.models import User
from events_erp.schemas import LoginRequest, LoginResponse, UserResponse
from events_erp.core import (
    settings,
    verify_password,
    create_access_token,
    verify_access_token,
    token_claims_for
)
from events_erp.core.permissions import ensure_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])
security = HTTPBearer(auto_error=False)
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Dependency para obter o usuário autenticado.

    Papel e unidade vêm do banco, não das claims do token, para que mudanças
    feitas pelo MASTER valham imediatamente.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Access denied, token missing")

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise _unauthorized("Invalid or expired token")

    result = await db.execute(
        select(User).where(User.id == payload["sub"])
    )
    user = result.scalar_one_or_none()

    if not user:
        raise _unauthorized("User not found")

    return user


def require_roles(*roles: str):
    """Dependency que restringe a rota a determinados papéis"""
    async def dependency(user: User = Depends(get_current_user)) -> User:
        ensure_role(user, *roles)
        return user
    return dependency


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(request: Request, credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login por email e senha"""
    result = await db.execute(
        select(User).where(User.email == credentials.email)
    )
    user = result.scalar_one_or_none()

    # Mesma resposta para email inexistente e senha errada
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Falha de login para {credentials.email}")
        raise _unauthorized("Invalid credentials")

    token = create_access_token(data=token_claims_for(user))

    return LoginResponse(
        token=token,
        access_token=token,
        token_type="bearer",
        user=user.to_dict()
    )


@router.post("/register")
async def register(request: Request):
    """Auto-cadastro desabilitado: contas são provisionadas pelo MASTER"""
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Public registration is disabled. Contact the system administrator."
    )


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Retorna dados do usuário atual"""
    return user.to_dict()
