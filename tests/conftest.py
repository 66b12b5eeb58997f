"""
Fixtures compartilhadas: banco SQLite por teste, cliente HTTP e fábricas.
"""
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import uuid
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from events_erp.main import app
from events_erp.database import Base, get_db
from events_erp.core import create_access_token, get_password_hash, token_claims_for
from events_erp.models import Event, EventStatus, Unit, User, UserRole

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'events.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_unit(db):
    async def _make(name: str = None) -> Unit:
        unit = Unit(name=name or f"Unidade {uuid.uuid4().hex[:8]}")
        db.add(unit)
        await db.commit()
        return unit
    return _make


@pytest.fixture
def make_user(db):
    async def _make(role: UserRole = UserRole.STANDARD, unit: Unit = None,
                    email: str = None, password: str = DEFAULT_PASSWORD, name: str = None) -> User:
        user = User(
            name=name or f"{role.value.title()} User",
            email=email or f"{role.value.lower()}-{uuid.uuid4().hex[:8]}@sebrae.com.br",
            password_hash=get_password_hash(password),
            role=role.value,
            unit_id=unit.id if unit else None,
        )
        db.add(user)
        await db.commit()
        return user
    return _make


@pytest.fixture
def make_event(db):
    async def _make(owner: User, unit: Unit = None, status: EventStatus = EventStatus.OPEN,
                    budget: Decimal = Decimal("10000"), **overrides) -> Event:
        start = datetime(2026, 2, 27, 9, 0)
        data = dict(
            name="Evento Teste",
            start_date=start,
            end_date=start + timedelta(days=2),
            budget=budget,
            status=status.value,
            project="Projeto",
            action="Ação",
            responsible_unit="Unidade Responsável",
            responsible_email="responsavel@sebrae.com.br",
            responsible_phone="(95) 3000-0000",
            user_id=owner.id,
            unit_id=unit.id if unit else owner.unit_id,
        )
        data.update(overrides)
        event = Event(**data)
        db.add(event)
        await db.commit()
        return event
    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        token = create_access_token(token_claims_for(user))
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def event_payload():
    def _payload(**overrides) -> dict:
        data = {
            "name": "Decola Roraima",
            "startDate": "2026-02-27T03:00:00Z",
            "endDate": "2026-03-27T06:30:00Z",
            "location": "D Rosi",
            "description": "Um evento para muita gente",
            "budget": 50000,
            "project": "Decola",
            "action": "Feira",
            "responsibleUnit": "Sebrae Roraima",
            "responsibleEmail": "gerente@sebrae.com.br",
            "responsiblePhone": "(95) 99999-0000",
        }
        data.update(overrides)
        return data
    return _payload
