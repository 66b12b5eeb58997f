"""
Events ERP - Database Session
"""
import logging
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy import select, func

from events_erp.core.config import settings

logger = logging.getLogger(__name__)

# Engine assíncrono
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

# Base para models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """Dependency para injetar sessão do banco"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def bootstrap_master(session: AsyncSession) -> bool:
    """
    Cria a conta MASTER inicial quando não existe nenhum usuário.

    O auto-cadastro é desabilitado, então sem essa conta ninguém conseguiria
    provisionar os demais usuários. Retorna True se criou a conta.
    """
    from events_erp.core.security import get_password_hash
    from events_erp.models import User, UserRole

    result = await session.execute(select(func.count(User.id)))
    if result.scalar():
        return False

    master = User(
        name=settings.MASTER_NAME,
        email=settings.MASTER_EMAIL.lower(),
        password_hash=get_password_hash(settings.MASTER_PASSWORD),
        role=UserRole.MASTER.value,
    )
    session.add(master)
    await session.commit()

    logger.info(f"Conta MASTER inicial criada: {settings.MASTER_EMAIL}")
    if settings.MASTER_PASSWORD == "change-me-in-production":
        logger.warning("MASTER_PASSWORD padrão em uso. Altere a senha da conta MASTER.")
    return True


async def init_db():
    """Inicializa banco de dados (cria tabelas) e garante a conta MASTER"""
    # Registra os models no metadata
    import events_erp.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        await bootstrap_master(session)
