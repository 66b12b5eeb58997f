from .session import Base, engine, AsyncSessionLocal, get_db, init_db, bootstrap_master

__all__ = [
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_db",
    "init_db",
    "bootstrap_master"
]
