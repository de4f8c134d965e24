import logging

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.api.db.memory_storage import MemoryStorage
from app.api.db.sql_storage import SQLStorage
from app.api.db.storage import Storage
from config import Settings

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Build the async engine for ``database_url``.

    Plain ``postgresql://`` URLs are switched to the asyncpg driver.

    Args:
        database_url (str): SQLAlchemy database URL
        echo (bool): Log emitted SQL

    Returns:
        AsyncEngine: Configured engine
    """
    db_url = database_url.replace("postgresql://", "postgresql+asyncpg://")

    if db_url.startswith("sqlite"):
        return create_async_engine(db_url, echo=echo)

    return create_async_engine(
        db_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )


def create_storage(settings: Settings) -> Storage:
    """
    Build the storage backend selected by ``STORAGE_BACKEND``.

    Args:
        settings (Settings): Application settings

    Returns:
        Storage: SQLStorage for ``sql``, MemoryStorage for ``memory``

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "memory":
        logger.info("Using in-memory storage")
        return MemoryStorage()

    if backend == "sql":
        logger.info("Using SQL storage")
        return SQLStorage(create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG))

    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")


def get_storage(request: Request) -> Storage:
    """
    Dependency that provides the storage backend built at startup.

    Returns:
        Storage: Storage held on ``app.state``
    """
    return request.app.state.storage
