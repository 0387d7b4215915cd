"""Persistence backends selectable at startup."""
import logging

from app.core.config import Settings
from app.stores.base import Store, StoreProvider, TaskRecord, TaskStore, UserRecord, UserStore
from app.stores.memory import MemoryStore, MemoryStoreProvider
from app.stores.sql import SQLStore, SQLStoreProvider

logger = logging.getLogger(__name__)


def build_store_provider(settings: Settings) -> StoreProvider:
    """Pick the backend named by STORE_BACKEND. Called once per app."""
    if settings.STORE_BACKEND == "memory":
        logger.warning("Using in-memory store; all data is lost on restart")
        return MemoryStoreProvider()
    provider = SQLStoreProvider(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        auto_create=settings.DB_AUTO_CREATE,
    )
    logger.info("Using SQL store")
    return provider


__all__ = [
    "Store",
    "StoreProvider",
    "UserStore",
    "TaskStore",
    "UserRecord",
    "TaskRecord",
    "MemoryStore",
    "MemoryStoreProvider",
    "SQLStore",
    "SQLStoreProvider",
    "build_store_provider",
]
