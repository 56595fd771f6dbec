"""
Storage layer: one interface, an in-memory and a database adapter, and the
fixture migration that seeds either of them.
"""

import structlog

from sportsbar.core.config import Settings
from sportsbar.core.database import build_engine
from sportsbar.storage.base import EntityKind, InsertOutcome, Storage
from sportsbar.storage.database import DatabaseStorage
from sportsbar.storage.errors import ConflictError, MissingReferenceError, StorageError
from sportsbar.storage.fixtures import FixtureLoader
from sportsbar.storage.memory import MemoryStorage
from sportsbar.storage.migration import MigrationDriver, MigrationReport, MigrationState

logger = structlog.get_logger(__name__)


def create_storage(settings: Settings) -> Storage:
    """Build the configured adapter and seed it from fixtures"""
    if settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage; data is lost on restart")
        storage: Storage = MemoryStorage()
    elif settings.STORAGE_BACKEND == "database":
        engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        storage = DatabaseStorage(engine, create_tables=not settings.SCHEMA_MANAGED_BY_ALEMBIC)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND {settings.STORAGE_BACKEND!r}")

    if settings.RUN_FIXTURE_MIGRATION:
        MigrationDriver(storage, FixtureLoader(settings.FIXTURES_DIR)).run()
    return storage


__all__ = [
    "ConflictError",
    "DatabaseStorage",
    "EntityKind",
    "FixtureLoader",
    "InsertOutcome",
    "MemoryStorage",
    "MigrationDriver",
    "MigrationReport",
    "MigrationState",
    "MissingReferenceError",
    "Storage",
    "StorageError",
    "create_storage",
]
