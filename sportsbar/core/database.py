"""
Database engine construction
"""

from sqlalchemy import Engine, event
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine
import structlog

logger = structlog.get_logger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL.

    SQLite connections get foreign keys switched on and may be shared across
    the threads FastAPI uses for sync endpoints. An in-memory SQLite URL is
    pinned to a single connection, otherwise every checkout would see a new,
    empty database.
    """
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url == "sqlite://":
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db(engine: Engine) -> None:
    """Create all tables known to SQLModel metadata"""
    # Models must be imported so their tables are registered
    import sportsbar.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created")
