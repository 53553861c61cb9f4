"""Async SQLAlchemy engine and session helpers."""

import logging
from typing import Any, AsyncGenerator, Dict, Tuple

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from rostertrack.config import settings

logger = logging.getLogger(__name__)


def _normalize_db_url(url: str) -> str:
    """Select an async-capable driver for the configured database.

    Bare "sqlite://" URLs switch to aiosqlite, bare "postgres://" or
    "postgresql://" URLs switch to asyncpg. Explicit drivers are respected.
    """
    try:
        u = make_url(url)
        driver = (u.drivername or "").lower()
        if "+" in driver:
            return u.render_as_string(hide_password=False)
        if driver in ("postgres", "postgresql"):
            u = u.set(drivername="postgresql+asyncpg")
        elif driver == "sqlite":
            u = u.set(drivername="sqlite+aiosqlite")
        return u.render_as_string(hide_password=False)
    except Exception:
        # Fallback string-level normalization for odd/partial URLs
        if url.startswith("postgresql://"):
            return "postgresql+asyncpg://" + url.split("://", 1)[1]
        if url.startswith("postgres://"):
            return "postgresql+asyncpg://" + url.split("://", 1)[1]
        if url.startswith("sqlite://"):
            return "sqlite+aiosqlite://" + url.split("://", 1)[1]
        return url


def _engine_options(url: str) -> Tuple[str, Dict[str, Any]]:
    """Return the normalized URL and engine kwargs for its backend."""
    normalized_url = _normalize_db_url(url)
    options: Dict[str, Any] = {}
    if normalized_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return normalized_url, options


def enable_sqlite_foreign_keys(engine) -> None:  # type: ignore[no-untyped-def]
    """Turn on FK enforcement (and so ON DELETE CASCADE) for SQLite connections."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


DATABASE_URL, ENGINE_OPTIONS = _engine_options(settings.database_url)

engine = create_async_engine(DATABASE_URL, **ENGINE_OPTIONS)
enable_sqlite_foreign_keys(engine)
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session."""
    async with SessionLocal() as session:
        yield session

def import_table_models() -> None:
    """Import every table module so SQLModel metadata is fully populated."""
    from rostertrack.schemas import matches, player_stats, players, teams, training  # noqa: F401

async def init_db():
    """Initialize the database (create tables)."""
    import_table_models()

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Tables ready: %s", ", ".join(sorted(SQLModel.metadata.tables)))

async def dispose_engine() -> None:
    """Dispose of the async engine and its connection pool."""
    await engine.dispose()

def describe_database_url(url: str) -> str:
    """Return a sanitized, human-readable description of the DB URL for logging.

    Example: "postgresql+asyncpg://user@host:5432/dbname"
    Passwords are never included.
    """
    try:
        u = make_url(url)
        if u.drivername.startswith("sqlite"):
            return f"{u.drivername}:///{u.database or ':memory:'}"
        auth = u.username or "?"
        host = u.host or "?"
        port = f":{u.port}" if u.port else ""
        db = u.database or "?"
        return f"{u.drivername}://{auth}@{host}{port}/{db}"
    except Exception:
        # On parse failure, do not log the raw URL; hint only
        return "<unparseable database URL>"
