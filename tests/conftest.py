"""Pytest fixtures: an isolated database per test plus a wired HTTP client."""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from httpx import AsyncClient, ASGITransport
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from dotenv import load_dotenv

from rostertrack.schemas.matches import Match
from rostertrack.schemas.players import Player
from rostertrack.schemas.teams import Team
from tests.integration.roster_helpers import (
    REFERENCE_TIME,
    add_match,
    add_player,
    add_stats,
    add_team,
)

load_dotenv()

IN_MEMORY_URL = "sqlite+aiosqlite://"


def _load_database_url() -> str:
    """Resolve the database URL for tests.

    Defaults to in-memory SQLite; an external TEST_DATABASE_URL needs an
    explicit PYTEST_ALLOW_DB=1 because every test drops and recreates tables.
    """
    test_db_url = os.getenv("TEST_DATABASE_URL")
    if not test_db_url:
        return IN_MEMORY_URL
    if int(os.getenv("PYTEST_ALLOW_DB", "0")) != 1:
        raise RuntimeError(
            "Running tests against TEST_DATABASE_URL requires setting PYTEST_ALLOW_DB=1 to"
            " confirm the configured database is safe to mutate."
        )
    return test_db_url


@pytest.fixture(scope="session")
def database_url() -> str:
    return _load_database_url()


@pytest_asyncio.fixture()
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Yield an engine with a freshly created schema."""
    from rostertrack.utils.db_async import (
        _normalize_db_url,
        enable_sqlite_foreign_keys,
        import_table_models,
    )

    import_table_models()

    url = _normalize_db_url(database_url)
    if url.startswith("sqlite"):
        # One shared connection so the in-memory database survives across sessions
        engine = create_async_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        enable_sqlite_foreign_keys(engine)
    else:
        engine = create_async_engine(url, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        async_engine, expire_on_commit=False, class_=AsyncSession
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def app_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an HTTP client with the application wired to the test session."""
    try:
        from rostertrack.main import app
    except ValidationError as exc:  # pragma: no cover - guard for misconfigured env
        pytest.skip(f"App configuration failed: {exc}")

    from rostertrack.utils.db_async import get_session

    async def _get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_session] = _get_session_override
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_session, None)


@dataclass
class Squad:
    team: Team
    players: list[Player] = field(default_factory=list)
    matches: list[Match] = field(default_factory=list)


@pytest_asyncio.fixture()
async def rosie_fc(db_session: AsyncSession) -> Squad:
    """Three players (jerseys 1-3), two matches two months before REFERENCE_TIME.

    Goals per match: [1, 0, 2] and [0, 1, 0]; no assists; 90 minutes each.
    """
    team = await add_team(db_session, "Rosie FC")
    players = [
        await add_player(db_session, team.id, "Emma Rodriguez", 1, "GK"),
        await add_player(db_session, team.id, "Sofia Martinez", 2, "CB"),
        await add_player(db_session, team.id, "Isabella Thompson", 3, "CB"),
    ]
    two_months_ago = REFERENCE_TIME - timedelta(days=60)
    matches = [
        await add_match(db_session, team.id, two_months_ago),
        await add_match(db_session, team.id, two_months_ago + timedelta(days=3)),
    ]
    for match, goals in zip(matches, ([1, 0, 2], [0, 1, 0])):
        for player, scored in zip(players, goals):
            await add_stats(
                db_session, player.id, match.id, goals=scored, minutes_played=90
            )
    return Squad(team=team, players=players, matches=matches)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Ensure HTTPX uses asyncio backend during tests."""
    return "asyncio"
