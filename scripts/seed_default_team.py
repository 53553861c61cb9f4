#!/usr/bin/env python
"""Seed the default team and its roster.

Usage:
    python scripts/seed_default_team.py

Adds "Rosie FC" with 20 players when the database has no teams yet.
"""

import asyncio
import os

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

load_dotenv()


async def seed() -> None:
    """Create tables if needed and insert the default team."""
    from sqlmodel import SQLModel

    from rostertrack.config import settings
    from rostertrack.services.bootstrap_service import DEFAULT_TEAM_NAME, seed_default_team
    from rostertrack.utils.db_async import _normalize_db_url, import_table_models

    database_url = os.getenv("DATABASE_URL") or settings.database_url

    import_table_models()
    engine = create_async_engine(_normalize_db_url(database_url), echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        if await seed_default_team(session):
            print(f"  ADD: {DEFAULT_TEAM_NAME}")
        else:
            print("  SKIP: teams already present")

    await engine.dispose()


if __name__ == "__main__":
    print("Seeding default team...")
    asyncio.run(seed())
