"""Integration tests for table creation and team-owned cascades."""

import pytest
from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from rostertrack.models.fields import Timeframe
from rostertrack.schemas.matches import Match
from rostertrack.schemas.player_stats import PlayerStats
from rostertrack.schemas.players import Player
from rostertrack.services.player_service import fetch_active_players
from rostertrack.services.stats_service import get_team_stats_summary


@pytest.mark.asyncio
async def test_all_tables_created(async_engine: AsyncEngine):
    async with async_engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    assert {
        "teams",
        "players",
        "matches",
        "player_stats",
        "training_sessions",
        "training_attendance",
        "training_drills",
        "training_photos",
    } <= set(tables)


@pytest.mark.asyncio
async def test_deleting_team_removes_its_rows(db_session: AsyncSession, rosie_fc):
    team_id = rosie_fc.team.id

    await db_session.delete(rosie_fc.team)
    await db_session.commit()

    for model in (Player, Match, PlayerStats):
        remaining = (await db_session.execute(select(func.count(model.id)))).scalar()
        assert remaining == 0, model.__tablename__

    active = await fetch_active_players(db_session, team_id)
    summary = await get_team_stats_summary(db_session, team_id, Timeframe.all_time)
    assert active.ok and active.data == []
    assert summary.ok and summary.data.players_count == 0
