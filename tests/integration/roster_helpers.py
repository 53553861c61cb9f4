"""Builders for roster rows used across integration tests."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.schemas.matches import Match
from rostertrack.schemas.player_stats import PlayerStats
from rostertrack.schemas.players import Player
from rostertrack.schemas.teams import Team

# Fixed evaluation instant for timeframe tests
REFERENCE_TIME = datetime(2026, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


async def _save(db: AsyncSession, row):  # type: ignore[no-untyped-def]
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return row


async def add_team(db: AsyncSession, name: Optional[str] = "Rosie FC") -> Team:
    return await _save(db, Team(name=name, created_at=REFERENCE_TIME))


async def add_player(
    db: AsyncSession,
    team_id: Optional[int],
    name: Optional[str],
    jersey_number: Optional[int],
    position: Optional[str] = "CM",
    is_injured: Optional[bool] = False,
    injury_date: Optional[datetime] = None,
    return_to_play_date: Optional[datetime] = None,
) -> Player:
    return await _save(
        db,
        Player(
            team_id=team_id,
            name=name,
            jersey_number=jersey_number,
            position=position,
            is_injured=is_injured,
            injury_date=injury_date,
            return_to_play_date=return_to_play_date,
        ),
    )


async def add_match(
    db: AsyncSession,
    team_id: Optional[int],
    date: Optional[datetime],
    duration: int = 90,
) -> Match:
    return await _save(db, Match(team_id=team_id, date=date, duration=duration))


async def add_stats(
    db: AsyncSession,
    player_id: Optional[int],
    match_id: Optional[int],
    goals: int = 0,
    assists: int = 0,
    minutes_played: int = 0,
) -> PlayerStats:
    return await _save(
        db,
        PlayerStats(
            player_id=player_id,
            match_id=match_id,
            goals=goals,
            assists=assists,
            minutes_played=minutes_played,
        ),
    )


def _storage_down() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("unable to open database file"))


class UnavailableSession:
    """Stand-in session whose reads fail the way a missing database does."""

    async def execute(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        raise _storage_down()

    async def get(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        raise _storage_down()

    async def close(self) -> None:
        return None
