"""Timeframe-windowed statistics and team rollups over player_stats."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import desc, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.errors import QueryResult
from rostertrack.models.fields import Timeframe, as_utc, timeframe_cutoff, utc_now
from rostertrack.models.stats import (
    InjuryStatistics,
    PlayerStatsLine,
    PlayerStatsRead,
    PlayerStatsSummary,
    TeamStatsSummary,
)
from rostertrack.schemas.matches import Match
from rostertrack.schemas.player_stats import PlayerStats
from rostertrack.schemas.players import Player
from rostertrack.services.query_helpers import degrade_on_storage_error, fetch_in_pages

logger = logging.getLogger(__name__)


def _within(stmt, cutoff: Optional[datetime]):  # type: ignore[no-untyped-def]
    """Restrict a statement joined to matches to dates on or after ``cutoff``.

    Undated or unresolvable matches never satisfy a bounded window.
    """
    if cutoff is None:
        return stmt
    return stmt.where(Match.date >= cutoff)  # type: ignore[operator]


def _totals_columns():  # type: ignore[no-untyped-def]
    return (
        func.coalesce(func.sum(PlayerStats.goals), 0).label("total_goals"),
        func.coalesce(func.sum(PlayerStats.assists), 0).label("total_assists"),
        func.coalesce(func.sum(PlayerStats.minutes_played), 0).label("total_minutes"),
        func.count(distinct(Match.id)).label("matches_played"),
    )


@degrade_on_storage_error("get_player_statistics", list)
async def get_player_statistics(
    db: AsyncSession,
    player_id: int,
    timeframe: Timeframe,
    now: Optional[datetime] = None,
) -> QueryResult[list[PlayerStatsRead]]:
    """Return a player's stat lines inside the timeframe, newest match first.

    Args:
        db: Async database session
        player_id: Player whose lines to fetch
        timeframe: Window applied to the match date
        now: Reference time for the window (defaults to current UTC time)

    Returns:
        QueryResult with PlayerStatsRead rows carrying their match date
    """
    cutoff = timeframe_cutoff(timeframe, now)
    stmt = (
        select(PlayerStats, Match.date.label("match_date"))  # type: ignore[call-overload, union-attr]
        .select_from(PlayerStats)
        .outerjoin(Match, Match.id == PlayerStats.match_id)
        .where(PlayerStats.player_id == player_id)  # type: ignore[arg-type]
        .order_by(
            Match.date.is_(None),  # type: ignore[union-attr]
            desc(Match.date),  # type: ignore[arg-type]
            desc(PlayerStats.id),  # type: ignore[arg-type]
        )
    )
    rows = await fetch_in_pages(db, _within(stmt, cutoff), scalars=False)

    items = [
        PlayerStatsRead(
            id=stats.id,
            player_id=stats.player_id,
            match_id=stats.match_id,
            match_date=match_date,
            goals=stats.goals or 0,
            assists=stats.assists or 0,
            minutes_played=stats.minutes_played or 0,
        )
        for stats, match_date in rows
    ]
    return QueryResult.success(items)


@degrade_on_storage_error("get_team_stats_summary", TeamStatsSummary)
async def get_team_stats_summary(
    db: AsyncSession,
    team_id: int,
    timeframe: Timeframe,
    now: Optional[datetime] = None,
) -> QueryResult[TeamStatsSummary]:
    """Sum a team's stat lines over the timeframe and attach the roster size.

    Lines are selected through the player's team. ``matches_played`` counts
    distinct matches, not lines. ``players_count`` is the current roster and
    is not affected by the timeframe.
    """
    cutoff = timeframe_cutoff(timeframe, now)

    totals_stmt = (
        select(*_totals_columns())
        .select_from(PlayerStats)
        .join(Player, Player.id == PlayerStats.player_id)
        .outerjoin(Match, Match.id == PlayerStats.match_id)
        .where(Player.team_id == team_id)  # type: ignore[arg-type]
    )
    totals = (await db.execute(_within(totals_stmt, cutoff))).mappings().one()

    roster_stmt = select(func.count(Player.id)).where(  # type: ignore[arg-type]
        Player.team_id == team_id  # type: ignore[arg-type]
    )
    players_count = (await db.execute(roster_stmt)).scalar() or 0

    summary = TeamStatsSummary(
        total_goals=int(totals["total_goals"]),
        total_assists=int(totals["total_assists"]),
        total_minutes=int(totals["total_minutes"]),
        matches_played=int(totals["matches_played"]),
        players_count=int(players_count),
    )
    logger.debug(
        "team %s summary (%s): %s", team_id, timeframe.value, summary.model_dump()
    )
    return QueryResult.success(summary)


@degrade_on_storage_error("get_player_stats_summary", PlayerStatsSummary)
async def get_player_stats_summary(
    db: AsyncSession,
    player_id: int,
    timeframe: Timeframe,
    now: Optional[datetime] = None,
) -> QueryResult[PlayerStatsSummary]:
    """Totals for a single player over the timeframe."""
    cutoff = timeframe_cutoff(timeframe, now)
    stmt = (
        select(*_totals_columns())
        .select_from(PlayerStats)
        .outerjoin(Match, Match.id == PlayerStats.match_id)
        .where(PlayerStats.player_id == player_id)  # type: ignore[arg-type]
    )
    totals = (await db.execute(_within(stmt, cutoff))).mappings().one()
    return QueryResult.success(
        PlayerStatsSummary(
            total_goals=int(totals["total_goals"]),
            total_assists=int(totals["total_assists"]),
            total_minutes=int(totals["total_minutes"]),
            matches_played=int(totals["matches_played"]),
        )
    )


@degrade_on_storage_error("get_team_player_summaries", list)
async def get_team_player_summaries(
    db: AsyncSession,
    team_id: int,
    timeframe: Timeframe,
    now: Optional[datetime] = None,
) -> QueryResult[list[PlayerStatsLine]]:
    """One rollup line per roster player, most minutes first.

    A single grouped query joins the per-player totals back onto the roster,
    so players without lines in the window still appear with zeros.
    """
    cutoff = timeframe_cutoff(timeframe, now)

    per_player = _within(
        select(PlayerStats.player_id.label("player_id"), *_totals_columns())  # type: ignore[union-attr]
        .select_from(PlayerStats)
        .join(Player, Player.id == PlayerStats.player_id)
        .outerjoin(Match, Match.id == PlayerStats.match_id)
        .where(Player.team_id == team_id),  # type: ignore[arg-type]
        cutoff,
    ).group_by(PlayerStats.player_id).subquery()

    minutes = func.coalesce(per_player.c.total_minutes, 0)
    stmt = (
        select(
            Player.id,
            Player.name,
            Player.position,
            Player.jersey_number,
            func.coalesce(per_player.c.total_goals, 0).label("total_goals"),
            func.coalesce(per_player.c.total_assists, 0).label("total_assists"),
            minutes.label("total_minutes"),
            func.coalesce(per_player.c.matches_played, 0).label("matches_played"),
        )  # type: ignore[call-overload]
        .select_from(Player)
        .outerjoin(per_player, per_player.c.player_id == Player.id)
        .where(Player.team_id == team_id)  # type: ignore[arg-type]
        .order_by(desc(minutes), func.coalesce(Player.jersey_number, 0), Player.id)
    )
    result = await db.execute(stmt)

    lines = [
        PlayerStatsLine(
            player_id=row["id"],
            name=row["name"],
            position=row["position"],
            jersey_number=row["jersey_number"],
            total_goals=int(row["total_goals"]),
            total_assists=int(row["total_assists"]),
            total_minutes=int(row["total_minutes"]),
            matches_played=int(row["matches_played"]),
        )
        for row in result.mappings().all()
    ]
    return QueryResult.success(lines)


@degrade_on_storage_error("get_injury_statistics", InjuryStatistics)
async def get_injury_statistics(
    db: AsyncSession,
    team_id: int,
    now: Optional[datetime] = None,
) -> QueryResult[InjuryStatistics]:
    """Availability counts for the roster and mean days out for injured players."""
    reference = as_utc(now) if now is not None else utc_now()
    stmt = select(Player.is_injured, Player.injury_date).where(  # type: ignore[call-overload]
        Player.team_id == team_id  # type: ignore[arg-type]
    )
    rows = (await db.execute(stmt)).all()

    total = len(rows)
    injured_dates = [injury_date for is_injured, injury_date in rows if is_injured]
    injured = len(injured_dates)

    average_days = 0
    if injured:
        days_out = sum(
            max((reference - as_utc(d)).days, 0)
            for d in injured_dates
            if d is not None
        )
        average_days = days_out // injured

    return QueryResult.success(
        InjuryStatistics(
            total_players=total,
            available_players=total - injured,
            injured_players=injured,
            injury_rate=(injured / total) if total else 0.0,
            average_injury_days=average_days,
        )
    )
