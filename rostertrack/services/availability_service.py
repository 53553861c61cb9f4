"""Availability lookups around injuries: cover for a position and expected returns."""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.errors import QueryResult
from rostertrack.models.fields import as_utc, utc_now
from rostertrack.models.players import ReturnToPlayReminder
from rostertrack.schemas.players import Player
from rostertrack.services.query_helpers import degrade_on_storage_error, malformed


def only_available(stmt):  # type: ignore[no-untyped-def]
    """Restrict a Player select to players not marked injured (NULL counts as fit)."""
    return stmt.where(
        or_(
            Player.is_injured.is_(False),  # type: ignore[union-attr]
            Player.is_injured.is_(None),  # type: ignore[union-attr]
        )
    )


def _injured_returning(team_id: int):  # type: ignore[no-untyped-def]
    """Injured team players with a known return date, earliest return first."""
    return (
        select(Player)
        .where(Player.team_id == team_id)  # type: ignore[arg-type]
        .where(Player.is_injured.is_(True))  # type: ignore[union-attr]
        .where(Player.return_to_play_date.is_not(None))  # type: ignore[union-attr]
        .order_by(Player.return_to_play_date, Player.id)  # type: ignore[arg-type]
    )


@degrade_on_storage_error("get_alternative_players", list)
async def get_alternative_players(
    db: AsyncSession,
    team_id: int,
    position: str,
    exclude_ids: Optional[Iterable[int]] = None,
) -> QueryResult[list[Player]]:
    """Available players who play exactly ``position``, ordered by name.

    Args:
        db: Async database session
        team_id: Team to look in
        position: Roster position code, e.g. "CB"
        exclude_ids: Players already picked

    Returns:
        QueryResult with matching players (empty with a warning for blank position)
    """
    code = (position or "").strip()
    if not code:
        warning = malformed("get_alternative_players", "position must not be blank")
        return QueryResult.success([], warnings=[warning])

    stmt = only_available(
        select(Player)
        .where(Player.team_id == team_id)  # type: ignore[arg-type]
        .where(Player.position == code)  # type: ignore[arg-type]
    )
    excluded = [pid for pid in (exclude_ids or []) if pid is not None]
    if excluded:
        stmt = stmt.where(Player.id.not_in(excluded))  # type: ignore[union-attr]
    stmt = stmt.order_by(func.coalesce(Player.name, ""), Player.id)  # type: ignore[arg-type]

    result = await db.execute(stmt)
    return QueryResult.success(list(result.scalars().all()))


@degrade_on_storage_error("get_players_returning_soon", list)
async def get_players_returning_soon(
    db: AsyncSession,
    team_id: int,
    days_ahead: int = 7,
    now: Optional[datetime] = None,
) -> QueryResult[list[Player]]:
    """Injured players expected back between ``now`` and ``now + days_ahead``."""
    if days_ahead < 0:
        warning = malformed(
            "get_players_returning_soon", f"days_ahead must be >= 0, got {days_ahead}"
        )
        return QueryResult.success([], warnings=[warning])

    start = as_utc(now) if now is not None else utc_now()
    end = start + timedelta(days=days_ahead)
    stmt = (
        _injured_returning(team_id)
        .where(Player.return_to_play_date >= start)  # type: ignore[operator]
        .where(Player.return_to_play_date <= end)  # type: ignore[operator]
    )
    result = await db.execute(stmt)
    return QueryResult.success(list(result.scalars().all()))


@degrade_on_storage_error("get_overdue_returns", list)
async def get_overdue_returns(
    db: AsyncSession,
    team_id: int,
    now: Optional[datetime] = None,
) -> QueryResult[list[Player]]:
    """Injured players whose expected return date has already passed."""
    reference = as_utc(now) if now is not None else utc_now()
    stmt = _injured_returning(team_id).where(
        Player.return_to_play_date < reference  # type: ignore[operator]
    )
    result = await db.execute(stmt)
    return QueryResult.success(list(result.scalars().all()))


@degrade_on_storage_error("get_return_to_play_reminders", list)
async def get_return_to_play_reminders(
    db: AsyncSession,
    team_id: int,
    days_ahead: int = 3,
    now: Optional[datetime] = None,
) -> QueryResult[list[ReturnToPlayReminder]]:
    """Injured players due back on the UTC calendar day ``days_ahead`` from now."""
    if days_ahead < 0:
        warning = malformed(
            "get_return_to_play_reminders", f"days_ahead must be >= 0, got {days_ahead}"
        )
        return QueryResult.success([], warnings=[warning])

    reference = as_utc(now) if now is not None else utc_now()
    target = reference + timedelta(days=days_ahead)
    day_start = target.replace(hour=0, minute=0, second=0, microsecond=0)
    stmt = (
        _injured_returning(team_id)
        .where(Player.return_to_play_date >= day_start)  # type: ignore[operator]
        .where(Player.return_to_play_date < day_start + timedelta(days=1))  # type: ignore[operator]
    )
    result = await db.execute(stmt)

    reminders = [
        ReturnToPlayReminder(
            player_id=player.id or 0,
            name=player.name,
            position=player.position,
            return_to_play_date=player.return_to_play_date,  # type: ignore[arg-type]
            days_until_return=days_ahead,
        )
        for player in result.scalars().all()
    ]
    return QueryResult.success(reminders)
