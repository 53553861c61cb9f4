"""Roster lookups: active players, search, injuries."""

import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.errors import QueryResult
from rostertrack.schemas.players import Player
from rostertrack.services.query_helpers import (
    degrade_on_storage_error,
    fold_text,
    malformed,
    parse_jersey_number,
)

logger = logging.getLogger(__name__)


def _roster_order(stmt):  # type: ignore[no-untyped-def]
    # Missing jersey numbers sort as 0; id keeps duplicates in insertion order
    return stmt.order_by(
        func.coalesce(Player.jersey_number, 0),
        Player.id,  # type: ignore[arg-type]
    )


async def _load_roster(db: AsyncSession, team_id: int) -> list[Player]:
    stmt = _roster_order(
        select(Player).where(Player.team_id == team_id)  # type: ignore[arg-type]
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


def player_matches_search(
    player: Player, folded_text: str, number: Optional[int]
) -> bool:
    """Name OR position contains the folded text, OR the jersey number equals it."""
    if folded_text in fold_text(player.name):
        return True
    if folded_text in fold_text(player.position):
        return True
    return number is not None and (player.jersey_number or 0) == number


def _filter_roster(roster: list[Player], search_text: str) -> list[Player]:
    text = search_text.strip()
    if not text:
        return roster

    # Both predicates see the same trimmed text
    folded = fold_text(text)
    number = parse_jersey_number(text)
    if number is None:
        logger.debug("search text %r is not numeric; skipping jersey match", search_text)

    return [p for p in roster if player_matches_search(p, folded, number)]


@degrade_on_storage_error("fetch_active_players", list)
async def fetch_active_players(
    db: AsyncSession, team_id: int
) -> QueryResult[list[Player]]:
    """Players on the team who are not injured (NULL counts as not injured).

    Ordered by jersey number ascending; equal numbers keep insertion order.
    """
    stmt = _roster_order(
        select(Player)
        .where(Player.team_id == team_id)  # type: ignore[arg-type]
        .where(
            or_(
                Player.is_injured.is_(False),  # type: ignore[union-attr]
                Player.is_injured.is_(None),  # type: ignore[union-attr]
            )
        )
    )
    result = await db.execute(stmt)
    return QueryResult.success(list(result.scalars().all()))


@degrade_on_storage_error("search_players", list)
async def search_players(
    db: AsyncSession,
    team_id: int,
    search_text: str = "",
    offset: int = 0,
    limit: Optional[int] = None,
) -> QueryResult[list[Player]]:
    """Search a team's roster by name, position or jersey number.

    Text matching is case- and diacritic-insensitive substring matching done
    in Python after loading the team's roster, since SQL LIKE cannot ignore
    accents portably. Blank text returns the whole roster.

    Args:
        db: Async database session
        team_id: Team to search
        search_text: Free text; an integer also matches jersey numbers
        offset: Number of matches to skip
        limit: Optional maximum number of matches to return

    Returns:
        QueryResult with matching players, each once, jersey number ascending
    """
    warnings: list[str] = []
    if offset < 0:
        warnings.append(malformed("search_players", f"offset must be >= 0, got {offset}"))
        offset = 0
    if limit is not None and limit <= 0:
        warnings.append(malformed("search_players", f"limit must be positive, got {limit}"))
        return QueryResult.success([], warnings=warnings)

    matched = _filter_roster(await _load_roster(db, team_id), search_text or "")
    end = None if limit is None else offset + limit
    return QueryResult.success(matched[offset:end], warnings=warnings)


@degrade_on_storage_error("count_players", lambda: 0)
async def count_players(
    db: AsyncSession, team_id: int, search_text: str = ""
) -> QueryResult[int]:
    """Number of players ``search_players`` would return without paging."""
    if not (search_text or "").strip():
        stmt = select(func.count(Player.id)).where(  # type: ignore[arg-type]
            Player.team_id == team_id  # type: ignore[arg-type]
        )
        result = await db.execute(stmt)
        return QueryResult.success(int(result.scalar() or 0))

    roster = await _load_roster(db, team_id)
    return QueryResult.success(len(_filter_roster(roster, search_text)))


@degrade_on_storage_error("get_injured_players", list)
async def get_injured_players(
    db: AsyncSession, team_id: int
) -> QueryResult[list[Player]]:
    """Injured players on the team, ordered by name."""
    stmt = (
        select(Player)
        .where(Player.team_id == team_id)  # type: ignore[arg-type]
        .where(Player.is_injured.is_(True))  # type: ignore[union-attr]
        .order_by(func.coalesce(Player.name, ""), Player.id)  # type: ignore[arg-type]
    )
    result = await db.execute(stmt)
    return QueryResult.success(list(result.scalars().all()))
