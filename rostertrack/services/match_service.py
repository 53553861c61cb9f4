"""Match lookups for a team."""

from typing import Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.errors import QueryResult
from rostertrack.schemas.matches import Match
from rostertrack.services.query_helpers import (
    degrade_on_storage_error,
    fetch_in_pages,
    malformed,
)


def matches_for_team(team_id: int):
    """Team matches, most recent first; undated matches last, ties by newest id."""
    return (
        select(Match)
        .where(Match.team_id == team_id)  # type: ignore[arg-type]
        .order_by(
            Match.date.is_(None),  # type: ignore[union-attr]
            desc(Match.date),  # type: ignore[arg-type]
            desc(Match.id),  # type: ignore[arg-type]
        )
    )


@degrade_on_storage_error("fetch_matches", list)
async def fetch_matches(
    db: AsyncSession,
    team_id: int,
    limit: Optional[int] = None,
    page_size: Optional[int] = None,
) -> QueryResult[list[Match]]:
    """Fetch a team's matches ordered by date descending.

    Args:
        db: Async database session
        team_id: Owning team
        limit: Optional positive cap on the number of matches
        page_size: Rows per round trip; defaults to settings.fetch_batch_size

    Returns:
        QueryResult with the matches (empty when none, or when limit is not positive)
    """
    if limit is not None and limit <= 0:
        warning = malformed("fetch_matches", f"limit must be positive, got {limit}")
        return QueryResult.success([], warnings=[warning])

    matches = await fetch_in_pages(
        db, matches_for_team(team_id), limit=limit, page_size=page_size
    )
    return QueryResult.success(matches)
