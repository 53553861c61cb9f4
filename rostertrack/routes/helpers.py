"""Shared helpers for API routes."""

from typing import Optional, TypeVar

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.errors import QueryResult
from rostertrack.schemas.players import Player
from rostertrack.schemas.teams import Team
from rostertrack.services.team_service import get_player, get_team

T = TypeVar("T")


def unwrap(result: QueryResult[T]) -> T:
    """Return the data of a successful result or raise 503 with the failure."""
    if result.error is not None:
        raise HTTPException(status_code=503, detail=result.error.to_dict())
    return result.data


async def require_team(db: AsyncSession, team_id: int) -> Team:
    team: Optional[Team] = unwrap(await get_team(db, team_id))
    if team is None:
        raise HTTPException(status_code=404, detail="Team not found")
    return team


async def require_player(db: AsyncSession, player_id: int) -> Player:
    player: Optional[Player] = unwrap(await get_player(db, player_id))
    if player is None:
        raise HTTPException(status_code=404, detail="Player not found")
    return player
