from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.models.fields import Timeframe
from rostertrack.models.players import PlayerRead, PlayerStatisticsResponse
from rostertrack.routes.helpers import require_player, unwrap
from rostertrack.routes.teams import player_read
from rostertrack.services.stats_service import (
    get_player_statistics,
    get_player_stats_summary,
)
from rostertrack.utils.db_async import get_session

router = APIRouter(prefix="/api/players", tags=["players"])


@router.get("/{player_id}", response_model=PlayerRead)
async def get_player_handler(
    player_id: int,
    db: AsyncSession = Depends(get_session),
) -> PlayerRead:
    return player_read(await require_player(db, player_id))


@router.get("/{player_id}/stats", response_model=PlayerStatisticsResponse)
async def get_player_stats_handler(
    player_id: int,
    timeframe: Timeframe = Timeframe.all_time,
    db: AsyncSession = Depends(get_session),
) -> PlayerStatisticsResponse:
    """Return a player's stat lines in the window, newest match first, with totals."""
    await require_player(db, player_id)
    items = unwrap(await get_player_statistics(db, player_id, timeframe))
    summary = unwrap(await get_player_stats_summary(db, player_id, timeframe))
    return PlayerStatisticsResponse(
        player_id=player_id,
        timeframe=timeframe,
        summary=summary,
        items=items,
    )
