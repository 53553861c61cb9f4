"""Team-scoped lineup and availability routes."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.models.lineups import (
    FormationRecommendations,
    Formation,
    LineupSuggestion,
    MatchType,
)
from rostertrack.models.players import PlayerListResponse, ReturnToPlayReminderResponse
from rostertrack.routes.helpers import require_team, unwrap
from rostertrack.routes.teams import player_read
from rostertrack.services.availability_service import (
    get_alternative_players,
    get_overdue_returns,
    get_players_returning_soon,
    get_return_to_play_reminders,
)
from rostertrack.services.lineup_service import (
    generate_balanced_lineup,
    recommend_formations,
)
from rostertrack.utils.db_async import get_session

router = APIRouter(prefix="/api/teams", tags=["lineups"])


@router.get("/{team_id}/lineup/suggestion", response_model=LineupSuggestion)
async def lineup_suggestion(
    team_id: int,
    formation: Formation = Formation.four_four_two,
    players_on_field: int = Query(default=11, ge=1, le=11),
    consider_playtime: bool = True,
    consider_performance: bool = False,
    db: AsyncSession = Depends(get_session),
) -> LineupSuggestion:
    """Suggested starters for the formation, favouring players with less recent playtime."""
    await require_team(db, team_id)
    return unwrap(
        await generate_balanced_lineup(
            db,
            team_id,
            players_on_field=players_on_field,
            consider_playtime=consider_playtime,
            consider_performance=consider_performance,
            formation=formation,
        )
    )


@router.get("/{team_id}/lineup/formations", response_model=FormationRecommendations)
async def formation_recommendations(
    team_id: int,
    match_type: MatchType = MatchType.regular,
    db: AsyncSession = Depends(get_session),
) -> FormationRecommendations:
    await require_team(db, team_id)
    formations = unwrap(await recommend_formations(db, team_id, match_type))
    return FormationRecommendations(
        team_id=team_id, match_type=match_type, formations=formations
    )


@router.get("/{team_id}/players/alternatives", response_model=PlayerListResponse)
async def alternative_players(
    team_id: int,
    position: str = Query(..., min_length=1, description="Position code, e.g. CB"),
    exclude: List[int] = Query(default=[], description="Player ids already picked"),
    db: AsyncSession = Depends(get_session),
) -> PlayerListResponse:
    """Available players for the same position, ordered by name."""
    await require_team(db, team_id)
    players = unwrap(await get_alternative_players(db, team_id, position, exclude))
    return PlayerListResponse(items=[player_read(p) for p in players])


@router.get("/{team_id}/injuries/returning", response_model=PlayerListResponse)
async def returning_players(
    team_id: int,
    days_ahead: int = Query(default=7, ge=0, le=365),
    db: AsyncSession = Depends(get_session),
) -> PlayerListResponse:
    """Injured players expected back within ``days_ahead`` days."""
    await require_team(db, team_id)
    players = unwrap(await get_players_returning_soon(db, team_id, days_ahead))
    return PlayerListResponse(items=[player_read(p) for p in players])


@router.get("/{team_id}/injuries/overdue", response_model=PlayerListResponse)
async def overdue_returns(
    team_id: int,
    db: AsyncSession = Depends(get_session),
) -> PlayerListResponse:
    await require_team(db, team_id)
    players = unwrap(await get_overdue_returns(db, team_id))
    return PlayerListResponse(items=[player_read(p) for p in players])


@router.get("/{team_id}/injuries/reminders", response_model=ReturnToPlayReminderResponse)
async def return_to_play_reminders(
    team_id: int,
    days_ahead: int = Query(default=3, ge=0, le=365),
    db: AsyncSession = Depends(get_session),
) -> ReturnToPlayReminderResponse:
    """Players due back exactly ``days_ahead`` days from today (UTC)."""
    await require_team(db, team_id)
    reminders = unwrap(await get_return_to_play_reminders(db, team_id, days_ahead))
    return ReturnToPlayReminderResponse(days_ahead=days_ahead, items=reminders)
