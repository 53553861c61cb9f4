"""Team-scoped API routes: roster lookups, matches, statistics and exports."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.models.fields import Timeframe, utc_now
from rostertrack.models.matches import MatchListResponse, MatchRead
from rostertrack.models.players import PlayerListResponse, PlayerRead, PlayerSearchResponse
from rostertrack.models.stats import (
    InjuryStatistics,
    PlayerStatsLinesResponse,
    TeamStatsSummaryResponse,
)
from rostertrack.models.teams import TeamRead
from rostertrack.routes.helpers import require_team, unwrap
from rostertrack.schemas.matches import Match
from rostertrack.schemas.players import Player
from rostertrack.services.export_service import (
    build_match_history_csv,
    build_player_statistics_csv,
    get_match_history_lines,
)
from rostertrack.services.match_service import fetch_matches
from rostertrack.services.player_service import (
    count_players,
    fetch_active_players,
    get_injured_players,
    search_players,
)
from rostertrack.services.stats_service import (
    get_injury_statistics,
    get_team_player_summaries,
    get_team_stats_summary,
)
from rostertrack.services.team_service import list_teams
from rostertrack.utils.db_async import get_session

router = APIRouter(prefix="/api/teams", tags=["teams"])


def player_read(player: Player) -> PlayerRead:
    return PlayerRead(
        id=player.id or 0,
        team_id=player.team_id,
        name=player.name,
        jersey_number=player.jersey_number,
        position=player.position,
        is_injured=bool(player.is_injured),
        injury_description=player.injury_description,
        injury_date=player.injury_date,
        return_to_play_date=player.return_to_play_date,
    )


def match_read(match: Match) -> MatchRead:
    return MatchRead(
        id=match.id or 0,
        team_id=match.team_id,
        date=match.date,
        duration=match.duration,
        number_of_halves=match.number_of_halves,
        has_overtime=bool(match.has_overtime),
    )


@router.get("", response_model=List[TeamRead])
async def list_teams_handler(
    db: AsyncSession = Depends(get_session),
) -> List[TeamRead]:
    """List all teams."""
    teams = unwrap(await list_teams(db))
    return [TeamRead(id=t.id or 0, name=t.name, created_at=t.created_at) for t in teams]


@router.get("/{team_id}/matches", response_model=MatchListResponse)
async def list_matches(
    team_id: int,
    limit: Optional[int] = Query(default=None, ge=1, description="Most recent N matches"),
    db: AsyncSession = Depends(get_session),
) -> MatchListResponse:
    """Matches for the team, most recent first."""
    await require_team(db, team_id)
    matches = unwrap(await fetch_matches(db, team_id, limit=limit))
    return MatchListResponse(items=[match_read(m) for m in matches], limit=limit)


@router.get("/{team_id}/players/active", response_model=PlayerListResponse)
async def list_active_players(
    team_id: int,
    db: AsyncSession = Depends(get_session),
) -> PlayerListResponse:
    """Players available for selection, ordered by jersey number."""
    await require_team(db, team_id)
    players = unwrap(await fetch_active_players(db, team_id))
    return PlayerListResponse(items=[player_read(p) for p in players])


@router.get("/{team_id}/players/injured", response_model=PlayerListResponse)
async def list_injured_players(
    team_id: int,
    db: AsyncSession = Depends(get_session),
) -> PlayerListResponse:
    await require_team(db, team_id)
    players = unwrap(await get_injured_players(db, team_id))
    return PlayerListResponse(items=[player_read(p) for p in players])


@router.get("/{team_id}/players/search", response_model=PlayerSearchResponse)
async def search_team_players(
    team_id: int,
    q: str = Query(default="", description="Name, position or jersey number"),
    offset: int = Query(default=0, ge=0),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
) -> PlayerSearchResponse:
    """Search the roster (typeahead). Blank query returns everyone."""
    await require_team(db, team_id)
    players = unwrap(await search_players(db, team_id, q, offset=offset, limit=limit))
    total = unwrap(await count_players(db, team_id, q))
    return PlayerSearchResponse(
        query=q,
        items=[player_read(p) for p in players],
        total=total,
        offset=offset,
        limit=limit,
    )


@router.get("/{team_id}/stats/summary", response_model=TeamStatsSummaryResponse)
async def team_stats_summary(
    team_id: int,
    timeframe: Timeframe = Timeframe.all_time,
    db: AsyncSession = Depends(get_session),
) -> TeamStatsSummaryResponse:
    """Goals, assists, minutes and distinct matches in the window, plus roster size."""
    await require_team(db, team_id)
    summary = unwrap(await get_team_stats_summary(db, team_id, timeframe))
    return TeamStatsSummaryResponse(team_id=team_id, timeframe=timeframe, summary=summary)


@router.get("/{team_id}/stats/players", response_model=PlayerStatsLinesResponse)
async def team_player_stats(
    team_id: int,
    timeframe: Timeframe = Timeframe.all_time,
    db: AsyncSession = Depends(get_session),
) -> PlayerStatsLinesResponse:
    await require_team(db, team_id)
    lines = unwrap(await get_team_player_summaries(db, team_id, timeframe))
    return PlayerStatsLinesResponse(team_id=team_id, timeframe=timeframe, items=lines)


@router.get("/{team_id}/injuries/summary", response_model=InjuryStatistics)
async def injury_summary(
    team_id: int,
    db: AsyncSession = Depends(get_session),
) -> InjuryStatistics:
    await require_team(db, team_id)
    return unwrap(await get_injury_statistics(db, team_id))


@router.get("/{team_id}/export/players.csv", response_class=PlainTextResponse)
async def export_player_statistics(
    team_id: int,
    timeframe: Timeframe = Timeframe.all_time,
    db: AsyncSession = Depends(get_session),
) -> PlainTextResponse:
    """Download per-player statistics as CSV."""
    team = await require_team(db, team_id)
    lines = unwrap(await get_team_player_summaries(db, team_id, timeframe))
    body = build_player_statistics_csv(team.name, lines, utc_now())
    return PlainTextResponse(
        body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="team-{team_id}-players.csv"'},
    )


@router.get("/{team_id}/export/matches.csv", response_class=PlainTextResponse)
async def export_match_history(
    team_id: int,
    db: AsyncSession = Depends(get_session),
) -> PlainTextResponse:
    """Download the match history as CSV."""
    team = await require_team(db, team_id)
    lines = unwrap(await get_match_history_lines(db, team_id))
    body = build_match_history_csv(team.name, lines, utc_now())
    return PlainTextResponse(
        body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="team-{team_id}-matches.csv"'},
    )
