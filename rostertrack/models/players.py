from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel

from rostertrack.models.fields import Timeframe
from rostertrack.models.stats import PlayerStatsRead, PlayerStatsSummary


class PlayerRead(SQLModel):
    """Roster entry as returned by the player lookups."""

    id: int
    team_id: Optional[int] = None
    name: Optional[str] = None
    jersey_number: Optional[int] = None
    position: Optional[str] = None
    is_injured: bool = False
    injury_description: Optional[str] = None
    injury_date: Optional[datetime] = None
    return_to_play_date: Optional[datetime] = None


class PlayerListResponse(SQLModel):
    items: list[PlayerRead]


class PlayerSearchResponse(SQLModel):
    """Response model for player search results."""

    query: str
    items: list[PlayerRead]
    total: int
    offset: int = 0
    limit: Optional[int] = None


class PlayerStatisticsResponse(SQLModel):
    player_id: int
    timeframe: Timeframe
    summary: PlayerStatsSummary
    items: list[PlayerStatsRead]


class ReturnToPlayReminder(SQLModel):
    """An injured player whose expected return falls on the reminder day."""

    player_id: int
    name: Optional[str] = None
    position: Optional[str] = None
    return_to_play_date: datetime
    days_until_return: int


class ReturnToPlayReminderResponse(SQLModel):
    days_ahead: int
    items: list[ReturnToPlayReminder]
