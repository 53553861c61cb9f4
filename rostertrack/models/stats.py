"""Pydantic models for statistics rollups."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from rostertrack.models.fields import Timeframe


def per_match(total: int, matches: int) -> float:
    return total / matches if matches > 0 else 0.0


class PlayerStatsRead(BaseModel):
    id: int
    player_id: Optional[int] = None
    match_id: Optional[int] = None
    match_date: Optional[datetime] = None
    goals: int = 0
    assists: int = 0
    minutes_played: int = 0


class TeamStatsSummary(BaseModel):
    """Timeframe-filtered totals plus the current roster size.

    ``players_count`` is a roster snapshot and ignores the timeframe.
    """

    total_goals: int = 0
    total_assists: int = 0
    total_minutes: int = 0
    matches_played: int = 0
    players_count: int = 0


class PlayerStatsSummary(BaseModel):
    total_goals: int = 0
    total_assists: int = 0
    total_minutes: int = 0
    matches_played: int = 0


class PlayerStatsLine(BaseModel):
    """One roster player's rollup inside a team view."""

    player_id: int
    name: Optional[str] = None
    position: Optional[str] = None
    jersey_number: Optional[int] = None
    total_goals: int = 0
    total_assists: int = 0
    total_minutes: int = 0
    matches_played: int = 0

    @computed_field  # type: ignore[misc]
    @property
    def goals_per_match(self) -> float:
        return per_match(self.total_goals, self.matches_played)

    @computed_field  # type: ignore[misc]
    @property
    def assists_per_match(self) -> float:
        return per_match(self.total_assists, self.matches_played)

    @computed_field  # type: ignore[misc]
    @property
    def minutes_per_match(self) -> float:
        return per_match(self.total_minutes, self.matches_played)

    @computed_field  # type: ignore[misc]
    @property
    def goal_contributions(self) -> int:
        return self.total_goals + self.total_assists


class MatchHistoryLine(BaseModel):
    """Per-match rollup used by the match history export."""

    match_id: int
    date: Optional[datetime] = None
    duration: int = 90
    number_of_halves: int = 2
    has_overtime: bool = False
    total_goals: int = 0
    total_assists: int = 0
    total_minutes: int = 0
    players_used: int = 0


class InjuryStatistics(BaseModel):
    total_players: int = 0
    available_players: int = 0
    injured_players: int = 0
    injury_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    average_injury_days: int = 0


class TeamStatsSummaryResponse(BaseModel):
    team_id: int
    timeframe: Timeframe
    summary: TeamStatsSummary


class PlayerStatsLinesResponse(BaseModel):
    team_id: int
    timeframe: Timeframe
    items: list[PlayerStatsLine]
