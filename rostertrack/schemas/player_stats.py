"""Per-player per-match statistics (the fact table for aggregation)."""

from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer


class PlayerStats(SQLModel, table=True):  # type: ignore[call-arg]
    """One player's line in one match.

    The player's team and the match's team are expected to agree but nothing
    enforces it; readers select through ``player_id`` and tolerate mismatches.
    """

    __tablename__ = "player_stats"
    __table_args__ = (
        CheckConstraint("goals >= 0", name="ck_player_stats_goals_nonneg"),
        CheckConstraint("assists >= 0", name="ck_player_stats_assists_nonneg"),
        CheckConstraint("minutes_played >= 0", name="ck_player_stats_minutes_nonneg"),
        Index("ix_player_stats_player_match", "player_id", "match_id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    player_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("players.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )
    match_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("matches.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )

    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    minutes_played: int = Field(default=0, ge=0)
