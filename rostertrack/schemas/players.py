from typing import Optional
from datetime import datetime
from sqlmodel import Field
from sqlalchemy import Column, ForeignKey, Index, Integer

from rostertrack.schemas.base import TimestampMixin


class Player(TimestampMixin, table=True):  # type: ignore[call-arg]
    __tablename__ = "players"
    __table_args__ = (
        Index("ix_players_team_jersey", "team_id", "jersey_number"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    # Nullable so a player whose team was removed stays readable
    team_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("teams.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )

    name: Optional[str] = Field(default=None, index=True)
    # Scoped per team, uniqueness is not enforced
    jersey_number: Optional[int] = Field(default=None)
    position: Optional[str] = Field(default=None, description="GK, CB, CM, CF, ...")

    # NULL is treated as "not injured"
    is_injured: Optional[bool] = Field(default=False, index=True)
    injury_description: Optional[str] = Field(default=None)
    injury_date: Optional[datetime] = Field(default=None)
    return_to_play_date: Optional[datetime] = Field(default=None)
