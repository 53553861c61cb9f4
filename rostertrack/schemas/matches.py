from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, ForeignKey, Index, Integer


class Match(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "matches"
    __table_args__ = (
        Index("ix_matches_team_date", "team_id", "date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("teams.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )
    # Kick-off time, aware UTC
    date: Optional[datetime] = Field(default=None)
    duration: int = Field(default=90, description="Minutes")
    number_of_halves: int = Field(default=2)
    has_overtime: bool = Field(default=False)
