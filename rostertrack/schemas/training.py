"""Training-domain tables.

Stored for the roster app; no query logic reads them yet.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer, LargeBinary
from sqlmodel import Field, SQLModel

from rostertrack.models.fields import utc_now


class TrainingSession(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "training_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=True, index=True
        ),
    )
    title: Optional[str] = Field(default=None)
    date: Optional[datetime] = Field(default=None, index=True)
    duration: int = Field(default=60, description="Minutes")
    location: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)


class TrainingAttendance(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "training_attendance"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("training_sessions.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )
    player_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=True, index=True
        ),
    )
    is_present: bool = Field(default=False)
    notes: Optional[str] = Field(default=None)


class TrainingDrill(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "training_drills"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("training_sessions.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )
    name: Optional[str] = Field(default=None)
    drill_description: Optional[str] = Field(default=None)
    duration: int = Field(default=0, description="Minutes")
    order: int = Field(default=0)


class TrainingPhoto(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "training_photos"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("training_sessions.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )
    caption: Optional[str] = Field(default=None)
    image_data: Optional[bytes] = Field(default=None, sa_column=Column(LargeBinary))
    thumbnail_data: Optional[bytes] = Field(default=None, sa_column=Column(LargeBinary))
    created_at: datetime = Field(default_factory=utc_now)
