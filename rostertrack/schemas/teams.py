from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field

from rostertrack.models.fields import utc_now


class Team(SQLModel, table=True):  # type: ignore[call-arg]
    """A squad. Owns its players and matches (see their ON DELETE CASCADE keys)."""

    __tablename__ = "teams"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utc_now)
