"""Base Classes to Use as MixIns Elsewhere in App"""

from datetime import datetime

from sqlmodel import Field, SQLModel

from rostertrack.models.fields import utc_now


class TimestampMixin(SQLModel):
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
