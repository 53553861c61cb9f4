from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel


class MatchRead(SQLModel):
    id: int
    team_id: Optional[int] = None
    date: Optional[datetime] = None
    duration: int = 90
    number_of_halves: int = 2
    has_overtime: bool = False


class MatchListResponse(SQLModel):
    items: list[MatchRead]
    limit: Optional[int] = None
