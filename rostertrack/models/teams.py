from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel


class TeamRead(SQLModel):
    id: int
    name: Optional[str] = None
    created_at: Optional[datetime] = None
