"""Team lookups used by the routes to resolve path parameters."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.errors import QueryResult
from rostertrack.schemas.players import Player
from rostertrack.schemas.teams import Team
from rostertrack.services.query_helpers import degrade_on_storage_error


@degrade_on_storage_error("list_teams", list)
async def list_teams(db: AsyncSession) -> QueryResult[list[Team]]:
    stmt = select(Team).order_by(func.coalesce(Team.name, ""), Team.id)  # type: ignore[arg-type]
    result = await db.execute(stmt)
    return QueryResult.success(list(result.scalars().all()))


@degrade_on_storage_error("get_team", lambda: None)
async def get_team(db: AsyncSession, team_id: int) -> QueryResult[Optional[Team]]:
    return QueryResult.success(await db.get(Team, team_id))


@degrade_on_storage_error("get_player", lambda: None)
async def get_player(db: AsyncSession, player_id: int) -> QueryResult[Optional[Player]]:
    return QueryResult.success(await db.get(Player, player_id))
