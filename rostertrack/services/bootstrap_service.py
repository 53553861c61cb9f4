"""First-run bootstrap: the default team and its 20-player roster."""

import logging
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.models.fields import utc_now
from rostertrack.schemas.players import Player
from rostertrack.schemas.teams import Team

logger = logging.getLogger(__name__)

DEFAULT_TEAM_NAME = "Rosie FC"

# (name, position, jersey number)
DEFAULT_ROSTER = [
    ("Emma Rodriguez", "GK", 1),
    ("Sofia Martinez", "CB", 2),
    ("Isabella Thompson", "CB", 3),
    ("Mia Johnson", "LB", 4),
    ("Charlotte Williams", "RB", 5),
    ("Amelia Brown", "CM", 6),
    ("Harper Davis", "CM", 7),
    ("Evelyn Miller", "LM", 8),
    ("Abigail Wilson", "RM", 9),
    ("Emily Moore", "CF", 10),
    ("Elizabeth Taylor", "LF", 11),
    ("Mila Anderson", "RF", 12),
    ("Ella Thomas", "GK", 13),
    ("Avery Jackson", "CB", 14),
    ("Sofia White", "LB", 15),
    ("Camila Harris", "CM", 16),
    ("Aria Martin", "RM", 17),
    ("Scarlett Garcia", "CF", 18),
    ("Victoria Clark", "LF", 19),
    ("Madison Lewis", "RF", 20),
]


async def seed_default_team(session: AsyncSession) -> bool:
    """Insert the default team and roster if the store has no teams.

    Returns:
        True when rows were inserted, False when teams already existed
    """
    existing = (await session.execute(select(func.count(Team.id)))).scalar() or 0  # type: ignore[arg-type]
    if existing:
        logger.info("Store already has %d team(s); skipping default team", existing)
        return False

    now = utc_now()
    team = Team(name=DEFAULT_TEAM_NAME, created_at=now)
    session.add(team)
    await session.flush()

    for name, position, jersey_number in DEFAULT_ROSTER:
        session.add(
            Player(
                team_id=team.id,
                name=name,
                position=position,
                jersey_number=jersey_number,
                is_injured=False,
                created_at=now,
                updated_at=now,
            )
        )

    await session.commit()
    logger.info("Added %s with %d players", DEFAULT_TEAM_NAME, len(DEFAULT_ROSTER))
    return True
