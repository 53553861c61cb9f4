"""Print roster, match and stat totals for every team.

Usage:
    python scripts/check_counts.py [--timeframe last_week|last_month|all_time]
"""

import argparse
import asyncio

from rostertrack.models.fields import Timeframe
from rostertrack.services.match_service import fetch_matches
from rostertrack.services.player_service import count_players, fetch_active_players
from rostertrack.services.stats_service import get_team_stats_summary
from rostertrack.services.team_service import list_teams
from rostertrack.utils.db_async import SessionLocal, dispose_engine


async def count_rows(timeframe: Timeframe) -> int:
    async with SessionLocal() as session:
        teams = await list_teams(session)
        if teams.failed:
            print(f"ERROR: {teams.error.message}")  # type: ignore[union-attr]
            return 1

        for team in teams.data:
            players = await count_players(session, team.id)
            active = await fetch_active_players(session, team.id)
            matches = await fetch_matches(session, team.id)
            summary = await get_team_stats_summary(session, team.id, timeframe)

            print(f"{team.name or 'Unknown Team'} (id={team.id})")
            print(f"  players: {players.data} ({len(active.data)} available)")
            print(f"  matches: {len(matches.data)}")
            print(
                f"  {timeframe.display_name}: {summary.data.total_goals} goals,"
                f" {summary.data.total_assists} assists,"
                f" {summary.data.matches_played} matches with stats"
            )

    await dispose_engine()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--timeframe",
        type=Timeframe,
        choices=list(Timeframe),
        default=Timeframe.all_time,
    )
    args = parser.parse_args()
    raise SystemExit(asyncio.run(count_rows(args.timeframe)))
