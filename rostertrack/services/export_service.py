"""CSV reports for a team's player statistics and match history.

The builders are pure functions over already-aggregated lines so they can be
tested without a database; ``get_match_history_lines`` supplies the match
rollups in one grouped query.
"""

import csv
import io
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.errors import QueryResult
from rostertrack.models.stats import MatchHistoryLine, PlayerStatsLine, per_match
from rostertrack.schemas.matches import Match
from rostertrack.schemas.player_stats import PlayerStats
from rostertrack.services.query_helpers import degrade_on_storage_error

PLAYER_STATISTICS_COLUMNS = [
    "Player Name",
    "Position",
    "Jersey Number",
    "Total Minutes",
    "Average Minutes per Match",
    "Total Goals",
    "Goals per Match",
    "Total Assists",
    "Assists per Match",
    "Matches Played",
    "Goals + Assists",
]

MATCH_HISTORY_COLUMNS = [
    "Match Date",
    "Day of Week",
    "Duration (min)",
    "Halves",
    "Overtime",
    "Total Goals",
    "Goals per Half",
    "Total Assists",
    "Assists per Half",
    "Players Used",
    "Goal + Assist Total",
    "Average Minutes per Player",
]


def _report_header(title: str, team_name: Optional[str], generated_at: datetime) -> str:
    return (
        f"# {title}\n"
        f"# Team: {team_name or 'Unknown Team'}\n"
        f"# Generated: {generated_at.strftime('%Y-%m-%d %H:%M')}\n"
        "# \n"
    )


def build_player_statistics_csv(
    team_name: Optional[str],
    lines: Iterable[PlayerStatsLine],
    generated_at: datetime,
) -> str:
    """Render per-player rollups as CSV, best goal contributors first."""
    buffer = io.StringIO()
    buffer.write(_report_header("Player Statistics Report", team_name, generated_at))
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(PLAYER_STATISTICS_COLUMNS)

    ordered = sorted(lines, key=lambda line: line.goal_contributions, reverse=True)
    for line in ordered:
        writer.writerow(
            [
                line.name or "",
                line.position or "",
                line.jersey_number if line.jersey_number is not None else 0,
                line.total_minutes,
                f"{line.minutes_per_match:.1f}",
                line.total_goals,
                f"{line.goals_per_match:.2f}",
                line.total_assists,
                f"{line.assists_per_match:.2f}",
                line.matches_played,
                line.goal_contributions,
            ]
        )
    return buffer.getvalue()


def build_match_history_csv(
    team_name: Optional[str],
    lines: Iterable[MatchHistoryLine],
    generated_at: datetime,
) -> str:
    """Render per-match rollups as CSV in the order given."""
    buffer = io.StringIO()
    buffer.write(_report_header("Match History Report", team_name, generated_at))
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(MATCH_HISTORY_COLUMNS)

    for line in lines:
        writer.writerow(
            [
                line.date.strftime("%Y-%m-%d") if line.date else "",
                line.date.strftime("%A") if line.date else "",
                line.duration,
                line.number_of_halves,
                "Yes" if line.has_overtime else "No",
                line.total_goals,
                f"{per_match(line.total_goals, line.number_of_halves):.2f}",
                line.total_assists,
                f"{per_match(line.total_assists, line.number_of_halves):.2f}",
                line.players_used,
                line.total_goals + line.total_assists,
                f"{per_match(line.total_minutes, line.players_used):.1f}",
            ]
        )
    return buffer.getvalue()


@degrade_on_storage_error("get_match_history_lines", list)
async def get_match_history_lines(
    db: AsyncSession, team_id: int
) -> QueryResult[list[MatchHistoryLine]]:
    """Per-match totals for a team, most recent first."""
    stmt = (
        select(
            Match.id,
            Match.date,
            Match.duration,
            Match.number_of_halves,
            Match.has_overtime,
            func.coalesce(func.sum(PlayerStats.goals), 0).label("total_goals"),
            func.coalesce(func.sum(PlayerStats.assists), 0).label("total_assists"),
            func.coalesce(func.sum(PlayerStats.minutes_played), 0).label("total_minutes"),
            func.count(PlayerStats.id).label("players_used"),
        )  # type: ignore[call-overload]
        .select_from(Match)
        .outerjoin(PlayerStats, PlayerStats.match_id == Match.id)
        .where(Match.team_id == team_id)  # type: ignore[arg-type]
        .group_by(
            Match.id,
            Match.date,
            Match.duration,
            Match.number_of_halves,
            Match.has_overtime,
        )
        .order_by(
            Match.date.is_(None),  # type: ignore[union-attr]
            desc(Match.date),  # type: ignore[arg-type]
            desc(Match.id),  # type: ignore[arg-type]
        )
    )
    result = await db.execute(stmt)
    return QueryResult.success(
        [
            MatchHistoryLine(
                match_id=row["id"],
                date=row["date"],
                duration=row["duration"],
                number_of_halves=row["number_of_halves"],
                has_overtime=bool(row["has_overtime"]),
                total_goals=int(row["total_goals"]),
                total_assists=int(row["total_assists"]),
                total_minutes=int(row["total_minutes"]),
                players_used=int(row["players_used"]),
            )
            for row in result.mappings().all()
        ]
    )
