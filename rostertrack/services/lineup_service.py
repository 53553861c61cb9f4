"""Balanced lineup suggestions and formation recommendations.

Both are reads: they rank the available roster from recent stat lines and
never write a lineup back.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.errors import QueryResult
from rostertrack.models.fields import as_utc, utc_now
from rostertrack.models.lineups import (
    FieldPosition,
    Formation,
    LineupPlayer,
    LineupSlot,
    LineupSuggestion,
    MatchType,
    field_group,
)
from rostertrack.schemas.matches import Match
from rostertrack.schemas.player_stats import PlayerStats
from rostertrack.schemas.players import Player
from rostertrack.services.availability_service import only_available
from rostertrack.services.query_helpers import degrade_on_storage_error, malformed

logger = logging.getLogger(__name__)

PLAYTIME_WINDOW = timedelta(days=14)
PERFORMANCE_WINDOW = timedelta(days=30)
FULL_MATCH_MINUTES = 90

BASE_SCORE = 10.0
PLAYTIME_WEIGHT = 0.6
PERFORMANCE_WEIGHT = 0.4
POSITION_WEIGHT = 0.2
# Neutral performance score for players without recent lines
NO_FORM_SCORE = 5.0

POSITION_PREFERENCE = {
    FieldPosition.goalkeeper: 2.0,
    FieldPosition.defender: 1.5,
    FieldPosition.midfielder: 1.0,
    FieldPosition.forward: 1.2,
}
UNKNOWN_POSITION_PREFERENCE = 0.5

FALLBACK_SPOT = (FieldPosition.midfielder, 0.5, 0.5)

DEFAULT_FORMATIONS = [
    Formation.four_four_two,
    Formation.four_three_three,
    Formation.three_five_two,
]

FORMATION_FIT = {
    (Formation.four_four_two, MatchType.regular): 9.0,
    (Formation.four_three_three, MatchType.attacking): 9.5,
    (Formation.five_three_two, MatchType.defensive): 9.5,
    (Formation.three_five_two, MatchType.midfield): 9.0,
}
DEFAULT_FORMATION_FIT = 7.0


@dataclass
class RecentForm:
    minutes: int = 0
    lines: int = 0
    goals: int = 0
    assists: int = 0


@dataclass
class Candidate:
    player: Player
    group: Optional[FieldPosition]
    playtime: RecentForm = field(default_factory=RecentForm)
    score: float = 0.0

    def as_lineup_player(self) -> LineupPlayer:
        return LineupPlayer(
            player_id=self.player.id or 0,
            name=self.player.name,
            position=self.player.position,
            jersey_number=self.player.jersey_number,
            score=round(self.score, 3),
            recent_minutes=self.playtime.minutes,
        )


async def _recent_form(
    db: AsyncSession, player_ids: list[int], since: datetime
) -> dict[int, RecentForm]:
    """Per-player totals over lines whose match is strictly after ``since``."""
    if not player_ids:
        return {}
    stmt = (
        select(
            PlayerStats.player_id,
            func.coalesce(func.sum(PlayerStats.minutes_played), 0),
            func.count(PlayerStats.id),
            func.coalesce(func.sum(PlayerStats.goals), 0),
            func.coalesce(func.sum(PlayerStats.assists), 0),
        )  # type: ignore[call-overload]
        .select_from(PlayerStats)
        .join(Match, Match.id == PlayerStats.match_id)
        .where(PlayerStats.player_id.in_(player_ids))  # type: ignore[union-attr]
        .where(Match.date > since)  # type: ignore[operator]
        .group_by(PlayerStats.player_id)
    )
    rows = (await db.execute(stmt)).all()
    return {
        player_id: RecentForm(int(minutes), int(lines), int(goals), int(assists))
        for player_id, minutes, lines, goals, assists in rows
    }


def playtime_score(form: RecentForm) -> float:
    """0..10, higher for players with fewer recent minutes per match."""
    average = form.minutes // form.lines if form.lines else 0
    return (FULL_MATCH_MINUTES - average) / FULL_MATCH_MINUTES * 10.0


def performance_score(form: RecentForm) -> float:
    """Goals and assists per 90 minutes, goals weighted 3 and assists 2."""
    if not form.lines:
        return NO_FORM_SCORE
    if form.minutes <= 0:
        return 0.0
    goals_per_90 = form.goals / form.minutes * FULL_MATCH_MINUTES
    assists_per_90 = form.assists / form.minutes * FULL_MATCH_MINUTES
    return goals_per_90 * 3 + assists_per_90 * 2


def position_preference(player: Player, group: Optional[FieldPosition]) -> float:
    if not player.position:
        return 0.0
    if group is None:
        return UNKNOWN_POSITION_PREFERENCE
    return POSITION_PREFERENCE[group]


def assign_positions(
    ranked: list[Candidate], formation: Formation, players_on_field: int
) -> list[tuple[Candidate, FieldPosition, float, float]]:
    """Fill the goalkeeper, then each line of the formation, then the rest by rank."""
    lineup: list[tuple[Candidate, FieldPosition, float, float]] = []
    used: set[int] = set()

    def place(candidate: Candidate, group: FieldPosition, x: float, y: float) -> None:
        lineup.append((candidate, group, x, y))
        used.add(id(candidate))

    for group in FieldPosition:
        spots = formation.spots(group)
        matching = [c for c in ranked if c.group == group and id(c) not in used]
        for candidate, (x, y) in zip(matching, spots):
            if len(lineup) >= players_on_field:
                return lineup
            place(candidate, group, x, y)

    taken = {(x, y) for _, _, x, y in lineup}
    free_spots = [spot for spot in formation.all_spots() if spot[1:] not in taken]
    for candidate in ranked:
        if len(lineup) >= players_on_field:
            break
        if id(candidate) in used:
            continue
        group, x, y = free_spots.pop(0) if free_spots else FALLBACK_SPOT
        place(candidate, group, x, y)

    return lineup


def balance_score(lineup: list[tuple[Candidate, FieldPosition, float, float]]) -> float:
    """10 minus penalties for thin lines and for uneven recent playtime."""
    counts = Counter(group for _, group, _, _ in lineup)
    score = 10.0
    if counts[FieldPosition.goalkeeper] == 0:
        score -= 3.0
    if counts[FieldPosition.defender] < 2:
        score -= 2.0
    if counts[FieldPosition.midfielder] < 2:
        score -= 1.0
    if counts[FieldPosition.forward] < 1:
        score -= 1.0

    if lineup:
        minutes = [float(c.playtime.minutes) for c, _, _, _ in lineup]
        mean = sum(minutes) / len(minutes)
        variance = sum((m - mean) ** 2 for m in minutes) / len(minutes)
        score -= variance / 100.0

    return max(0.0, min(10.0, score))


def lineup_reasoning(
    lineup: list[tuple[Candidate, FieldPosition, float, float]],
    formation: Formation,
    consider_playtime: bool,
    consider_performance: bool,
) -> str:
    reasons = [f"Suggested {formation.display_name} formation"]
    if consider_playtime:
        reasons.append("Prioritized players with less recent playtime for balance")
    if consider_performance:
        reasons.append("Considered recent performance metrics")

    counts = Counter(group for _, group, _, _ in lineup)
    if counts[FieldPosition.defender] >= 4:
        reasons.append("Strong defensive setup")
    if counts[FieldPosition.midfielder] >= 4:
        reasons.append("Midfield control focus")
    if counts[FieldPosition.forward] >= 3:
        reasons.append("Attacking formation")
    return ". ".join(reasons) + "."


async def _available_roster(db: AsyncSession, team_id: int) -> list[Player]:
    stmt = only_available(
        select(Player).where(Player.team_id == team_id)  # type: ignore[arg-type]
    ).order_by(func.coalesce(Player.name, ""), Player.id)  # type: ignore[arg-type]
    result = await db.execute(stmt)
    return list(result.scalars().all())


@degrade_on_storage_error("generate_balanced_lineup", LineupSuggestion)
async def generate_balanced_lineup(
    db: AsyncSession,
    team_id: int,
    players_on_field: int = 11,
    consider_playtime: bool = True,
    consider_performance: bool = False,
    formation: Formation = Formation.four_four_two,
    now: Optional[datetime] = None,
) -> QueryResult[LineupSuggestion]:
    """Suggest a starting lineup from the available roster.

    Each available player scores a base 10, plus 0.6 x a playtime score that
    favours fewer recent minutes (14-day window), plus 0.4 x goals/assists per
    90 (30-day window) when performance counts, plus 0.2 x a position bonus.
    Ties keep name order.

    Args:
        db: Async database session
        team_id: Team to pick from
        players_on_field: Number of starters
        consider_playtime: Weigh recent minutes
        consider_performance: Weigh recent goals and assists
        formation: Formation whose slots are filled
        now: Reference time for the recent windows

    Returns:
        QueryResult with the suggestion; too few available players gives an
        empty lineup with everyone on the bench
    """
    reference = as_utc(now) if now is not None else utc_now()
    roster = await _available_roster(db, team_id)

    if players_on_field <= 0:
        warning = malformed(
            "generate_balanced_lineup",
            f"players_on_field must be positive, got {players_on_field}",
        )
        bench = [Candidate(p, field_group(p.position)).as_lineup_player() for p in roster]
        return QueryResult.success(
            LineupSuggestion(formation=formation, bench=bench), warnings=[warning]
        )

    ids = [p.id for p in roster if p.id is not None]
    playtime = await _recent_form(db, ids, reference - PLAYTIME_WINDOW)
    performance = (
        await _recent_form(db, ids, reference - PERFORMANCE_WINDOW)
        if consider_performance
        else {}
    )

    candidates: list[Candidate] = []
    for player in roster:
        group = field_group(player.position)
        candidate = Candidate(player, group, playtime.get(player.id or 0, RecentForm()))
        score = BASE_SCORE
        if consider_playtime:
            score += playtime_score(candidate.playtime) * PLAYTIME_WEIGHT
        if consider_performance:
            form = performance.get(player.id or 0, RecentForm())
            score += performance_score(form) * PERFORMANCE_WEIGHT
        score += position_preference(player, group) * POSITION_WEIGHT
        candidate.score = score
        candidates.append(candidate)

    if len(candidates) < players_on_field:
        logger.info(
            "team %s has %d available players, %d needed",
            team_id,
            len(candidates),
            players_on_field,
        )
        return QueryResult.success(
            LineupSuggestion(
                formation=formation,
                bench=[c.as_lineup_player() for c in candidates],
                reasoning="Not enough available players for full lineup",
            )
        )

    ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
    lineup = assign_positions(ranked, formation, players_on_field)
    picked = {id(c) for c, _, _, _ in lineup}

    return QueryResult.success(
        LineupSuggestion(
            formation=formation,
            lineup=[
                LineupSlot(player=c.as_lineup_player(), field_position=group, x=x, y=y)
                for c, group, x, y in lineup
            ],
            bench=[c.as_lineup_player() for c in candidates if id(c) not in picked],
            reasoning=lineup_reasoning(
                lineup, formation, consider_playtime, consider_performance
            ),
            balance_score=round(balance_score(lineup), 3),
        )
    )


def _formation_fit(formation: Formation, match_type: MatchType) -> float:
    return FORMATION_FIT.get((formation, match_type), DEFAULT_FORMATION_FIT)


@degrade_on_storage_error("recommend_formations", list)
async def recommend_formations(
    db: AsyncSession,
    team_id: int,
    match_type: MatchType = MatchType.regular,
) -> QueryResult[list[Formation]]:
    """Formations the available roster can field, best fit for the match type first.

    Players without a position count as midfielders. When no formation is
    fully covered, 4-4-2, 4-3-3 and 3-5-2 are suggested.
    """
    roster = await _available_roster(db, team_id)
    counts = Counter(
        field_group(p.position) if p.position else FieldPosition.midfielder
        for p in roster
    )
    defenders = counts[FieldPosition.defender]
    midfielders = counts[FieldPosition.midfielder]
    forwards = counts[FieldPosition.forward]

    recommended = [
        formation
        for formation in (
            Formation.four_four_two,
            Formation.three_five_two,
            Formation.four_three_three,
            Formation.five_three_two,
            Formation.three_four_three,
        )
        if defenders >= formation.requirements[FieldPosition.defender]
        and midfielders >= formation.requirements[FieldPosition.midfielder]
        and forwards >= formation.requirements[FieldPosition.forward]
    ]
    if not recommended:
        recommended = list(DEFAULT_FORMATIONS)

    recommended.sort(key=lambda f: _formation_fit(f, match_type), reverse=True)
    return QueryResult.success(recommended)
