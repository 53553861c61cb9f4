"""Integration tests for timeframe-windowed statistics and team rollups."""

from datetime import timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rostertrack.models.fields import Timeframe
from rostertrack.models.stats import TeamStatsSummary
from rostertrack.schemas.matches import Match
from rostertrack.schemas.players import Player
from rostertrack.schemas.teams import Team
from rostertrack.services.bootstrap_service import DEFAULT_TEAM_NAME, seed_default_team
from rostertrack.services.export_service import get_match_history_lines
from rostertrack.services.stats_service import (
    get_injury_statistics,
    get_player_stats_summary,
    get_player_statistics,
    get_team_player_summaries,
    get_team_stats_summary,
)
from tests.integration.roster_helpers import (
    REFERENCE_TIME,
    UnavailableSession,
    add_match,
    add_player,
    add_stats,
    add_team,
)


class TestTeamStatsSummary:
    @pytest.mark.asyncio
    async def test_all_time_totals(self, db_session: AsyncSession, rosie_fc):
        result = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.all_time, now=REFERENCE_TIME
        )

        assert result.ok
        assert result.data == TeamStatsSummary(
            total_goals=4,
            total_assists=0,
            total_minutes=540,
            matches_played=2,
            players_count=3,
        )

    @pytest.mark.asyncio
    async def test_last_week_without_recent_matches(
        self, db_session: AsyncSession, rosie_fc
    ):
        result = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.last_week, now=REFERENCE_TIME
        )

        assert result.data == TeamStatsSummary(players_count=3)

    @pytest.mark.asyncio
    async def test_last_month_window(self, db_session: AsyncSession, rosie_fc):
        recent = await add_match(
            db_session, rosie_fc.team.id, REFERENCE_TIME - timedelta(days=20)
        )
        await add_stats(
            db_session,
            rosie_fc.players[0].id,
            recent.id,
            goals=2,
            assists=1,
            minutes_played=45,
        )

        month = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.last_month, now=REFERENCE_TIME
        )
        week = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.last_week, now=REFERENCE_TIME
        )

        assert month.data == TeamStatsSummary(
            total_goals=2,
            total_assists=1,
            total_minutes=45,
            matches_played=1,
            players_count=3,
        )
        assert week.data.total_goals == 0

    @pytest.mark.asyncio
    async def test_window_start_is_inclusive(self, db_session: AsyncSession, rosie_fc):
        boundary = await add_match(
            db_session, rosie_fc.team.id, REFERENCE_TIME - timedelta(weeks=1)
        )
        await add_stats(db_session, rosie_fc.players[1].id, boundary.id, goals=1)

        result = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.last_week, now=REFERENCE_TIME
        )

        assert result.data.total_goals == 1
        assert result.data.matches_played == 1

    @pytest.mark.asyncio
    async def test_last_week_over_orm_rows(self, db_session: AsyncSession, rosie_fc):
        recent = await add_match(
            db_session, rosie_fc.team.id, REFERENCE_TIME - timedelta(days=2)
        )
        await add_stats(
            db_session, rosie_fc.players[0].id, recent.id, goals=1, minutes_played=70
        )

        for now in (
            REFERENCE_TIME,
            REFERENCE_TIME.replace(tzinfo=None),
            REFERENCE_TIME.astimezone(timezone(timedelta(hours=-5))),
        ):
            result = await get_team_stats_summary(
                db_session, rosie_fc.team.id, Timeframe.last_week, now=now
            )
            assert result.ok, result.error
            assert result.data == TeamStatsSummary(
                total_goals=1,
                total_minutes=70,
                matches_played=1,
                players_count=3,
            )

    @pytest.mark.asyncio
    async def test_stored_dates_come_back_as_utc(
        self, db_session: AsyncSession, rosie_fc
    ):
        matches = await db_session.execute(select(Match.date))

        assert all(d.utcoffset() == timedelta(0) for d in matches.scalars())

    @pytest.mark.asyncio
    async def test_matches_counted_once_not_per_line(
        self, db_session: AsyncSession, rosie_fc
    ):
        result = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.all_time
        )

        # Six stat lines across two matches
        assert result.data.matches_played == 2

    @pytest.mark.asyncio
    async def test_roster_size_ignores_window(self, db_session: AsyncSession, rosie_fc):
        await add_player(db_session, rosie_fc.team.id, "Bench Player", 14, "CB")

        for timeframe in Timeframe:
            result = await get_team_stats_summary(
                db_session, rosie_fc.team.id, timeframe, now=REFERENCE_TIME
            )
            assert result.data.players_count == 4

    @pytest.mark.asyncio
    async def test_lines_without_match_only_count_all_time(
        self, db_session: AsyncSession, rosie_fc
    ):
        await add_stats(
            db_session, rosie_fc.players[0].id, None, goals=5, minutes_played=30
        )

        all_time = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.all_time
        )
        last_month = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.last_month, now=REFERENCE_TIME
        )

        assert all_time.data.total_goals == 9
        assert all_time.data.total_minutes == 570
        assert all_time.data.matches_played == 2
        assert last_month.data.total_goals == 0

    @pytest.mark.asyncio
    async def test_lines_follow_the_players_team(
        self, db_session: AsyncSession, rosie_fc
    ):
        other = await add_team(db_session, "Other FC")
        away = await add_match(db_session, other.id, REFERENCE_TIME - timedelta(days=2))
        await add_stats(db_session, rosie_fc.players[2].id, away.id, goals=3)

        ours = await get_team_stats_summary(
            db_session, rosie_fc.team.id, Timeframe.all_time
        )
        theirs = await get_team_stats_summary(db_session, other.id, Timeframe.all_time)

        assert ours.data.total_goals == 7
        assert ours.data.matches_played == 3
        assert theirs.data == TeamStatsSummary()

    @pytest.mark.asyncio
    async def test_empty_team(self, db_session: AsyncSession):
        team = await add_team(db_session, "Empty FC")

        result = await get_team_stats_summary(db_session, team.id, Timeframe.all_time)

        assert result.ok
        assert result.data == TeamStatsSummary()

    @pytest.mark.asyncio
    async def test_unavailable_storage(self):
        result = await get_team_stats_summary(
            UnavailableSession(), 1, Timeframe.all_time  # type: ignore[arg-type]
        )

        assert result.failed
        assert result.error.kind == "storage_unavailable"
        assert result.data == TeamStatsSummary()


class TestPlayerStatistics:
    @pytest.mark.asyncio
    async def test_lines_newest_match_first(self, db_session: AsyncSession, rosie_fc):
        player = rosie_fc.players[0]
        first, second = rosie_fc.matches

        result = await get_player_statistics(
            db_session, player.id, Timeframe.all_time, now=REFERENCE_TIME
        )

        assert result.ok
        assert [line.match_id for line in result.data] == [second.id, first.id]
        assert result.data[0].match_date == second.date
        assert [line.goals for line in result.data] == [0, 1]

    @pytest.mark.asyncio
    async def test_window_filters_old_lines(self, db_session: AsyncSession, rosie_fc):
        player = rosie_fc.players[0]
        recent = await add_match(
            db_session, rosie_fc.team.id, REFERENCE_TIME - timedelta(days=3)
        )
        await add_stats(db_session, player.id, recent.id, goals=1, minutes_played=60)

        week = await get_player_statistics(
            db_session, player.id, Timeframe.last_week, now=REFERENCE_TIME
        )

        assert [line.match_id for line in week.data] == [recent.id]

    @pytest.mark.asyncio
    async def test_line_without_match_sorts_last(
        self, db_session: AsyncSession, rosie_fc
    ):
        player = rosie_fc.players[1]
        loose = await add_stats(db_session, player.id, None, assists=2)

        all_time = await get_player_statistics(db_session, player.id, Timeframe.all_time)
        week = await get_player_statistics(
            db_session, player.id, Timeframe.last_week, now=REFERENCE_TIME
        )

        assert all_time.data[-1].id == loose.id
        assert all_time.data[-1].match_date is None
        assert week.data == []

    @pytest.mark.asyncio
    async def test_player_summary(self, db_session: AsyncSession, rosie_fc):
        result = await get_player_stats_summary(
            db_session, rosie_fc.players[2].id, Timeframe.all_time
        )

        assert result.data.total_goals == 2
        assert result.data.total_minutes == 180
        assert result.data.matches_played == 2

    @pytest.mark.asyncio
    async def test_unknown_player_is_empty(self, db_session: AsyncSession, rosie_fc):
        result = await get_player_statistics(db_session, 9999, Timeframe.all_time)

        assert result.ok
        assert result.data == []


class TestTeamPlayerSummaries:
    @pytest.mark.asyncio
    async def test_one_line_per_roster_player(self, db_session: AsyncSession, rosie_fc):
        bench = await add_player(db_session, rosie_fc.team.id, "Bench Player", 14, "CB")

        result = await get_team_player_summaries(
            db_session, rosie_fc.team.id, Timeframe.all_time
        )

        ids = [line.player_id for line in result.data]
        # Equal minutes fall back to jersey order; the unused player is last
        assert ids == [p.id for p in rosie_fc.players] + [bench.id]
        assert result.data[-1].total_minutes == 0
        assert result.data[-1].matches_played == 0
        assert result.data[2].total_goals == 2
        assert result.data[2].goals_per_match == 1.0
        assert result.data[2].minutes_per_match == 90.0

    @pytest.mark.asyncio
    async def test_window_keeps_roster(self, db_session: AsyncSession, rosie_fc):
        result = await get_team_player_summaries(
            db_session, rosie_fc.team.id, Timeframe.last_week, now=REFERENCE_TIME
        )

        assert len(result.data) == 3
        assert all(line.total_minutes == 0 for line in result.data)
        assert all(line.goals_per_match == 0.0 for line in result.data)


class TestInjuryStatistics:
    @pytest.mark.asyncio
    async def test_rates_and_average_days(self, db_session: AsyncSession):
        team = await add_team(db_session, "Rosie FC")
        await add_player(db_session, team.id, "Fit", 1)
        await add_player(
            db_session,
            team.id,
            "Ankle",
            2,
            is_injured=True,
            injury_date=REFERENCE_TIME - timedelta(days=10),
        )
        await add_player(
            db_session,
            team.id,
            "Knee",
            3,
            is_injured=True,
            injury_date=REFERENCE_TIME - timedelta(days=5),
        )
        await add_player(db_session, team.id, "Unknown Date", 4, is_injured=True)

        result = await get_injury_statistics(db_session, team.id, now=REFERENCE_TIME)

        assert result.data.total_players == 4
        assert result.data.available_players == 1
        assert result.data.injured_players == 3
        assert result.data.injury_rate == pytest.approx(0.75)
        assert result.data.average_injury_days == 5

    @pytest.mark.asyncio
    async def test_empty_roster(self, db_session: AsyncSession):
        team = await add_team(db_session, "Empty FC")

        result = await get_injury_statistics(db_session, team.id, now=REFERENCE_TIME)

        assert result.data.total_players == 0
        assert result.data.injury_rate == 0.0
        assert result.data.average_injury_days == 0


@pytest.mark.asyncio
async def test_match_history_lines(db_session: AsyncSession, rosie_fc):
    first, second = rosie_fc.matches

    result = await get_match_history_lines(db_session, rosie_fc.team.id)

    assert [line.match_id for line in result.data] == [second.id, first.id]
    assert result.data[0].total_goals == 1
    assert result.data[1].total_goals == 3
    assert result.data[1].players_used == 3
    assert result.data[1].total_minutes == 270


@pytest.mark.asyncio
async def test_seed_default_team_runs_once(db_session: AsyncSession):
    assert await seed_default_team(db_session) is True
    assert await seed_default_team(db_session) is False

    teams = (await db_session.execute(select(Team))).scalars().all()
    players = (await db_session.execute(select(func.count(Player.id)))).scalar()
    assert [t.name for t in teams] == [DEFAULT_TEAM_NAME]
    assert players == 20
