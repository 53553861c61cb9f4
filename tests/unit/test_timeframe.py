"""Unit tests for timeframe window bounds."""

from datetime import datetime, timedelta, timezone

from rostertrack.models.fields import Timeframe, as_utc, months_back, timeframe_cutoff


REFERENCE = datetime(2026, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


class TestTimeframeCutoff:
    def test_last_week_is_seven_days_back(self):
        assert timeframe_cutoff(Timeframe.last_week, REFERENCE) == datetime(
            2026, 3, 8, 12, 0, tzinfo=timezone.utc
        )

    def test_last_month_is_one_calendar_month_back(self):
        assert timeframe_cutoff(Timeframe.last_month, REFERENCE) == datetime(
            2026, 2, 15, 12, 0, tzinfo=timezone.utc
        )

    def test_all_time_has_no_bound(self):
        assert timeframe_cutoff(Timeframe.all_time, REFERENCE) is None

    def test_cutoff_is_aware_utc(self):
        """An instant two hours ahead of UTC lands on the same UTC cutoff."""
        plus_two = datetime(2026, 3, 15, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        cutoff = timeframe_cutoff(Timeframe.last_week, plus_two)
        assert cutoff == datetime(2026, 3, 8, 12, 0, tzinfo=timezone.utc)
        assert cutoff.tzinfo == timezone.utc

    def test_naive_reference_is_read_as_utc(self):
        naive = REFERENCE.replace(tzinfo=None)
        assert timeframe_cutoff(Timeframe.last_week, naive) == datetime(
            2026, 3, 8, 12, 0, tzinfo=timezone.utc
        )

    def test_defaults_to_current_time(self):
        before = datetime.now(timezone.utc) - timedelta(weeks=1)
        cutoff = timeframe_cutoff(Timeframe.last_week)
        after = datetime.now(timezone.utc) - timedelta(weeks=1)
        assert cutoff is not None
        assert before <= cutoff <= after


class TestMonthsBack:
    def test_clamps_to_end_of_shorter_month(self):
        assert months_back(datetime(2026, 3, 31, 9, 30), 1) == datetime(2026, 2, 28, 9, 30)

    def test_leap_year_february(self):
        assert months_back(datetime(2024, 3, 31), 1) == datetime(2024, 2, 29)

    def test_crosses_year_boundary(self):
        assert months_back(datetime(2026, 1, 10), 1) == datetime(2025, 12, 10)

    def test_keeps_time_zone(self):
        assert months_back(REFERENCE, 1).tzinfo == timezone.utc


def test_as_utc_converts_offsets():
    eastern = datetime(2026, 3, 15, 7, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert as_utc(eastern) == REFERENCE
    assert as_utc(eastern).utcoffset() == timedelta(0)


def test_display_names():
    assert Timeframe.last_week.display_name == "Last Week"
    assert Timeframe.last_month.display_name == "Last Month"
    assert Timeframe.all_time.display_name == "All Time"
