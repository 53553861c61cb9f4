"""Unit tests for field groups, formation slots and lineup scoring helpers."""

import pytest

from rostertrack.models.lineups import FieldPosition, Formation, field_group
from rostertrack.services.lineup_service import (
    RecentForm,
    performance_score,
    playtime_score,
)


@pytest.mark.parametrize(
    "position, expected",
    [
        ("GK", FieldPosition.goalkeeper),
        (" cb ", FieldPosition.defender),
        ("CDM", FieldPosition.midfielder),
        ("st", FieldPosition.forward),
        ("Sweeper", None),
        ("", None),
        (None, None),
    ],
)
def test_field_group(position, expected):
    assert field_group(position) is expected


@pytest.mark.parametrize("formation", list(Formation))
def test_every_formation_has_eleven_spots(formation: Formation):
    assert len(formation.all_spots()) == 11
    assert sum(formation.requirements.values()) == 11


def test_requirements_follow_the_name():
    assert Formation.three_five_two.requirements == {
        FieldPosition.goalkeeper: 1,
        FieldPosition.defender: 3,
        FieldPosition.midfielder: 5,
        FieldPosition.forward: 2,
    }


def test_playtime_score_favours_fewer_minutes():
    assert playtime_score(RecentForm()) == 10.0
    assert playtime_score(RecentForm(minutes=90, lines=1)) == 0.0
    assert playtime_score(RecentForm(minutes=90, lines=2)) == 5.0


def test_performance_score():
    assert performance_score(RecentForm()) == 5.0
    assert performance_score(RecentForm(minutes=0, lines=1)) == 0.0
    form = RecentForm(minutes=90, lines=1, goals=1, assists=1)
    assert performance_score(form) == pytest.approx(5.0)
