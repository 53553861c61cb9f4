"""
Lineup suggestion types: field groups, formations and the suggestion payload.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FieldPosition(str, Enum):
    goalkeeper = "GK"
    defender = "DEF"
    midfielder = "MID"
    forward = "FWD"

    @property
    def display_name(self) -> str:
        return {
            "GK": "Goalkeeper",
            "DEF": "Defender",
            "MID": "Midfielder",
            "FWD": "Forward",
        }[self.value]


# Roster position codes folded onto the four field groups
POSITION_GROUPS = {
    "GK": FieldPosition.goalkeeper,
    "DEF": FieldPosition.defender,
    "CB": FieldPosition.defender,
    "LB": FieldPosition.defender,
    "RB": FieldPosition.defender,
    "LWB": FieldPosition.defender,
    "RWB": FieldPosition.defender,
    "MID": FieldPosition.midfielder,
    "CM": FieldPosition.midfielder,
    "CDM": FieldPosition.midfielder,
    "CAM": FieldPosition.midfielder,
    "LM": FieldPosition.midfielder,
    "RM": FieldPosition.midfielder,
    "FWD": FieldPosition.forward,
    "CF": FieldPosition.forward,
    "ST": FieldPosition.forward,
    "LF": FieldPosition.forward,
    "RF": FieldPosition.forward,
    "LW": FieldPosition.forward,
    "RW": FieldPosition.forward,
}


def field_group(position: Optional[str]) -> Optional[FieldPosition]:
    """Map a roster position code ("CB", "cm") to its field group, or None."""
    if not position:
        return None
    return POSITION_GROUPS.get(position.strip().upper())


# (x, y) on a 0..1 pitch; y=0 is the own goal line
_DEFENDER_SPOTS = {
    "4": [(0.2, 0.25), (0.4, 0.25), (0.6, 0.25), (0.8, 0.25)],
    "3": [(0.25, 0.25), (0.5, 0.25), (0.75, 0.25)],
    "5": [(0.15, 0.25), (0.35, 0.25), (0.5, 0.25), (0.65, 0.25), (0.85, 0.25)],
}

_MIDFIELD_SPOTS = {
    "4-4-2": [(0.2, 0.5), (0.4, 0.5), (0.6, 0.5), (0.8, 0.5)],
    "4-3-3": [(0.3, 0.5), (0.5, 0.5), (0.7, 0.5)],
    "3-5-2": [(0.15, 0.5), (0.35, 0.5), (0.5, 0.5), (0.65, 0.5), (0.85, 0.5)],
    "3-4-3": [(0.25, 0.5), (0.45, 0.5), (0.55, 0.5), (0.75, 0.5)],
    "5-3-2": [(0.3, 0.5), (0.5, 0.5), (0.7, 0.5)],
}

_FORWARD_SPOTS = {
    "2": [(0.4, 0.75), (0.6, 0.75)],
    "3": [(0.3, 0.75), (0.5, 0.75), (0.7, 0.75)],
}

GOALKEEPER_SPOT = (0.5, 0.1)


class Formation(str, Enum):
    four_four_two = "4-4-2"
    four_three_three = "4-3-3"
    three_five_two = "3-5-2"
    three_four_three = "3-4-3"
    five_three_two = "5-3-2"

    @property
    def display_name(self) -> str:
        return self.value

    def spots(self, group: FieldPosition) -> list[tuple[float, float]]:
        """Pitch coordinates for one field group, left to right."""
        defenders, _, forwards = self.value.split("-")
        if group == FieldPosition.goalkeeper:
            return [GOALKEEPER_SPOT]
        if group == FieldPosition.defender:
            return list(_DEFENDER_SPOTS[defenders])
        if group == FieldPosition.midfielder:
            return list(_MIDFIELD_SPOTS[self.value])
        return list(_FORWARD_SPOTS[forwards])

    def all_spots(self) -> list[tuple[FieldPosition, float, float]]:
        return [
            (group, x, y)
            for group in FieldPosition
            for x, y in self.spots(group)
        ]

    @property
    def requirements(self) -> dict[FieldPosition, int]:
        return {group: len(self.spots(group)) for group in FieldPosition}


class MatchType(str, Enum):
    regular = "regular"
    attacking = "attacking"
    defensive = "defensive"
    midfield = "midfield"

    @property
    def display_name(self) -> str:
        return {
            "regular": "Regular",
            "attacking": "Attacking",
            "defensive": "Defensive",
            "midfield": "Midfield Control",
        }[self.value]


class LineupPlayer(BaseModel):
    player_id: int
    name: Optional[str] = None
    position: Optional[str] = None
    jersey_number: Optional[int] = None
    score: float = 0.0
    # Minutes over the recent playtime window
    recent_minutes: int = 0


class LineupSlot(BaseModel):
    player: LineupPlayer
    field_position: FieldPosition
    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)


class LineupSuggestion(BaseModel):
    """A starting lineup plus the available players left on the bench."""

    formation: Formation = Formation.four_four_two
    lineup: list[LineupSlot] = Field(default_factory=list)
    bench: list[LineupPlayer] = Field(default_factory=list)
    reasoning: str = ""
    balance_score: float = Field(default=0.0, ge=0.0, le=10.0)


class FormationRecommendations(BaseModel):
    team_id: int
    match_type: MatchType
    formations: list[Formation]
