"""Spaceship, mission duration and mission status enumerations.

Ordinals mirror the values used by the decoded save data so that snapshot
records can be mapped without translation tables.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class Spaceship(IntEnum):
    """Spaceship variants in their in-game unlock order."""

    CHICKEN_ONE = 0
    CHICKEN_NINE = 1
    CHICKEN_HEAVY = 2
    BCR = 3
    MILLENIUM_CHICKEN = 4
    CORELLIHEN_CORVETTE = 5
    GALEGGTICA = 6
    CHICKFIANT = 7
    VOYEGGER = 8
    HENERPRISE = 9
    ATREGGIES = 10


class DurationType(IntEnum):
    """Mission duration classes."""

    SHORT = 0
    LONG = 1
    EPIC = 2
    TUTORIAL = 3


class MissionStatus(IntEnum):
    """Ordinal mission status; anything at or past EXPLORING has launched."""

    FUELING = 0
    PREPARE_TO_LAUNCH = 5
    EXPLORING = 10
    RETURNED = 15
    ANALYZING = 16
    COMPLETE = 20
    ARCHIVED = 25


SPACESHIP_LIST: Final[tuple[Spaceship, ...]] = tuple(Spaceship)

# Display order, which differs from the ordinal order.
DURATION_TYPE_LIST: Final[tuple[DurationType, ...]] = (
    DurationType.TUTORIAL,
    DurationType.SHORT,
    DurationType.LONG,
    DurationType.EPIC,
)

_SPACESHIP_NAMES: Final[dict[Spaceship, str]] = {
    Spaceship.CHICKEN_ONE: "Chicken One",
    Spaceship.CHICKEN_NINE: "Chicken Nine",
    Spaceship.CHICKEN_HEAVY: "Chicken Heavy",
    Spaceship.BCR: "BCR",
    Spaceship.MILLENIUM_CHICKEN: "Quintillion Chicken",
    Spaceship.CORELLIHEN_CORVETTE: "Cornish-Hen Corvette",
    Spaceship.GALEGGTICA: "Galeggtica",
    Spaceship.CHICKFIANT: "Defihent",
    Spaceship.VOYEGGER: "Voyegger",
    Spaceship.HENERPRISE: "Henerprise",
    Spaceship.ATREGGIES: "Atreggies Henliner",
}

_DURATION_TYPE_NAMES: Final[dict[DurationType, str]] = {
    DurationType.TUTORIAL: "Tutorial",
    DurationType.SHORT: "Short",
    DurationType.LONG: "Standard",
    DurationType.EPIC: "Extended",
}


def spaceship_name(ship: Spaceship) -> str:
    """Return the in-game display name of a spaceship."""

    return _SPACESHIP_NAMES[ship]


def duration_type_name(duration_type: DurationType) -> str:
    """Return the in-game display name of a duration class."""

    return _DURATION_TYPE_NAMES[duration_type]


def is_launched(status: int) -> bool:
    """Return True when a mission status means the ship has left."""

    return status >= MissionStatus.EXPLORING
