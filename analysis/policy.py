"""Level and unlock threshold tables for spaceship progression.

These tables are game-balance data and must be kept in lockstep with the
game's own configuration. Nothing here is computed: callers look values up,
and the Progression Aggregator consumes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Final, Mapping

from .ships import DurationType, Spaceship


class InvalidConfigurationError(ValueError):
    """Raised when policy tables are empty or malformed for a lookup."""


DEFAULT_LEVEL_THRESHOLDS: Final[dict[Spaceship, tuple[int, ...]]] = {
    Spaceship.CHICKEN_ONE: (0, 5, 10, 20),
    Spaceship.CHICKEN_NINE: (0, 6, 16, 31),
    Spaceship.CHICKEN_HEAVY: (0, 12, 27, 47, 72),
    Spaceship.BCR: (0, 15, 35, 65, 105),
    Spaceship.MILLENIUM_CHICKEN: (0, 18, 43, 78, 128, 193),
    Spaceship.CORELLIHEN_CORVETTE: (0, 21, 51, 96, 156, 231),
    Spaceship.GALEGGTICA: (0, 24, 59, 109, 174, 254),
    Spaceship.CHICKFIANT: (0, 27, 67, 127, 207, 307, 427),
    Spaceship.VOYEGGER: (0, 30, 75, 145, 235, 345, 475),
    Spaceship.HENERPRISE: (0, 35, 85, 165, 265, 395, 555, 745, 965),
    Spaceship.ATREGGIES: (0, 40, 100, 200, 325, 475, 650, 850, 1075),
}

# Tutorial and short missions are point-equivalent.
DEFAULT_DURATION_WEIGHTS: Final[dict[DurationType, Decimal]] = {
    DurationType.TUTORIAL: Decimal("1.0"),
    DurationType.SHORT: Decimal("1.0"),
    DurationType.LONG: Decimal("1.4"),
    DurationType.EPIC: Decimal("1.8"),
}

# None marks the last ship, which unlocks nothing.
DEFAULT_UNLOCK_REQUIREMENTS: Final[dict[Spaceship, int | None]] = {
    Spaceship.CHICKEN_ONE: 4,
    Spaceship.CHICKEN_NINE: 6,
    Spaceship.CHICKEN_HEAVY: 12,
    Spaceship.BCR: 15,
    Spaceship.MILLENIUM_CHICKEN: 18,
    Spaceship.CORELLIHEN_CORVETTE: 21,
    Spaceship.GALEGGTICA: 24,
    Spaceship.CHICKFIANT: 27,
    Spaceship.VOYEGGER: 30,
    Spaceship.HENERPRISE: 40,
    Spaceship.ATREGGIES: None,
}


@dataclass(frozen=True, slots=True)
class ProgressionPolicy:
    """Lookup tables consumed by the Progression Aggregator.

    Attributes:
        level_thresholds: Cumulative launch points required for each level,
            indexed by level 0..max_level.
        duration_weights: Launch points awarded per mission of a duration class.
        unlock_requirements: Total launches of a ship required to unlock the
            next ship, or None when there is no next ship.
    """

    level_thresholds: Mapping[Spaceship, tuple[int | float, ...]] = field(
        default_factory=lambda: dict(DEFAULT_LEVEL_THRESHOLDS)
    )
    duration_weights: Mapping[DurationType, Decimal] = field(
        default_factory=lambda: dict(DEFAULT_DURATION_WEIGHTS)
    )
    unlock_requirements: Mapping[Spaceship, int | None] = field(
        default_factory=lambda: dict(DEFAULT_UNLOCK_REQUIREMENTS)
    )

    def level_thresholds_for(self, ship: Spaceship) -> tuple[int | float, ...]:
        """Return the validated threshold sequence for a ship.

        Raises:
            InvalidConfigurationError: When the table is missing, empty, does
                not start at 0, or is decreasing for `ship`.
        """

        thresholds = self.level_thresholds.get(ship)
        if not thresholds:
            raise InvalidConfigurationError(f"No level thresholds configured for {ship.name}.")
        if thresholds[0] > 0:
            raise InvalidConfigurationError(
                f"Level 0 of {ship.name} must require 0 launch points: {list(thresholds)}."
            )
        for previous, current in zip(thresholds, thresholds[1:]):
            if current < previous:
                raise InvalidConfigurationError(
                    f"Level thresholds for {ship.name} must be non-decreasing: {list(thresholds)}."
                )
        return tuple(thresholds)

    def weight(self, duration_type: DurationType) -> Decimal:
        """Return the launch-point weight of a duration class.

        Raises:
            InvalidConfigurationError: When the weight is missing, not a finite
                number, or not positive.
        """

        raw = self.duration_weights.get(duration_type)
        try:
            weight = None if raw is None else Decimal(str(raw))
        except (InvalidOperation, TypeError, ValueError):
            weight = None
        if weight is None or not weight.is_finite() or weight <= 0:
            raise InvalidConfigurationError(
                f"No positive launch point weight configured for {duration_type.name}: {raw!r}."
            )
        return weight

    def weights(self) -> dict[DurationType, Decimal]:
        """Return validated weights for every duration class."""

        return {duration_type: self.weight(duration_type) for duration_type in DurationType}

    def unlock_requirement(self, ship: Spaceship) -> int | None:
        """Return total launches of `ship` needed to unlock the next ship."""

        if ship not in self.unlock_requirements:
            raise InvalidConfigurationError(f"No unlock requirement configured for {ship.name}.")
        return self.unlock_requirements[ship]


DEFAULT_POLICY: Final[ProgressionPolicy] = ProgressionPolicy()


def missions_needed(remaining_points: Decimal | None, *, weight: Decimal) -> int:
    """Return how many missions of a given weight cover `remaining_points`.

    Args:
        remaining_points: Launch points still required, or None when capped.
        weight: Launch points awarded per mission.

    Returns:
        `ceil(remaining_points / weight)`, or 0 when nothing remains.
    """

    if not remaining_points or remaining_points <= 0:
        return 0
    return int((Decimal(remaining_points) / Decimal(weight)).to_integral_value(rounding=ROUND_CEILING))
