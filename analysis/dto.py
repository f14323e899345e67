"""DTO types consumed and returned by the mission statistics core.

DTOs are plain data containers. They intentionally avoid any Django
dependencies; the core app builds the input DTOs from decoded snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Mapping

from .policy import InvalidConfigurationError, missions_needed
from .ships import DurationType, MissionStatus, Spaceship, duration_type_name, spaceship_name


@dataclass(frozen=True, slots=True)
class MissionTypeKey:
    """A (ship, duration class) bucket key."""

    ship: Spaceship
    duration_type: DurationType


@dataclass(frozen=True, slots=True)
class MissionRecord:
    """A single mission as produced by the save decoder.

    Attributes:
        identifier: Unique mission identifier.
        ship: Spaceship variant.
        duration_type: Duration class.
        status: Ordinal mission status.
        start_time_derived: Derived start time (epoch seconds), if known.
        launch_timestamp: Launch time (epoch seconds), if known.
        level: Ship level at the time of launch.
        capacity: Artifact capacity of the mission, if known.
    """

    identifier: str
    ship: Spaceship
    duration_type: DurationType
    status: MissionStatus
    start_time_derived: float | None = None
    launch_timestamp: float | None = None
    level: int = 0
    capacity: int | None = None

    @property
    def mission_type(self) -> MissionTypeKey:
        return MissionTypeKey(ship=self.ship, duration_type=self.duration_type)

    @property
    def launch_time(self) -> datetime | None:
        """Launch time as an aware UTC datetime, or None when unknown."""

        if self.launch_timestamp is None:
            return None
        return datetime.fromtimestamp(self.launch_timestamp, tz=timezone.utc)

    @property
    def ship_name(self) -> str:
        return spaceship_name(self.ship)

    @property
    def duration_type_name(self) -> str:
        return duration_type_name(self.duration_type)


@dataclass(frozen=True, slots=True)
class ArtifactsDBInput:
    """Mission collections from the decoded artifacts database.

    Attributes:
        mission_archive: Completed missions, if any.
        mission_infos: Currently tracked missions, if any.
    """

    mission_archive: tuple[MissionRecord, ...] | None = None
    mission_infos: tuple[MissionRecord, ...] | None = None


@dataclass(frozen=True, slots=True)
class EpicResearchInput:
    """A single epic research entry from the save."""

    id: str
    level: int


@dataclass(frozen=True, slots=True)
class ProgressInput:
    """Save-derived progress used to build a ShipsConfig."""

    epic_research: tuple[EpicResearchInput, ...] = ()


@dataclass(frozen=True, slots=True)
class ShipsConfig:
    """Ship configuration derived from a save.

    Attributes:
        ship_levels: Current level per ship. Ships absent from the mapping are
            treated as level 0.
        ftl_drive_upgrades_level: Epic research level of FTL Drive Upgrades.
        zero_g_quantum_containment_level: Epic research level of Zero-G
            Quantum Containment.
    """

    ship_levels: Mapping[Spaceship, int] = field(default_factory=dict)
    ftl_drive_upgrades_level: int = 0
    zero_g_quantum_containment_level: int = 0

    def ship_level(self, ship: Spaceship) -> int:
        return self.ship_levels.get(ship, 0)

    def with_ship_levels(self, ship_levels: Mapping[Spaceship, int]) -> ShipsConfig:
        """Return a copy whose level overlay is updated with `ship_levels`."""

        merged = dict(self.ship_levels)
        merged.update(ship_levels)
        return replace(self, ship_levels=merged)


@dataclass(frozen=True, slots=True)
class MissionTypeStatistics:
    """Mission count for one (ship, duration class) bucket.

    Attributes:
        mission_type: Bucket key.
        count: Number of launched missions in the bucket.
        weight: Launch points awarded per mission in the bucket.
    """

    mission_type: MissionTypeKey
    count: int
    weight: Decimal

    @property
    def launch_points(self) -> Decimal:
        return self.count * self.weight


@dataclass(frozen=True, slots=True)
class ShipProgressionStats:
    """Aggregate progression for one ship.

    Derived fields are computed once by the Progression Aggregator; inputs never
    change after construction.

    Attributes:
        ship: Spaceship variant.
        durations: Nonzero buckets in display order.
        count: Total launched missions across buckets.
        launch_points: Total weighted launch points.
        level_thresholds: Cumulative thresholds used for level resolution.
        max_level: Highest attainable level.
        current_level: Resolved level.
        launch_points_to_next_level: Points still needed for the next level, or
            None when already at max level.
        launch_points_to_max_level: Points still needed for max level, or None
            when the final threshold has been reached.
        required_total_launches_to_unlock_next_ship: Policy requirement, or None
            when no next ship exists.
        required_remaining_launches_to_unlock_next_ship: Launches still needed,
            or None when no next ship exists.
        duration_weights: Weights used to translate points into missions.
    """

    ship: Spaceship
    durations: tuple[MissionTypeStatistics, ...]
    count: int
    launch_points: Decimal
    level_thresholds: tuple[int | float, ...]
    max_level: int
    current_level: int
    launch_points_to_next_level: Decimal | None
    launch_points_to_max_level: Decimal | None
    required_total_launches_to_unlock_next_ship: int | None
    required_remaining_launches_to_unlock_next_ship: int | None
    duration_weights: Mapping[DurationType, Decimal] = field(default_factory=dict)

    @property
    def ship_name(self) -> str:
        return spaceship_name(self.ship)

    @property
    def short_missions_to_next_level(self) -> int:
        return self._missions_needed(DurationType.SHORT, self.launch_points_to_next_level)

    @property
    def standard_missions_to_next_level(self) -> int:
        return self._missions_needed(DurationType.LONG, self.launch_points_to_next_level)

    @property
    def extended_missions_to_next_level(self) -> int:
        return self._missions_needed(DurationType.EPIC, self.launch_points_to_next_level)

    @property
    def short_missions_to_max_level(self) -> int:
        return self._missions_needed(DurationType.SHORT, self.launch_points_to_max_level)

    @property
    def standard_missions_to_max_level(self) -> int:
        return self._missions_needed(DurationType.LONG, self.launch_points_to_max_level)

    @property
    def extended_missions_to_max_level(self) -> int:
        return self._missions_needed(DurationType.EPIC, self.launch_points_to_max_level)

    def _missions_needed(self, duration_type: DurationType, remaining: Decimal | None) -> int:
        weight = self.duration_weights.get(duration_type)
        if weight is None:
            raise InvalidConfigurationError(f"No launch point weight recorded for {duration_type.name}.")
        return missions_needed(remaining, weight=weight)


@dataclass(frozen=True, slots=True)
class FleetProgressionStats:
    """Progression for every ship with at least one launched mission.

    Attributes:
        config: Ships configuration with the resolved level overlay applied.
        ships: Per-ship stats in declared ship order.
        ship_levels: Resolved level per included ship.
    """

    config: ShipsConfig
    ships: tuple[ShipProgressionStats, ...] = ()
    ship_levels: Mapping[Spaceship, int] = field(default_factory=dict)

    @property
    def total_missions(self) -> int:
        return sum(ship.count for ship in self.ships)

    @property
    def total_launch_points(self) -> Decimal:
        return sum((ship.launch_points for ship in self.ships), Decimal(0))

    def ship(self, ship: Spaceship) -> ShipProgressionStats | None:
        """Return stats for `ship`, or None when it has no launched missions."""

        for stats in self.ships:
            if stats.ship == ship:
                return stats
        return None
