"""Per-ship progression statistics derived from launched missions.

Counts launched missions per (ship, duration class) bucket, converts them into
weighted launch points, and resolves each ship's level against the threshold
tables in `analysis.policy`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from .dto import (
    FleetProgressionStats,
    MissionRecord,
    MissionTypeKey,
    MissionTypeStatistics,
    ProgressInput,
    ShipProgressionStats,
    ShipsConfig,
)
from .missions import ArtifactsDBLike, get_launched_missions
from .policy import DEFAULT_POLICY, ProgressionPolicy
from .ships import DURATION_TYPE_LIST, SPACESHIP_LIST, Spaceship

logger = logging.getLogger(__name__)

FTL_DRIVE_UPGRADES = "afx_mission_time"
ZERO_G_QUANTUM_CONTAINMENT = "afx_mission_capacity"


def ships_config_from_progress(progress: ProgressInput | None) -> ShipsConfig:
    """Build a ShipsConfig from save-derived progress.

    Args:
        progress: Progress exposing `epic_research` entries with `id`/`level`,
            or None for a fresh config.

    Returns:
        ShipsConfig with research levels filled in and an empty level overlay.
    """

    research_levels: dict[str, int] = {}
    for research in getattr(progress, "epic_research", None) or ():
        research_levels[research.id] = research.level
    return ShipsConfig(
        ftl_drive_upgrades_level=research_levels.get(FTL_DRIVE_UPGRADES, 0),
        zero_g_quantum_containment_level=research_levels.get(ZERO_G_QUANTUM_CONTAINMENT, 0),
    )


def resolve_level(
    launch_points: Decimal, thresholds: Sequence[int | float]
) -> tuple[int, int, Decimal | None, Decimal | None]:
    """Resolve a level from cumulative launch points.

    Args:
        launch_points: Total launch points earned.
        thresholds: Non-decreasing cumulative thresholds indexed by level.

    Returns:
        Tuple of `(max_level, current_level, to_next_level, to_max_level)`.
        `to_next_level` is None at max level; `to_max_level` is None once the
        final threshold has been reached.
    """

    if not thresholds:
        raise ValueError("thresholds must not be empty")

    bounds = [Decimal(str(threshold)) for threshold in thresholds]
    max_level = len(bounds) - 1
    final_threshold = bounds[max_level]
    to_max_level = final_threshold - launch_points if final_threshold > launch_points else None

    for level, threshold in enumerate(bounds):
        if launch_points < threshold:
            return max_level, level - 1, threshold - launch_points, to_max_level
    return max_level, max_level, None, to_max_level


def build_ship_statistics(
    ship: Spaceship,
    counts: dict[MissionTypeKey, int],
    *,
    policy: ProgressionPolicy = DEFAULT_POLICY,
) -> ShipProgressionStats | None:
    """Build progression stats for one ship from bucket counts.

    Returns:
        ShipProgressionStats, or None when the ship has no launched missions.

    Raises:
        InvalidConfigurationError: When any duration weight is malformed, or
            the ship has missions and a malformed threshold table.
    """

    weights = policy.weights()
    durations: list[MissionTypeStatistics] = []
    for duration_type in DURATION_TYPE_LIST:
        key = MissionTypeKey(ship=ship, duration_type=duration_type)
        count = counts.get(key, 0)
        if count > 0:
            durations.append(
                MissionTypeStatistics(mission_type=key, count=count, weight=weights[duration_type])
            )
    if not durations:
        return None

    count = sum(duration.count for duration in durations)
    launch_points = sum((duration.launch_points for duration in durations), Decimal(0))
    thresholds = policy.level_thresholds_for(ship)
    max_level, current_level, to_next_level, to_max_level = resolve_level(launch_points, thresholds)

    required_total = policy.unlock_requirement(ship)
    required_remaining = None if required_total is None else max(required_total - count, 0)

    return ShipProgressionStats(
        ship=ship,
        durations=tuple(durations),
        count=count,
        launch_points=launch_points,
        level_thresholds=thresholds,
        max_level=max_level,
        current_level=current_level,
        launch_points_to_next_level=to_next_level,
        launch_points_to_max_level=to_max_level,
        required_total_launches_to_unlock_next_ship=required_total,
        required_remaining_launches_to_unlock_next_ship=required_remaining,
        duration_weights=weights,
    )


def count_mission_types(missions: Sequence[MissionRecord]) -> dict[MissionTypeKey, int]:
    """Count missions per (ship, duration class) bucket, zero-filled."""

    counts = {
        MissionTypeKey(ship=ship, duration_type=duration_type): 0
        for ship in SPACESHIP_LIST
        for duration_type in DURATION_TYPE_LIST
    }
    for mission in missions:
        counts[mission.mission_type] += 1
    return counts


def get_mission_statistics(
    artifacts_db: ArtifactsDBLike,
    progress: ProgressInput | None = None,
    *,
    config: ShipsConfig | None = None,
    policy: ProgressionPolicy = DEFAULT_POLICY,
) -> FleetProgressionStats:
    """Compute per-ship progression for every ship with a launched mission.

    Args:
        artifacts_db: Object exposing optional `mission_archive` and
            `mission_infos` collections.
        progress: Save progress used to build the ships config when `config`
            is not given.
        config: Optional pre-built ships config. It is never mutated.
        policy: Threshold, weight and unlock tables.

    Returns:
        FleetProgressionStats whose `ship_levels` map holds each included ship's
        resolved level, also applied to the returned config.

    Raises:
        InvalidConfigurationError: When any duration weight is malformed, or
            the tables of a ship present in the missions are.
    """

    missions = get_launched_missions(artifacts_db)
    counts = count_mission_types(missions)
    base_config = config if config is not None else ships_config_from_progress(progress)

    ships: list[ShipProgressionStats] = []
    ship_levels: dict[Spaceship, int] = {}
    for ship in SPACESHIP_LIST:
        stats = build_ship_statistics(ship, counts, policy=policy)
        if stats is None:
            continue
        ships.append(stats)
        ship_levels[ship] = stats.current_level
        logger.debug(
            "%s: %d missions, %s launch points, level %d/%d",
            ship.name,
            stats.count,
            stats.launch_points,
            stats.current_level,
            stats.max_level,
        )

    return FleetProgressionStats(
        config=base_config.with_ship_levels(ship_levels),
        ships=tuple(ships),
        ship_levels=ship_levels,
    )
