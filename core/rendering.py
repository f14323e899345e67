"""Text and JSON renderings of mission statistics for management commands."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from analysis.dto import FleetProgressionStats, MissionRecord, ShipProgressionStats
from analysis.launch_log import DailyLaunchLog


def format_points(value: Decimal | None) -> str:
    """Format launch points with at most one decimal place ("-" for None)."""

    if value is None:
        return "-"
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text


def _decimal_or_none(value: Decimal | None) -> float | None:
    return None if value is None else float(value)


def ship_payload(ship: ShipProgressionStats) -> dict[str, Any]:
    """Return a JSON-serializable payload for one ship."""

    return {
        "ship": ship.ship.name,
        "shipName": ship.ship_name,
        "durations": {
            duration.mission_type.duration_type.name: duration.count for duration in ship.durations
        },
        "count": ship.count,
        "launchPoints": float(ship.launch_points),
        "level": ship.current_level,
        "maxLevel": ship.max_level,
        "launchPointsToNextLevel": _decimal_or_none(ship.launch_points_to_next_level),
        "launchPointsToMaxLevel": _decimal_or_none(ship.launch_points_to_max_level),
        "missionsToNextLevel": {
            "short": ship.short_missions_to_next_level,
            "standard": ship.standard_missions_to_next_level,
            "extended": ship.extended_missions_to_next_level,
        },
        "missionsToMaxLevel": {
            "short": ship.short_missions_to_max_level,
            "standard": ship.standard_missions_to_max_level,
            "extended": ship.extended_missions_to_max_level,
        },
        "requiredRemainingLaunchesToUnlockNextShip": ship.required_remaining_launches_to_unlock_next_ship,
    }


def fleet_payload(stats: FleetProgressionStats) -> dict[str, Any]:
    """Return a JSON-serializable payload for fleet progression."""

    return {
        "totalMissions": stats.total_missions,
        "totalLaunchPoints": float(stats.total_launch_points),
        "shipLevels": {ship.name: level for ship, level in stats.ship_levels.items()},
        "research": {
            "ftlDriveUpgrades": stats.config.ftl_drive_upgrades_level,
            "zeroGQuantumContainment": stats.config.zero_g_quantum_containment_level,
        },
        "ships": [ship_payload(ship) for ship in stats.ships],
    }


def render_fleet_table(stats: FleetProgressionStats) -> list[str]:
    """Render fleet progression as fixed-width table lines."""

    if not stats.ships:
        return ["No launched missions."]

    header = f"{'Ship':<22}{'Missions':>9}{'LP':>9}{'Level':>8}{'To next':>9}{'To max':>9}{'Unlock':>8}"
    lines = [header, "-" * len(header)]
    for ship in stats.ships:
        unlock = ship.required_remaining_launches_to_unlock_next_ship
        lines.append(
            f"{ship.ship_name:<22}"
            f"{ship.count:>9}"
            f"{format_points(ship.launch_points):>9}"
            f"{f'{ship.current_level}/{ship.max_level}':>8}"
            f"{format_points(ship.launch_points_to_next_level):>9}"
            f"{format_points(ship.launch_points_to_max_level):>9}"
            f"{'-' if unlock is None else unlock:>8}"
        )
    lines.append("-" * len(header))
    lines.append(f"{'Total':<22}{stats.total_missions:>9}{format_points(stats.total_launch_points):>9}")
    lines.append(
        f"FTL Drive Upgrades: {stats.config.ftl_drive_upgrades_level}  "
        f"Zero-G Quantum Containment: {stats.config.zero_g_quantum_containment_level}"
    )
    return lines


def mission_payload(mission: MissionRecord) -> dict[str, Any]:
    launch_time = mission.launch_time
    return {
        "id": mission.identifier,
        "ship": mission.ship.name,
        "durationType": mission.duration_type.name,
        "status": mission.status.name,
        "level": mission.level,
        "launchTime": launch_time.isoformat() if launch_time else None,
    }


def launch_log_payload(days: Sequence[DailyLaunchLog]) -> list[dict[str, Any]]:
    """Return a JSON-serializable payload for daily launch logs."""

    return [
        {"date": day.date_display, "missions": [mission_payload(mission) for mission in day.missions]}
        for day in days
    ]


def render_launch_log(days: Sequence[DailyLaunchLog]) -> list[str]:
    """Render daily launch logs as indented text lines."""

    if not days:
        return ["No launches in range."]

    lines: list[str] = []
    for day in days:
        lines.append(f"{day.date_display} ({len(day.missions)} launches)")
        for mission in day.missions:
            launch_time = mission.launch_time
            local_time = launch_time.astimezone(day.day_start.tzinfo) if launch_time else None
            clock = local_time.strftime("%H:%M") if local_time else "--:--"
            lines.append(f"  {clock}  {mission.ship_name:<22}{mission.duration_type_name:<10}L{mission.level}")
    return lines
