"""Pytest fixtures shared across the mission statistics tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from analysis.dto import MissionRecord
from analysis.ships import DurationType, MissionStatus, Spaceship


def epoch(*args: int) -> float:
    """Return epoch seconds for a UTC wall-clock time."""

    return datetime(*args, tzinfo=timezone.utc).timestamp()


@pytest.fixture
def make_mission() -> Callable[..., MissionRecord]:
    """Return a factory for launched MissionRecord values with sane defaults."""

    counter = iter(range(1, 1_000_000))

    def _make(
        *,
        ship: Spaceship = Spaceship.CHICKEN_ONE,
        duration_type: DurationType = DurationType.SHORT,
        status: MissionStatus = MissionStatus.ARCHIVED,
        launched_at: float | None = None,
        identifier: str | None = None,
        start_time: float | None = None,
        level: int = 0,
    ) -> MissionRecord:
        launched_at = launched_at if launched_at is not None else epoch(2024, 3, 1, 12)
        return MissionRecord(
            identifier=identifier or f"mission-{next(counter)}",
            ship=ship,
            duration_type=duration_type,
            status=status,
            start_time_derived=start_time if start_time is not None else launched_at,
            launch_timestamp=launched_at,
            level=level,
        )

    return _make


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that writes a snapshot document to a temp JSON file."""

    def _write(document: dict[str, Any]) -> Path:
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests over the analysis package.
    - `integration`: tests touching Django settings, commands, or files.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
