"""Load decoded save snapshots into analysis input DTOs.

Snapshots are JSON documents shaped like a decoded backup:

    {
      "artifactsDb": {"missionArchive": [...], "missionInfos": [...]},
      "game": {"epicResearch": [{"id": "afx_mission_time", "level": 60}]}
    }

Enum fields accept either the protobuf ordinal or the enum name.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar

from analysis.dto import ArtifactsDBInput, EpicResearchInput, MissionRecord, ProgressInput
from analysis.ships import DurationType, MissionStatus, Spaceship

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=IntEnum)


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or has an invalid shape."""


@dataclass(frozen=True, slots=True)
class SaveSnapshot:
    """Analysis inputs decoded from one snapshot document."""

    artifacts_db: ArtifactsDBInput
    progress: ProgressInput


def _coerce_enum(enum_type: type[_E], raw: object, *, field_name: str, context: str) -> _E:
    """Map an ordinal or enum name onto `enum_type`."""

    try:
        if isinstance(raw, str) and not raw.strip().lstrip("-").isdigit():
            return enum_type[raw.strip().upper()]
        return enum_type(int(raw))  # type: ignore[arg-type]
    except (KeyError, ValueError, TypeError) as exc:
        raise SnapshotError(f"{context}: invalid {field_name} {raw!r}.") from exc


def _coerce_timestamp(raw: object, *, field_name: str, context: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise SnapshotError(f"{context}: invalid {field_name} {raw!r}.")
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise SnapshotError(f"{context}: invalid {field_name} {raw!r}.") from exc
    return value if value > 0 else None


def parse_mission(payload: dict[str, Any], *, context: str) -> MissionRecord:
    """Parse one mission entry.

    The launch timestamp falls back to the derived start time, which is when
    the game records the ship leaving.
    """

    if not isinstance(payload, dict):
        raise SnapshotError(f"{context}: mission entries must be objects.")

    identifier = payload.get("identifier")
    if not identifier:
        identifier = context
        logger.warning("Mission without identifier at %s; using its position instead.", context)

    start_time = _coerce_timestamp(payload.get("startTimeDerived"), field_name="startTimeDerived", context=context)
    launch_timestamp = _coerce_timestamp(
        payload.get("launchTimestamp"), field_name="launchTimestamp", context=context
    )
    if launch_timestamp is None:
        launch_timestamp = start_time

    capacity = payload.get("capacity")
    return MissionRecord(
        identifier=str(identifier),
        ship=_coerce_enum(Spaceship, payload.get("ship"), field_name="ship", context=context),
        duration_type=_coerce_enum(
            DurationType, payload.get("durationType"), field_name="durationType", context=context
        ),
        status=_coerce_enum(MissionStatus, payload.get("status"), field_name="status", context=context),
        start_time_derived=start_time,
        launch_timestamp=launch_timestamp,
        level=int(payload.get("level") or 0),
        capacity=int(capacity) if capacity is not None else None,
    )


def _parse_missions(raw: object, *, source: str) -> tuple[MissionRecord, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise SnapshotError(f"{source} must be a list.")
    return tuple(parse_mission(entry, context=f"{source}[{index}]") for index, entry in enumerate(raw))


def parse_snapshot(document: dict[str, Any]) -> SaveSnapshot:
    """Build analysis inputs from a decoded snapshot document.

    Args:
        document: Parsed JSON object.

    Returns:
        SaveSnapshot with mission collections and epic research progress.

    Raises:
        SnapshotError: When the document shape or a field value is invalid.
    """

    if not isinstance(document, dict):
        raise SnapshotError("Snapshot root must be a JSON object.")

    artifacts = document.get("artifactsDb") or {}
    if not isinstance(artifacts, dict):
        raise SnapshotError("artifactsDb must be an object.")
    mission_archive = _parse_missions(artifacts.get("missionArchive"), source="missionArchive")
    mission_infos = _parse_missions(artifacts.get("missionInfos"), source="missionInfos")

    game = document.get("game") or {}
    if not isinstance(game, dict):
        raise SnapshotError("game must be an object.")
    epic_research: list[EpicResearchInput] = []
    for entry in game.get("epicResearch") or ():
        if not isinstance(entry, dict) or "id" not in entry:
            raise SnapshotError(f"Invalid epicResearch entry {entry!r}.")
        epic_research.append(EpicResearchInput(id=str(entry["id"]), level=int(entry.get("level") or 0)))

    logger.info(
        "Loaded snapshot: %d archived missions, %d current missions.",
        len(mission_archive or ()),
        len(mission_infos or ()),
    )
    return SaveSnapshot(
        artifacts_db=ArtifactsDBInput(mission_archive=mission_archive, mission_infos=mission_infos),
        progress=ProgressInput(epic_research=tuple(epic_research)),
    )


def load_snapshot(path: str | Path) -> SaveSnapshot:
    """Read and parse a snapshot JSON file."""

    snapshot_path = Path(path)
    try:
        document = json.loads(snapshot_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {snapshot_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot {snapshot_path} is not valid JSON: {exc}") from exc
    return parse_snapshot(document)
