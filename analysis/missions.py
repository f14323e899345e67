"""Mission selection shared by the progression and launch log pipelines."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from .dto import MissionRecord
from .ships import is_launched


class ArtifactsDBLike(Protocol):
    """Protocol for decoded artifacts databases (duck-typed)."""

    mission_archive: Iterable[MissionRecord] | None
    mission_infos: Iterable[MissionRecord] | None


def get_launched_missions(artifacts_db: ArtifactsDBLike) -> tuple[MissionRecord, ...]:
    """Return launched missions in chronological order.

    Args:
        artifacts_db: Object exposing optional `mission_archive` and
            `mission_infos` collections.

    Returns:
        Archived missions followed by current missions, keeping only those at or
        past EXPLORING, stably sorted by derived start time.

    Notes:
        Missing collections are treated as empty. A mission without a derived
        start time sorts as if it started at the epoch.
    """

    archive = getattr(artifacts_db, "mission_archive", None) or ()
    current = getattr(artifacts_db, "mission_infos", None) or ()
    missions = [mission for mission in (*archive, *current) if is_launched(mission.status)]
    missions.sort(key=lambda mission: mission.start_time_derived or 0.0)
    return tuple(missions)
