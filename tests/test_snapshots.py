"""Integration tests for snapshot and policy override loading."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from analysis.policy import DEFAULT_POLICY, InvalidConfigurationError
from analysis.ships import DurationType, MissionStatus, Spaceship
from core.policy_loader import load_policy, policy_from_document
from core.snapshots import SnapshotError, load_snapshot, parse_snapshot

pytestmark = pytest.mark.integration


def test_load_snapshot_parses_missions_and_research(write_snapshot) -> None:
    """Ordinals and enum names both map onto analysis enums."""

    path = write_snapshot(
        {
            "artifactsDb": {
                "missionArchive": [
                    {
                        "identifier": "a1",
                        "ship": 3,
                        "durationType": 1,
                        "status": 25,
                        "startTimeDerived": 1_700_000_000,
                        "level": 2,
                        "capacity": 12,
                    }
                ],
                "missionInfos": [
                    {
                        "identifier": "c1",
                        "ship": "HENERPRISE",
                        "durationType": "epic",
                        "status": "EXPLORING",
                        "startTimeDerived": 1_700_100_000,
                        "launchTimestamp": 1_700_100_005,
                    }
                ],
            },
            "game": {"epicResearch": [{"id": "afx_mission_time", "level": 30}]},
        }
    )

    snapshot = load_snapshot(path)

    (archived,) = snapshot.artifacts_db.mission_archive
    assert archived.ship == Spaceship.BCR
    assert archived.duration_type == DurationType.LONG
    assert archived.status == MissionStatus.ARCHIVED
    assert archived.launch_timestamp == 1_700_000_000
    assert archived.level == 2
    assert archived.capacity == 12
    (current,) = snapshot.artifacts_db.mission_infos
    assert current.ship == Spaceship.HENERPRISE
    assert current.duration_type == DurationType.EPIC
    assert current.launch_timestamp == 1_700_100_005
    assert snapshot.progress.epic_research[0].level == 30


def test_parse_snapshot_treats_missing_collections_as_absent() -> None:
    """An empty document yields no missions rather than an error."""

    snapshot = parse_snapshot({})
    assert snapshot.artifacts_db.mission_archive is None
    assert snapshot.artifacts_db.mission_infos is None
    assert snapshot.progress.epic_research == ()


def test_parse_snapshot_rejects_unknown_ship() -> None:
    """Unknown enum values are reported with their position."""

    document = {"artifactsDb": {"missionArchive": [{"identifier": "x", "ship": 99, "durationType": 0, "status": 25}]}}
    with pytest.raises(SnapshotError, match=r"missionArchive\[0\]: invalid ship 99"):
        parse_snapshot(document)


def test_load_snapshot_reports_invalid_json(tmp_path) -> None:
    """Non-JSON files raise SnapshotError."""

    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError, match="not valid JSON"):
        load_snapshot(path)


def test_policy_override_merges_over_defaults() -> None:
    """Overrides replace only the entries they name."""

    policy = policy_from_document(
        {
            "levelThresholds": {"BCR": [0, 10, 25, 50]},
            "durationWeights": {"LONG": "1.5"},
            "unlockRequirements": {"BCR": None},
        }
    )
    assert policy.level_thresholds_for(Spaceship.BCR) == (0, 10, 25, 50)
    assert policy.level_thresholds_for(Spaceship.CHICKEN_ONE) == DEFAULT_POLICY.level_thresholds_for(
        Spaceship.CHICKEN_ONE
    )
    assert policy.weight(DurationType.LONG) == Decimal("1.5")
    assert policy.weight(DurationType.EPIC) == Decimal("1.8")
    assert policy.unlock_requirement(Spaceship.BCR) is None


def test_policy_override_rejects_decreasing_thresholds() -> None:
    """Malformed overrides fail when loaded."""

    with pytest.raises(InvalidConfigurationError, match="non-decreasing"):
        policy_from_document({"levelThresholds": {"BCR": [0, 10, 5]}})


@pytest.mark.parametrize("value", [0, "-1", "NaN", "Infinity"])
def test_policy_override_rejects_unusable_weight(value) -> None:
    """Weights that cannot divide remaining points fail when loaded."""

    with pytest.raises(InvalidConfigurationError, match="EPIC"):
        policy_from_document({"durationWeights": {"EPIC": value}})


def test_policy_override_rejects_threshold_table_above_zero() -> None:
    """Level 0 must stay free in overrides too."""

    with pytest.raises(InvalidConfigurationError, match="Level 0 of BCR"):
        policy_from_document({"levelThresholds": {"BCR": [5, 10]}})


def test_load_policy_defaults_without_override(settings) -> None:
    """No configured path means the built-in tables."""

    settings.PROGRESSION_POLICY_PATH = None
    assert load_policy() is DEFAULT_POLICY


def test_load_policy_reads_configured_path(settings, tmp_path) -> None:
    """The settings path is used when no explicit path is given."""

    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"unlockRequirements": {"CHICKEN_ONE": 9}}), encoding="utf-8")
    settings.PROGRESSION_POLICY_PATH = str(path)

    assert load_policy().unlock_requirement(Spaceship.CHICKEN_ONE) == 9
