"""Load progression policy overrides from JSON.

The file may override any subset of the default tables:

    {
      "levelThresholds": {"CHICKEN_ONE": [0, 5, 10, 20]},
      "durationWeights": {"LONG": "1.4"},
      "unlockRequirements": {"CHICKEN_ONE": 4, "ATREGGIES": null}
    }

Keys are enum names. Entries not present keep their default values.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from django.conf import settings

from analysis.policy import (
    DEFAULT_DURATION_WEIGHTS,
    DEFAULT_LEVEL_THRESHOLDS,
    DEFAULT_POLICY,
    DEFAULT_UNLOCK_REQUIREMENTS,
    InvalidConfigurationError,
    ProgressionPolicy,
)
from analysis.ships import DurationType, Spaceship

logger = logging.getLogger(__name__)


def _section(document: dict[str, Any], key: str) -> dict[str, Any]:
    section = document.get(key) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"{key} must be an object keyed by enum name.")
    return section


def _ship(name: str) -> Spaceship:
    try:
        return Spaceship[name.upper()]
    except KeyError as exc:
        raise InvalidConfigurationError(f"Unknown spaceship {name!r}.") from exc


def _duration_type(name: str) -> DurationType:
    try:
        return DurationType[name.upper()]
    except KeyError as exc:
        raise InvalidConfigurationError(f"Unknown duration type {name!r}.") from exc


def policy_from_document(document: dict[str, Any]) -> ProgressionPolicy:
    """Merge a JSON override document over the default policy tables.

    Raises:
        InvalidConfigurationError: When a key or value is malformed.
    """

    if not isinstance(document, dict):
        raise InvalidConfigurationError("Policy override must be a JSON object.")

    thresholds = dict(DEFAULT_LEVEL_THRESHOLDS)
    for name, values in _section(document, "levelThresholds").items():
        ship = _ship(name)
        if not isinstance(values, list) or not all(isinstance(v, (int, float)) for v in values):
            raise InvalidConfigurationError(f"levelThresholds.{name} must be a list of numbers.")
        thresholds[ship] = tuple(values)

    weights = dict(DEFAULT_DURATION_WEIGHTS)
    for name, value in _section(document, "durationWeights").items():
        try:
            weights[_duration_type(name)] = Decimal(str(value))
        except InvalidOperation as exc:
            raise InvalidConfigurationError(f"durationWeights.{name} is not a number: {value!r}.") from exc

    unlocks = dict(DEFAULT_UNLOCK_REQUIREMENTS)
    for name, value in _section(document, "unlockRequirements").items():
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise InvalidConfigurationError(f"unlockRequirements.{name} must be an integer or null.")
        unlocks[_ship(name)] = value

    policy = ProgressionPolicy(level_thresholds=thresholds, duration_weights=weights, unlock_requirements=unlocks)
    for ship in Spaceship:
        policy.level_thresholds_for(ship)
    policy.weights()
    return policy


def load_policy(path: str | Path | None = None) -> ProgressionPolicy:
    """Return the progression policy, applying a JSON override when configured.

    Args:
        path: Optional override file. Defaults to `settings.PROGRESSION_POLICY_PATH`.

    Returns:
        DEFAULT_POLICY when no override is configured, otherwise the merged policy.
    """

    if path is None:
        path = getattr(settings, "PROGRESSION_POLICY_PATH", None)
    if not path:
        return DEFAULT_POLICY

    policy_path = Path(path)
    try:
        document = json.loads(policy_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidConfigurationError(f"Cannot load policy override {policy_path}: {exc}") from exc
    logger.info("Using progression policy override from %s.", policy_path)
    return policy_from_document(document)
