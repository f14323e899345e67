"""Django settings for rocketsTracker.

The project has no database and no web surface; Django provides configuration,
logging and the management command runner around the pure `analysis` package.
Configuration is driven by environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_str(name: str, *, default: str | None) -> str | None:
    """Read a string environment variable, treating blank values as unset."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

INSTALLED_APPS = [
    "core.apps.CoreConfig",
]

DATABASES: dict[str, dict[str, object]] = {}

LANGUAGE_CODE = "en-us"
# Day boundary used when grouping the launch log.
TIME_ZONE = _env_str("ROCKETS_TRACKER_TIME_ZONE", default="UTC")
USE_I18N = False
USE_TZ = True

# Optional JSON file overriding the level/unlock threshold tables.
PROGRESSION_POLICY_PATH = _env_str("ROCKETS_TRACKER_POLICY_PATH", default=None)

LOG_LEVEL = (_env_str("ROCKETS_TRACKER_LOG_LEVEL", default=None) or ("DEBUG" if DEBUG else "INFO")).upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "analysis": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "core": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}
