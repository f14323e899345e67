"""Pure mission statistics package for rocketsTracker.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
I/O.
"""

from .launch_log import get_launch_log
from .missions import get_launched_missions
from .progression import get_mission_statistics

__all__ = ["get_launch_log", "get_launched_missions", "get_mission_statistics"]
