"""Print per-ship mission progression for a decoded save snapshot."""

from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError

from analysis.policy import InvalidConfigurationError
from analysis.progression import get_mission_statistics
from core.policy_loader import load_policy
from core.rendering import fleet_payload, render_fleet_table
from core.snapshots import SnapshotError, load_snapshot


class Command(BaseCommand):
    """Compute launch points and ship levels from a snapshot file."""

    help = "Print per-ship launch points, levels and unlock progress for a save snapshot."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("snapshot", help="Path to a decoded save snapshot (JSON).")
        parser.add_argument(
            "--policy",
            default=None,
            help="Optional JSON file overriding level/unlock tables "
            "(default: ROCKETS_TRACKER_POLICY_PATH).",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Emit JSON instead of a text table.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        try:
            snapshot = load_snapshot(options["snapshot"])
            policy = load_policy(options["policy"])
            stats = get_mission_statistics(snapshot.artifacts_db, snapshot.progress, policy=policy)
        except (SnapshotError, InvalidConfigurationError) as exc:
            raise CommandError(str(exc)) from exc

        if options["json"]:
            self.stdout.write(json.dumps(fleet_payload(stats), indent=2))
            return None
        for line in render_fleet_table(stats):
            self.stdout.write(line)
        return None
