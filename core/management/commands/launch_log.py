"""Print the day-grouped launch log for a decoded save snapshot."""

from __future__ import annotations

import json
import logging

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from analysis.launch_log import MissingLaunchTimestampError, get_launch_log
from core.rendering import launch_log_payload, render_launch_log
from core.snapshots import SnapshotError, load_snapshot

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Group launched missions by calendar day, newest first."""

    help = "Print launched missions grouped by day (day boundary: TIME_ZONE)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("snapshot", help="Path to a decoded save snapshot (JSON).")
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Only show the last N days, counting today (default: all days).",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Emit JSON instead of text.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        days: int | None = options["days"]
        if days is not None and days <= 0:
            raise CommandError("--days must be a positive integer.")

        tz = timezone.get_current_timezone()
        try:
            snapshot = load_snapshot(options["snapshot"])
            log = get_launch_log(snapshot.artifacts_db, tz=tz)
        except (SnapshotError, MissingLaunchTimestampError) as exc:
            raise CommandError(str(exc)) from exc

        selected = log.filtered(days, now=timezone.now())
        logger.info("Launch log: %d of %d days selected.", len(selected), len(log.dates))

        if options["json"]:
            self.stdout.write(json.dumps(launch_log_payload(selected), indent=2))
            return None
        for line in render_launch_log(selected):
            self.stdout.write(line)
        return None
