"""Day-grouped launch log built from launched missions.

Missions are grouped by the calendar day of their launch time in a caller
supplied timezone (UTC by default). Days are ordered newest first, and so are
the missions within each day.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from .dto import MissionRecord
from .missions import ArtifactsDBLike, get_launched_missions


class MissingLaunchTimestampError(ValueError):
    """Raised when a launched mission has no resolvable launch time."""

    def __init__(self, *, mission_id: str) -> None:
        """Initialize the error.

        Args:
            mission_id: Identifier of the offending mission record.
        """

        super().__init__(f"mission {mission_id}: launch timestamp not found")
        self.mission_id = mission_id


@dataclass(frozen=True, slots=True)
class DailyLaunchLog:
    """Missions launched on one calendar day.

    Attributes:
        date: Calendar day in the log's timezone.
        day_start: Aware datetime of local midnight starting `date`.
        missions: Missions sorted newest launch first.
    """

    date: date
    day_start: datetime
    missions: tuple[MissionRecord, ...]

    @classmethod
    def from_missions(cls, day: date, missions: Iterable[MissionRecord], *, tz: tzinfo) -> DailyLaunchLog:
        """Build a daily log, sorting missions newest launch first."""

        ordered = sorted(missions, key=lambda mission: mission.launch_timestamp, reverse=True)
        return cls(
            date=day,
            day_start=datetime.combine(day, time.min, tzinfo=tz),
            missions=tuple(ordered),
        )

    @property
    def date_display(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True, slots=True)
class LaunchLog:
    """Daily launch logs sorted newest day first.

    Attributes:
        dates: Daily logs, newest first.
        tz: Timezone defining day boundaries for grouping and filtering.
    """

    dates: tuple[DailyLaunchLog, ...] = ()
    tz: tzinfo = timezone.utc

    @property
    def mission_count(self) -> int:
        return sum(len(day.missions) for day in self.dates)

    def filtered(self, last_n_days: int | None = None, *, now: datetime | None = None) -> tuple[DailyLaunchLog, ...]:
        """Return days within a trailing window.

        Args:
            last_n_days: Optional window size in days, counting today as one.
                When omitted, every day is returned.
            now: Optional reference time; defaults to the current time.

        Returns:
            Days on or after `start_of_today - (last_n_days - 1)`, newest first.
        """

        if last_n_days is None:
            return self.dates
        if isinstance(last_n_days, bool) or not isinstance(last_n_days, int) or last_n_days <= 0:
            raise ValueError("last_n_days must be a positive integer.")

        reference = now if now is not None else datetime.now(tz=self.tz)
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=self.tz)
        today = reference.astimezone(self.tz).date()
        cutoff = today - timedelta(days=last_n_days - 1)
        return tuple(day for day in self.dates if day.date >= cutoff)


def local_day(mission: MissionRecord, *, tz: tzinfo) -> date:
    """Return the calendar day a mission launched on in `tz`."""

    launch_time = mission.launch_time
    if launch_time is None:
        raise MissingLaunchTimestampError(mission_id=mission.identifier)
    return launch_time.astimezone(tz).date()


def build_launch_log(missions: Iterable[MissionRecord], *, tz: tzinfo = timezone.utc) -> LaunchLog:
    """Group missions into a LaunchLog.

    Raises:
        MissingLaunchTimestampError: On the first mission without a launch
            timestamp; no partial log is returned.
    """

    by_day: dict[date, list[MissionRecord]] = defaultdict(list)
    for mission in missions:
        by_day[local_day(mission, tz=tz)].append(mission)

    dates = [DailyLaunchLog.from_missions(day, day_missions, tz=tz) for day, day_missions in by_day.items()]
    dates.sort(key=lambda daily: daily.date, reverse=True)
    return LaunchLog(dates=tuple(dates), tz=tz)


def get_launch_log(artifacts_db: ArtifactsDBLike, *, tz: tzinfo = timezone.utc) -> LaunchLog:
    """Build the launch log for every launched mission in an artifacts DB.

    Args:
        artifacts_db: Object exposing optional `mission_archive` and
            `mission_infos` collections.
        tz: Timezone whose midnight separates calendar days.

    Returns:
        LaunchLog with days and missions ordered newest first.
    """

    return build_launch_log(get_launched_missions(artifacts_db), tz=tz)
