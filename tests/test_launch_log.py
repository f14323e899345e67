"""Unit tests for the day-grouped launch log."""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from analysis.dto import ArtifactsDBInput, MissionRecord
from analysis.launch_log import MissingLaunchTimestampError, build_launch_log, get_launch_log
from analysis.ships import DurationType, MissionStatus, Spaceship

pytestmark = pytest.mark.unit


def _ts(*args: int) -> float:
    return datetime(*args, tzinfo=timezone.utc).timestamp()


def test_same_day_missions_are_sorted_newest_first(make_mission) -> None:
    """Two launches on one day form one entry, most recent first."""

    first = make_mission(launched_at=_ts(2024, 3, 1, 8))
    second = make_mission(launched_at=_ts(2024, 3, 1, 17))

    log = build_launch_log([first, second])

    assert len(log.dates) == 1
    assert log.dates[0].date == date(2024, 3, 1)
    assert log.dates[0].missions == (second, first)
    assert log.dates[0].date_display == "2024-03-01"


def test_days_are_sorted_newest_first_and_partition_missions(make_mission) -> None:
    """Every mission lands in exactly one day; days run newest first."""

    missions = [
        make_mission(launched_at=_ts(2024, 3, 2, 1)),
        make_mission(launched_at=_ts(2024, 3, 5, 9)),
        make_mission(launched_at=_ts(2024, 3, 2, 23)),
        make_mission(launched_at=_ts(2024, 2, 28, 12)),
        make_mission(launched_at=_ts(2024, 3, 5, 8)),
    ]

    log = build_launch_log(missions)

    assert [day.date for day in log.dates] == [date(2024, 3, 5), date(2024, 3, 2), date(2024, 2, 28)]
    grouped = [mission for day in log.dates for mission in day.missions]
    assert sorted(m.identifier for m in grouped) == sorted(m.identifier for m in missions)
    assert log.mission_count == len(missions)
    for day in log.dates:
        stamps = [mission.launch_timestamp for mission in day.missions]
        assert stamps == sorted(stamps, reverse=True)


def test_missing_launch_timestamp_fails_fast(make_mission) -> None:
    """A launched mission without a launch time is a hard error naming the mission."""

    good = make_mission()
    broken = MissionRecord(
        identifier="corrupt-7",
        ship=Spaceship.BCR,
        duration_type=DurationType.LONG,
        status=MissionStatus.ARCHIVED,
        start_time_derived=10.0,
        launch_timestamp=None,
    )

    with pytest.raises(MissingLaunchTimestampError, match="mission corrupt-7: launch timestamp not found") as excinfo:
        build_launch_log([good, broken])
    assert excinfo.value.mission_id == "corrupt-7"


def test_day_boundaries_follow_the_given_timezone(make_mission) -> None:
    """The same instant can fall on different days in different zones."""

    mission = make_mission(launched_at=_ts(2024, 3, 1, 23, 30))

    new_york = build_launch_log([mission], tz=ZoneInfo("America/New_York"))
    tokyo = build_launch_log([mission], tz=ZoneInfo("Asia/Tokyo"))

    assert new_york.dates[0].date == date(2024, 3, 1)
    assert tokyo.dates[0].date == date(2024, 3, 2)
    assert tokyo.dates[0].day_start == datetime(2024, 3, 2, tzinfo=ZoneInfo("Asia/Tokyo"))


def test_filtered_keeps_trailing_window_including_today(make_mission) -> None:
    """filtered(N) keeps today and the N-1 preceding days."""

    log = build_launch_log(
        [
            make_mission(launched_at=_ts(2024, 3, 10, 6)),
            make_mission(launched_at=_ts(2024, 3, 9, 6)),
            make_mission(launched_at=_ts(2024, 3, 8, 6)),
            make_mission(launched_at=_ts(2024, 3, 1, 6)),
        ]
    )
    now = datetime(2024, 3, 10, 12, tzinfo=timezone.utc)

    assert [day.date.day for day in log.filtered(1, now=now)] == [10]
    assert [day.date.day for day in log.filtered(2, now=now)] == [10, 9]
    assert [day.date.day for day in log.filtered(3, now=now)] == [10, 9, 8]
    assert [day.date.day for day in log.filtered(10, now=now)] == [10, 9, 8, 1]
    assert log.filtered(now=now) == log.dates
    assert log.filtered() == log.dates


def test_filtered_uses_the_log_timezone_for_today(make_mission) -> None:
    """The current day is computed in the same zone used for grouping."""

    tz = ZoneInfo("Asia/Tokyo")
    log = build_launch_log(
        [
            make_mission(launched_at=_ts(2024, 3, 10, 16)),
            make_mission(launched_at=_ts(2024, 3, 10, 1)),
        ],
        tz=tz,
    )
    # 2024-03-10 16:00 UTC is already 2024-03-11 in Tokyo.
    now = datetime(2024, 3, 10, 16, 30, tzinfo=timezone.utc)

    assert [day.date for day in log.filtered(1, now=now)] == [date(2024, 3, 11)]


@pytest.mark.parametrize("window", [0, -3])
def test_filtered_rejects_non_positive_windows(make_mission, window) -> None:
    """Window sizes must be positive."""

    log = build_launch_log([make_mission()])
    with pytest.raises(ValueError, match="positive"):
        log.filtered(window)


def test_get_launch_log_skips_unlaunched_missions(make_mission) -> None:
    """Missions that never launched do not appear, even without timestamps."""

    fueling = MissionRecord(
        identifier="fueling",
        ship=Spaceship.CHICKEN_ONE,
        duration_type=DurationType.SHORT,
        status=MissionStatus.FUELING,
    )
    launched = make_mission(launched_at=_ts(2024, 3, 1, 9))
    db = ArtifactsDBInput(mission_archive=(launched,), mission_infos=(fueling,))

    log = get_launch_log(db)
    assert [m.identifier for day in log.dates for m in day.missions] == [launched.identifier]


def test_get_launch_log_of_empty_snapshot_is_empty() -> None:
    """No missions yields an empty log."""

    log = get_launch_log(ArtifactsDBInput())
    assert log.dates == ()
    assert log.filtered(7) == ()
