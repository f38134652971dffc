from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from liftlog.schemas.tracking import SetResult, TrackingRecord
from liftlog.services.history_aggregator import (
    estimate_one_rep_max,
    group_by_exercise,
    one_rep_max_progression,
    recent_exercises,
    training_days,
    training_streak,
)
from tests.fakes import OWNER_ID

# Never on the same calendar day, so the server clock can agree with at most one
LINE_ISLANDS = timezone(timedelta(hours=14))
BAKER_ISLAND = timezone(timedelta(hours=-12))


def _record(record_id, exercise_id, name, day, sets_data='[{"reps":10,"weight":60.0}]'):
    return TrackingRecord(
        id=record_id,
        owner_id=OWNER_ID,
        exercise_id=exercise_id,
        exercise_name=name,
        performed_at=datetime(2024, 1, day, 12, tzinfo=timezone.utc),
        sets_data=sets_data,
    )


def test_group_by_exercise_orders_oldest_first():
    later = _record("a", "bench", "Bench Press", 10)
    earlier = _record("b", "bench", "Bench Press", 5)
    squat = _record("c", "squat", "Squat", 7)

    groups = group_by_exercise([later, squat, earlier])

    assert [r.id for r in groups["bench"]] == ["b", "a"]
    assert [r.id for r in groups["squat"]] == ["c"]


def test_group_by_exercise_breaks_ties_by_identity():
    records = [_record("z", "bench", "Bench Press", 5), _record("m", "bench", "Bench Press", 5)]
    assert [r.id for r in group_by_exercise(records)["bench"]] == ["m", "z"]


def test_group_by_exercise_does_not_mutate_input():
    records = [_record("a", "bench", "Bench Press", 10), _record("b", "bench", "Bench Press", 5)]
    before = list(records)
    group_by_exercise(records)
    assert records == before


def test_group_by_exercise_empty():
    assert group_by_exercise([]) == {}


def test_recent_exercises_distinct_names_newest_first():
    records = [
        _record("1", "squat", "Squat", 3),
        _record("2", "bench", "Bench Press", 4),
        _record("3", "squat", "Squat", 6),
        _record("4", "row", "Row", 1),
    ]
    recent = recent_exercises(records)
    assert [r.exercise_name for r in recent] == ["Squat", "Bench Press"]
    assert recent[0].id == "3"


def test_recent_exercises_custom_limit():
    records = [_record(str(i), f"ex{i}", f"Exercise {i}", i) for i in range(1, 6)]
    assert [r.id for r in recent_exercises(records, limit=4)] == ["5", "4", "3", "2"]


def test_training_days_distinct_and_newest_first():
    records = [_record("a", "x", "X", 3), _record("b", "y", "Y", 3), _record("c", "x", "X", 1)]
    assert training_days(records, timezone.utc) == [date(2024, 1, 3), date(2024, 1, 1)]


def test_streak_counts_consecutive_days_ending_today():
    records = [_record(str(d), "x", "X", d) for d in (1, 2, 3, 8, 9)]
    streak = training_streak(records, today=date(2024, 1, 9), tz=timezone.utc)
    assert streak.current_streak == 2
    assert streak.longest_streak == 3
    assert streak.last_training_date == date(2024, 1, 9)


def test_streak_is_zero_when_nothing_logged_today():
    records = [_record("a", "x", "X", 8)]
    streak = training_streak(records, today=date(2024, 1, 9), tz=timezone.utc)
    assert streak.current_streak == 0
    assert streak.longest_streak == 1


def test_streak_without_records():
    streak = training_streak([], today=date(2024, 1, 9), tz=timezone.utc)
    assert (streak.current_streak, streak.longest_streak, streak.last_training_date) == (0, 0, None)


def test_epley_estimate():
    assert estimate_one_rep_max(SetResult(reps=10, weight=100.0)) == pytest.approx(133.333, rel=1e-4)
    assert estimate_one_rep_max(SetResult(reps=1, weight=100.0)) == pytest.approx(103.333, rel=1e-4)


def test_one_rep_max_progression_best_set_per_record():
    records = [
        _record("b", "bench", "Bench Press", 10, '[{"reps":5,"weight":90.0},{"reps":10,"weight":80.0}]'),
        _record("a", "bench", "Bench Press", 5, '[{"reps":10,"weight":75.0}]'),
        _record("s", "squat", "Squat", 6, '[{"reps":5,"weight":140.0}]'),
    ]
    points = one_rep_max_progression(records, "bench")
    assert [p.date.day for p in points] == [5, 10]
    assert points[0].one_rep_max == pytest.approx(100.0)
    assert points[1].one_rep_max == pytest.approx(106.6667, rel=1e-4)


def test_one_rep_max_progression_skips_corrupted_records(caplog):
    records = [
        _record("ok", "bench", "Bench Press", 5, '[{"reps":10,"weight":75.0}]'),
        _record("bad", "bench", "Bench Press", 6, "not json"),
        _record("empty", "bench", "Bench Press", 7, "[]"),
    ]
    points = one_rep_max_progression(records, "bench")
    assert len(points) == 1
    assert "bad" in caplog.text


@pytest.mark.parametrize("tz", [LINE_ISLANDS, BAKER_ISLAND])
def test_streak_today_follows_the_zone_not_the_server_clock(tz):
    trained = datetime.combine(datetime.now(tz).date(), datetime.min.time().replace(hour=12), tzinfo=tz)
    record = TrackingRecord(
        id="t", owner_id=OWNER_ID, exercise_id="x", exercise_name="X", performed_at=trained, sets_data="[]"
    )
    streak = training_streak([record], tz=tz)
    assert streak.current_streak == 1
    assert streak.last_training_date == trained.date()


@pytest.mark.parametrize("zone_name", ["Pacific/Kiritimati", "Etc/GMT+12"])
def test_streak_uses_configured_zone_by_default(configured_zone, zone_name):
    configured_zone(zone_name)
    zone = ZoneInfo(zone_name)
    trained = datetime.combine(datetime.now(zone).date(), datetime.min.time().replace(hour=12), tzinfo=zone)
    record = _record("t", "x", "X", 1).model_copy(update={"performed_at": trained})

    streak = training_streak([record])

    assert streak.current_streak == 1
    assert streak.last_training_date == trained.date()
