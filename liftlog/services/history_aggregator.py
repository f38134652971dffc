"""History views derived from tracking records. Pure functions, no I/O."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, timedelta, tzinfo

from liftlog.core.constants import EPLEY_REPS_DIVISOR, RECENT_EXERCISES_LIMIT
from liftlog.core.exceptions import MalformedSeriesError
from liftlog.schemas.tracking import OneRepMaxPoint, SetResult, StreakRead, TrackingRecord
from liftlog.services import set_series_codec
from liftlog.services.input_validator import local_timezone, local_today

logger = logging.getLogger(__name__)


def _chronological_key(record: TrackingRecord):
    return (record.performed_at, record.id)


def group_by_exercise(records: Iterable[TrackingRecord]) -> dict[str, list[TrackingRecord]]:
    """Map exercise_id -> its records, oldest first (ties by identity for determinism)."""
    groups: dict[str, list[TrackingRecord]] = {}
    for record in records:
        groups.setdefault(record.exercise_id, []).append(record)
    return {exercise_id: sorted(items, key=_chronological_key) for exercise_id, items in groups.items()}


def recent_exercises(
    records: Iterable[TrackingRecord],
    limit: int = RECENT_EXERCISES_LIMIT,
) -> list[TrackingRecord]:
    """Latest record of each distinct exercise name, newest first."""
    latest: dict[str, TrackingRecord] = {}
    for record in sorted(records, key=_chronological_key, reverse=True):
        latest.setdefault(record.exercise_name, record)
    return list(latest.values())[:limit]


def training_days(records: Iterable[TrackingRecord], tz: tzinfo | None = None) -> list[date]:
    """Distinct calendar days with at least one record, newest first."""
    tz = tz or local_timezone()
    return sorted({r.performed_at.astimezone(tz).date() for r in records}, reverse=True)


def training_streak(
    records: Iterable[TrackingRecord],
    today: date | None = None,
    tz: tzinfo | None = None,
) -> StreakRead:
    """
    Current streak: consecutive days ending today in ``tz`` (0 if nothing was logged today).
    Also returns the longest run ever and the last training day.
    """
    tz = tz or local_timezone()
    days = training_days(records, tz)
    if not days:
        return StreakRead(current_streak=0, longest_streak=0, last_training_date=None)

    today = today or local_today(tz)
    day_set = set(days)
    current = 0
    check = today
    while check in day_set:
        current += 1
        check -= timedelta(days=1)

    longest = 1
    run = 1
    for i in range(1, len(days)):
        if days[i] == days[i - 1] - timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return StreakRead(current_streak=current, longest_streak=longest, last_training_date=days[0])


def estimate_one_rep_max(set_result: SetResult) -> float:
    """Epley estimate: weight * (1 + reps / 30)."""
    return set_result.weight * (1 + set_result.reps / EPLEY_REPS_DIVISOR)


def one_rep_max_progression(records: Iterable[TrackingRecord], exercise_id: str) -> list[OneRepMaxPoint]:
    """Best estimated 1RM per record of one exercise, in chronological order."""
    points: list[OneRepMaxPoint] = []
    for record in sorted((r for r in records if r.exercise_id == exercise_id), key=_chronological_key):
        try:
            sets = set_series_codec.decode(record.sets_data)
        except MalformedSeriesError:
            logger.warning("Skipping tracking %s in 1RM progression: corrupted sets data", record.id)
            continue
        if not sets:
            continue
        best = max(estimate_one_rep_max(s) for s in sets)
        points.append(OneRepMaxPoint(date=record.performed_at, one_rep_max=best))
    return points
