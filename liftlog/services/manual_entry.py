"""Manual tracking entry: log sets for a chosen date without a live session."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

from liftlog.core.exceptions import EmptySessionError, InvalidDateError
from liftlog.repositories.tracking_repository import TrackingRepository
from liftlog.schemas.exercise import ExerciseRef
from liftlog.schemas.tracking import SetResult, TrackingRecord
from liftlog.services.input_validator import validate_date
from liftlog.services.session_recorder import check_exercise, new_record


async def log_manual_entry(
    repository: TrackingRepository,
    exercise: ExerciseRef,
    performed_on: date | datetime,
    sets: Sequence[SetResult],
) -> TrackingRecord:
    """Create one record for ``exercise`` on ``performed_on`` (pinned to midday)."""
    check_exercise(exercise)
    checked = validate_date(performed_on)
    if not checked.ok:
        raise InvalidDateError(checked.error.message, performed_on)
    if not sets:
        raise EmptySessionError()
    record = new_record(repository.owner_id, exercise, checked.value, sets)
    return await repository.create(record)
