"""Edit flow for an already-persisted tracking record.

Two states only: EDITING until ``commit`` succeeds, then COMMITTED. A record
whose stored sets cannot be decoded opens with an empty series so the user
can still fix it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from liftlog.core.enums import EditStatus
from liftlog.core.exceptions import EmptySessionError, InvalidTransitionError
from liftlog.repositories.tracking_repository import TrackingRepository
from liftlog.schemas.tracking import SetResult, SetSeries, TrackingRecord
from liftlog.services import set_series_codec
from liftlog.services.input_validator import SetValidation, Validated, validate_date, validate_set

logger = logging.getLogger(__name__)


class TrackingEditor:
    def __init__(self, repository: TrackingRepository, record: TrackingRecord):
        self._repository = repository
        self._original = record
        self._sets: list[SetResult] = list(set_series_codec.decode_or_empty(record.sets_data, record.id))
        # Loaded dates were normalized when first accepted; keep them as-is
        self._performed_at = record.performed_at
        self.status = EditStatus.EDITING

    @classmethod
    def load(cls, repository: TrackingRepository, record: TrackingRecord) -> TrackingEditor:
        return cls(repository, record)

    @property
    def record(self) -> TrackingRecord:
        return self._original

    @property
    def sets(self) -> SetSeries:
        return tuple(self._sets)

    @property
    def performed_at(self) -> datetime:
        return self._performed_at

    def _require_editing(self, action: str) -> None:
        if self.status is not EditStatus.EDITING:
            raise InvalidTransitionError(self.status, action)

    def add_set(self, raw_reps: object, raw_weight: object) -> SetValidation:
        """Append a set with the same validation rules as a live session."""
        self._require_editing("add_set")
        outcome = validate_set(raw_reps, raw_weight)
        if outcome.ok:
            self._sets.append(outcome.result)
        return outcome

    def set_date(self, value: date | datetime) -> Validated[datetime]:
        """Replace the date with a newly chosen one (normalized to midday once)."""
        self._require_editing("set_date")
        checked = validate_date(value)
        if checked.ok:
            self._performed_at = checked.value
        return checked

    async def commit(self) -> TrackingRecord:
        """Send date and sets to the store. On a remote error the edits are kept."""
        self._require_editing("commit")
        if not self._sets:
            raise EmptySessionError()
        edited = self._original.with_changes(
            performed_at=self._performed_at,
            sets_data=set_series_codec.encode(self._sets),
        )
        stored = await self._repository.update(edited)
        self._original = stored
        self.status = EditStatus.COMMITTED
        logger.info("Committed edits to tracking %s", stored.id)
        return stored
