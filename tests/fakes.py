"""In-memory stand-in for TrackingRepository with failure injection."""

from __future__ import annotations

from liftlog.core.exceptions import DuplicateRecordError, OwnershipError, RecordNotFoundError, RemoteError
from liftlog.schemas.tracking import TrackingRecord

OWNER_ID = "user-123"
OTHER_OWNER_ID = "user-456"


class FakeTrackingRepository:
    def __init__(self, owner_id: str = OWNER_ID):
        self.owner_id = owner_id
        self.records: dict[str, TrackingRecord] = {}
        self.create_calls: list[TrackingRecord] = []
        self.update_calls: list[TrackingRecord] = []
        self.fail_with: RemoteError | None = None
        # Store the record, then report failure (timeout after the write landed)
        self.land_then_fail = False

    def seed(self, *records: TrackingRecord) -> None:
        for record in records:
            self.records[record.id] = record

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error

    async def create(self, record: TrackingRecord) -> TrackingRecord:
        self.create_calls.append(record)
        if record.id in self.records:
            raise DuplicateRecordError("A tracking with this id already exists", record.id)
        if self.land_then_fail:
            self.records[record.id] = record
            self.land_then_fail = False
            self._maybe_fail()
        self._maybe_fail()
        self.records[record.id] = record
        return record

    async def update(self, record: TrackingRecord) -> TrackingRecord:
        self.update_calls.append(record)
        self._maybe_fail()
        existing = self.records.get(record.id)
        if existing is None:
            raise RecordNotFoundError("Tracking not found", record.id)
        if existing.owner_id != self.owner_id:
            raise OwnershipError("Record belongs to another user", record.id)
        stored = existing.with_changes(performed_at=record.performed_at, sets_data=record.sets_data)
        self.records[record.id] = stored
        return stored

    async def delete(self, record_id: str) -> None:
        self._maybe_fail()
        self.records.pop(record_id, None)

    async def get(self, record_id: str) -> TrackingRecord | None:
        self._maybe_fail()
        record = self.records.get(record_id)
        if record is None or record.owner_id != self.owner_id:
            return None
        return record

    async def list_by_owner(self, owner_id: str | None = None) -> list[TrackingRecord]:
        self._maybe_fail()
        owner_id = owner_id or self.owner_id
        return [r for r in self.records.values() if r.owner_id == owner_id]
