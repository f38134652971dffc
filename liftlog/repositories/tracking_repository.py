"""Tracking repository: create/update/delete/get/list against the record store.

Every call opens its own short-lived session from the injected factory, so the
repository can be shared by a screen and any background refresh. Transport and
database failures are logged here and surfaced as RemoteWriteError /
RemoteReadError with the original exception chained.

``create`` carries no idempotency key. After an ambiguous failure (timeout,
dropped connection) the row may or may not exist; look it up with ``get``
before writing again instead of blindly retrying.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from liftlog.core.auth import require_owner_id
from liftlog.core.exceptions import (
    DuplicateRecordError,
    EmptySessionError,
    OwnershipError,
    RecordNotFoundError,
    RemoteReadError,
    RemoteWriteError,
)
from liftlog.models.tracking import ExerciseTracking
from liftlog.schemas.tracking import TrackingRecord
from liftlog.services import set_series_codec

logger = logging.getLogger(__name__)

# asyncpg raises plain OSError subclasses when the server is unreachable
_TRANSPORT_ERRORS = (SQLAlchemyError, OSError)


def _to_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def _as_aware(value: datetime | None) -> datetime | None:
    # SQLite hands back naive values; they were written as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(row: ExerciseTracking) -> TrackingRecord:
    return TrackingRecord(
        id=row.id,
        owner_id=row.user_id,
        exercise_id=row.exercise_id,
        exercise_name=row.exercise_name,
        performed_at=_as_aware(row.date),
        sets_data=row.sets_data,
        created_at=_as_aware(row.created_at),
        updated_at=_as_aware(row.updated_at),
    )


class TrackingRepository:
    """Record-store access scoped to one owner."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], owner_id: str | None):
        self._session_factory = session_factory
        self.owner_id = require_owner_id(owner_id)
        # At most one in-flight write per identity; entries live only while held or awaited
        self._write_locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @asynccontextmanager
    async def _serialized(self, record_id: str):
        lock = self._write_locks.setdefault(record_id, asyncio.Lock())
        self._lock_users[record_id] = self._lock_users.get(record_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[record_id] -= 1
            if not self._lock_users[record_id]:
                del self._lock_users[record_id]
                del self._write_locks[record_id]

    def _check_writable(self, record: TrackingRecord) -> None:
        if record.owner_id != self.owner_id:
            raise OwnershipError("Record belongs to another user", record.id)
        if not set_series_codec.decode(record.sets_data):
            raise EmptySessionError()

    async def create(self, record: TrackingRecord) -> TrackingRecord:
        """Insert a record under its new identity. Not idempotent."""
        self._check_writable(record)
        row = ExerciseTracking(
            id=record.id,
            user_id=record.owner_id,
            exercise_id=record.exercise_id,
            exercise_name=record.exercise_name,
            date=_to_utc(record.performed_at),
            sets_data=record.sets_data,
        )
        async with self._serialized(record.id):
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        session.add(row)
            except IntegrityError as e:
                logger.warning("create tracking %s rejected: identity already exists", record.id)
                raise DuplicateRecordError("A tracking with this id already exists", record.id) from e
            except _TRANSPORT_ERRORS as e:
                logger.exception("create tracking %s failed: %s", record.id, e)
                raise RemoteWriteError("Could not save the tracking", record.id) from e
        logger.info("Created tracking %s (%s)", record.id, record.exercise_name)
        return _to_record(row)

    async def update(self, record: TrackingRecord) -> TrackingRecord:
        """Replace date and sets of an existing record. Identity and owner are never written."""
        self._check_writable(record)
        async with self._serialized(record.id):
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        row = await session.get(ExerciseTracking, record.id)
                        if row is None:
                            raise RecordNotFoundError("Tracking not found", record.id)
                        if row.user_id != self.owner_id:
                            raise OwnershipError("Record belongs to another user", record.id)
                        row.date = _to_utc(record.performed_at)
                        row.sets_data = record.sets_data
            except _TRANSPORT_ERRORS as e:
                logger.exception("update tracking %s failed: %s", record.id, e)
                raise RemoteWriteError("Could not update the tracking", record.id) from e
        return _to_record(row)

    async def delete(self, record_id: str) -> None:
        """Delete by identity. Deleting an identity that is already gone is not an error."""
        async with self._serialized(record_id):
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        row = await session.get(ExerciseTracking, record_id)
                        if row is None:
                            logger.debug("Tracking %s already deleted", record_id)
                            return
                        if row.user_id != self.owner_id:
                            raise OwnershipError("Record belongs to another user", record_id)
                        await session.delete(row)
            except _TRANSPORT_ERRORS as e:
                logger.exception("delete tracking %s failed: %s", record_id, e)
                raise RemoteWriteError("Could not delete the tracking", record_id) from e

    async def get(self, record_id: str) -> TrackingRecord | None:
        """The owner's record with this identity, or None."""
        try:
            async with self._session_factory() as session:
                row = await session.get(ExerciseTracking, record_id)
        except _TRANSPORT_ERRORS as e:
            logger.exception("get tracking %s failed: %s", record_id, e)
            raise RemoteReadError("Could not load the tracking", record_id) from e
        if row is None or row.user_id != self.owner_id:
            return None
        return _to_record(row)

    async def list_by_owner(self, owner_id: str | None = None) -> list[TrackingRecord]:
        """All records of a user. Order is unspecified; see history_aggregator."""
        owner_id = require_owner_id(owner_id or self.owner_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(ExerciseTracking).where(ExerciseTracking.user_id == owner_id)
                )
                rows = result.scalars().all()
        except _TRANSPORT_ERRORS as e:
            logger.exception("list trackings for %s failed: %s", owner_id, e)
            raise RemoteReadError("Could not load trackings") from e
        return [_to_record(r) for r in rows]
