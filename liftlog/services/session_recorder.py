"""Live workout session: exercise selection, set entry and finalization.

The lifecycle is an explicit state enum driven by a pure transition function
over ``TRANSITIONS``; the recorder only performs side effects (validation,
building the record, calling the repository) around it. One recorder serves
one screen: mutating calls are expected from a single caller, never in
parallel.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from liftlog.core.auth import require_owner_id
from liftlog.core.enums import SessionEvent, SessionStatus
from liftlog.core.exceptions import (
    EmptySessionError,
    InvalidExerciseError,
    InvalidTransitionError,
    RemoteError,
)
from liftlog.repositories.tracking_repository import TrackingRepository
from liftlog.schemas.exercise import ExerciseRef
from liftlog.schemas.tracking import SetResult, SetSeries, TrackingRecord
from liftlog.services import set_series_codec
from liftlog.services.input_validator import SetValidation, local_today, normalize_date, validate_set

logger = logging.getLogger(__name__)

S = SessionStatus
E = SessionEvent

TRANSITIONS: dict[tuple[SessionStatus, SessionEvent], SessionStatus] = {
    (S.IDLE, E.START): S.IN_PROGRESS,
    (S.COMPLETED, E.START): S.IN_PROGRESS,
    (S.FAILED, E.START): S.IN_PROGRESS,
    (S.IN_PROGRESS, E.ADD_SET): S.IN_PROGRESS,
    (S.IN_PROGRESS, E.REMOVE_LAST_SET): S.IN_PROGRESS,
    (S.IN_PROGRESS, E.FINISH): S.FINALIZING,
    (S.FINALIZING, E.PERSISTED): S.COMPLETED,
    (S.FINALIZING, E.PERSIST_FAILED): S.FAILED,
    (S.FAILED, E.RETRY): S.FINALIZING,
    (S.IDLE, E.CANCEL): S.IDLE,
    (S.IN_PROGRESS, E.CANCEL): S.IDLE,
    (S.FINALIZING, E.CANCEL): S.IDLE,
    (S.FAILED, E.CANCEL): S.IDLE,
}


def transition(status: SessionStatus, event: SessionEvent) -> SessionStatus:
    """Next status for ``event``; raises InvalidTransitionError for pairs not in the table."""
    try:
        return TRANSITIONS[(status, event)]
    except KeyError:
        raise InvalidTransitionError(status, event) from None


def check_exercise(exercise: ExerciseRef | None) -> ExerciseRef:
    if exercise is None or not exercise.id or not exercise.name.strip():
        raise InvalidExerciseError("Select an exercise first.", exercise)
    return exercise


def new_record(
    owner_id: str,
    exercise: ExerciseRef,
    performed_at: datetime,
    sets: Iterable[SetResult],
) -> TrackingRecord:
    """Build a record under a freshly generated identity."""
    return TrackingRecord(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        exercise_id=exercise.id,
        exercise_name=exercise.name,
        performed_at=performed_at,
        sets_data=set_series_codec.encode(sets),
    )


@dataclass
class WorkoutSession:
    """Ephemeral state of one live session; never persisted as such."""

    exercise: ExerciseRef
    performed_at: datetime
    sets: list[SetResult] = field(default_factory=list)
    attempted: TrackingRecord | None = None  # Last record handed to create()


class SessionRecorder:
    def __init__(
        self,
        repository: TrackingRepository,
        owner_id: str | None,
        today: Callable[[], date] = local_today,
    ):
        self._repository = repository
        self.owner_id = require_owner_id(owner_id)
        self._today = today
        self._status = SessionStatus.IDLE
        self._session: WorkoutSession | None = None
        self._record: TrackingRecord | None = None
        self.last_error: Exception | None = None

    # ── State ────────────────────────────────────────────────────────────

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_pending(self) -> bool:
        """True while a create is in flight; the screen should disable input."""
        return self._status is SessionStatus.FINALIZING

    @property
    def exercise(self) -> ExerciseRef | None:
        return self._session.exercise if self._session else None

    @property
    def sets(self) -> SetSeries:
        return tuple(self._session.sets) if self._session else ()

    @property
    def record(self) -> TrackingRecord | None:
        """The persisted record once the session is COMPLETED."""
        return self._record

    def _apply(self, event: SessionEvent) -> None:
        new_status = transition(self._status, event)
        if new_status is not self._status:
            logger.info("Session %s -> %s (%s)", self._status.value, new_status.value, event.value)
        self._status = new_status

    # ── Operations ───────────────────────────────────────────────────────

    def start_session(self, exercise: ExerciseRef, performed_on: date | datetime | None = None) -> None:
        check_exercise(exercise)
        transition(self._status, SessionEvent.START)
        when = performed_on if performed_on is not None else self._today()
        self._session = WorkoutSession(exercise=exercise, performed_at=normalize_date(when))
        self._record = None
        self.last_error = None
        self._apply(SessionEvent.START)

    def add_set(self, raw_reps: object, raw_weight: object) -> SetValidation:
        """Validate and append. A rejected set leaves the series untouched."""
        transition(self._status, SessionEvent.ADD_SET)
        outcome = validate_set(raw_reps, raw_weight)
        if outcome.ok:
            self._session.sets.append(outcome.result)
            self._apply(SessionEvent.ADD_SET)
        return outcome

    def remove_last_set(self) -> SetResult | None:
        """Pop the most recent set; no-op on an empty series."""
        self._apply(SessionEvent.REMOVE_LAST_SET)
        if not self._session.sets:
            return None
        return self._session.sets.pop()

    async def finish(self) -> TrackingRecord:
        """Persist the session as a new record.

        Raises EmptySessionError (state unchanged) when no set was recorded.
        Remote errors are re-raised unchanged after moving to FAILED; the
        entered sets stay available for ``retry``.
        """
        transition(self._status, SessionEvent.FINISH)
        if not self._session.sets:
            raise EmptySessionError()
        session = self._session
        session.attempted = new_record(self.owner_id, session.exercise, session.performed_at, session.sets)
        self._apply(SessionEvent.FINISH)
        return await self._persist(session, session.attempted)

    async def retry(self) -> TrackingRecord:
        """Try again after FAILED without risking a duplicate.

        The previous attempt may have landed even though the call failed, so
        its identity is looked up first; only when it is absent is a new
        record created under a fresh identity.
        """
        transition(self._status, SessionEvent.RETRY)
        session = self._session
        self._apply(SessionEvent.RETRY)
        previous = session.attempted
        if previous is not None:
            try:
                landed = await self._repository.get(previous.id)
            except RemoteError as e:
                self._fail(session, e)
                raise
            if landed is not None:
                logger.info("Tracking %s landed despite the earlier failure", previous.id)
                return self._complete(session, landed)
        session.attempted = new_record(self.owner_id, session.exercise, session.performed_at, session.sets)
        return await self._persist(session, session.attempted)

    def cancel(self) -> None:
        """Discard the session without persisting anything."""
        if self._status is SessionStatus.FINALIZING:
            logger.warning("Session cancelled while saving; the in-flight create is not recalled")
        self._apply(SessionEvent.CANCEL)
        self._session = None
        self._record = None

    async def _persist(self, session: WorkoutSession, record: TrackingRecord) -> TrackingRecord:
        try:
            stored = await self._repository.create(record)
        except RemoteError as e:
            self._fail(session, e)
            raise
        return self._complete(session, stored)

    def _complete(self, session: WorkoutSession, stored: TrackingRecord) -> TrackingRecord:
        if self._session is not session:
            logger.info("Tracking %s saved after its session was discarded", stored.id)
            return stored
        self._record = stored
        self._apply(SessionEvent.PERSISTED)
        return stored

    def _fail(self, session: WorkoutSession, error: RemoteError) -> None:
        if self._session is session:
            self.last_error = error
            self._apply(SessionEvent.PERSIST_FAILED)
