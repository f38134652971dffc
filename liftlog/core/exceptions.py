"""Error taxonomy shared by the tracking core and the HTTP layer.

Validation and decode errors are recoverable and stay at the component that
detected them. Remote errors travel up to the caller with their kind intact so
the caller can choose between retrying and abandoning.
"""

from __future__ import annotations


class LiftlogError(Exception):
    """Base for every error raised by the tracking core."""


# ── Validation ───────────────────────────────────────────────────────────


class ValidationError(LiftlogError):
    """A single input field was rejected."""

    field: str = ""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.message = message
        self.value = value


class InvalidRepsError(ValidationError):
    field = "reps"


class InvalidWeightError(ValidationError):
    field = "weight"


class InvalidDateError(ValidationError):
    field = "date"


class InvalidExerciseError(ValidationError):
    field = "exercise"


class EmptySessionError(ValidationError):
    field = "sets"

    def __init__(self, message: str = "At least one set is required.", value: object = None):
        super().__init__(message, value)


# ── Codec ────────────────────────────────────────────────────────────────


class MalformedSeriesError(LiftlogError):
    """Stored set-series text could not be decoded."""

    def __init__(self, message: str, text: str | None = None):
        super().__init__(message)
        self.text = text


# ── Remote store ─────────────────────────────────────────────────────────


class RemoteError(LiftlogError):
    """The record store could not be reached or refused the operation."""

    kind = "remote_error"

    def __init__(self, message: str, record_id: str | None = None):
        super().__init__(message)
        self.record_id = record_id


class RemoteWriteError(RemoteError):
    kind = "remote_write_error"


class RecordNotFoundError(RemoteWriteError):
    kind = "record_not_found"


class OwnershipError(RemoteWriteError):
    kind = "not_owner"


class DuplicateRecordError(RemoteWriteError):
    """The identity is already taken; writing it again can never succeed."""

    kind = "duplicate_record"


class RemoteReadError(RemoteError):
    kind = "remote_read_error"


# ── Auth / state ─────────────────────────────────────────────────────────


class NotAuthenticatedError(LiftlogError):
    """No current owner identifier; the user has to authenticate again."""

    def __init__(self, message: str = "No authenticated user."):
        super().__init__(message)


class InvalidTransitionError(LiftlogError):
    """An operation was requested in a session state that does not allow it."""

    def __init__(self, status: object, event: object):
        super().__init__(f"Cannot apply {event} while session is {status}")
        self.status = status
        self.event = event
