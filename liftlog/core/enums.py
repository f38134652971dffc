"""Shared enums for the session state machine, models and API."""

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle of a live workout session."""

    IDLE = "idle"  # No active session
    IN_PROGRESS = "in_progress"  # Exercise chosen, sets being recorded
    FINALIZING = "finalizing"  # Create in flight
    COMPLETED = "completed"
    FAILED = "failed"


class SessionEvent(str, Enum):
    """Inputs accepted by the session transition table."""

    START = "start"
    ADD_SET = "add_set"
    REMOVE_LAST_SET = "remove_last_set"
    FINISH = "finish"
    PERSISTED = "persisted"
    PERSIST_FAILED = "persist_failed"
    RETRY = "retry"
    CANCEL = "cancel"


class EditStatus(str, Enum):
    """Edit flow for an already-persisted record."""

    EDITING = "editing"
    COMMITTED = "committed"


class ExerciseType(str, Enum):
    """How an exercise is loaded."""

    NORMAL = "normal"  # External weight
    BODYWEIGHT = "bodyweight"
