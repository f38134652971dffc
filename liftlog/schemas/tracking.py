"""Set, tracking record and history schemas."""

from __future__ import annotations

import datetime as dt
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from liftlog.schemas.exercise import ExerciseRef


class SetResult(BaseModel):
    """One completed set. Strict so stored text never coerces "10" into 10."""

    model_config = ConfigDict(frozen=True, strict=True)

    reps: int = Field(..., gt=0)
    weight: float = Field(..., gt=0, allow_inf_nan=False)  # kg


SetSeries = tuple[SetResult, ...]


class TrackingRecord(BaseModel):
    """A persisted workout log entry (client-side copy)."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    exercise_id: str
    exercise_name: str
    performed_at: datetime
    sets_data: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def with_changes(
        self,
        *,
        performed_at: datetime | None = None,
        sets_data: str | None = None,
    ) -> TrackingRecord:
        """Copy with a new date and/or sets; identity and owner never change."""
        update: dict = {}
        if performed_at is not None:
            update["performed_at"] = performed_at
        if sets_data is not None:
            update["sets_data"] = sets_data
        return self.model_copy(update=update)


# ── API payloads ─────────────────────────────────────────────────────────


class TrackingCreate(BaseModel):
    id: str | None = Field(None, min_length=1, max_length=36)  # Client-generated identity
    exercise_id: str = Field(..., min_length=1, max_length=64)
    exercise_name: str = Field(..., min_length=1, max_length=255)
    date: dt.date | dt.datetime
    sets: list[SetResult] = Field(..., min_length=1)


class TrackingUpdate(BaseModel):
    date: datetime | None = None  # Already-normalized instant; stored as sent
    sets: list[SetResult] | None = Field(None, min_length=1)


class TrackingRead(BaseModel):
    id: str
    owner_id: str
    exercise_id: str
    exercise_name: str
    date: datetime
    sets: list[SetResult] = []
    sets_data: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ExerciseHistoryRead(BaseModel):
    """All records for one exercise, oldest first."""

    exercise: ExerciseRef
    trackings: list[TrackingRead] = []


class OneRepMaxPoint(BaseModel):
    date: datetime
    one_rep_max: float


class StreakRead(BaseModel):
    current_streak: int
    longest_streak: int
    last_training_date: dt.date | None = None
