"""Input validation for reps, weight and dates before they enter the domain model.

Nothing here raises for bad input: every check returns a ``Validated`` value that
carries either the accepted value or the field-level error.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Generic, TypeVar
from zoneinfo import ZoneInfo

from liftlog.core.config import get_settings
from liftlog.core.constants import MIDDAY
from liftlog.core.exceptions import (
    InvalidDateError,
    InvalidRepsError,
    InvalidWeightError,
    ValidationError,
)
from liftlog.schemas.tracking import SetResult

T = TypeVar("T")

_REPS_PATTERN = re.compile(r"^\d+$")
_WEIGHT_PATTERN = re.compile(r"^\d+(\.\d+)?$|^\.\d+$")


@dataclass(frozen=True)
class Validated(Generic[T]):
    value: T | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SetValidation:
    """Outcome of validating one reps/weight pair. ``errors`` is keyed by field name."""

    result: SetResult | None = None
    errors: dict[str, ValidationError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.result is not None and not self.errors


def validate_reps(raw: object) -> Validated[int]:
    """Reps must be a whole number greater than zero."""
    if isinstance(raw, bool):
        return Validated(error=InvalidRepsError("Reps must be a whole number.", raw))
    if isinstance(raw, int):
        reps = raw
    else:
        text = str(raw).strip() if raw is not None else ""
        if not _REPS_PATTERN.match(text):
            return Validated(error=InvalidRepsError("Reps must be a whole number.", raw))
        reps = int(text)
    if reps <= 0:
        return Validated(error=InvalidRepsError("Reps must be greater than zero.", raw))
    return Validated(value=reps)


def validate_weight(raw: object) -> Validated[float]:
    """Weight must be a positive number of kilograms; ``62,5`` is read as 62.5."""
    if isinstance(raw, bool):
        return Validated(error=InvalidWeightError("Weight must be a number.", raw))
    if isinstance(raw, (int, float)):
        weight = float(raw)
    else:
        text = str(raw).strip().replace(",", ".") if raw is not None else ""
        if not _WEIGHT_PATTERN.match(text):
            return Validated(error=InvalidWeightError("Weight must be a number.", raw))
        weight = float(text)
    if not math.isfinite(weight) or weight <= 0:
        return Validated(error=InvalidWeightError("Weight must be greater than zero.", raw))
    return Validated(value=weight)


def validate_set(raw_reps: object, raw_weight: object) -> SetValidation:
    """Check both fields; a SetResult is produced only when both pass."""
    reps = validate_reps(raw_reps)
    weight = validate_weight(raw_weight)
    errors = {e.field: e for e in (reps.error, weight.error) if e is not None}
    if errors:
        return SetValidation(errors=errors)
    return SetValidation(result=SetResult(reps=reps.value, weight=weight.value))


def local_timezone() -> tzinfo:
    """Configured zone, falling back to the system's current local offset."""
    name = get_settings().local_timezone
    if name:
        return ZoneInfo(name)
    return datetime.now().astimezone().tzinfo


def local_today(tz: tzinfo | None = None) -> date:
    """Calendar day it is now in the configured zone, not on the server clock."""
    return datetime.now(tz or local_timezone()).date()


def normalize_date(value: date | datetime, tz: tzinfo | None = None) -> datetime:
    """Pin a calendar date to 12:00:00 local.

    A datetime keeps its own calendar day and zone; a naive one is read as
    local. Normalizing an already-normalized value returns the same instant.
    """
    if isinstance(value, datetime):
        if tz is None:
            tz = value.tzinfo or local_timezone()
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        day = value.date()
    else:
        tz = tz or local_timezone()
        day = value
    return datetime.combine(day, MIDDAY, tzinfo=tz)


def validate_date(value: object, tz: tzinfo | None = None) -> Validated[datetime]:
    """Accept a user-selected date, normalized to midday."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return Validated(error=InvalidDateError("Not a calendar date.", value))
    if not isinstance(value, (date, datetime)):
        return Validated(error=InvalidDateError("A date is required.", value))
    return Validated(value=normalize_date(value, tz))
