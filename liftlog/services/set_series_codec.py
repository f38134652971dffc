"""Set series codec: the only stored representation of a series of sets.

Text format is a compact JSON array, e.g. ``[{"reps":10,"weight":60.0}]``.
Records written by the first mobile client stored integral weights as JSON
integers; those still decode (as floats). Historical rows are always decoded
with the current codec, so any format change needs a migration.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from liftlog.core.exceptions import MalformedSeriesError
from liftlog.schemas.tracking import SetResult, SetSeries

logger = logging.getLogger(__name__)

_SERIES_ADAPTER = TypeAdapter(list[SetResult])


def encode(series: Iterable[SetResult]) -> str:
    """Encode sets in order. Floats keep full precision (shortest round-trip repr)."""
    return json.dumps(
        [{"reps": s.reps, "weight": float(s.weight)} for s in series],
        separators=(",", ":"),
    )


def decode(text: str | bytes | None) -> SetSeries:
    """Strict inverse of :func:`encode`. Raises MalformedSeriesError on bad input."""
    if text is None:
        raise MalformedSeriesError("No set data stored", text)
    try:
        items = _SERIES_ADAPTER.validate_json(text)
    except PydanticValidationError as e:
        raise MalformedSeriesError(f"Unreadable set data: {e.error_count()} error(s)", text) from e
    return tuple(items)


def decode_or_empty(text: str | bytes | None, record_id: str | None = None) -> SetSeries:
    """Decode for display/editing: corrupted text degrades to an empty series."""
    try:
        return decode(text)
    except MalformedSeriesError:
        logger.warning("Corrupted sets data on tracking %s; showing zero sets", record_id)
        return ()
