"""Tracking record endpoints: CRUD over the record store plus history views."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException

from liftlog.api.deps import get_tracking_repository
from liftlog.repositories.tracking_repository import TrackingRepository
from liftlog.schemas.exercise import ExerciseRef
from liftlog.schemas.tracking import (
    ExerciseHistoryRead,
    OneRepMaxPoint,
    TrackingCreate,
    TrackingRead,
    TrackingRecord,
    TrackingUpdate,
)
from liftlog.services import set_series_codec
from liftlog.services.history_aggregator import (
    group_by_exercise,
    one_rep_max_progression,
    recent_exercises,
)
from liftlog.services.input_validator import normalize_date

router = APIRouter()


def _to_read(record: TrackingRecord) -> TrackingRead:
    """Decoded view; corrupted sets text shows as zero sets rather than failing the request."""
    return TrackingRead(
        id=record.id,
        owner_id=record.owner_id,
        exercise_id=record.exercise_id,
        exercise_name=record.exercise_name,
        date=record.performed_at,
        sets=list(set_series_codec.decode_or_empty(record.sets_data, record.id)),
        sets_data=record.sets_data,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.get("", response_model=list[TrackingRead])
async def list_trackings(repo: TrackingRepository = Depends(get_tracking_repository)):
    """List the current user's trackings, newest first."""
    records = await repo.list_by_owner(repo.owner_id)
    records.sort(key=lambda r: (r.performed_at, r.id), reverse=True)
    return [_to_read(r) for r in records]


@router.post("", response_model=TrackingRead, status_code=201)
async def create_tracking(
    payload: TrackingCreate,
    repo: TrackingRepository = Depends(get_tracking_repository),
):
    """Create a tracking. The date is pinned to midday; the id is generated when not supplied."""
    record = TrackingRecord(
        id=payload.id or str(uuid.uuid4()),
        owner_id=repo.owner_id,
        exercise_id=payload.exercise_id,
        exercise_name=payload.exercise_name,
        performed_at=normalize_date(payload.date),
        sets_data=set_series_codec.encode(payload.sets),
    )
    return _to_read(await repo.create(record))


@router.get("/history", response_model=list[ExerciseHistoryRead])
async def tracking_history(repo: TrackingRepository = Depends(get_tracking_repository)):
    """Trackings grouped by exercise, each group oldest first."""
    groups = group_by_exercise(await repo.list_by_owner(repo.owner_id))
    return [
        ExerciseHistoryRead(
            # Name of the most recent record; older snapshots may carry a previous name
            exercise=ExerciseRef(id=exercise_id, name=items[-1].exercise_name),
            trackings=[_to_read(r) for r in items],
        )
        for exercise_id, items in groups.items()
    ]


@router.get("/recent", response_model=list[TrackingRead])
async def recent_trackings(
    limit: int = 2,
    repo: TrackingRepository = Depends(get_tracking_repository),
):
    """Latest tracking of each of the most recently trained exercises."""
    records = await repo.list_by_owner(repo.owner_id)
    return [_to_read(r) for r in recent_exercises(records, limit=max(1, limit))]


@router.get("/exercises/{exercise_id}/one-rep-max", response_model=list[OneRepMaxPoint])
async def exercise_one_rep_max(
    exercise_id: str,
    repo: TrackingRepository = Depends(get_tracking_repository),
):
    """Estimated 1RM (Epley) progression for one exercise."""
    records = await repo.list_by_owner(repo.owner_id)
    return one_rep_max_progression(records, exercise_id)


@router.get("/{tracking_id}", response_model=TrackingRead)
async def get_tracking(
    tracking_id: str,
    repo: TrackingRepository = Depends(get_tracking_repository),
):
    """Get one tracking with its decoded sets."""
    record = await repo.get(tracking_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Tracking not found")
    return _to_read(record)


@router.patch("/{tracking_id}", response_model=TrackingRead)
async def update_tracking(
    tracking_id: str,
    payload: TrackingUpdate,
    repo: TrackingRepository = Depends(get_tracking_repository),
):
    """Replace the date and/or the sets. Identity, owner and exercise never change."""
    record = await repo.get(tracking_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Tracking not found")
    edited = record.with_changes(
        performed_at=payload.date,
        sets_data=set_series_codec.encode(payload.sets) if payload.sets is not None else None,
    )
    return _to_read(await repo.update(edited))


@router.delete("/{tracking_id}", status_code=204)
async def delete_tracking(
    tracking_id: str,
    repo: TrackingRepository = Depends(get_tracking_repository),
):
    """Delete a tracking. Deleting one that is already gone also returns 204."""
    await repo.delete(tracking_id)
    return None
