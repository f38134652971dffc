"""Streak calculation endpoint."""

from fastapi import APIRouter, Depends

from liftlog.api.deps import get_tracking_repository
from liftlog.repositories.tracking_repository import TrackingRepository
from liftlog.schemas.tracking import StreakRead
from liftlog.services.history_aggregator import training_streak
from liftlog.services.input_validator import local_today

router = APIRouter()


@router.get("", response_model=StreakRead)
async def get_streak(repo: TrackingRepository = Depends(get_tracking_repository)):
    """
    Returns the current training streak (consecutive days with at least one tracking,
    ending today in the configured zone), the longest streak ever and the date of the last training.
    """
    records = await repo.list_by_owner(repo.owner_id)
    return training_streak(records, today=local_today())
