"""Exercise catalog endpoints (read-only)."""

from fastapi import APIRouter, Depends, HTTPException

from liftlog.api.deps import get_exercise_catalog
from liftlog.repositories.exercise_catalog import ExerciseCatalog
from liftlog.schemas.exercise import ExerciseRead

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(catalog: ExerciseCatalog = Depends(get_exercise_catalog)):
    """List the current user's exercises by name."""
    return await catalog.list_all()


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: str,
    catalog: ExerciseCatalog = Depends(get_exercise_catalog),
):
    """Get a single exercise by id."""
    exercise = await catalog.get(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
