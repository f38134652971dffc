"""ORM models - import all so Base.metadata is complete for migrations."""

from liftlog.models.exercise import Exercise
from liftlog.models.tracking import ExerciseTracking

__all__ = [
    "Exercise",
    "ExerciseTracking",
]
