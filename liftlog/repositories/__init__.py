"""Record-store repositories."""

from liftlog.repositories.exercise_catalog import ExerciseCatalog
from liftlog.repositories.tracking_repository import TrackingRepository

__all__ = ["ExerciseCatalog", "TrackingRepository"]
