"""Exercise model - the user's exercise catalog, read-only from the tracking core."""

from __future__ import annotations

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.core.constants import MAX_EXERCISE_NAME_LENGTH, MAX_OWNER_ID_LENGTH
from liftlog.core.enums import ExerciseType
from liftlog.db.base import Base


class Exercise(Base):
    """Exercise definition with its default rest time and target sets/reps."""

    __tablename__ = "exercises"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(MAX_OWNER_ID_LENGTH), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(MAX_EXERCISE_NAME_LENGTH), nullable=False, index=True)
    muscle_group: Mapped[str | None] = mapped_column(String(100), nullable=True)
    rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)  # Rest timer preset
    target_sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    exercise_type: Mapped[ExerciseType] = mapped_column(
        Enum(ExerciseType), default=ExerciseType.NORMAL, nullable=False
    )
