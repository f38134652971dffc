"""Exercise schemas."""

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.enums import ExerciseType


class ExerciseRef(BaseModel):
    """Minimal exercise info used to seed a session (id + name only)."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str


class ExerciseRead(ExerciseRef):
    muscle_group: str | None = None
    rest_seconds: int | None = Field(None, ge=0)
    target_sets: int | None = None
    target_reps: int | None = None
    exercise_type: ExerciseType = ExerciseType.NORMAL
