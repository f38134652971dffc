"""Read-only view of the user's exercise catalog, used to seed sessions."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from liftlog.core.auth import require_owner_id
from liftlog.core.exceptions import RemoteReadError
from liftlog.models.exercise import Exercise
from liftlog.schemas.exercise import ExerciseRead

logger = logging.getLogger(__name__)


class ExerciseCatalog:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], owner_id: str | None):
        self._session_factory = session_factory
        self.owner_id = require_owner_id(owner_id)

    async def list_all(self) -> list[ExerciseRead]:
        """Owner's exercises ordered by name."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Exercise).where(Exercise.user_id == self.owner_id).order_by(Exercise.name)
                )
                rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.exception("list exercises for %s failed: %s", self.owner_id, e)
            raise RemoteReadError("Could not load exercises") from e
        return [ExerciseRead.model_validate(r) for r in rows]

    async def get(self, exercise_id: str) -> ExerciseRead | None:
        try:
            async with self._session_factory() as session:
                row = await session.get(Exercise, exercise_id)
        except (SQLAlchemyError, OSError) as e:
            logger.exception("get exercise %s failed: %s", exercise_id, e)
            raise RemoteReadError("Could not load the exercise") from e
        if row is None or row.user_id != self.owner_id:
            return None
        return ExerciseRead.model_validate(row)
