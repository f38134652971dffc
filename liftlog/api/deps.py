"""Request-scoped dependencies: current owner and owner-scoped repositories."""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from liftlog.core.auth import require_owner_id
from liftlog.db.session import get_session_factory
from liftlog.repositories.exercise_catalog import ExerciseCatalog
from liftlog.repositories.tracking_repository import TrackingRepository


async def get_current_owner(x_user_id: str | None = Header(default=None)) -> str:
    """Owner id issued by the identity provider. Missing -> NotAuthenticatedError (401)."""
    return require_owner_id(x_user_id)


async def get_tracking_repository(
    owner_id: str = Depends(get_current_owner),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> TrackingRepository:
    return TrackingRepository(session_factory, owner_id)


async def get_exercise_catalog(
    owner_id: str = Depends(get_current_owner),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ExerciseCatalog:
    return ExerciseCatalog(session_factory, owner_id)
