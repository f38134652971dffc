"""Shared fixtures: isolated SQLite record store, fake repository, API client."""

import os

# Point the module-level engine at SQLite before liftlog.db is imported
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")

from collections.abc import Generator

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from liftlog.api.deps import get_current_owner, get_tracking_repository
from liftlog.core.config import get_settings
from liftlog.db.base import Base
from liftlog.main import create_application
from liftlog.models import Exercise, ExerciseTracking  # noqa: F401 - register tables
from liftlog.schemas.exercise import ExerciseRef
from tests.fakes import OWNER_ID, FakeTrackingRepository


@pytest.fixture
async def session_factory(tmp_path):
    """Fresh file-backed SQLite store per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def fake_repo() -> FakeTrackingRepository:
    return FakeTrackingRepository(OWNER_ID)


@pytest.fixture
def squat() -> ExerciseRef:
    return ExerciseRef(id="ex1", name="Squat")


@pytest.fixture
def client(fake_repo) -> Generator[TestClient, None, None]:
    """API client whose tracking routes use the in-memory fake repository.

    The owner header is still enforced through get_current_owner.
    """
    app = create_application()

    async def _fake_repository(owner_id: str = Depends(get_current_owner)):
        return fake_repo

    app.dependency_overrides[get_tracking_repository] = _fake_repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def configured_zone(monkeypatch):
    """Set LOCAL_TIMEZONE for one test; settings are re-read before and after."""

    def _configure(name: str) -> None:
        monkeypatch.setenv("LOCAL_TIMEZONE", name)
        get_settings.cache_clear()

    yield _configure
    get_settings.cache_clear()
