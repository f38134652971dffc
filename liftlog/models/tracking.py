"""ExerciseTracking model - one persisted set series for one exercise on one date."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.core.constants import MAX_EXERCISE_NAME_LENGTH, MAX_OWNER_ID_LENGTH
from liftlog.db.base import Base


class ExerciseTracking(Base):
    """A tracking record. ``sets_data`` holds the encoded set series; ``exercise_name``
    is a snapshot taken at creation and is not updated when the exercise is renamed."""

    __tablename__ = "exercise_trackings"
    __table_args__ = (Index("ix_exercise_trackings_user_id_date", "user_id", "date"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # Client-generated UUID4
    user_id: Mapped[str] = mapped_column(String(MAX_OWNER_ID_LENGTH), nullable=False, index=True)
    exercise_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    exercise_name: Mapped[str] = mapped_column(String(MAX_EXERCISE_NAME_LENGTH), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)  # Stored in UTC
    sets_data: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
