"""Initial schema: exercises, exercise_trackings.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("muscle_group", sa.String(length=100), nullable=True),
        sa.Column("rest_seconds", sa.Integer(), nullable=True),
        sa.Column("target_sets", sa.Integer(), nullable=True),
        sa.Column("target_reps", sa.Integer(), nullable=True),
        sa.Column(
            "exercise_type",
            sa.Enum("NORMAL", "BODYWEIGHT", name="exercisetype"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercises_user_id"), "exercises", ["user_id"], unique=False)
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=False)

    op.create_table(
        "exercise_trackings",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("exercise_id", sa.String(length=64), nullable=False),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sets_data", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercise_trackings_user_id"), "exercise_trackings", ["user_id"], unique=False)
    op.create_index(op.f("ix_exercise_trackings_exercise_id"), "exercise_trackings", ["exercise_id"], unique=False)
    op.create_index("ix_exercise_trackings_user_id_date", "exercise_trackings", ["user_id", "date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_exercise_trackings_user_id_date", table_name="exercise_trackings")
    op.drop_index(op.f("ix_exercise_trackings_exercise_id"), table_name="exercise_trackings")
    op.drop_index(op.f("ix_exercise_trackings_user_id"), table_name="exercise_trackings")
    op.drop_table("exercise_trackings")
    op.drop_index(op.f("ix_exercises_name"), table_name="exercises")
    op.drop_index(op.f("ix_exercises_user_id"), table_name="exercises")
    op.drop_table("exercises")
    sa.Enum(name="exercisetype").drop(op.get_bind(), checkfirst=True)
