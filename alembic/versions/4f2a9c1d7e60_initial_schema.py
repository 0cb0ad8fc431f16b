"""initial schema: workouts, exercises and sets

Revision ID: 4f2a9c1d7e60
Revises:
Create Date: 2026-10-19 09:12:31.406125

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e60"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "workouts",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
    )
    op.create_table(
        "exercises",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "workout_id",
            sa.String(),
            sa.ForeignKey("workouts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("comments", sa.String(), nullable=True),
        sa.Column("sort", sa.Integer(), nullable=False),
    )
    op.create_table(
        "sets",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "exercise_id",
            sa.String(),
            sa.ForeignKey("exercises.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
    )

    # Exercises are always read per workout, sets per exercise
    op.create_index(op.f("ix_exercises_workout_id"), "exercises", ["workout_id"])
    op.create_index(op.f("ix_sets_exercise_id"), "sets", ["exercise_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_sets_exercise_id"), table_name="sets")
    op.drop_index(op.f("ix_exercises_workout_id"), table_name="exercises")
    op.drop_table("sets")
    op.drop_table("exercises")
    op.drop_table("workouts")
