"""SQLAlchemy database models."""

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from database import Base


class WorkoutDB(Base):
    """Database model for workouts.

    One workout per calendar day, keyed by its date key (YYYY-MM-DD).
    A workout only exists while it holds at least one exercise.
    """

    __tablename__ = "workouts"

    id = Column(String, primary_key=True)
    date = Column(Date, nullable=False)

    # Relationship to exercises (ordered by their position in the workout)
    exercises = relationship(
        "ExerciseDB",
        order_by="ExerciseDB.sort",
        back_populates="workout",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<WorkoutDB(id={self.id}, date={self.date})>"


class ExerciseDB(Base):
    """Database model for an exercise performed in a workout.

    The id is composed as {date_key}_{type}, so the parent workout id
    can also be recovered from it (see ids.workout_key_from_exercise_id).
    """

    __tablename__ = "exercises"

    id = Column(String, primary_key=True)
    workout_id = Column(
        String,
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    comments = Column(String, nullable=True)
    sort = Column(Integer, nullable=False)  # 1-based position within the workout

    # Relationships
    workout = relationship("WorkoutDB", back_populates="exercises")
    sets = relationship(
        "SetDB",
        order_by="SetDB.id",
        back_populates="exercise",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<ExerciseDB(id={self.id}, sort={self.sort})>"


class SetDB(Base):
    """Database model for a single set of an exercise."""

    __tablename__ = "sets"

    id = Column(String, primary_key=True)  # {exercise_id}_{ordinal:03d}
    exercise_id = Column(
        String,
        ForeignKey("exercises.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reps = Column(Integer, nullable=False)
    weight = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)

    exercise = relationship("ExerciseDB", back_populates="sets")

    def __repr__(self):
        return f"<SetDB(id={self.id}, reps={self.reps}, weight={self.weight})>"
