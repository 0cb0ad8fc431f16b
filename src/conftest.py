"""Pytest configuration and shared fixtures."""

import os
from datetime import date
from typing import List, Tuple

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from cache import CacheUpdate, ExerciseCache
from database import Base
from ids import compose_exercise_id, compose_set_id
from typedefs import WorkoutExercise, WorkoutSet


def get_test_db_url(tmp_path):
    """Get the test database URL from environment or use a throwaway SQLite file."""
    return os.environ.get(
        "TEST_DATABASE_URL", f"sqlite:///{tmp_path / 'workout_log_test.db'}"
    )


@pytest.fixture
def test_engine(tmp_path):
    """Create a fresh database engine with all tables for each test."""
    import models  # noqa: F401

    db_url = get_test_db_url(tmp_path)
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    engine = create_engine(db_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session(session_factory):
    """Create a new database session for each test."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def exercise_cache() -> ExerciseCache:
    return ExerciseCache()


class NotificationRecorder:
    """Notify callback that remembers every cache update it receives."""

    def __init__(self):
        self.updates: List[CacheUpdate] = []

    def __call__(self, update: CacheUpdate) -> None:
        self.updates.append(update)

    @property
    def statuses(self) -> List[str]:
        return [u.status.value for u in self.updates]


@pytest.fixture
def notify() -> NotificationRecorder:
    return NotificationRecorder()


WORKOUT_DATE = date(2018, 5, 4)


def make_exercise(
    exercise_type: str = "bench-press",
    sets: List[Tuple[int, float]] = ((6, 100), (5, 100)),
    day: date = WORKOUT_DATE,
    comments: str | None = None,
    ordinals: List[int] | None = None,
) -> WorkoutExercise:
    """Build an exercise record whose sets are numbered 1..N (or by ordinals)."""
    exercise_id = compose_exercise_id(day, exercise_type)
    ordinals = ordinals or list(range(1, len(sets) + 1))
    return WorkoutExercise(
        id=exercise_id,
        date=day,
        type=exercise_type,
        comments=comments,
        sets=[
            WorkoutSet(
                id=compose_set_id(exercise_id, ordinal),
                reps=reps,
                weight=weight,
                date=day,
                type=exercise_type,
            )
            for ordinal, (reps, weight) in zip(ordinals, sets)
        ],
    )


@pytest.fixture
def exercise_factory():
    return make_exercise
