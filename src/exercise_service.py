"""Add, update and delete exercises while keeping workouts consistent.

Invariants kept by every mutation:
- a workout never exists without exercises (created on first add,
  deleted with its last exercise)
- an exercise never exists without sets (removing its last set removes it)
- exercise sort values in a workout are always 1..N

Each mutation runs in one atomic scope on the session it is given.
add and update also publish optimistic cache updates through notify:
pending before the write, then confirmed or rollback afterwards.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from cache import CacheStatus, CacheUpdate, Notify
from errors import InvalidExercise, NotFound
from ids import (
    date_from_key,
    date_key,
    exercise_type_from_id,
    split_set_id,
    workout_key_from_exercise_id,
)
from models import ExerciseDB, SetDB, WorkoutDB
from reconcile import reconcile_sets
from transaction import atomic
from typedefs import Workout, WorkoutExercise, WorkoutSet

logger = logging.getLogger(__name__)


# ========== Read helpers ==========


def get_workout(db: Session, workout_id: str) -> Workout:
    """Get a workout and its exercises by date key.

    Raises:
        NotFound: if no workout exists for that day
    """
    workout = db.get(WorkoutDB, workout_id)
    if workout is None:
        raise NotFound(f"Workout {workout_id} not found")
    return Workout.model_validate(workout)


def list_workouts(db: Session, skip: int = 0, limit: int = 100) -> List[Workout]:
    """List workouts, most recent day first."""
    workouts = (
        db.query(WorkoutDB)
        .order_by(WorkoutDB.date.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return [Workout.model_validate(w) for w in workouts]


def get_exercise(db: Session, exercise_id: str) -> WorkoutExercise:
    """Get a persisted exercise by id.

    Raises:
        NotFound: if the exercise doesn't exist
    """
    exercise = db.get(ExerciseDB, exercise_id)
    if exercise is None:
        raise NotFound(f"Exercise {exercise_id} not found")
    return WorkoutExercise.model_validate(exercise)


def find_exercise(db: Session, exercise_id: str) -> WorkoutExercise | None:
    """Like get_exercise, but returns None when the exercise is missing."""
    exercise = db.get(ExerciseDB, exercise_id)
    return WorkoutExercise.model_validate(exercise) if exercise else None


# ========== Internal store operations ==========


def _check_identity(exercise: WorkoutExercise) -> str:
    """Validate that ids, date and type of a record agree.

    Returns:
        The workout key the exercise belongs to
    """
    workout_id = workout_key_from_exercise_id(exercise.id)
    if workout_id != date_key(exercise.date):
        raise InvalidExercise(
            f"Exercise {exercise.id} doesn't belong to {date_key(exercise.date)}"
        )
    if exercise_type_from_id(exercise.id) != exercise.type:
        raise InvalidExercise(
            f"Exercise {exercise.id} doesn't match type {exercise.type}"
        )
    for s in exercise.sets:
        if split_set_id(s.id)[0] != exercise.id:
            raise InvalidExercise(f"Set {s.id} doesn't belong to {exercise.id}")
    return workout_id


def _find_in_workout(workout: WorkoutDB, exercise_id: str) -> ExerciseDB:
    existing = next((e for e in workout.exercises if e.id == exercise_id), None)
    if existing is None:
        raise NotFound(f"Exercise {exercise_id} not found in workout {workout.id}")
    return existing


def _build_set(s: WorkoutSet) -> SetDB:
    return SetDB(id=s.id, reps=s.reps, weight=s.weight, date=s.date, type=s.type)


def _to_record(db: Session, exercise: ExerciseDB) -> WorkoutExercise:
    db.flush()
    # Reload so sets come back in id order
    db.expire(exercise, ["sets"])
    return WorkoutExercise.model_validate(exercise)


def _remove_exercise(db: Session, workout: WorkoutDB, exercise: ExerciseDB) -> None:
    """Remove an exercise, then renumber or drop its workout."""
    workout.exercises.remove(exercise)  # delete-orphan cascades to its sets

    if workout.exercises:
        # Keep the remaining exercises' relative order, closing the gap
        for i, e in enumerate(workout.exercises):
            e.sort = i + 1
        logger.debug(
            "Removed exercise %s, %d left in workout %s",
            exercise.id,
            len(workout.exercises),
            workout.id,
        )
    else:
        db.delete(workout)
        logger.debug(
            "Removed last exercise %s, deleted workout %s", exercise.id, workout.id
        )


def _insert_exercise(db: Session, exercise: WorkoutExercise) -> WorkoutExercise:
    if not exercise.sets:
        raise InvalidExercise(f"Exercise {exercise.id} has no sets")
    workout_id = _check_identity(exercise)

    workout = db.get(WorkoutDB, workout_id)
    if workout is None:
        workout = WorkoutDB(id=workout_id, date=date_from_key(workout_id))
        db.add(workout)
        logger.debug("Created workout %s", workout_id)

    db_exercise = ExerciseDB(
        id=exercise.id,
        date=exercise.date,
        type=exercise.type,
        comments=exercise.comments or None,
        sort=len(workout.exercises) + 1,
        sets=[_build_set(s) for s in exercise.sets],
    )
    workout.exercises.append(db_exercise)

    return _to_record(db, db_exercise)


def _apply_update(db: Session, exercise: WorkoutExercise) -> WorkoutExercise | None:
    workout_id = date_key(exercise.date)
    workout = db.get(WorkoutDB, workout_id)
    if workout is None:
        raise NotFound(f"Workout {workout_id} not found")
    existing = _find_in_workout(workout, exercise.id)
    _check_identity(exercise)

    diff = reconcile_sets(WorkoutExercise.model_validate(existing), exercise)
    logger.debug(
        "Reconciled %s: delete=%s update=%s insert=%s delete_exercise=%s",
        exercise.id,
        diff.sets_to_delete,
        [s.id for s in diff.sets_to_update],
        [s.id for s in diff.sets_to_insert],
        diff.delete_exercise,
    )

    if diff.delete_exercise:
        _remove_exercise(db, workout, existing)
        db.flush()
        return None

    # Deletions go first
    doomed = set(diff.sets_to_delete)
    for s in [s for s in existing.sets if s.id in doomed]:
        existing.sets.remove(s)
    db.flush()

    existing.comments = diff.comments
    sets_by_id = {s.id: s for s in existing.sets}
    for s in diff.sets_to_update:
        sets_by_id[s.id].reps = s.reps
        sets_by_id[s.id].weight = s.weight
    for s in diff.sets_to_insert:
        existing.sets.append(_build_set(s))

    return _to_record(db, existing)


# ========== Mutations ==========


def add_exercise(
    db: Session, notify: Notify, exercise: WorkoutExercise
) -> WorkoutExercise:
    """Add a new exercise to the workout of its day.

    The workout is created if this is the day's first exercise. The
    exercise is appended after the existing ones, so its sort is
    always len(exercises) + 1 regardless of the sort it was sent with.

    Args:
        db: Database session
        notify: Receives the pending, then the confirmed or rollback update
        exercise: Exercise record with at least one set

    Returns:
        The committed exercise

    Raises:
        InvalidExercise: if the record has no sets or inconsistent ids
        TransactionAbort: if the write fails (e.g. the id already exists)
    """
    notify(
        CacheUpdate(
            exercise_id=exercise.id, status=CacheStatus.PENDING, exercise=exercise
        )
    )

    try:
        with atomic(db, f"add_exercise({exercise.id})"):
            committed = _insert_exercise(db, exercise)
    except Exception:
        notify(
            CacheUpdate(
                exercise_id=exercise.id, status=CacheStatus.ROLLBACK, exercise=exercise
            )
        )
        raise

    notify(
        CacheUpdate(
            exercise_id=exercise.id, status=CacheStatus.CONFIRMED, exercise=committed
        )
    )
    logger.info("Added exercise %s at position %d", committed.id, committed.sort)
    return committed


def delete_exercise(db: Session, exercise: WorkoutExercise) -> Workout | None:
    """Delete an exercise and all its sets.

    If it was the last exercise of its workout the workout is deleted
    too, otherwise the remaining exercises are renumbered 1..N.

    Returns:
        The remaining workout, or None if it was deleted

    Raises:
        NotFound: if the exercise or its workout doesn't exist
    """
    with atomic(db, f"delete_exercise({exercise.id})"):
        workout_id = workout_key_from_exercise_id(exercise.id)
        workout = db.get(WorkoutDB, workout_id)
        if workout is None:
            raise NotFound(f"Workout {workout_id} not found")
        existing = _find_in_workout(workout, exercise.id)

        _remove_exercise(db, workout, existing)
        db.flush()
        remaining = Workout.model_validate(workout) if workout.exercises else None

    logger.info("Deleted exercise %s", exercise.id)
    return remaining


def update_exercise_paper_for_workout(
    db: Session, notify: Notify, exercise: WorkoutExercise
) -> WorkoutExercise | None:
    """Apply an edited exercise to its persisted version.

    The persisted exercise is found through the workout of the edited
    exercise's date. Sets are reconciled by id: missing ones are deleted,
    known ones get the new reps and weight, unknown ones are inserted.
    An edit with no sets deletes the exercise (and its workout if it was
    the last one).

    Args:
        db: Database session
        notify: Receives the pending, then the confirmed or rollback update
        exercise: Edited exercise

    Returns:
        The committed exercise, or None if the edit deleted it

    Raises:
        NotFound: if the workout or the exercise doesn't exist
        InvalidExercise: if the edited record has inconsistent ids
        TransactionAbort: if the write fails
    """
    notify(
        CacheUpdate(
            exercise_id=exercise.id, status=CacheStatus.PENDING, exercise=exercise
        )
    )

    try:
        with atomic(db, f"update_exercise({exercise.id})"):
            committed = _apply_update(db, exercise)
    except Exception:
        notify(
            CacheUpdate(
                exercise_id=exercise.id, status=CacheStatus.ROLLBACK, exercise=exercise
            )
        )
        raise

    notify(
        CacheUpdate(
            exercise_id=exercise.id, status=CacheStatus.CONFIRMED, exercise=committed
        )
    )
    if committed is None:
        logger.info("Exercise %s had no sets left and was deleted", exercise.id)
    return committed
