"""REST API endpoints for logging exercises."""

from typing import Dict, List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

import exercise_service
from cache import CacheEntry, ExerciseCache, get_exercise_cache
from database import get_db
from errors import InvalidExercise
from ids import compose_exercise_id, compose_set_id
from paper import build_sets_from_paper, generate_summary
from typedefs import (
    ExerciseCreateRequest,
    ExercisePaperRequest,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)

router = APIRouter(prefix="/api/v1", tags=["exercises"])


def build_exercise(request: ExerciseCreateRequest) -> WorkoutExercise:
    """Build a full exercise record, with composed ids, from a request.

    Args:
        request: ExerciseCreateRequest with either sets or a paper

    Returns:
        WorkoutExercise ready to be added
    """
    exercise_id = compose_exercise_id(request.date, request.type)

    if request.paper is not None:
        sets, paper_comments = build_sets_from_paper(
            exercise_id, request.date, request.type, request.paper
        )
        comments = request.comments or paper_comments
    else:
        sets = [
            WorkoutSet(
                id=compose_set_id(exercise_id, i + 1),
                reps=s.reps,
                weight=s.weight,
                date=request.date,
                type=request.type,
            )
            for i, s in enumerate(request.sets)
        ]
        comments = request.comments

    return WorkoutExercise(
        id=exercise_id,
        date=request.date,
        type=request.type,
        comments=comments,
        sets=sets,
    )


@router.get("/workouts", response_model=List[Workout])
def list_workouts(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
) -> List[Workout]:
    """List workouts with pagination, most recent day first."""
    return exercise_service.list_workouts(db, skip=skip, limit=limit)


@router.get("/workouts/{workout_id}", response_model=Workout)
def get_workout(workout_id: str, db: Session = Depends(get_db)) -> Workout:
    """Get the workout of one day (workout_id is YYYY-MM-DD)."""
    return exercise_service.get_workout(db, workout_id)


@router.post("/exercises", response_model=WorkoutExercise, status_code=201)
def add_exercise(
    request: ExerciseCreateRequest,
    db: Session = Depends(get_db),
    cache: ExerciseCache = Depends(get_exercise_cache),
) -> WorkoutExercise:
    """Log a new exercise, creating the day's workout if needed."""
    return exercise_service.add_exercise(db, cache, build_exercise(request))


@router.get("/exercises/{exercise_id}", response_model=WorkoutExercise)
def get_exercise(exercise_id: str, db: Session = Depends(get_db)) -> WorkoutExercise:
    return exercise_service.get_exercise(db, exercise_id)


@router.put("/exercises/{exercise_id}", response_model=WorkoutExercise)
def update_exercise(
    exercise_id: str,
    exercise: WorkoutExercise,
    db: Session = Depends(get_db),
    cache: ExerciseCache = Depends(get_exercise_cache),
):
    """Replace the sets and comments of an exercise.

    Returns:
        The updated exercise, or 204 if it had no sets left and was deleted
    """
    if exercise.id != exercise_id:
        raise InvalidExercise(f"Exercise id {exercise.id} doesn't match the URL")

    updated = exercise_service.update_exercise_paper_for_workout(db, cache, exercise)
    if updated is None:
        return Response(status_code=204)
    return updated


@router.get("/exercises/{exercise_id}/paper", response_model=ExercisePaperRequest)
def get_exercise_paper(
    exercise_id: str, db: Session = Depends(get_db)
) -> ExercisePaperRequest:
    """Render the stored exercise as a paper summary for editing."""
    current = exercise_service.get_exercise(db, exercise_id)
    return ExercisePaperRequest(paper=generate_summary(current.sets, current.comments))


@router.put("/exercises/{exercise_id}/paper", response_model=WorkoutExercise)
def update_exercise_paper(
    exercise_id: str,
    request: ExercisePaperRequest,
    db: Session = Depends(get_db),
    cache: ExerciseCache = Depends(get_exercise_cache),
):
    """Update an exercise from its edited paper summary.

    An empty paper deletes the exercise (204).
    """
    current = exercise_service.get_exercise(db, exercise_id)
    sets, comments = build_sets_from_paper(
        current.id, current.date, current.type, request.paper, current.sets
    )
    proposed = current.model_copy(update={"sets": sets, "comments": comments})

    updated = exercise_service.update_exercise_paper_for_workout(db, cache, proposed)
    if updated is None:
        return Response(status_code=204)
    return updated


@router.delete("/exercises/{exercise_id}", status_code=204)
def delete_exercise(
    exercise_id: str,
    db: Session = Depends(get_db),
    cache: ExerciseCache = Depends(get_exercise_cache),
):
    """Delete an exercise and its sets, and the workout if it was the last."""
    exercise = exercise_service.get_exercise(db, exercise_id)
    exercise_service.delete_exercise(db, exercise)
    cache.remove(exercise_id)


@router.get("/cache", response_model=Dict[str, CacheEntry])
def get_cache(cache: ExerciseCache = Depends(get_exercise_cache)):
    """Show the optimistic exercise cache and the status of each entry."""
    return cache.entries()
