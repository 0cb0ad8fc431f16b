import datetime
from typing import List

from pydantic import BaseModel, field_validator


class WorkoutSet(BaseModel):
    """A single set of an exercise.

    The id is stable across edits and is the only key used to match a
    persisted set with its edited version.
    """

    id: str  # {exercise_id}_{ordinal:03d}
    reps: int
    weight: float
    date: datetime.date
    type: str

    class Config:
        from_attributes = True


class WorkoutExercise(BaseModel):
    """An exercise of a workout together with its sets."""

    id: str  # {date_key}_{type}
    date: datetime.date
    type: str
    comments: str | None = None
    sort: int | None = None  # 1-based position, assigned when inserted
    sets: List[WorkoutSet] = []

    class Config:
        from_attributes = True

    @field_validator("sets")
    @classmethod
    def set_ids_are_unique(cls, sets: List[WorkoutSet]) -> List[WorkoutSet]:
        seen = set()
        for s in sets:
            if s.id in seen:
                raise ValueError(f"Duplicate set id: {s.id}")
            seen.add(s.id)
        return sets


class Workout(BaseModel):
    """All exercises logged on one calendar day."""

    id: str  # YYYY-MM-DD
    date: datetime.date
    exercises: List[WorkoutExercise]

    class Config:
        from_attributes = True


# Request models (for API input)
class SetInput(BaseModel):
    reps: int
    weight: float


class ExerciseCreateRequest(BaseModel):
    """Request to log a new exercise.

    Sets can be given as a list of reps/weight pairs or as a paper
    summary (one "{reps}x{weight}" line per set, then comments).
    """

    date: datetime.date
    type: str
    comments: str | None = None
    sets: List[SetInput] = []
    paper: str | None = None


class ExercisePaperRequest(BaseModel):
    """Paper summary of an existing exercise."""

    paper: str
