"""Set-level reconciliation between a persisted and an edited exercise.

This module is pure: it only computes what has to change and never
touches the store. exercise_service applies the result inside an
atomic scope.
"""

from dataclasses import dataclass, field
from typing import List

from typedefs import WorkoutExercise, WorkoutSet


@dataclass
class SetReconciliation:
    """Changes needed to turn a persisted exercise into the proposed one.

    Deletions are applied before updates and inserts. When
    delete_exercise is set no set-level change is applied at all: the
    whole exercise goes, cascading to its workout if it was the last.
    """

    sets_to_delete: List[str] = field(default_factory=list)
    sets_to_update: List[WorkoutSet] = field(default_factory=list)
    sets_to_insert: List[WorkoutSet] = field(default_factory=list)
    comments: str | None = None
    delete_exercise: bool = False

    @property
    def sets_to_upsert(self) -> List[WorkoutSet]:
        return self.sets_to_update + self.sets_to_insert

    @property
    def is_noop(self) -> bool:
        return not (
            self.sets_to_delete
            or self.sets_to_update
            or self.sets_to_insert
            or self.delete_exercise
        )


def reconcile_sets(
    previous: WorkoutExercise, proposed: WorkoutExercise
) -> SetReconciliation:
    """Diff the sets of a persisted exercise against an edited version.

    Sets are matched by id only, never by position, so the order in
    which the proposed sets are listed doesn't matter.

    Args:
        previous: The exercise as currently committed
        proposed: The edited exercise

    Returns:
        SetReconciliation describing deletes, updates and inserts
    """
    proposed_ids = {s.id for s in proposed.sets}
    existing_by_id = {s.id: s for s in previous.sets}

    result = SetReconciliation(
        sets_to_delete=[s.id for s in previous.sets if s.id not in proposed_ids]
    )

    if not proposed.sets:
        result.delete_exercise = True
        return result

    # Empty comments clear the stored value
    result.comments = proposed.comments or None

    for proposed_set in proposed.sets:
        existing = existing_by_id.get(proposed_set.id)
        if existing is None:
            result.sets_to_insert.append(proposed_set)
        elif (existing.reps, existing.weight) != (
            proposed_set.reps,
            proposed_set.weight,
        ):
            result.sets_to_update.append(proposed_set)

    return result
