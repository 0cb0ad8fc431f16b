"""In-process read cache of exercises, updated optimistically.

Mutations publish a pending entry before their write is attempted, then
either confirm it with the committed record or tag it for rollback.
The cache never undoes a rollback entry itself: whoever owns the cache
calls reconcile() with the store's current state.
"""

import threading
from enum import Enum
from typing import Callable, Dict, List

from pydantic import BaseModel

from typedefs import WorkoutExercise


class CacheStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLBACK = "rollback"


class CacheUpdate(BaseModel):
    """A change notification for one exercise.

    exercise is None when a confirmed update removed the exercise.
    """

    exercise_id: str
    status: CacheStatus
    exercise: WorkoutExercise | None = None


Notify = Callable[[CacheUpdate], None]


class CacheEntry(BaseModel):
    exercise: WorkoutExercise
    status: CacheStatus


class ExerciseCache:
    """Insert-or-replace cache keyed by exercise id.

    Instances are callable so they can be passed directly as the notify
    callback of exercise_service operations.
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def __call__(self, update: CacheUpdate) -> None:
        self.apply(update)

    def apply(self, update: CacheUpdate) -> None:
        with self._lock:
            if update.exercise is None:
                if update.status == CacheStatus.ROLLBACK:
                    entry = self._entries.get(update.exercise_id)
                    if entry:
                        entry.status = CacheStatus.ROLLBACK
                else:
                    self._entries.pop(update.exercise_id, None)
                return

            self._entries[update.exercise_id] = CacheEntry(
                exercise=update.exercise, status=update.status
            )

    def get(self, exercise_id: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(exercise_id)

    def remove(self, exercise_id: str) -> None:
        with self._lock:
            self._entries.pop(exercise_id, None)

    def entries(self) -> Dict[str, CacheEntry]:
        with self._lock:
            return dict(self._entries)

    def needs_reconciliation(self) -> List[str]:
        """Ids of entries whose write failed after they were published."""
        with self._lock:
            return [
                exercise_id
                for exercise_id, entry in self._entries.items()
                if entry.status == CacheStatus.ROLLBACK
            ]

    def reconcile(self, exercise_id: str, persisted: WorkoutExercise | None) -> None:
        """Replace an entry with what the store actually holds."""
        with self._lock:
            if persisted is None:
                self._entries.pop(exercise_id, None)
            else:
                self._entries[exercise_id] = CacheEntry(
                    exercise=persisted, status=CacheStatus.CONFIRMED
                )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


exercise_cache = ExerciseCache()


def get_exercise_cache() -> ExerciseCache:
    """Dependency function that returns the process-wide exercise cache."""
    return exercise_cache
