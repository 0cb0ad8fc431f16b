"""Identifier scheme for workouts, exercises and sets.

Ids are composed so that each child id embeds its parent's id:

    workout   2018-05-04
    exercise  2018-05-04_bench-press
    set       2018-05-04_bench-press_001

The workout key of any exercise or set is therefore recoverable from
its id alone; all parsing of that prefix goes through this module.
"""

import datetime
from typing import Iterable

from errors import InvalidIdentifier

DATE_KEY_LENGTH = len("YYYY-MM-DD")
SEPARATOR = "_"
ORDINAL_WIDTH = 3


def date_key(value: datetime.date) -> str:
    """Canonical workout key for a calendar day."""
    if isinstance(value, datetime.datetime):
        value = value.date()
    return value.isoformat()


def date_from_key(key: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(key)
    except ValueError as e:
        raise InvalidIdentifier(f"Invalid date key: {key!r}") from e


def compose_exercise_id(date: datetime.date, exercise_type: str) -> str:
    if not exercise_type:
        raise InvalidIdentifier("Exercise type must not be empty")
    return f"{date_key(date)}{SEPARATOR}{exercise_type}"


def compose_set_id(exercise_id: str, ordinal: int) -> str:
    if ordinal < 1:
        raise InvalidIdentifier(f"Set ordinal must be positive, got {ordinal}")
    return f"{exercise_id}{SEPARATOR}{ordinal:0{ORDINAL_WIDTH}d}"


def workout_key_from_exercise_id(exercise_id: str) -> str:
    """Return the workout key prefix of an exercise id.

    Raises:
        InvalidIdentifier: if the id has no date key prefix or no type
    """
    key = exercise_id[:DATE_KEY_LENGTH]
    rest = exercise_id[DATE_KEY_LENGTH:]
    if not rest.startswith(SEPARATOR) or len(rest) == 1:
        raise InvalidIdentifier(f"Invalid exercise id: {exercise_id!r}")
    date_from_key(key)
    return key


def exercise_type_from_id(exercise_id: str) -> str:
    workout_key_from_exercise_id(exercise_id)
    return exercise_id[DATE_KEY_LENGTH + 1 :]


def split_set_id(set_id: str) -> tuple[str, int]:
    """Split a set id into (exercise_id, ordinal).

    The ordinal must be positive and zero-padded exactly as
    compose_set_id writes it, so "_001" and "_1234" parse but "_0",
    "_7" and "_0001" don't.
    """
    exercise_id, _, suffix = set_id.rpartition(SEPARATOR)
    if (
        not exercise_id
        or not suffix.isdigit()
        or int(suffix) < 1
        or suffix != f"{int(suffix):0{ORDINAL_WIDTH}d}"
    ):
        raise InvalidIdentifier(f"Invalid set id: {set_id!r}")
    workout_key_from_exercise_id(exercise_id)
    return exercise_id, int(suffix)


def parse_set_ordinal(set_id: str) -> int:
    return split_set_id(set_id)[1]


def workout_key_from_set_id(set_id: str) -> str:
    return workout_key_from_exercise_id(split_set_id(set_id)[0])


def next_set_id(exercise_id: str, existing_ids: Iterable[str]) -> str:
    """Mint the next free set id for an exercise (highest ordinal + 1)."""
    ordinals = [
        ordinal
        for parent, ordinal in (split_set_id(set_id) for set_id in existing_ids)
        if parent == exercise_id
    ]
    return compose_set_id(exercise_id, max(ordinals, default=0) + 1)
