"""Plain-text "paper" form of an exercise.

A paper lists one set per line as {reps}x{weight}, followed by free
comment lines:

    6x100
    5x102.5

    Felt heavy today
"""

import datetime
import re
from typing import Iterable, List, Sequence, Tuple

from ids import next_set_id
from typedefs import WorkoutSet

SET_LINE = re.compile(r"^\s*(\d+)\s*[xX×]\s*(\d+(?:[.,]\d+)?)\s*$")


def format_weight(weight: float) -> str:
    """Render a weight without a trailing .0 (100.0 -> "100")."""
    return str(int(weight)) if float(weight).is_integer() else str(weight)


def generate_summary(sets: Iterable, comments: str | None = None) -> str:
    """Render sets (anything with reps and weight) and comments as a paper."""
    lines = [f"{s.reps}x{format_weight(s.weight)}" for s in sets]
    if comments:
        if lines:
            lines.append("")
        lines.append(comments)
    return "\n".join(lines)


def parse_summary(text: str) -> Tuple[List[Tuple[int, float]], str | None]:
    """Split a paper into (reps, weight) pairs and comments.

    Lines that look like "6x100" are sets; every other non-blank line is
    kept, in order, as a comment line.

    Returns:
        (sets, comments), comments is None when there are none
    """
    sets = []
    comment_lines = []
    for line in text.splitlines():
        match = SET_LINE.match(line)
        if match:
            reps, weight = match.groups()
            sets.append((int(reps), float(weight.replace(",", "."))))
        elif line.strip():
            comment_lines.append(line.strip())

    return sets, "\n".join(comment_lines) or None


def build_sets_from_paper(
    exercise_id: str,
    date: datetime.date,
    exercise_type: str,
    text: str,
    existing_sets: Sequence[WorkoutSet] = (),
) -> Tuple[List[WorkoutSet], str | None]:
    """Turn a paper into set records ready for reconciliation.

    Parsed lines take over the ids of the existing sets in order; lines
    beyond those get freshly minted ids. Existing sets without a line
    are left out and so get deleted by reconciliation.
    """
    parsed, comments = parse_summary(text)
    used_ids = [s.id for s in existing_sets]

    sets = []
    for i, (reps, weight) in enumerate(parsed):
        if i < len(existing_sets):
            set_id = existing_sets[i].id
        else:
            set_id = next_set_id(exercise_id, used_ids)
            used_ids.append(set_id)
        sets.append(
            WorkoutSet(
                id=set_id, reps=reps, weight=weight, date=date, type=exercise_type
            )
        )

    return sets, comments
