"""Atomic scope around a unit of work on the embedded store."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from errors import TransactionAbort, WorkoutLogError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session, name: str = "transaction") -> Iterator[Session]:
    """Run the enclosed block as a single all-or-nothing write.

    Commits when the block exits normally. On any failure the session is
    rolled back, so none of the block's writes become visible. Domain
    errors (NotFound, InvalidExercise, ...) are re-raised as is; anything
    else is wrapped in TransactionAbort.

    Args:
        db: Database session the block writes through
        name: Label used in log messages

    Raises:
        WorkoutLogError: whatever domain error the block raised
        TransactionAbort: for any other failure, including the commit
    """
    try:
        yield db
        db.commit()
    except WorkoutLogError:
        db.rollback()
        logger.warning("%s rolled back", name)
        raise
    except Exception as e:
        db.rollback()
        logger.warning("%s aborted: %s", name, e)
        raise TransactionAbort(f"{name} failed: {e}") from e
