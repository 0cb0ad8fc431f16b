"""Exceptions raised by the workout log core.

Every error carries a short machine code and the HTTP status the API
maps it to. The core never retries or swallows these; they surface to
the immediate caller.
"""


class WorkoutLogError(Exception):
    """Base exception for all workout log failures."""

    code = "workout_log_error"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class NotFound(WorkoutLogError):
    """A workout or exercise that must exist is missing from the store."""

    code = "not_found"
    http_status = 404


class InvalidExercise(WorkoutLogError):
    """A proposed exercise record can't be applied as given."""

    code = "invalid_exercise"
    http_status = 400


class InvalidIdentifier(InvalidExercise):
    """An id doesn't follow the {date_key}_{type}[_{ordinal}] scheme."""

    code = "invalid_identifier"


class TransactionAbort(WorkoutLogError):
    """An atomic scope failed and was rolled back.

    The original exception is kept as __cause__.
    """

    code = "transaction_aborted"
    http_status = 409
