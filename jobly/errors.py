"""
Error taxonomy for the data-access layer.

Every error carries an HTTP-like status so an outer request layer can
translate it without inspecting the message.
"""


class JoblyError(Exception):
    """Base error for all failures surfaced to callers."""

    status = 500

    def __init__(self, message: str = "", status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class InvalidArgumentError(JoblyError):
    """Raised for empty patches and malformed filter values."""

    status = 400


class NotFoundError(JoblyError):
    """Raised when an operation targets an id with no matching row."""

    status = 404


class ConstraintViolationError(JoblyError):
    """Raised when the store rejects a write (foreign key, unique, check)."""

    status = 400
