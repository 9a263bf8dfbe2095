"""
utils/errors.py
---------------
Error types raised by the data access layer.
Each carries a human-readable message and the HTTP status the API layer
should answer with.
"""


class AppError(Exception):
    """Base class for errors that are safe to show to an API caller."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Caller-supplied data violates an input contract."""

    status_code = 400


class DuplicateKeyError(AppError):
    """An entity with the same unique key already exists."""

    status_code = 409


class NotFoundError(AppError):
    """The requested key does not resolve to a record."""

    status_code = 404
