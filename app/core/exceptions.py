"""
Domain exceptions for the Job Board API.

Each exception carries the HTTP status it maps to at the request boundary.
The handlers registered in main.py turn them into the error envelope:

    {"error": {"message": "...", "status": 404}}
"""


class AppError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(AppError):
    """Caller supplied unusable input (empty update, inconsistent filters)."""

    status_code = 400


class ConflictError(AppError):
    """A unique key or reference constraint rejected the write."""

    status_code = 400


class NotFoundError(AppError):
    """No row matches the selection key."""

    status_code = 404


class UnauthorizedError(AppError):
    """Missing, invalid or insufficient credentials."""

    status_code = 401
