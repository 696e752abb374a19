# workout_api/errors.py
"""
Domain errors raised below the HTTP layer.

Each carries the status code and detail the API answers with; main.py
renders them with a single exception handler so repositories never import
FastAPI.
"""
from __future__ import annotations


class WorkoutAppError(Exception):
    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(WorkoutAppError):
    """Malformed or missing input, rejected before the store is touched."""
    status_code = 400
    default_detail = "Invalid payload"


class NotFoundError(WorkoutAppError):
    status_code = 404
    default_detail = "Not found"


class ForbiddenError(WorkoutAppError):
    """The caller is authenticated but the resource belongs to another user."""
    status_code = 403
    default_detail = "Not allowed for this user"


class ConflictError(WorkoutAppError):
    """Unique constraint violation, e.g. a duplicate registration email."""
    status_code = 400
    default_detail = "Already exists"


class StoreError(WorkoutAppError):
    """The store failed; the enclosing transaction was rolled back."""
    status_code = 500
    default_detail = "Internal server error"


class AuthError(WorkoutAppError):
    status_code = 401
    reason: str = "invalid"


class MissingCredentialError(AuthError):
    reason = "required"
    default_detail = "Token is required"


class InvalidCredentialError(AuthError):
    reason = "invalid"
    default_detail = "Invalid token"


class UnconfirmedAccountError(WorkoutAppError):
    status_code = 403
    default_detail = "Please validate your email before logging in"


class NotificationError(WorkoutAppError):
    default_detail = "Notification delivery failed"
