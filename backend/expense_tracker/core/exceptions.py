"""
Application error taxonomy.

Every failure that reaches the API boundary is one of these. The exception
handlers registered in ``expense_tracker.main`` render them as
``{"error": message}`` with the matching status code.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors mapped onto an HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed required fields."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AppError):
    """Resource already exists (duplicate email)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class AuthError(AppError):
    """Missing, wrong or expired credentials.

    401 for absent credentials and failed logins, 403 for a token that is
    present but does not verify.
    """
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class NotFoundError(AppError):
    """Resource absent or not owned by the caller."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ServerError(AppError):
    """Unexpected store or runtime failure."""
