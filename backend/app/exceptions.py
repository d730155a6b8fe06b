"""
Application Errors
Domain errors raised by services and rendered by the API exception handler.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a structured HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers = None

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(detail)
        self.detail = detail


class ValidationError(AppError):
    status_code = 422


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
