"""
Domain errors raised by the category services.

Services never build HTTP responses; each error carries the status code the
API boundary translates it to (see ``main.py``).
"""
from fastapi import status


class CategoryError(Exception):
    """Base class for category domain errors."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CategoryError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(CategoryError):
    status_code = status.HTTP_409_CONFLICT


class BadRequestError(CategoryError):
    status_code = status.HTTP_400_BAD_REQUEST
