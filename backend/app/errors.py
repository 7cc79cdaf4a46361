# app/errors.py
from fastapi import status


class WorkoutAPIError(Exception):
    """Base for errors that end a request with a `{"error": ...}` body."""
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(WorkoutAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class NotFoundError(WorkoutAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Workout not found"


class MethodNotAllowedError(WorkoutAPIError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Method not allowed"


class MalformedRouteError(WorkoutAPIError):
    # bad id segment is route-not-found, not a validation error
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StoreBusyError(WorkoutAPIError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Store is busy, try again"
