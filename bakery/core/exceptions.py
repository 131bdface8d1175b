"""
Domain error taxonomy.

Services raise these; the handlers registered in ``bakery.main`` turn them
into ``{"detail": ...}`` JSON responses with the matching status code.
"""
from fastapi import status


class BakeryError(Exception):
    """Base class for every error surfaced to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BakeryError):
    """Missing or malformed input; the caller can fix it."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class PermissionDeniedError(BakeryError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to perform this action"


class NotFoundError(BakeryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(BakeryError):
    """The request is incompatible with the current state of the resource."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Request conflicts with the current state"


class ResourceInUseError(ConflictError):
    default_message = "Resource is still referenced and cannot be removed"


class UnknownChangeTypeError(BakeryError):
    """Raised by the mutation applier for a change type outside the closed set."""

    default_message = "Unknown change type"


class BackendUnavailableError(BakeryError):
    """The database or object storage could not be reached or initialised."""

    default_message = "Backend services are unavailable"
