"""
Domain error taxonomy.

Business rules raise these exceptions at the point of detection; the
exception handlers registered in ``main.create_app`` are the only
place where they are turned into HTTP responses.  Anything that is not
a ``FlightsAPIError`` is treated as an internal error (HTTP 500).
"""

from fastapi import status


class FlightsAPIError(Exception):
    """Base class for errors that map to a client-facing status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadInputError(FlightsAPIError):
    """Malformed, missing or incoherent input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(FlightsAPIError):
    """The referenced flight does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(FlightsAPIError):
    """The request clashes with the current state (duplicate flight name)."""

    status_code = status.HTTP_409_CONFLICT
