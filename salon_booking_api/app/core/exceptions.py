"""
Error taxonomy shared by the service layer and the HTTP handlers.

Services raise these exceptions; ``main.create_app`` registers a
handler that turns any ``SalonError`` into a JSON body of the form
``{"error": "<message>"}`` with the class's ``status_code``.  Keyword
``details`` are merged into that body next to ``error``.
"""

from typing import Any

from fastapi import status


class SalonError(Exception):
    """Base class for errors that map to a specific HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, **details: Any) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class MissingToken(SalonError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Missing token"


class InvalidToken(SalonError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class Unauthorized(SalonError):
    """Token is valid but belongs to the wrong kind of account."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InvalidCredentials(SalonError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class ValidationFailed(SalonError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidStatus(ValidationFailed):
    default_message = "Invalid status value"


class NotFound(SalonError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(SalonError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"
