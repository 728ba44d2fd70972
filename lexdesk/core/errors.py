"""Domain errors raised by the billing, case and access layers.

Each error carries the HTTP status it maps to; the API installs a single
exception handler that renders ``{"detail": message}`` with that status.
"""

from __future__ import annotations

from fastapi import status


class LexdeskError(Exception):
    """Base class for errors that map onto a caller-facing status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidReference(LexdeskError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, resource: str, identifier: object | None = None) -> None:
        message = f"Invalid {resource} reference"
        if identifier is not None:
            message = f"{resource} '{identifier}' does not exist"
        self.resource = resource
        super().__init__(message)


class NotFound(LexdeskError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, identifier: object | None = None) -> None:
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} with id '{identifier}' not found"
        self.resource = resource
        super().__init__(message)


class ValidationFailure(LexdeskError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class Unauthorized(LexdeskError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Not authorised to access this resource") -> None:
        super().__init__(message)


class DuplicateKey(LexdeskError):
    status_code = status.HTTP_409_CONFLICT


class StoreUnavailable(LexdeskError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self) -> None:
        super().__init__("Storage is temporarily unavailable")
