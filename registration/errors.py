# registration/errors.py
from __future__ import annotations


class TeamRegistrationError(Exception):
    """Client-facing failure: rendered as {"error": message} with `status_code`."""

    status_code = 400
    default_message = "Invalid request."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MalformedIdentifierError(TeamRegistrationError):
    default_message = "Team id is invalid."


class MissingIdentifierError(TeamRegistrationError):
    default_message = "Team id is required."


class UnsupportedMediaTypeError(TeamRegistrationError):
    status_code = 415
    default_message = "Content-Type must be application/json."


class MalformedBodyError(TeamRegistrationError):
    default_message = "Invalid JSON payload."


class SchemaViolationError(TeamRegistrationError):
    """Raised with the first violated validation rule as message."""

    default_message = "Invalid payload."


class TeamNotFoundError(TeamRegistrationError):
    status_code = 404
    default_message = "Team not found."


class TeamStoreError(RuntimeError):
    """Raised when the team collection cannot be read or written."""
    pass
