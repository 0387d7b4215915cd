"""
Domain errors raised by services and stores.

Each error carries the HTTP status the API boundary maps it to; the
handlers in ``app.main`` do the translation.
"""
from fastapi import status


class TodoError(Exception):
    """Base class for all expected, caller-facing failures."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(TodoError):
    """Missing or malformed request fields."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class DuplicateIdentity(TodoError):
    """Username or email already registered."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class InvalidCredentials(TodoError):
    """Login failed. Deliberately does not say which part was wrong."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class InvalidToken(TodoError):
    """Missing, malformed, tampered or expired bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class NotFound(TodoError):
    """Record absent, or owned by somebody else."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StoreUnavailable(TodoError):
    """Backing store unreachable or failing."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
