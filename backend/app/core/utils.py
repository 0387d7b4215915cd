"""
Utility functions for the application.
"""
from typing import Any, Dict
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC now, matching what DateTime columns round-trip."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_message(message: str, **extra: Any) -> Dict[str, Any]:
    """Format a plain API message response."""
    response = {"message": message}
    response.update(extra)
    return response


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"detail": message}
    if details:
        response["error"] = details
    return response
