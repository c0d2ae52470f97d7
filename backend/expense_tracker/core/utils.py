"""
Utility functions for the application.
"""
from typing import Any, Dict
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_response(message: str, **data: Any) -> Dict[str, Any]:
    """Format API response."""
    response = {"message": message}
    response.update(data)
    return response


def format_error(message: str) -> Dict[str, Any]:
    """Format error response."""
    return {"error": message}
