"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return value is None or not value.strip()


def format_error(message: str, code: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"detail": message, "code": code}
    if details:
        response["details"] = details
    return response
