"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional


def format_error(status_code: int, error: str, message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {
        "status": status_code,
        "error": error,
        "message": message,
    }
    if details:
        response["details"] = details
    return response


def clean_label(label: Optional[str]) -> Optional[str]:
    """Return a stripped label, or None for blank input."""
    if label is None:
        return None
    label = label.strip()
    return label or None
