"""
Domain errors raised by the service layer.

Each error carries the HTTP status and error code the API layer reports.
"""


class TravelJournalError(Exception):
    """Base class for all domain errors."""
    status_code = 500
    error = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TravelJournalError):
    """Malformed or insufficient input."""
    status_code = 400
    error = "BAD_REQUEST"


class NotFoundError(TravelJournalError):
    """Referenced travel, day, photo, log, comment or token does not exist."""
    status_code = 404
    error = "NOT_FOUND"


class ForbiddenError(TravelJournalError):
    """Authenticated, but not allowed to touch this resource."""
    status_code = 403
    error = "FORBIDDEN"


class ConflictError(TravelJournalError):
    """The request collides with existing state (e.g. duplicate day date)."""
    status_code = 409
    error = "CONFLICT"
