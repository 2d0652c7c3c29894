"""
AnonBoard Errors

Every failure a board operation can report. Each carries the HTTP status
the web layer answers with.
"""


class BoardError(Exception):
    """Base class for board operation failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(BoardError):
    """A required field is missing, empty or malformed."""
    status_code = 400


class ForbiddenError(BoardError):
    """The delete password does not match."""
    status_code = 403


class NotFoundError(BoardError):
    """The referenced thread or reply does not exist."""
    status_code = 404


class InternalError(BoardError):
    """Unexpected fault in the storage layer."""
    status_code = 500
