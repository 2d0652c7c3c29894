"""AnonBoard Core Module - board service, password hashing, and errors."""

from .boards import BoardService
from .crypto import SecretHasher
from .errors import BoardError, ValidationError, NotFoundError, ForbiddenError, InternalError

__all__ = [
    "BoardService",
    "SecretHasher",
    "BoardError",
    "ValidationError",
    "NotFoundError",
    "ForbiddenError",
    "InternalError",
]
