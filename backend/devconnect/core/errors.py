"""
Application error taxonomy.

Services raise these; the handlers registered in ``devconnect.main`` turn them
into JSON responses. Every error renders either as ``{"msg": ...}`` or, for
batched validation failures, as ``{"errors": [{"msg": ...}, ...]}``.
"""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP response."""

    status_code: int = 500
    default_message: str = "Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"msg": self.message}


class MissingToken(AppError):
    status_code = 401
    default_message = "No token, authorization denied"


class InvalidToken(AppError):
    # Expired, tampered and malformed tokens all end up here
    status_code = 401
    default_message = "Token is not valid"


class ValidationFailed(AppError):
    """A batch of field errors, rendered as ``{"errors": [...]}``."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        super().__init__(errors[0]["msg"] if errors else None)

    @classmethod
    def single(cls, message: str, param: Optional[str] = None) -> "ValidationFailed":
        error: Dict[str, Any] = {"msg": message}
        if param:
            error["param"] = param
        return cls([error])

    def to_body(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class InvalidCredentials(ValidationFailed):
    # Same message for unknown email and wrong password
    def __init__(self):
        super().__init__([{"msg": "Invalid credentials"}])


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class Forbidden(AppError):
    # Ownership mismatches answer 401, which existing clients expect
    status_code = 401
    default_message = "User not authorized"


class AlreadyLiked(AppError):
    status_code = 400
    default_message = "Post already liked"


class NotLiked(AppError):
    status_code = 400
    default_message = "Post has not yet been liked"


class UpstreamUnavailable(AppError):
    status_code = 503
    default_message = "GitHub API is unavailable"


class Conflict(AppError):
    status_code = 409
    default_message = "Document was modified by another request, please retry"


class InternalError(AppError):
    status_code = 500
    default_message = "Server Error"
