"""
Domain exceptions raised by the service layer.

Every error carries a human-readable message and a stable machine-readable
code. The API layer maps each class to an HTTP status in
``courtside.api.exception_handlers``.
"""


class CourtsideError(Exception):
    """Base class for all service-level errors."""
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r})"


class ValidationError(CourtsideError):
    """Malformed or missing input."""
    code = "VALIDATION_ERROR"


class NotFoundError(CourtsideError):
    """A referenced entity does not exist."""
    code = "NOT_FOUND"


class ForbiddenError(CourtsideError):
    """The caller is authenticated but not allowed to do this."""
    code = "FORBIDDEN"


class GoneError(CourtsideError):
    """The reference is valid but the resource is closed."""
    code = "GONE"


class ConflictError(CourtsideError):
    """A uniqueness rule was violated. Safe for the caller to retry."""
    code = "CONFLICT"


class ExhaustionError(CourtsideError):
    """The join-code generator ran out of attempts."""
    code = "CODE_SPACE_EXHAUSTED"
