class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class BackendError(Exception):
    """Raised when a database call fails.

    The message is the driver's own error text so it can be shown to the user as-is.
    """

    def __init__(self, message: str, *, errno: int | None = None):
        super().__init__(message)
        self.errno = errno


class ConstraintViolation(BackendError):
    """Raised when an insert collides with a unique key."""
