class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed (bad id, bad date, bad range)."""


class NotFoundError(DomainError):
    """Raised when the record or employee an operation needs does not exist."""


class ConflictError(DomainError):
    """Raised when an operation collides with the current state of a record."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no user is logged in."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DuplicateRecordError(DomainError):
    """Raised by repositories when the storage uniqueness constraint rejects a write."""
