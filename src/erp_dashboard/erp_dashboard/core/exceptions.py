class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when form input is invalid or a required field is missing."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when the current role lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a row addressed by id does not exist."""
