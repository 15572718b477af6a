class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConflictError(DomainError):
    """Raised when an action would break a uniqueness rule (e.g. two approvals for one day)."""


class StoreNotConfiguredError(DomainError):
    """Raised by the HTTP layer when a write needs a store that is not configured."""
