class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateRange(ValidationError):
    """Raised when a start date falls after its end date."""


class InvalidPeriod(ValidationError):
    """Raised when a payroll month/year is malformed."""


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConflictError(DomainError):
    """Raised when a write collides with an existing record."""


class PayrollComputationError(DomainError):
    """Raised when payroll inputs cannot produce a finite result."""
