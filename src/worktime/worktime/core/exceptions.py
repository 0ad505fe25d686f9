class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidInterval(ValidationError):
    """Raised when a check-out lies before its check-in."""


class InvalidBreakWindow(ValidationError):
    """Raised for a break timing that is not a same-day HH:MM window."""


class InvalidCoordinate(ValidationError):
    """Raised for a latitude/longitude that is not finite or out of range."""


class ConfigurationError(DomainError):
    """Raised when company settings cannot be used as configured."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConcurrencyConflict(DomainError):
    """Raised when another writer already closed the attendance record."""
