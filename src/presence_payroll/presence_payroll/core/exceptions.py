class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class OverlappingLeaveError(ValidationError):
    """Raised when one day is covered by more than one approved leave."""


class ConfigurationError(DomainError):
    """Raised when compensation or calendar data cannot be priced (e.g. zero working days)."""


class NotFoundError(DomainError):
    """Raised when a slip, employee or leave lookup misses."""


class DuplicateSlipError(DomainError):
    """Raised when a slip already exists for the same (user, month, year)."""


class LockedSlipError(DomainError):
    """Raised when a mutation is attempted on a locked or paid slip."""
