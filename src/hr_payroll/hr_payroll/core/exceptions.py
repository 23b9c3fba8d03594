class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class SpreadsheetFormatError(ValidationError):
    """Raised when an uploaded sheet cannot be imported at all (e.g. no name column)."""


class CalendarError(ValidationError):
    """Raised when a Bikram Sambat date does not exist."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""
