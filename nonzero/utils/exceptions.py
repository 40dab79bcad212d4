"""Custom exceptions for NonZero."""

from typing import Optional, Dict, Any


class NonZeroError(Exception):
    """Base exception for all NonZero errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(NonZeroError):
    """Input validation failed."""
    pass


class DuplicateEntryError(ValidationError):
    """A task already has an entry on that calendar day."""
    pass


class TaskNotFoundError(NonZeroError):
    """No task with the requested id."""
    pass


class ConfigurationError(NonZeroError):
    """Configuration error."""
    pass


class PreconditionError(NonZeroError, ValueError):
    """A calculator was called with arguments no caller should pass."""
    pass
