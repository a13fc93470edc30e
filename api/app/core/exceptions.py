"""
Custom exceptions for the application.
"""


class HeraldException(Exception):
    """Base exception for all Herald application exceptions."""
    pass


class ValidationError(HeraldException):
    """Raised when validation fails."""
    pass


class NotFoundError(HeraldException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(HeraldException):
    """Raised when there's a conflict (e.g., duplicate topic key)."""
    pass


class PersistenceError(HeraldException):
    """Raised when the underlying storage fails (timeout, connection loss). Safe to retry."""
    pass

