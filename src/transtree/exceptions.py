"""
Custom exceptions for the transtree core.

Every failure raised by the tree primitives derives from ``TransTreeError``
so that samplers can catch the whole family at their proposal boundary.
"""


class TransTreeError(Exception):
    """Base exception for transmission tree errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class InvalidArgumentError(TransTreeError):
    """Raised for an empty candidate set or a case index outside 1..N."""
    pass


class PreconditionViolationError(TransTreeError):
    """Raised when genetic distance is requested for a case without a sequence."""
    pass


class ValidationError(TransTreeError):
    """Raised when a tree state or genetic dataset is malformed."""
    pass


class ConfigurationError(TransTreeError):
    """Raised when configuration is invalid."""
    pass
