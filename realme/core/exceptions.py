"""
Error taxonomy shared by the flows and the wellness store.

Only terminal flow failures are meant to reach a user-facing boundary;
everything else is absorbed where it happens.
"""

from typing import Optional


class RealmeError(Exception):
    """Base class for all errors raised by this package."""


class InputValidationError(RealmeError):
    """User input was rejected before any generation attempt."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class GenerationError(RealmeError):
    """The structured generation capability failed (network, empty or unparseable content)."""


class OutputValidationError(RealmeError):
    """Generated output does not conform to the declared output schema."""


class AuthorizationError(RealmeError):
    """The identity is not allowed to perform the requested operation."""


class PersistenceError(RealmeError):
    """Stored state could not be read or written."""
