"""Custom exceptions for the VSCode Server construct."""

from typing import Iterable


class VSCodeServerError(Exception):
    """Base exception for the VSCode Server construct."""
    pass


class ConfigurationError(VSCodeServerError, ValueError):
    """Raised when the construct properties fail validation."""

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields = tuple(fields)


class InvalidOptionError(ConfigurationError):
    """Raised when a value is outside the set of legal values for a field."""
    pass


class ConflictingOptionError(ConfigurationError):
    """Raised when mutually exclusive fields are set together."""
    pass


class MissingDependencyError(ConfigurationError):
    """Raised when a field requires another field that is unset."""
    pass


class PreconditionViolationError(VSCodeServerError):
    """Raised when an output is read before construction completes."""
    pass


class UnregisteredTypeError(VSCodeServerError):
    """Raised when an unregistered type is passed to a construction engine.

    This is a misuse of the construct and is not meant to be handled;
    it aborts synthesis before any resource is defined.
    """
    pass


class EngineNotFoundError(VSCodeServerError):
    """Raised when no construction engine is registered under a name."""
    pass
