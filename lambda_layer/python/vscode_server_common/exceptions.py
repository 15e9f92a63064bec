"""Custom exceptions for the VSCode Server Lambda functions."""


class VSCodeServerLambdaError(Exception):
    """Base exception for VSCode Server Lambda functions."""
    pass


class ValidationError(VSCodeServerLambdaError):
    """Raised when an incoming event is malformed."""
    pass


class ThrottlingError(VSCodeServerLambdaError):
    """Raised when an AWS API call is throttled."""
    pass


class SecretRetrievalError(VSCodeServerLambdaError):
    """Raised when a secret cannot be read or parsed."""
    pass
