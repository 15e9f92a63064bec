"""Retry utilities with exponential backoff for AWS API calls."""

import time
import logging
from functools import wraps
from typing import Callable, Type, Tuple
from botocore.exceptions import ClientError
from .exceptions import ThrottlingError

logger = logging.getLogger(__name__)

# Secrets Manager and most AWS APIs report throttling with one of these codes
THROTTLING_ERROR_CODES = (
    "ThrottlingException",
    "Throttling",
    "TooManyRequestsException",
    "RequestLimitExceeded",
)


def exponential_backoff_retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    backoff_rate: float = 2.0,
    max_delay: float = 8.0,
    retryable_exceptions: Tuple[Type[Exception], ...] = (ThrottlingError,)
):
    """Decorator for retrying functions with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts
        initial_delay: Initial delay in seconds
        backoff_rate: Multiplier for delay after each attempt
        max_delay: Maximum delay in seconds
        retryable_exceptions: Tuple of exception types to retry

    Returns:
        Decorated function with retry logic
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            delay = initial_delay

            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except retryable_exceptions as e:
                    if attempt == max_attempts:
                        logger.error(
                            f"Function {func.__name__} failed after {max_attempts} attempts: {e}"
                        )
                        raise

                    logger.warning(
                        f"Attempt {attempt}/{max_attempts} failed for {func.__name__}, "
                        f"retrying in {delay}s"
                    )

                    time.sleep(delay)
                    delay = min(delay * backoff_rate, max_delay)

        return wrapper
    return decorator


def raise_for_throttling(func: Callable) -> Callable:
    """Translate throttling ClientErrors into ThrottlingError.

    Other client errors propagate unchanged.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in THROTTLING_ERROR_CODES:
                raise ThrottlingError(f"{func.__name__} throttled: {code}") from e
            raise
    return wrapper
