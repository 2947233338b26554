"""Retry utilities with exponential backoff."""

import time
from functools import wraps
from typing import Callable, Tuple, Type

import structlog
from requests.exceptions import ConnectionError, HTTPError, Timeout

log = structlog.stdlib.get_logger()

# Status codes worth another attempt; everything else fails immediately.
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

TRANSIENT_EXCEPTIONS: Tuple[Type[Exception], ...] = (ConnectionError, Timeout, HTTPError)


def is_transient(error: Exception) -> bool:
    """Return True for network failures and retryable HTTP statuses."""
    if isinstance(error, HTTPError):
        response = error.response
        return response is not None and response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(error, (ConnectionError, Timeout))


def exponential_backoff_retry(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exceptions: Tuple[Type[Exception], ...] = TRANSIENT_EXCEPTIONS,
    should_retry: Callable[[Exception], bool] = is_transient,
    sleep: Callable[[float], None] | None = None,
) -> Callable:
    """
    Decorator that retries a function with exponential backoff.

    Only use it on idempotent calls: the wrapped function may run
    ``max_retries + 1`` times.

    Args:
        max_retries: Maximum number of retry attempts
        base_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        exceptions: Exception types that are candidates for a retry
        should_retry: Final say on whether a caught exception is retried
        sleep: Function used to wait between attempts (time.sleep if None)

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if not should_retry(e):
                        raise

                    if attempt >= max_retries:
                        log.error(
                            "max_retries_reached",
                            function=func.__name__,
                            max_retries=max_retries,
                            error=str(e),
                        )
                        raise

                    delay = min(base_delay * (2**attempt), max_delay)
                    attempt += 1

                    log.warning(
                        "retrying_after_error",
                        function=func.__name__,
                        attempt=attempt,
                        max_retries=max_retries,
                        delay_seconds=delay,
                        error=str(e),
                    )

                    (sleep or time.sleep)(delay)

        return wrapper

    return decorator
