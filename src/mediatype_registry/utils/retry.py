"""Retry decorator for upstream HTTP calls.

Retries transient failures with exponential backoff and jitter. HTTP
status errors are only retried for the configured status codes.
"""

import logging
import random
import time
from functools import wraps
from typing import Callable, Optional, Tuple, Type, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (httpx.TransportError, httpx.HTTPStatusError),
    status_codes: Optional[Tuple[int, ...]] = (429, 502, 503, 504),
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Create a retry decorator for synchronous functions.

    :param max_attempts: Maximum number of attempts (including the first)
    :type max_attempts: int
    :param delay: Initial delay between attempts in seconds
    :type delay: float
    :param backoff: Multiplier applied to the delay after each attempt
    :type backoff: float
    :param exceptions: Exception types that trigger a retry
    :type exceptions: Tuple[Type[Exception], ...]
    :param status_codes: HTTP status codes that trigger a retry (only
        applies to ``httpx.HTTPStatusError``)
    :type status_codes: Optional[Tuple[int, ...]]
    :param sleep: Sleep function, replaceable in tests
    :type sleep: Callable[[float], None]
    :return: Decorator
    :rtype: Callable[[Callable[..., T]], Callable[..., T]]
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            current_delay = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if isinstance(e, httpx.HTTPStatusError):
                        if status_codes and e.response.status_code not in status_codes:
                            raise
                    if attempt >= max_attempts:
                        raise
                    logger.warning(
                        "Attempt %d/%d of %s failed: %s",
                        attempt,
                        max_attempts,
                        func.__name__,
                        e,
                    )
                    sleep(current_delay * random.uniform(0.8, 1.2))
                    current_delay *= backoff
            raise AssertionError("unreachable")

        return wrapper

    return decorator


__all__ = ["retry"]
