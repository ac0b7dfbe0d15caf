"""
Retry Decorators

Retry decorators for transport exchanges. Only connection-level faults are
retried; an HTTP error status is an answer, not a failure to reach the server.

Key Features:
- Works on both sync and async callables
- Configurable backoff strategies
- Retry timing computed per attempt
"""

import asyncio
import logging
import time
from functools import wraps
from typing import Tuple, Type, Callable, Any, Optional

from ..exceptions.transport import TransportConnectionFault, TransportTimeoutFault

RETRYABLE_FAULTS: Tuple[Type[Exception], ...] = (TransportConnectionFault, TransportTimeoutFault)


def compute_delay(attempt: int, backoff: str, base_delay: float, max_delay: float) -> float:
    """Delay before the retry that follows failed attempt number `attempt` (1-based)."""
    if backoff == "exponential":
        return min(base_delay * (2 ** (attempt - 1)), max_delay)
    elif backoff == "linear":
        return min(base_delay * attempt, max_delay)
    return base_delay


def retry_decorator(
    max_attempts: int = 3,
    backoff: str = "exponential",
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exceptions: Optional[Tuple[Type[Exception], ...]] = None,
    logger: Optional[logging.Logger] = None
):
    """
    Configurable retry decorator for transport exchanges.

    Args:
        max_attempts: Maximum attempts including the first one (default: 3)
        backoff: Backoff strategy - "exponential", "linear", "fixed" (default: "exponential")
        base_delay: Base delay in seconds (default: 0.1)
        max_delay: Maximum delay cap in seconds (default: 2.0)
        exceptions: Exceptions to retry (default: connection and timeout faults)
        logger: Logger for retry messages

    Returns:
        Decorated function with retry logic, async if the wrapped function is async

    Raises:
        ValueError: If max_attempts is less than 1
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    if exceptions is None:
        exceptions = RETRYABLE_FAULTS
    log = logger or logging.getLogger(__name__)

    def decorator(func: Callable) -> Callable:
        if asyncio.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs) -> Any:
                for attempt in range(1, max_attempts + 1):
                    try:
                        return await func(*args, **kwargs)
                    except exceptions as e:
                        if attempt == max_attempts:
                            raise
                        delay = compute_delay(attempt, backoff, base_delay, max_delay)
                        log.debug(f"Exchange failed on attempt {attempt}, retrying in {delay}s: {e}")
                        await asyncio.sleep(delay)
            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args, **kwargs) -> Any:
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        raise
                    delay = compute_delay(attempt, backoff, base_delay, max_delay)
                    log.debug(f"Exchange failed on attempt {attempt}, retrying in {delay}s: {e}")
                    time.sleep(delay)
        return sync_wrapper

    return decorator
