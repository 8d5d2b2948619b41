"""Retry decorator with exponential backoff for read-only API calls."""
from __future__ import annotations

import functools
import random
import time
from typing import Any, Callable, Tuple, Type

from careerconnect.errors import ApiError
from careerconnect.log import get_logger

log = get_logger(__name__)


def _transient(exc: BaseException) -> bool:
    if isinstance(exc, ApiError):
        return exc.retryable
    return True


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 8.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (ApiError,),
    should_retry: Callable[[BaseException], bool] = _transient,
) -> Callable:
    """Retry the wrapped call while it raises a transient ``retryable`` error.

    4xx responses are client mistakes and are re-raised on the first attempt.
    Never wrap mutating calls (apply, save, upload) with this.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(1, max_attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    if not should_retry(exc):
                        raise
                    if attempt == max_attempts:
                        log.error(
                            "%s failed after %d attempts: %s",
                            fn.__qualname__,
                            max_attempts,
                            exc,
                        )
                        raise
                    delay = min(
                        base_delay * (backoff_factor ** (attempt - 1)), max_delay
                    )
                    if jitter:
                        delay *= 0.5 + random.random()
                    log.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__,
                        attempt,
                        max_attempts,
                        exc,
                        delay,
                    )
                    time.sleep(delay)
            raise RuntimeError("unreachable")  # pragma: no cover

        return wrapper

    return decorator
