# ============================================================================
# src/prescription_assistant/utils/retry.py
# ============================================================================
"""
Bounded retry for capability adapters.

Network-backed adapters retry transient failures a small fixed number of
times with a fixed delay between attempts. The pipeline itself never retries.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 1.0


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = DEFAULT_RETRY_DELAY,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    description: str = "request",
    log: Optional[logging.Logger] = None,
) -> T:
    """
    Await `operation()` until it succeeds or attempts run out.

    Args:
        operation: Zero-argument coroutine factory (called once per attempt)
        max_attempts: Total attempts, at least 1
        delay: Seconds to sleep between attempts (fixed, no backoff growth)
        retry_on: Exception types considered transient
        description: Label used in log lines
        log: Logger to use (defaults to this module's logger)

    Returns:
        Result of the first successful attempt

    Raises:
        The last exception once attempts are exhausted, or immediately for
        exceptions not listed in `retry_on`.
    """
    log = log or logger
    attempts = max(1, int(max_attempts))

    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except retry_on as e:
            if attempt >= attempts:
                log.error(f"{description} failed after {attempt} attempt(s): {e}")
                raise
            log.warning(
                f"{description} failed (attempt {attempt}/{attempts}): {e}; "
                f"retrying in {delay:.1f}s"
            )
            await asyncio.sleep(delay)

    # Unreachable: the loop either returns or raises
    raise RuntimeError(f"{description}: retry loop exited without result")
