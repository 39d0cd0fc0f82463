"""Wall-clock bound for a single source fetch."""

import asyncio
from typing import Any, Coroutine, Optional, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class SourceTimeoutError(Exception):
    """Raised when a source fetch exceeds its time bound."""

    def __init__(self, source: str, seconds: float):
        super().__init__(f"Source '{source}' timed out after {seconds:g}s")
        self.source = source
        self.seconds = seconds


async def run_with_timeout(
    coro: Coroutine[Any, Any, T],
    seconds: Optional[float],
    source: str = "default",
) -> T:
    """Await a coroutine, cancelling it once the bound is exceeded.

    Args:
        coro: Coroutine to await
        seconds: Time bound; None waits indefinitely
        source: Source name for logging and the error message

    Raises:
        SourceTimeoutError: If the coroutine did not finish in time
    """
    if seconds is None:
        return await coro

    try:
        return await asyncio.wait_for(coro, timeout=seconds)
    except asyncio.TimeoutError as e:
        logger.warning("source_timed_out", source=source, timeout_seconds=seconds)
        raise SourceTimeoutError(source, seconds) from e
