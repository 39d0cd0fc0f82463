"""Fallback chain for sources with more than one transport."""

from typing import Any, Callable, Coroutine, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class FallbackChain:
    """Try async fetchers in order and return the first that succeeds.

    A fetcher that returns normally (even with an empty result) ends the
    chain; only a raised exception moves on to the next fetcher.
    """

    def __init__(self, *fetchers: Callable[..., Coroutine[Any, Any, T]], name: str = "default"):
        """Initialize fallback chain with ordered fetchers.

        Args:
            *fetchers: Async callables to try in order
            name: Source name for logging
        """
        if not fetchers:
            raise ValueError("FallbackChain needs at least one fetcher")
        self.fetchers = fetchers
        self.name = name

    async def execute(self, *args: Any, **kwargs: Any) -> T:
        """Run fetchers in order until one succeeds.

        Returns:
            Result from the first successful fetcher

        Raises:
            The last fetcher's exception if every fetcher fails
        """
        last_error: Exception | None = None

        for i, fetcher in enumerate(self.fetchers):
            try:
                result = await fetcher(*args, **kwargs)
            except Exception as e:
                last_error = e
                logger.warning(
                    "fallback_attempt_failed",
                    source=self.name,
                    fetcher=fetcher.__name__,
                    attempt=i + 1,
                    total_fetchers=len(self.fetchers),
                    error=str(e),
                )
                continue

            if i > 0:
                logger.info(
                    "fallback_used",
                    source=self.name,
                    fetcher=fetcher.__name__,
                    attempt=i + 1,
                )
            return result

        logger.error(
            "fallback_chain_exhausted",
            source=self.name,
            fetchers=[f.__name__ for f in self.fetchers],
            final_error=str(last_error),
        )
        raise last_error  # type: ignore


async def with_fallback(
    primary: Callable[..., Coroutine[Any, Any, T]],
    fallback: Callable[..., Coroutine[Any, Any, T]],
    *args: Any,
    name: str = "default",
    **kwargs: Any,
) -> T:
    """Execute primary fetcher with a single fallback.

    Args:
        primary: Fetcher to try first
        fallback: Fetcher to try only if primary raises
        name: Source name for logging

    Returns:
        Result from whichever fetcher succeeds
    """
    chain = FallbackChain(primary, fallback, name=name)
    return await chain.execute(*args, **kwargs)
