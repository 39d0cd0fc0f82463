"""
Fan-out over all source adapters with settle-all semantics.

Every adapter runs to completion (or failure) regardless of the others, and
results are combined in registration order so output is deterministic even
though fetches overlap.
"""

import asyncio
from typing import Optional, Sequence

import structlog

from .models import AdapterResult, AggregateResult, AggregateStats, Event
from .resilience.health import HealthMonitor
from .sources.base import SourceAdapter

logger = structlog.get_logger()

CONCURRENT = "concurrent"
SEQUENTIAL = "sequential"
CONCURRENCY_MODES = (CONCURRENT, SEQUENTIAL)


async def run_all(
    adapters: Sequence[SourceAdapter],
    concurrency: str = CONCURRENT,
    health: Optional[HealthMonitor] = None,
) -> AggregateResult:
    """
    Run every adapter and combine the outcomes.

    Args:
        adapters: Adapters in registration order
        concurrency: "concurrent" launches all at once, "sequential" awaits
            one at a time (for rate-limited environments)
        health: Optional monitor that records each outcome

    Returns:
        AggregateResult with concatenated events and success/failure counts
    """
    if concurrency not in CONCURRENCY_MODES:
        raise ValueError(f"Unknown concurrency mode: {concurrency!r}")

    if concurrency == CONCURRENT:
        outcomes = await asyncio.gather(
            *(adapter.fetch() for adapter in adapters),
            return_exceptions=True,
        )
    else:
        outcomes = []
        for adapter in adapters:
            # Only a cancellation of this task escapes gather; the adapter's own is a value
            outcome, = await asyncio.gather(adapter.fetch(), return_exceptions=True)
            outcomes.append(outcome)

    results = [_settle(adapter, outcome) for adapter, outcome in zip(adapters, outcomes)]
    return _combine(results, health)


def _settle(adapter: SourceAdapter, outcome: object) -> AdapterResult:
    """Convert an escaped exception into a failed AdapterResult."""
    if isinstance(outcome, AdapterResult):
        return outcome

    source = getattr(adapter, "website", None) or type(adapter).__name__
    if isinstance(outcome, BaseException):
        # Includes an adapter that cancelled itself; run_all's own cancellation never gets here
        reason = str(outcome) or type(outcome).__name__
    else:
        reason = f"Unexpected adapter result: {type(outcome).__name__}"

    logger.warning("source_raised", source=source, error=reason)
    return AdapterResult(source=source, events=[], error=reason)


def _combine(results: list[AdapterResult], health: Optional[HealthMonitor]) -> AggregateResult:
    events: list[Event] = []
    stats = AggregateStats()

    for result in results:
        if health is not None:
            health.record(result)

        if result.contributed:
            events.extend(result.events)
            stats.success += 1
            logger.info("source_contributed", source=result.source, count=len(result.events))
        else:
            stats.failed += 1
            logger.warning(
                "source_no_events",
                source=result.source,
                reason=result.error or "no events",
            )
        stats.sources.append(result.to_stats())

    logger.info(
        "aggregation_complete",
        success=stats.success,
        failed=stats.failed,
        total_events=len(events),
    )
    return AggregateResult(events=events, stats=stats)
