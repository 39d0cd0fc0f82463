"""
End-to-end aggregation run: fetch all sources, deduplicate, order by date.
"""

import time
from datetime import datetime
from typing import Optional, Sequence

import structlog

from .aggregator import CONCURRENT, run_all
from .dedup import deduplicate, format_audit_summary
from .models import Event, PipelineReport
from .resilience.health import HealthMonitor
from .sorting import sort_by_date
from .sources import build_adapters
from .sources.base import SourceAdapter

logger = structlog.get_logger()


class Pipeline:
    """Aggregator -> Deduplicator -> Sorter."""

    def __init__(
        self,
        adapters: Sequence[SourceAdapter],
        concurrency: str = CONCURRENT,
        health: Optional[HealthMonitor] = None,
    ):
        """Initialize pipeline.

        Args:
            adapters: Source adapters in registration order
            concurrency: "concurrent" or "sequential" fan-out
            health: Monitor shared across runs; a fresh one is created if omitted
        """
        self.adapters = list(adapters)
        self.concurrency = concurrency
        self.health = health or HealthMonitor()

    @classmethod
    def from_config(cls, config: dict, only: Optional[list[str]] = None) -> "Pipeline":
        """Build a pipeline with the adapters enabled in config."""
        return cls(
            build_adapters(config, only=only),
            concurrency=config.get("concurrency", CONCURRENT),
        )

    async def run(self) -> list[Event]:
        """Return deduplicated events ordered by start date."""
        report = await self.run_report()
        return report.events

    async def run_report(self) -> PipelineReport:
        """Run the pipeline and return events with run statistics."""
        started_at = datetime.now()
        start = time.monotonic()
        logger.info(
            "pipeline_started",
            sources=[a.name for a in self.adapters],
            concurrency=self.concurrency,
        )

        aggregate = await run_all(self.adapters, concurrency=self.concurrency, health=self.health)
        deduped = deduplicate(aggregate.events)
        logger.debug("dedup_audit", summary=format_audit_summary(deduped))
        events = sort_by_date(deduped.events)

        report = PipelineReport(
            events=events,
            stats=aggregate.stats,
            total_fetched=len(aggregate.events),
            unique_count=len(events),
            duplicates_removed=deduped.duplicates_removed,
            duration_seconds=round(time.monotonic() - start, 2),
            started_at=started_at,
            unhealthy_sources=self.health.unhealthy_sources(),
        )

        logger.info(
            "pipeline_complete",
            successful_sources=f"{report.stats.success}/{report.stats.total}",
            failed_sources=report.stats.failed_sources,
            unhealthy_sources=report.unhealthy_sources,
            total_events=report.total_fetched,
            unique_events=report.unique_count,
            duration_seconds=report.duration_seconds,
        )
        if not events:
            logger.warning("pipeline_empty", message="No events from any source")

        return report
