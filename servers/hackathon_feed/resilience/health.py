"""Per-source health tracking across pipeline runs."""

from datetime import datetime
from typing import Optional

import structlog
from pydantic import BaseModel, Field, computed_field

from ..models import AdapterResult

logger = structlog.get_logger()


class SourceHealth(BaseModel):
    """Latest outcome of one source plus its failure and empty streaks."""

    source: str
    healthy: bool = True
    checked_at: datetime = Field(default_factory=datetime.now)
    event_count: int = 0
    consecutive_failures: int = 0
    consecutive_empty: int = 0
    last_error: Optional[str] = None


class HealthSummary(BaseModel):
    healthy: int = 0
    unhealthy: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.healthy + self.unhealthy


class HealthMonitor:
    """Track per-source outcomes across pipeline runs in one process.

    A source that answers with zero events is reachable but not
    contributing: it stays healthy while its empty streak grows.
    """

    def __init__(self):
        self.sources: dict[str, SourceHealth] = {}

    def record(self, result: AdapterResult) -> SourceHealth:
        """Fold one adapter outcome into the source's health."""
        previous = self.sources.get(result.source) or SourceHealth(source=result.source)

        if result.ok:
            count = len(result.events)
            current = SourceHealth(
                source=result.source,
                event_count=count,
                consecutive_empty=previous.consecutive_empty + 1 if count == 0 else 0,
            )
            logger.debug("source_healthy", source=result.source, event_count=count)
        else:
            current = SourceHealth(
                source=result.source,
                healthy=False,
                consecutive_failures=previous.consecutive_failures + 1,
                consecutive_empty=previous.consecutive_empty,
                last_error=result.error or "unknown error",
            )
            logger.warning(
                "source_unhealthy",
                source=result.source,
                consecutive_failures=current.consecutive_failures,
                error=current.last_error,
            )

        self.sources[result.source] = current
        return current

    def unhealthy_sources(self) -> list[str]:
        """Sources whose latest fetch failed, in first-seen order."""
        return [name for name, health in self.sources.items() if not health.healthy]

    def summary(self) -> HealthSummary:
        healthy = sum(1 for health in self.sources.values() if health.healthy)
        return HealthSummary(healthy=healthy, unhealthy=len(self.sources) - healthy)
