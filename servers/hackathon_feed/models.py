"""
Pydantic models for hackathon data structures.

These models define the core data types used throughout the aggregator:
- Event: A single normalized hackathon/competition listing
- AdapterResult: Outcome of one source fetch (events or a failure reason)
- AggregateStats: Success/failure counts across all sources
- DedupeResult: Result of deduplication with audit trail
- PipelineReport: Final ordered events plus run statistics
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator


DESCRIPTION_MAX_LENGTH = 200
DEFAULT_LOCATION = "Online"


class Event(BaseModel):
    """Represents a single hackathon listing normalized from any source."""

    # Source tracking
    website: str = Field(min_length=1)  # Devpost, Unstop, MLH, ...

    # Core event info
    event_name: str = Field(min_length=1)
    event_link: Optional[str] = None
    description: Optional[str] = None

    # Timing: ISO date when parseable, raw source text otherwise
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    location: str = DEFAULT_LOCATION

    # Classification
    tags: list[str] = Field(default_factory=list)

    prize: Optional[Union[int, float, str]] = None

    @field_validator("website", "event_name", mode="before")
    @classmethod
    def _strip_required(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _truncate_description(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        return text[:DESCRIPTION_MAX_LENGTH]

    @field_validator("location", mode="before")
    @classmethod
    def _default_location(cls, value):
        if value is None or not str(value).strip():
            return DEFAULT_LOCATION
        return str(value).strip()

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value):
        if value is None:
            return []
        return [str(tag).strip() for tag in value if tag is not None and str(tag).strip()]

    @field_validator("prize", mode="before")
    @classmethod
    def _flatten_prize(cls, value):
        # Sources send amounts as numbers, text or {"amount": .., "currency": ..}
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, dict):
            parts = [str(v).strip() for v in value.values() if v is not None and str(v).strip()]
            return " ".join(parts) or None
        if isinstance(value, (list, tuple)):
            parts = [str(v).strip() for v in value if v is not None and str(v).strip()]
            return ", ".join(parts) or None
        if isinstance(value, (int, float, str)):
            return value
        return str(value)


class FetchStats(BaseModel):
    """Statistics from a single source fetch."""

    source: str
    count: int
    status: str  # success, empty, error
    duration_ms: Optional[int] = None
    error_message: Optional[str] = None


class AdapterResult(BaseModel):
    """Outcome of one adapter run: events on success, a reason on failure."""

    source: str
    events: list[Event] = Field(default_factory=list)
    error: Optional[str] = None
    duration_ms: Optional[int] = None

    @property
    def ok(self) -> bool:
        """True when the fetch completed, even with zero events."""
        return self.error is None

    @property
    def contributed(self) -> bool:
        """True when the adapter produced at least one event."""
        return self.ok and len(self.events) > 0

    def to_stats(self) -> FetchStats:
        if not self.ok:
            status = "error"
        elif self.events:
            status = "success"
        else:
            status = "empty"
        return FetchStats(
            source=self.source,
            count=len(self.events),
            status=status,
            duration_ms=self.duration_ms,
            error_message=self.error,
        )


class AggregateStats(BaseModel):
    """Counts of contributing vs non-contributing sources for one run."""

    success: int = 0
    failed: int = 0
    sources: list[FetchStats] = Field(default_factory=list)

    @computed_field
    @property
    def total(self) -> int:
        return self.success + self.failed

    @computed_field
    @property
    def failed_sources(self) -> list[str]:
        return [s.source for s in self.sources if s.status != "success"]


class AggregateResult(BaseModel):
    """Combined events of all sources, in registration order."""

    events: list[Event]
    stats: AggregateStats


class DuplicateMatch(BaseModel):
    """Records a dropped duplicate for audit trail."""

    key: str
    kept_title: str
    kept_website: str
    dropped_title: str
    dropped_website: str

    @computed_field
    @property
    def reason(self) -> str:
        return (
            f"Dropped '{self.dropped_title}' ({self.dropped_website}), "
            f"same title as '{self.kept_title}' ({self.kept_website})"
        )


class DedupeResult(BaseModel):
    """Result of deduplication with audit trail."""

    events: list[Event]
    original_count: int
    duplicates_removed: int
    audit_trail: list[DuplicateMatch] = Field(default_factory=list)

    @computed_field
    @property
    def dedup_rate(self) -> float:
        """Percentage of events that were duplicates."""
        if self.original_count == 0:
            return 0.0
        return self.duplicates_removed / self.original_count * 100


class PipelineReport(BaseModel):
    """Final ordered events of a run plus observational statistics."""

    events: list[Event]
    stats: AggregateStats
    total_fetched: int
    unique_count: int
    duplicates_removed: int
    duration_seconds: float
    started_at: datetime = Field(default_factory=datetime.now)
    # Sources whose latest fetch raised or timed out (empty ones are not listed)
    unhealthy_sources: list[str] = Field(default_factory=list)
