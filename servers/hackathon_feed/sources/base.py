"""
Base class for hackathon source adapters.

Each source implements `fetch_events()`; the shared `fetch()` wrapper bounds it
with a timeout, caps the output and converts every exception into a failed
AdapterResult so one outage never aborts a run.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

import httpx
import structlog
from pydantic import ValidationError

from ..models import AdapterResult, Event
from ..resilience.timeout import SourceTimeoutError, run_with_timeout
from .transport import FetchTransport

logger = structlog.get_logger()


MAX_EVENTS = 20
DEFAULT_SOURCE_TIMEOUT = 30.0


class SourceAdapter(ABC):
    """A single upstream source mapped onto the Event schema."""

    name: str = "source"
    website: str = "Source"

    def __init__(
        self,
        transport: Optional[FetchTransport] = None,
        max_events: int = MAX_EVENTS,
        timeout: Optional[float] = DEFAULT_SOURCE_TIMEOUT,
    ):
        self.transport = transport or FetchTransport()
        self.max_events = max_events
        self.timeout = timeout

    @abstractmethod
    async def fetch_events(self) -> list[Event]:
        """Retrieve and normalize events. May raise."""

    async def fetch(self) -> AdapterResult:
        """Run the adapter; never raises."""
        start_time = datetime.now()

        try:
            events = await run_with_timeout(self.fetch_events(), self.timeout, source=self.name)
            events = events[: self.max_events]
        except SourceTimeoutError as e:
            return self._failure(str(e), start_time)
        except httpx.HTTPStatusError as e:
            return self._failure(f"HTTP {e.response.status_code}", start_time)
        except httpx.RequestError as e:
            return self._failure(f"Request failed: {e!r}", start_time)
        except Exception as e:
            return self._failure(str(e) or type(e).__name__, start_time)

        duration_ms = _elapsed_ms(start_time)
        logger.info("source_fetched", source=self.name, count=len(events), duration_ms=duration_ms)
        return AdapterResult(source=self.website, events=events, duration_ms=duration_ms)

    def _failure(self, reason: str, start_time: datetime) -> AdapterResult:
        logger.warning("source_failed", source=self.name, error=reason)
        return AdapterResult(
            source=self.website,
            events=[],
            error=reason,
            duration_ms=_elapsed_ms(start_time),
        )

    def build_event(self, **fields: Any) -> Optional[Event]:
        """Create an Event for this source, or None when the record has no title."""
        title = fields.get("event_name")
        if not isinstance(title, str) or not title.strip():
            return None
        try:
            return Event(website=self.website, **fields)
        except ValidationError as e:
            logger.debug("record_skipped", source=self.name, error=str(e))
            return None

    def collect(
        self,
        records: Optional[Iterable[Any]],
        parse: Optional[Callable[[Any], Optional[Event]]] = None,
    ) -> list[Event]:
        """Map raw records to Events, dropping untitled ones, up to the cap.

        Args:
            records: Raw records from the transport (None is treated as empty)
            parse: Record mapper; defaults to `parse_record`
        """
        parse = parse or self.parse_record
        events: list[Event] = []
        for record in records or []:
            if len(events) >= self.max_events:
                break
            try:
                event = parse(record)
            except (AttributeError, TypeError, KeyError, ValueError) as e:
                logger.debug("record_skipped", source=self.name, error=str(e))
                continue
            if event:
                events.append(event)
        return events

    def parse_record(self, record: Any) -> Optional[Event]:
        """Map one raw record to an Event. Sources using `collect` override this."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def _elapsed_ms(start_time: datetime) -> int:
    return int((datetime.now() - start_time).total_seconds() * 1000)


def text_or_none(value: Any) -> Optional[str]:
    """Strip a scalar to text; empty becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
