"""Shared pytest fixtures for hackathon aggregator tests."""

import asyncio
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from servers.hackathon_feed.models import Event
from servers.hackathon_feed.sources.base import SourceAdapter


class StubAdapter(SourceAdapter):
    """Adapter returning canned events, raising, or stalling on demand."""

    def __init__(
        self,
        website: str,
        events: Optional[list[Event]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        timeout: Optional[float] = 5.0,
    ):
        super().__init__(transport=MagicMock(), timeout=timeout)
        self.name = website.lower()
        self.website = website
        self._events = events or []
        self._error = error
        self._delay = delay
        self.calls = 0

    async def fetch_events(self) -> list[Event]:
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error:
            raise self._error
        return list(self._events)


class BrokenAdapter(StubAdapter):
    """Adapter whose fetch() itself raises, bypassing the adapter boundary."""

    async def fetch(self):
        raise RuntimeError(f"{self.website} exploded")


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for events with sensible defaults."""

    def _make(name: str, website: str = "Devpost", start_date: Optional[str] = None, **kwargs) -> Event:
        return Event(
            website=website,
            event_name=name,
            event_link=kwargs.pop("event_link", f"https://example.com/{name.lower().replace(' ', '-')}"),
            start_date=start_date,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_adapter() -> Callable[..., StubAdapter]:
    """Factory for stub adapters."""

    def _make(website: str, events=None, error=None, delay=0.0, timeout=5.0, broken=False) -> StubAdapter:
        cls = BrokenAdapter if broken else StubAdapter
        return cls(website, events=events, error=error, delay=delay, timeout=timeout)

    return _make


@pytest.fixture
def sample_event() -> Event:
    """Provide a sample event."""
    return Event(
        website="Devpost",
        event_name="AI Hack",
        event_link="https://devpost.com/hackathons/ai-hack",
        description="Build something with large language models",
        start_date="2025-03-01",
        end_date="2025-03-03",
        location="Online",
        tags=["Hackathon"],
        prize="$10,000",
    )


@pytest.fixture
def sample_events(make_event) -> list[Event]:
    """Events from several sources including cross-posted duplicates."""
    return [
        make_event("AI Hack", website="Devpost", start_date="2025-03-01"),
        make_event("AI Hack!!", website="Unstop", start_date="2025-03-02"),
        make_event("Web3 Jam", website="Dorahacks", start_date=None),
        make_event("Climate Buildathon", website="MLH", start_date="2025-02-14"),
        make_event("ai-hack", website="HackerEarth", start_date="2025-01-01"),
    ]


@pytest.fixture
def fake_transport() -> MagicMock:
    """Transport with every fetch method replaced by an AsyncMock."""
    transport = MagicMock()
    transport.fetch_feed = AsyncMock()
    transport.fetch_json = AsyncMock()
    transport.fetch_html = AsyncMock()
    transport.fetch_rendered_dom = AsyncMock()
    return transport
