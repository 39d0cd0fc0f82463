"""
Devpost hackathon listings.

Primary: RSS feed. Fallback: the public JSON API, tried only when the feed
fetch or parse fails.
"""

from typing import Any, Optional

from bs4 import BeautifulSoup

from ..dates import normalize_date, split_date_range
from ..models import Event
from ..resilience.fallback import with_fallback
from .base import SourceAdapter, text_or_none


# One endpoint serves RSS or JSON depending on the Accept header
DEVPOST_FEED_URL = "https://devpost.com/api/hackathons"
DEVPOST_API_URL = "https://devpost.com/api/hackathons"


class DevpostAdapter(SourceAdapter):
    """Devpost via RSS feed with JSON API fallback."""

    name = "devpost"
    website = "Devpost"

    async def fetch_events(self) -> list[Event]:
        return await with_fallback(self.fetch_from_feed, self.fetch_from_api, name=self.name)

    async def fetch_from_feed(self) -> list[Event]:
        entries = await self.transport.fetch_feed(DEVPOST_FEED_URL)
        return self.collect(entries, self._parse_feed_entry)

    async def fetch_from_api(self) -> list[Event]:
        data = await self.transport.fetch_json(DEVPOST_API_URL)
        return self.collect(data.get("hackathons"), self._parse_api_record)

    def _parse_feed_entry(self, entry: Any) -> Optional[Event]:
        return self.build_event(
            event_name=text_or_none(entry.get("title")),
            event_link=text_or_none(entry.get("link")),
            description=_snippet(entry.get("summary")),
            start_date=normalize_date(entry.get("published")),
            location="Online",
            tags=["Hackathon"],
        )

    def _parse_api_record(self, record: dict) -> Optional[Event]:
        start_date, end_date = split_date_range(record.get("submission_period_dates"))
        return self.build_event(
            event_name=text_or_none(record.get("title")),
            event_link=text_or_none(record.get("url")),
            start_date=start_date,
            end_date=end_date,
            location=_api_location(record) or "Online",
            tags=["Hackathon"],
        )


def _snippet(summary: Optional[str]) -> Optional[str]:
    """Plain-text form of a feed summary."""
    if not summary:
        return None
    return BeautifulSoup(summary, "html.parser").get_text(" ", strip=True) or None


def _api_location(record: dict) -> Optional[str]:
    location = record.get("location")
    if isinstance(location, str) and location.strip():
        return location.strip()
    displayed = record.get("displayed_location") or {}
    if isinstance(displayed, dict):
        return text_or_none(displayed.get("location"))
    return None
