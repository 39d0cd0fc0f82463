"""
HackerEarth events feed (the JSON endpoint behind their browser extension).
"""

from typing import Optional

from ..dates import to_iso_date
from ..models import Event
from .base import SourceAdapter, text_or_none


HACKEREARTH_EVENTS_URL = "https://www.hackerearth.com/chrome-extension/events/"


class HackerEarthAdapter(SourceAdapter):
    """HackerEarth coding competitions and hackathons."""

    name = "hackerearth"
    website = "HackerEarth"

    async def fetch_events(self) -> list[Event]:
        data = await self.transport.fetch_json(HACKEREARTH_EVENTS_URL)
        return self.collect(data.get("response"))

    def parse_record(self, record: dict) -> Optional[Event]:
        return self.build_event(
            event_name=text_or_none(record.get("title")),
            event_link=text_or_none(record.get("url")),
            start_date=to_iso_date(record.get("start_tz")),
            end_date=to_iso_date(record.get("end_tz")),
            location="Online",
            tags=["Coding", "Competition"],
        )
