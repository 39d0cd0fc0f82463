"""
Major League Hacking season calendar (static HTML).
"""

from datetime import datetime
from typing import Optional

from bs4 import Tag

from ..dates import split_date_range
from ..models import Event
from .base import SourceAdapter
from .html import extract_link, extract_text, find_cards


MLH_BASE_URL = "https://mlh.io"
MLH_SEASON_URL = "https://mlh.io/seasons/{season}/events"

CARD_SELECTORS = [".event", ".event-wrapper", '[class*="event-card"]']


class MLHAdapter(SourceAdapter):
    """MLH member events for one season."""

    name = "mlh"
    website = "MLH"

    def __init__(self, *args, season: Optional[int] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.season = season or datetime.now().year

    @property
    def url(self) -> str:
        return MLH_SEASON_URL.format(season=self.season)

    async def fetch_events(self) -> list[Event]:
        soup = await self.transport.fetch_html(self.url)
        return self.collect(find_cards(soup, CARD_SELECTORS))

    def parse_record(self, card: Tag) -> Optional[Event]:
        start_date, end_date = split_date_range(extract_text(card, ".event-date, time"))
        return self.build_event(
            event_name=extract_text(card, "h3, .event-name"),
            event_link=extract_link(card, MLH_BASE_URL),
            start_date=start_date,
            end_date=end_date,
            location=extract_text(card, ".event-location") or "Various",
            tags=["Hackathon", "Student"],
        )
