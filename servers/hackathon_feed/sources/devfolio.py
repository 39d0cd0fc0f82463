"""
Devfolio hackathon listings.

The listing is rendered client-side, so the page goes through a headless
browser before parsing.
"""

from typing import Optional

from bs4 import Tag

from ..dates import normalize_date
from ..models import Event
from .base import SourceAdapter
from .html import extract_link, extract_text, find_cards


DEVFOLIO_URL = "https://devfolio.co/hackathons"

# Page is ready once any heading-like element exists
READY_SELECTOR = 'h1, h2, h3, [class*="title"]'

# Tried in order; the first selector with matches wins
CARD_SELECTORS = [
    'div[class*="HackathonCard"]',
    'article[class*="hackathon"]',
    'div[data-testid*="hackathon"]',
    ".hackathon-card",
    '[class*="card"]',
]
TITLE_SELECTOR = 'h3, h2, h1, [class*="title"], [class*="name"]'
DATE_SELECTOR = 'time, [class*="date"], [class*="Date"]'
LOCATION_SELECTOR = '[class*="location"], [class*="Location"]'


class DevfolioAdapter(SourceAdapter):
    """Devfolio via rendered DOM."""

    name = "devfolio"
    website = "Devfolio"

    async def fetch_events(self) -> list[Event]:
        soup = await self.transport.fetch_rendered_dom(DEVFOLIO_URL, wait_for=READY_SELECTOR)
        return self.collect(find_cards(soup, CARD_SELECTORS))

    def parse_record(self, card: Tag) -> Optional[Event]:
        return self.build_event(
            event_name=extract_text(card, TITLE_SELECTOR),
            event_link=extract_link(card, DEVFOLIO_URL),
            start_date=normalize_date(extract_text(card, DATE_SELECTOR)),
            location=extract_text(card, LOCATION_SELECTOR) or "Various",
            tags=["Hackathon"],
        )
