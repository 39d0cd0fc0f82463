"""
Unstop (formerly Dare2Compete) public opportunity search API.
"""

from typing import Optional

from ..dates import normalize_date
from ..models import Event
from .base import SourceAdapter, text_or_none


UNSTOP_SEARCH_URL = "https://unstop.com/api/public/opportunity/search-result"
UNSTOP_BASE_URL = "https://unstop.com"


class UnstopAdapter(SourceAdapter):
    """Unstop hackathon search results."""

    name = "unstop"
    website = "Unstop"

    async def fetch_events(self) -> list[Event]:
        data = await self.transport.fetch_json(
            UNSTOP_SEARCH_URL,
            params={
                "opportunity": "hackathons",
                "page": 1,
                "per_page": self.max_events,
                "type": "hackathons",
            },
            headers={"Referer": f"{UNSTOP_BASE_URL}/hackathons"},
        )
        # Results are nested as {"data": {"data": [...]}}
        records = (data.get("data") or {}).get("data")
        return self.collect(records)

    def parse_record(self, record: dict) -> Optional[Event]:
        public_url = text_or_none(record.get("public_url"))
        organisation = record.get("organisation") or {}

        return self.build_event(
            event_name=text_or_none(record.get("title")),
            event_link=_absolute(public_url),
            start_date=normalize_date(record.get("start_date")),
            end_date=normalize_date(record.get("end_date")),
            location=text_or_none(organisation.get("name")) or "Various",
            tags=["Hackathon", record.get("type")],
            prize=record.get("prize_money") or None,
        )


def _absolute(public_url: Optional[str]) -> Optional[str]:
    if not public_url:
        return None
    if public_url.startswith("http"):
        return public_url
    return f"{UNSTOP_BASE_URL}/{public_url.lstrip('/')}"
