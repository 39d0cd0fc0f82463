"""
Dorahacks active bounties via the GraphQL API.
"""

from typing import Optional

from ..dates import to_iso_date
from ..models import Event
from .base import SourceAdapter, text_or_none


DORAHACKS_GRAPHQL_URL = "https://api.dorahacks.io/graphql"
DORAHACKS_BUIDL_URL = "https://dorahacks.io/buidl"

BOUNTIES_QUERY = """
query ActiveBounties($first: Int!) {
  bountiesList(first: $first, filter: {status: "active"}) {
    edges {
      node {
        id
        title
        slug
        description
        startTime
        endTime
        totalReward
      }
    }
  }
}
"""


class DorahacksAdapter(SourceAdapter):
    """Dorahacks Web3 hackathons and bounties."""

    name = "dorahacks"
    website = "Dorahacks"

    async def fetch_events(self) -> list[Event]:
        data = await self.transport.fetch_json(
            DORAHACKS_GRAPHQL_URL,
            method="POST",
            json_body={"query": BOUNTIES_QUERY, "variables": {"first": self.max_events}},
            headers={"Content-Type": "application/json"},
        )

        errors = data.get("errors")
        if errors and not data.get("data"):
            raise ValueError(f"GraphQL error: {errors[0].get('message', errors[0])}")

        bounties = ((data.get("data") or {}).get("bountiesList") or {}).get("edges")
        return self.collect(bounties)

    def parse_record(self, edge: dict) -> Optional[Event]:
        node = edge.get("node") or {}
        slug = text_or_none(node.get("slug"))

        return self.build_event(
            event_name=text_or_none(node.get("title")),
            event_link=f"{DORAHACKS_BUIDL_URL}/{slug}" if slug else None,
            description=node.get("description"),
            start_date=to_iso_date(node.get("startTime")),
            end_date=to_iso_date(node.get("endTime")),
            location="Online",
            tags=["Hackathon", "Web3"],
            prize=node.get("totalReward"),
        )
