"""
Hackathon Feed Aggregator

This package provides:
- Fetching hackathon listings from multiple sources (RSS, JSON/GraphQL APIs, rendered pages)
- Deduplicating events by normalized title
- Ordering events by start date for downstream consumers

Sources: Devpost, Unstop, Dorahacks, Devfolio, HackerEarth, MLH
"""

__version__ = "1.0.0"
