"""
Title-based deduplication for hackathon events.

Identity is the title reduced to lowercase ASCII letters and digits. The first
event seen for a key is kept, whichever source it came from. Two different
events with the same reduced title collide.
"""

import re
from typing import Optional

from .models import DedupeResult, DuplicateMatch, Event


_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_title(title: Optional[str]) -> str:
    """Reduce a title to its comparison key."""
    if not title:
        return ""
    return _NON_ALNUM.sub("", title.lower())


def deduplicate(events: list[Event]) -> DedupeResult:
    """
    Drop every event whose normalized title was already seen.

    Args:
        events: Events in aggregation order

    Returns:
        DedupeResult with surviving events (input order) and audit trail
    """
    kept: dict[str, Event] = {}
    result_events: list[Event] = []
    audit_trail: list[DuplicateMatch] = []

    for event in events:
        key = normalize_title(event.event_name)
        first = kept.get(key)
        if first is not None:
            audit_trail.append(DuplicateMatch(
                key=key,
                kept_title=first.event_name,
                kept_website=first.website,
                dropped_title=event.event_name,
                dropped_website=event.website,
            ))
            continue

        kept[key] = event
        result_events.append(event)

    return DedupeResult(
        events=result_events,
        original_count=len(events),
        duplicates_removed=len(events) - len(result_events),
        audit_trail=audit_trail,
    )


def dedupe(events: list[Event]) -> list[Event]:
    """Deduplicated events without the audit trail."""
    return deduplicate(events).events


def format_audit_summary(result: DedupeResult) -> str:
    """Format audit trail as human-readable summary."""
    if not result.audit_trail:
        return "No duplicates found."

    lines = [
        "Deduplication Summary:",
        f"  Original events: {result.original_count}",
        f"  Duplicates removed: {result.duplicates_removed}",
        f"  Final events: {len(result.events)}",
        f"  Dedup rate: {result.dedup_rate:.1f}%",
        "",
        "Dropped events:",
    ]
    lines.extend(f"  - {match.reason}" for match in result.audit_trail)

    return "\n".join(lines)
