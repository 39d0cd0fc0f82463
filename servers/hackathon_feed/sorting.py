"""Start-date ordering for hackathon events."""

from datetime import date

from .dates import parse_sort_date
from .models import Event


def _sort_key(event: Event) -> tuple[int, date]:
    # Unparseable dates count as undated
    parsed = parse_sort_date(event.start_date)
    if parsed is None:
        return (1, date.min)
    return (0, parsed)


def sort_by_date(events: list[Event]) -> list[Event]:
    """
    Order events by start date ascending, undated events last.

    The sort is stable: events with the same date, and all undated events,
    keep their input order.
    """
    return sorted(events, key=_sort_key)
