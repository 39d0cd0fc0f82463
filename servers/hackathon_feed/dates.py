"""
Date normalization for heterogeneous source formats.

Sources deliver dates as Unix timestamps (seconds or milliseconds), ISO
strings, RFC 822 feed dates, or free text such as "Jan 05 - Feb 10, 2025".
None of these helpers raise on bad input.

Timestamps carry no zone of their own and are read as UTC. Strings and
datetimes with an explicit offset keep the calendar date they were written
in: "2025-03-01T00:30:00+05:30" is 2025-03-01, the day the organizer
announced, not the UTC day it falls on.
"""

import re
from datetime import date, datetime, timezone
from typing import Optional

from dateutil import parser


# Timestamps above this are treated as milliseconds
MILLISECOND_THRESHOLD = 100_000_000_000

RANGE_SEPARATOR = re.compile(r"\s+[-–—]\s+|\s+to\s+", re.IGNORECASE)
YEAR_PATTERN = re.compile(r"\b\d{4}\b")
# "9th" or "9, 2025": an end day that shares the start month
DAY_ONLY_PATTERN = re.compile(r"^\d{1,2}(st|nd|rd|th)?\b", re.IGNORECASE)
MONTH_WORD_PATTERN = re.compile(r"^[A-Za-z]{3,9}\.?")


def to_iso_date(value) -> Optional[str]:
    """Convert a timestamp, datetime or date string to YYYY-MM-DD, or None."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, (int, float)):
        return _timestamp_to_iso(value)

    if not isinstance(value, str):
        return None

    text = value.strip()
    # dateutil reads words like "TBA" as timezone names and returns today
    if not any(ch.isdigit() for ch in text):
        return None
    if text.isdigit() and len(text) >= 9:
        return _timestamp_to_iso(int(text))

    try:
        return parser.parse(text).date().isoformat()
    except (ValueError, TypeError, OverflowError):
        return None


def _timestamp_to_iso(value: float) -> Optional[str]:
    seconds = value / 1000 if abs(value) >= MILLISECOND_THRESHOLD else value
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).date().isoformat()
    except (ValueError, OverflowError, OSError):
        return None


def normalize_date(value) -> Optional[str]:
    """
    Normalize a source date for an Event.

    Returns the ISO date when parseable, the stripped raw string when not,
    and None for empty input.
    """
    iso = to_iso_date(value)
    if iso:
        return iso
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_sort_date(value: Optional[str]) -> Optional[date]:
    """Best-effort calendar date for ordering; None means undated."""
    iso = to_iso_date(value)
    if not iso:
        return None
    return date.fromisoformat(iso)


def split_date_range(text: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """
    Split a range like "Jan 05 - Feb 10, 2025" into (start, end).

    A start without a year borrows the end's year (one year earlier when that
    would put it after the end). An unparseable start passes through raw.
    """
    if not text or not text.strip():
        return None, None

    parts = RANGE_SEPARATOR.split(text.strip(), maxsplit=1)
    start_text = parts[0].strip()
    end_text = parts[1].strip() if len(parts) > 1 else None

    if end_text and DAY_ONLY_PATTERN.match(end_text):
        month = MONTH_WORD_PATTERN.match(start_text)
        if month:
            end_text = f"{month.group(0)} {end_text}"
    end_iso = to_iso_date(end_text)

    if end_iso and not YEAR_PATTERN.search(start_text):
        end = date.fromisoformat(end_iso)
        try:
            start = parser.parse(start_text, default=datetime(end.year, 1, 1)).date()
        except (ValueError, TypeError, OverflowError):
            return normalize_date(start_text), end_iso
        if start > end:
            # Feb 29 has no counterpart in the previous year
            day = 28 if (start.month, start.day) == (2, 29) else start.day
            start = start.replace(year=start.year - 1, day=day)
        return start.isoformat(), end_iso

    return normalize_date(start_text), end_iso
