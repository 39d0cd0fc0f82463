"""
Shapes handed to external consumers (spreadsheet writer, chat notifier).

Only formatting lives here; the HTTP calls to those services belong to the
consumers themselves.
"""

from datetime import datetime
from typing import Optional

from .models import Event, PipelineReport
from .template_engine import TemplateEngine


SHEET_HEADER = ["Website", "Event Name", "Event Link", "Timestamp"]


def to_sheet_rows(
    events: list[Event],
    timestamp: Optional[datetime] = None,
    include_header: bool = False,
) -> list[list[str]]:
    """
    Rows of (website, event_name, event_link, timestamp) for a spreadsheet append.

    All rows of one run share the same timestamp.
    """
    stamp = (timestamp or datetime.now()).isoformat(timespec="seconds")
    rows = [
        [event.website, event.event_name, event.event_link or "", stamp]
        for event in events
    ]
    if include_header:
        rows.insert(0, list(SHEET_HEADER))
    return rows


def format_chat_messages(
    events: list[Event],
    engine: Optional[TemplateEngine] = None,
    template_name: str = "event_message.md",
) -> list[str]:
    """One formatted chat message per event, in event order."""
    engine = engine or TemplateEngine()
    return [engine.render(template_name, {"event": event}).strip() for event in events]


def format_run_summary(
    report: PipelineReport,
    engine: Optional[TemplateEngine] = None,
    limit: int = 10,
) -> str:
    """Digest of a pipeline run; an empty run reads as nothing to report."""
    engine = engine or TemplateEngine()
    return engine.render("run_summary.md", {"report": report, "limit": limit}).strip()
