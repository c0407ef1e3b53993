"""
presenter.py
------------
Map decode results to PresentationCards. Pure functions, no I/O.
"""

from __future__ import annotations

from datetime import timezone

from dateutil import parser as date_parser
from dateutil import tz

from .models import (
    COLOR_ATTENTION,
    COLOR_DEFAULT,
    COLOR_GOOD,
    FAILED,
    NA,
    SUCCEEDED,
    DecodeResult,
    DegradedResult,
    Fact,
    PipelineEvent,
    PresentationCard,
)

ERROR_TITLE_FALLBACK = "SNS Notification Error"
ERROR_NOTE = "Error parsing CodePipeline event from SNS"

_STATUS_STYLE = {
    SUCCEEDED: ("✅", COLOR_GOOD),
    FAILED: ("❌", COLOR_ATTENTION),
}
_DEFAULT_STYLE = ("ℹ️", COLOR_DEFAULT)


def status_style(state: str | None) -> tuple[str, str]:
    """Return (icon, color) for a pipeline state."""
    return _STATUS_STYLE.get(state, _DEFAULT_STYLE)


def format_timestamp(value: str, tz_name: str = "UTC") -> str:
    """
    Render an ISO-8601 timestamp as 'M/D/YYYY, h:mm:ss AM' in tz_name.

    Naive timestamps are taken as UTC. Unparseable input, or a value that
    falls outside the datetime range once shifted to tz_name, is returned as-is.
    """
    try:
        dt = date_parser.isoparse(value)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        local = dt.astimezone(tz.gettz(tz_name) or timezone.utc)
    except (ValueError, OverflowError):
        return value
    hour = local.hour % 12 or 12
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local:%M:%S} {'AM' if local.hour < 12 else 'PM'}"


def present_event(event: PipelineEvent, tz_name: str = "UTC") -> PresentationCard:
    icon, color = status_style(event.state)
    facts = (
        Fact("Pipeline", event.pipeline_name or NA),
        Fact("Execution ID", event.execution_id or NA),
        Fact("Stage", event.stage_name or NA),
        Fact("Action", event.action_name or NA),
        Fact("Status", event.state or NA),
        Fact("Timestamp", format_timestamp(event.timestamp, tz_name) or NA),
    )
    return PresentationCard(
        title=f"{icon} Pipeline: {event.pipeline_name or NA}",
        color=color,
        facts=facts,
        summary=event.summary or None,
    )


def present_degraded(result: DegradedResult) -> PresentationCard:
    # raw text is kept verbatim for diagnosis
    return PresentationCard(
        title=result.subject or ERROR_TITLE_FALLBACK,
        color=COLOR_ATTENTION,
        note=ERROR_NOTE,
        raw_text=result.raw_message,
    )


def present(result: DecodeResult, tz_name: str = "UTC") -> PresentationCard:
    """Build exactly one card for a decode result, status or error."""
    if isinstance(result, DegradedResult):
        return present_degraded(result)
    return present_event(result, tz_name)
