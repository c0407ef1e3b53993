"""
models.py
---------
Plain data containers passed between the decoder, presenter and dispatcher.
Nothing here outlives a single invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

NA = "N/A"

SUCCEEDED = "SUCCEEDED"
FAILED = "FAILED"

COLOR_GOOD = "good"
COLOR_ATTENTION = "attention"
COLOR_DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class NotificationRecord:
    """One SNS envelope: optional subject plus the (expected JSON) message."""

    message: str
    subject: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PipelineEvent:
    """CodePipeline status change; every field except timestamp may be absent."""

    timestamp: str  # ISO-8601
    pipeline_name: Optional[str] = None
    execution_id: Optional[str] = None
    stage_name: Optional[str] = None
    action_name: Optional[str] = None
    state: Optional[str] = None
    summary: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DegradedResult:
    """Decode outcome for a message that is not valid JSON."""

    raw_message: str
    subject: Optional[str] = None
    reason: str = ""


DecodeResult = Union[PipelineEvent, DegradedResult]


@dataclass(frozen=True, slots=True)
class Fact:
    label: str
    value: str


@dataclass(frozen=True, slots=True)
class PresentationCard:
    """
    Platform independent card: title line, color category, ordered facts,
    optional summary. Error cards carry a note and the raw message instead.
    """

    title: str
    color: str = COLOR_DEFAULT
    facts: Tuple[Fact, ...] = field(default_factory=tuple)
    summary: Optional[str] = None
    note: Optional[str] = None
    raw_text: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.raw_text is not None
