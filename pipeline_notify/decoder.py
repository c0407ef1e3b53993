"""
decoder.py
----------
Turn an SNS invocation payload into NotificationRecords and each record's
JSON message into a PipelineEvent (or a DegradedResult when the message
cannot be parsed).
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .errors import InvalidBatchError
from .models import DecodeResult, DegradedResult, NotificationRecord, PipelineEvent


def _get(d: Any, path: str, default=None):
    """Safe getter for nested dicts with '/'-separated keys (keys may contain dots and dashes)."""
    cur = d
    for key in path.split("/"):
        if isinstance(cur, dict):
            cur = cur.get(key, default)
        else:
            return default
    return cur


def _text(x) -> Optional[str]:
    """Coerce a scalar JSON value to str; None, empty strings and containers count as absent."""
    if x is None or isinstance(x, (dict, list)):
        return None
    s = x if isinstance(x, str) else str(x)
    return s or None


def parse_batch(event: Any) -> List[NotificationRecord]:
    """
    Extract the records of an SNS invocation payload.

    Raises
    ------
    InvalidBatchError
        If the payload has no Records list or a record is not an object.
    """
    if not isinstance(event, dict):
        raise InvalidBatchError(f"Event must be an object, got {type(event).__name__}")
    records = event.get("Records")
    if not isinstance(records, list):
        raise InvalidBatchError("Event has no 'Records' list")

    out: List[NotificationRecord] = []
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise InvalidBatchError(f"Record {i} must be an object, got {type(rec).__name__}")
        sns: Dict[str, Any] = rec.get("Sns") if isinstance(rec.get("Sns"), dict) else {}
        message = sns.get("Message")
        if message is None:
            message = ""
        elif not isinstance(message, str):
            message = str(message)
        out.append(NotificationRecord(message=message, subject=_text(sns.get("Subject"))))
    return out


def decode_record(record: NotificationRecord, now: Optional[datetime] = None) -> DecodeResult:
    """
    Parse one record's message. Never raises: invalid JSON yields a
    DegradedResult carrying the subject and the raw text.
    """
    try:
        payload = json.loads(record.message)
    except (ValueError, TypeError, RecursionError) as e:
        return DegradedResult(raw_message=record.message, subject=record.subject, reason=str(e))

    timestamp = _text(_get(payload, "time"))
    if timestamp is None:
        timestamp = (now or datetime.now(timezone.utc)).isoformat()

    return PipelineEvent(
        timestamp=timestamp,
        pipeline_name=_text(_get(payload, "detail/pipeline")),
        execution_id=_text(_get(payload, "detail/execution-id")),
        stage_name=_text(_get(payload, "detail/stage")),
        action_name=_text(_get(payload, "detail/action")),
        state=_text(_get(payload, "detail/state")),
        summary=_text(_get(payload, "detail/execution-result/external-execution-summary")),
    )
