"""
relay.py
--------
Batch orchestration: decode -> present -> send for every record of an SNS
batch, fanned out over a thread pool and joined before returning.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Tuple

from .config import Settings
from .decoder import decode_record, parse_batch
from .dispatcher import TeamsWebhook
from .errors import BatchDeliveryError
from .models import DegradedResult, NotificationRecord
from .presenter import present


def relay_record(record: NotificationRecord, settings: Settings, webhook: TeamsWebhook, log) -> int:
    """Decode, present and send one record. Only delivery failures raise."""
    result = decode_record(record)
    if isinstance(result, DegradedResult):
        log.warning("decode_failed subject=%s error=%s", record.subject, result.reason)
    card = present(result, settings.tz_name)
    return webhook.send(card)


def process_batch(event: Any, settings: Settings, webhook: TeamsWebhook, log) -> int:
    """
    Relay every record of an SNS invocation payload.

    All records are attempted, concurrently and in no particular order.
    The call returns only after each of them has settled.

    Returns
    -------
    int
        Number of records delivered.

    Raises
    ------
    InvalidBatchError
        If the payload is not a Records batch.
    BatchDeliveryError
        If any record failed; carries the failing record indexes.
    """
    records = parse_batch(event)
    log.info("batch_received records=%d", len(records))
    if not records:
        return 0

    workers = min(settings.max_workers, len(records))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="relay") as pool:
        futures = [pool.submit(relay_record, rec, settings, webhook, log) for rec in records]

    failures: List[Tuple[int, Exception]] = []
    for i, fut in enumerate(futures):
        err = fut.exception()
        if err is not None:
            log.error("record_failed index=%d subject=%s error=%s", i, records[i].subject, err)
            failures.append((i, err))

    if failures:
        raise BatchDeliveryError(failures, total=len(records))

    log.info("batch_delivered records=%d", len(records))
    return len(records)
