"""
main.py
-------
Event-triggered entrypoint for the CodePipeline → Teams relay.

Flow:
  1) Load settings & bootstrap logging
  2) Build the Teams webhook client
  3) Decode, present and send every SNS record concurrently
  4) Raise if any record failed so the trigger reports the invocation as failed
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pipeline_notify import (
    Settings, TeamsWebhook, get_logger, load_settings, log_section, process_batch, redact_url
)


def run(event: Any, settings: Optional[Settings] = None) -> int:
    """
    Relay one SNS invocation payload.

    Parameters
    ----------
    event : Any
        Payload of the form {"Records": [{"Sns": {"Subject": ..., "Message": ...}}]}.
    settings : Settings | None
        Explicit settings; loaded from the environment when omitted.

    Returns
    -------
    int
        Number of records delivered.
    """
    log = get_logger("pipeline_notify")
    cfg = settings or load_settings()
    log.debug("sns_event_received event=%s", json.dumps(event, default=str))

    webhook = TeamsWebhook(cfg.webhook_url, log, timeout=cfg.timeout)
    try:
        with log_section(log, "relay-batch", webhook=redact_url(cfg.webhook_url)):
            return process_batch(event, cfg, webhook, log)
    finally:
        webhook.close()


def handler(event: Dict[str, Any], context: Any = None) -> None:
    """AWS Lambda handler; raising marks the invocation failed."""
    run(event)
