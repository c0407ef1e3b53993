import json
import logging

import pytest

from pipeline_notify import Settings

WEBHOOK_URL = "https://example.webhook.office.com/webhookb2/abc/IncomingWebhook/def/tok1"


def pipeline_message(state="SUCCEEDED", summary=None, time="2024-01-01T00:00:00Z", **detail):
    """JSON string shaped like a CodePipeline action state-change event."""
    d = {
        "pipeline": "build-pipe",
        "execution-id": "e1",
        "stage": "Deploy",
        "action": "Deploy",
        "state": state,
    }
    d.update(detail)
    if summary is not None:
        d["execution-result"] = {"external-execution-summary": summary}
    payload = {"detail": d}
    if time is not None:
        payload["time"] = time
    return json.dumps(payload)


def sns_event(*messages, subject="CodePipeline notification"):
    return {"Records": [{"Sns": {"Subject": subject, "Message": m}} for m in messages]}


@pytest.fixture
def settings():
    return Settings(webhook_url=WEBHOOK_URL, timeout=2.0, tz_name="UTC", max_workers=4)


@pytest.fixture
def log():
    return logging.getLogger("pipeline_notify.tests")
