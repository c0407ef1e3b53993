import os
from unittest import mock

import pytest
import requests

import app as app_module
import main
from conftest import WEBHOOK_URL, pipeline_message, sns_event
from pipeline_notify import BatchDeliveryError, ConfigError, InvalidBatchError


@pytest.fixture
def env():
    with mock.patch.dict(os.environ, {"TEAMS_WEBHOOK_URL": WEBHOOK_URL}, clear=True):
        yield


def _ok():
    return mock.Mock(status_code=200, text="1")


def test_handler_sends_each_record(env):
    with mock.patch.object(requests.Session, "post", return_value=_ok()) as post:
        main.handler(sns_event(pipeline_message(), pipeline_message("FAILED")), None)
    assert post.call_count == 2
    assert all(c.args[0] == WEBHOOK_URL for c in post.call_args_list)


def test_handler_raises_on_delivery_failure(env):
    failing = mock.Mock(status_code=500, text="boom")
    with mock.patch.object(requests.Session, "post", return_value=failing):
        with pytest.raises(BatchDeliveryError):
            main.handler(sns_event(pipeline_message()), None)


def test_handler_rejects_malformed_event(env):
    with mock.patch.object(requests.Session, "post") as post:
        with pytest.raises(InvalidBatchError):
            main.handler({"detail": {}}, None)
    post.assert_not_called()


def test_handler_requires_webhook_url():
    with mock.patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ConfigError):
            main.handler(sns_event(pipeline_message()), None)


def test_run_with_explicit_settings(settings):
    with mock.patch.dict(os.environ, {}, clear=True):
        with mock.patch.object(requests.Session, "post", return_value=_ok()) as post:
            assert main.run(sns_event("not json"), settings=settings) == 1
    post.assert_called_once()


class TestApp:
    @pytest.fixture
    def client(self):
        app_module.app.config["TESTING"] = True
        return app_module.app.test_client()

    def test_health(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.get_json() == {"ok": True}

    def test_events_ok(self, client, env):
        with mock.patch.object(requests.Session, "post", return_value=_ok()):
            r = client.post("/events", json=sns_event(pipeline_message()))
        assert r.status_code == 200
        assert r.get_json() == {"status": "ok", "records": 1}

    def test_events_invalid_batch(self, client, env):
        r = client.post("/events", json={"nope": True})
        assert r.status_code == 400
        assert r.get_json()["status"] == "invalid"

    def test_events_non_json_body_is_invalid(self, client, env):
        r = client.post("/events", data="plain text", content_type="text/plain")
        assert r.status_code == 400

    def test_events_delivery_failure(self, client, env):
        with mock.patch.object(requests.Session, "post", side_effect=requests.ConnectionError("down")):
            r = client.post("/events", json=sns_event(pipeline_message()))
        assert r.status_code == 500
        assert r.get_json()["status"] == "error"
