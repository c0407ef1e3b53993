import logging

import pytest

from pipeline_notify import get_logger, log_section, redact_url


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://example.webhook.office.com/webhookb2/abc/def", "https://example.webhook.office.com/***/def"),
        ("http://host/x", "http://host/***st/x"),
        ("", ""),
        (None, ""),
        ("no-scheme-token", "***oken"),
    ],
)
def test_redact_url(url, expected):
    assert redact_url(url) == expected


def test_get_logger_honours_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    log = get_logger("pipeline_notify.level_test")
    assert log.level == logging.DEBUG


def test_log_section_start_end(caplog):
    log = logging.getLogger("pipeline_notify.section_test")
    with caplog.at_level(logging.INFO, logger=log.name):
        with log_section(log, "relay-batch", records=2):
            pass
    messages = [r.getMessage() for r in caplog.records]
    assert messages[0].startswith("START relay-batch records=2")
    assert messages[1].startswith("END   relay-batch duration_ms=")


def test_log_section_fail_reraises(caplog):
    log = logging.getLogger("pipeline_notify.section_test")
    with caplog.at_level(logging.INFO, logger=log.name):
        with pytest.raises(RuntimeError):
            with log_section(log, "relay-batch"):
                raise RuntimeError("boom")
    assert caplog.records[-1].levelno == logging.ERROR
    assert "FAIL  relay-batch" in caplog.records[-1].getMessage()
