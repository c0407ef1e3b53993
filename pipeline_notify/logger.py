"""
logger.py
---------
Logging for the relay: one bootstrap call per invocation, a section timer
wrapped around each batch, and webhook URL redaction so tokens carried in
the URL path never reach the log stream.
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from urllib.parse import urlparse

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str = "pipeline_notify") -> logging.Logger:
    """
    Return the relay logger, configured from LOG_LEVEL (default INFO).

    Safe to call on every Lambda invocation: basicConfig is a no-op once
    the root handler exists, and the named logger's level is refreshed.
    """
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    log = logging.getLogger(name)
    log.setLevel(level)
    return log


def _now_utc() -> str:
    return datetime.now(timezone.utc).isoformat()


def redact_url(url: str | None) -> str:
    """
    Reduce a webhook URL to <scheme>://<host>/***<last4> so tokens in the
    path never reach the logs.
    """
    if not url:
        return ""
    parsed = urlparse(url.strip())
    tail = url.strip()[-4:]
    if not parsed.netloc:
        return f"***{tail}"
    return f"{parsed.scheme or 'https'}://{parsed.netloc}/***{tail}"


@contextmanager
def log_section(log: logging.Logger, name: str, **kv):
    """
    Time a unit of relay work.

    Emits a START line with the given key=value context, then END with
    duration_ms, or FAIL with the traceback before re-raising.
    """
    started = _now_utc()
    t0 = time.perf_counter()
    ctx = " ".join(f"{k}={v}" for k, v in kv.items())
    log.info("START %s %s start_ts=%s", name, ctx, started)

    def elapsed_ms() -> int:
        return int((time.perf_counter() - t0) * 1000)

    try:
        yield
    except Exception as e:
        log.exception("FAIL  %s duration_ms=%d start_ts=%s end_ts=%s error=%s",
                      name, elapsed_ms(), started, _now_utc(), e)
        raise
    log.info("END   %s duration_ms=%d start_ts=%s end_ts=%s", name, elapsed_ms(), started, _now_utc())
