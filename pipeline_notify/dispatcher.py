"""
dispatcher.py
-------------
Microsoft Teams incoming-webhook client. Wraps PresentationCards in the
Adaptive Card message envelope and POSTs them, once, to the webhook.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import DeliveryError
from .logger import redact_url
from .models import COLOR_ATTENTION, PresentationCard

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
ADAPTIVE_CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"
ADAPTIVE_CARD_VERSION = "1.2"


# ------------------------- envelope -------------------------

def card_body(card: PresentationCard) -> List[Dict[str, Any]]:
    """Adaptive Card body elements for a PresentationCard."""
    body: List[Dict[str, Any]] = [
        {
            "type": "TextBlock",
            "size": "large",
            "weight": "bolder",
            "text": card.title,
            "color": card.color,
        }
    ]
    if card.facts:
        body.append(
            {
                "type": "FactSet",
                "facts": [{"title": f.label, "value": f.value} for f in card.facts],
                "separator": True,
            }
        )
    if card.summary:
        body.append(
            {
                "type": "TextBlock",
                "text": f"**Summary:** {card.summary}",
                "wrap": True,
                "separator": True,
            }
        )
    if card.note:
        body.append({"type": "TextBlock", "text": card.note, "weight": "bolder", "color": COLOR_ATTENTION})
    if card.raw_text is not None:
        body.append({"type": "TextBlock", "text": card.raw_text, "wrap": True})
    return body


def build_message(card: PresentationCard) -> Dict[str, Any]:
    """Teams 'message' payload with a single full-width Adaptive Card attachment."""
    return {
        "type": "message",
        "attachments": [
            {
                "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
                "contentUrl": None,
                "content": {
                    "$schema": ADAPTIVE_CARD_SCHEMA,
                    "type": "AdaptiveCard",
                    "version": ADAPTIVE_CARD_VERSION,
                    "msTeams": {"width": "full"},
                    "body": card_body(card),
                },
            }
        ],
    }


# ------------------------- client -------------------------

class TeamsWebhook:
    """
    Single-attempt Teams webhook client.

    Parameters
    ----------
    url : str
        Incoming webhook URL.
    log : logging.Logger
        Logger for delivery outcomes.
    timeout : float
        Seconds to wait for connect and read.

    Each calling thread gets its own requests Session, since Session is not
    documented as thread-safe and batches are sent from a thread pool.
    """

    def __init__(self, url: str, log, timeout: float = 10.0):
        self.url = url
        self.log = log
        self.timeout = timeout
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """Session owned by the current thread, created on first use."""
        s = getattr(self._local, "session", None)
        if s is None:
            s = self._make_session()
            self._local.session = s
            with self._lock:
                self._sessions.append(s)
        return s

    def _make_session(self) -> requests.Session:
        """Return a requests Session with urllib3 retries switched off."""
        retry = Retry(total=0, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)
        s = requests.Session()
        s.headers.update({"Accept": "application/json", "Content-Type": "application/json"})
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def send(self, card: PresentationCard) -> int:
        """
        POST one card.

        Returns
        -------
        int
            HTTP status of the successful response.

        Raises
        ------
        DeliveryError
            On a non-2xx response or any transport failure (no retry).
        """
        target = redact_url(self.url)
        try:
            r = self.session.post(self.url, json=build_message(card), timeout=self.timeout)
        except requests.RequestException as e:
            self.log.error("teams_send_failed url=%s error=%s", target, e)
            raise DeliveryError(f"Teams webhook request failed: {e}") from e

        if not 200 <= r.status_code < 300:
            body = r.text
            self.log.error("teams_send_failed url=%s status=%d body=%s", target, r.status_code, body)
            raise DeliveryError(
                f"Teams webhook returned HTTP {r.status_code}",
                status_code=r.status_code,
                body=body,
            )

        self.log.info("teams_send_ok url=%s status=%d title=%s", target, r.status_code, card.title)
        return r.status_code

    def close(self) -> None:
        """Close every session opened by any thread."""
        with self._lock:
            sessions, self._sessions = self._sessions, []
            self._local = threading.local()
        for s in sessions:
            s.close()
