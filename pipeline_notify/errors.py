"""
errors.py
---------
Exception hierarchy for the relay.

Decode problems never show up here: a message that is not valid JSON is
turned into an error card by the decoder instead of raising.
"""

from __future__ import annotations

from typing import List, Tuple


class RelayError(Exception):
    """Base class for every error raised by the relay."""


class ConfigError(RelayError):
    """Missing or invalid configuration."""


class InvalidBatchError(RelayError, ValueError):
    """The inbound event is not a {"Records": [...]} batch."""


class DeliveryError(RelayError):
    """
    The webhook POST failed.

    Parameters
    ----------
    message : str
        Human readable description.
    status_code : int | None
        HTTP status of the response, or None for transport failures.
    body : str | None
        Response body text, if a response was received.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class BatchDeliveryError(RelayError):
    """
    One or more records of a batch could not be delivered.

    `failures` holds (record_index, exception) pairs in record order. Decoding
    and presenting do not raise, so the exception is a DeliveryError unless a
    record failed for an unexpected reason. The batch as a whole is reported
    as failed regardless of how many records went through.
    """

    def __init__(self, failures: List[Tuple[int, Exception]], total: int):
        self.failures = failures
        self.total = total
        indexes = ", ".join(str(i) for i, _ in failures)
        super().__init__(f"{len(failures)} of {total} record(s) failed delivery (records: {indexes})")
