# pipeline_notify/__init__.py
from .config import load_settings, Settings
from .logger import get_logger, log_section, redact_url
from .errors import (
    RelayError,
    ConfigError,
    InvalidBatchError,
    DeliveryError,
    BatchDeliveryError,
)
from .models import (
    NotificationRecord,
    PipelineEvent,
    DegradedResult,
    Fact,
    PresentationCard,
)
from .decoder import parse_batch, decode_record
from .presenter import present, format_timestamp
from .dispatcher import TeamsWebhook, build_message
from .relay import process_batch, relay_record

__all__ = [
    "Settings",
    "load_settings",
    "get_logger",
    "log_section",
    "redact_url",
    "RelayError",
    "ConfigError",
    "InvalidBatchError",
    "DeliveryError",
    "BatchDeliveryError",
    "NotificationRecord",
    "PipelineEvent",
    "DegradedResult",
    "Fact",
    "PresentationCard",
    "parse_batch",
    "decode_record",
    "present",
    "format_timestamp",
    "TeamsWebhook",
    "build_message",
    "process_batch",
    "relay_record",
]

__version__ = "0.1.0"
