"""Stream service access: client wrapper and record model."""

from kinesis_browser.streams.client import (
    KinesisStreamClient,
    NoShardError,
    StreamClient,
    StreamClientError,
)
from kinesis_browser.streams.records import (
    StreamRecord,
    display_key,
    format_payload,
    format_timestamp,
)

__all__ = [
    # Client
    "KinesisStreamClient",
    "NoShardError",
    "StreamClient",
    "StreamClientError",
    # Records
    "StreamRecord",
    "display_key",
    "format_payload",
    "format_timestamp",
]
