"""
Record model and display helpers.

Records come back from GetRecords as dicts; the client turns them into
``StreamRecord`` instances so the rest of the browser never touches the raw
boto3 response shape.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from kinesis_browser.config import KeyMode

# RFC 1123 with a literal zone, second granularity
TIMESTAMP_FORMAT = "%a, %d %b %Y %H:%M:%S UTC"


@dataclass(frozen=True)
class StreamRecord:
    """A single record read from a shard."""

    sequence_number: str
    data: bytes
    partition_key: str = ""
    arrival: datetime | None = None

    @classmethod
    def from_response(cls, raw: dict[str, Any]) -> "StreamRecord":
        """Build a record from one entry of a GetRecords ``Records`` list."""
        data = raw.get("Data", b"")
        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls(
            sequence_number=raw["SequenceNumber"],
            data=data,
            partition_key=raw.get("PartitionKey", ""),
            arrival=raw.get("ApproximateArrivalTimestamp"),
        )


def format_timestamp(moment: datetime) -> str:
    """Format an arrival time in UTC, RFC 1123 style."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def display_key(record: StreamRecord, mode: KeyMode) -> str:
    """Return the identifier shown in the record list for ``record``.

    Args:
        record: The record to label.
        mode: Whether to use the arrival timestamp or the sequence number.

    Returns:
        The display key. Timestamp mode falls back to the sequence number
        when the service did not report an arrival time.
    """
    if mode is KeyMode.TIMESTAMP and record.arrival is not None:
        return format_timestamp(record.arrival)
    return record.sequence_number


def format_payload(payload: bytes) -> str:
    """Render a payload for the detail view.

    JSON payloads are re-indented with two spaces, keeping key order.
    Anything else is shown as decoded text.

    Examples:
        >>> format_payload(b'{"a":1}')
        '{\\n  "a": 1\\n}'
        >>> format_payload(b"hello")
        'hello'
    """
    text = payload.decode("utf-8", errors="replace")
    try:
        parsed = json.loads(text)
    except ValueError:
        return text
    return json.dumps(parsed, indent=2, ensure_ascii=False)
