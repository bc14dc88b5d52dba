"""
Runtime configuration for the stream browser.

The values are collected from the command line by ``kinesis_browser.tui.app``
and handed to the client, the ingestion pipeline and the navigator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyMode(Enum):
    """Which record field is shown in the record list and keys the cache."""

    TIMESTAMP = "timestamp"
    SEQUENCE = "sequence"


class StartPosition(Enum):
    """Where a new shard iterator is positioned."""

    TRIM_HORIZON = "TRIM_HORIZON"
    LATEST = "LATEST"

    @classmethod
    def from_name(cls, name: str) -> "StartPosition":
        """Resolve a case-insensitive CLI value such as ``trim_horizon``."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown start position: {name}") from None


DEFAULT_PAGE_BUDGET = 5
DEFAULT_PARTITION_KEY = "partition-1"


@dataclass
class BrowserConfig:
    """Settings shared by the stream client and the browsing engine.

    Attributes:
        page_budget: Maximum number of record pages fetched per browse.
        key_mode: Field used as the record display key.
        start_position: Shard iterator type used at session start.
        records_per_page: ``Limit`` passed to each GetRecords call.
        partition_key: Partition key for records published from the overlay.
        region: AWS region, or None for the default chain.
        profile: AWS profile name, or None for the default chain.
        endpoint_url: Endpoint override, e.g. a LocalStack URL.
        output_dir: Directory that exported records are written to.
        log_level: Level name for the ``kinesis_browser`` logger.
    """

    page_budget: int = DEFAULT_PAGE_BUDGET
    key_mode: KeyMode = KeyMode.TIMESTAMP
    start_position: StartPosition = StartPosition.TRIM_HORIZON
    records_per_page: int = 100
    partition_key: str = DEFAULT_PARTITION_KEY
    region: str | None = None
    profile: str | None = None
    endpoint_url: str | None = None
    output_dir: str = "."
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.page_budget < 0:
            raise ValueError(f"page_budget must be >= 0, got {self.page_budget}")
        if self.records_per_page <= 0:
            raise ValueError(
                f"records_per_page must be positive, got {self.records_per_page}"
            )
        if not self.partition_key:
            raise ValueError("partition_key must not be empty")
