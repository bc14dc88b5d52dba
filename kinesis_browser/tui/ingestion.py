"""
Ingestion pipeline: walk one shard's iterator chain into the record cache.

Runs on a background worker. Each fetched page is handed to the UI thread in
a single mutation that stores the records in the cache and appends their
display keys to the record list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kinesis_browser.config import BrowserConfig
from kinesis_browser.streams.client import StreamClient, StreamClientError
from kinesis_browser.streams.records import StreamRecord, display_key
from kinesis_browser.tui.record_cache import RecordCache
from kinesis_browser.tui.surface import Panel

if TYPE_CHECKING:
    from kinesis_browser.tui.surface import UISurface

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    """Outcome of one pipeline run."""

    stream_name: str
    pages_fetched: int = 0
    records_seen: int = 0
    error: StreamClientError | None = None
    superseded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class IngestionPipeline:
    """Bounded, backoff-free drain of the first shard of a stream."""

    def __init__(
        self,
        client: StreamClient,
        surface: "UISurface",
        cache: RecordCache,
        config: BrowserConfig,
    ) -> None:
        self.client = client
        self.surface = surface
        self.cache = cache
        self.config = config

    def run(self, stream_name: str, generation: int) -> IngestionResult:
        """Load up to ``config.page_budget`` pages of ``stream_name``.

        Args:
            stream_name: Stream chosen in the stream list.
            generation: Cache generation of the browse session. Writes are
                dropped and polling stops once a newer session starts.

        Returns:
            An IngestionResult. Client failures are logged and recorded on
            ``error`` rather than raised; records already stored are kept.
        """
        result = IngestionResult(stream_name=stream_name)
        budget = self.config.page_budget
        if budget <= 0:
            logger.info("page budget is 0, nothing to load for %s", stream_name)
            return result

        try:
            logger.info("getting shards...")
            shard_id = self.client.list_shards(stream_name)[0]

            logger.info("getting records...")
            iterator: str | None = self.client.get_iterator(
                shard_id, stream_name, self.config.start_position
            )

            for _ in range(budget):
                if not self.cache.is_current(generation):
                    result.superseded = True
                    logger.debug("browse of %s superseded, stopping", stream_name)
                    break

                records, iterator = self.client.get_records(iterator)
                result.pages_fetched += 1
                result.records_seen += len(records)
                if records:
                    self._publish_page(records, generation)

                if not iterator:
                    logger.debug("shard %s closed after %d pages", shard_id, result.pages_fetched)
                    break
        except StreamClientError as e:
            result.error = e
            logger.error("loading %s failed: %s", stream_name, e)
            return result

        if result.superseded:
            return result

        logger.info("done loading records")
        if result.records_seen == 0:
            logger.info("no record found")
        return result

    def _publish_page(self, records: list[StreamRecord], generation: int) -> None:
        keyed = [(display_key(r, self.config.key_mode), r.data) for r in records]

        def apply() -> None:
            for key, payload in keyed:
                # a colliding key overwrites the payload but keeps its single
                # line (see "Duplicate keys" in DESIGN.md)
                is_new = key not in self.cache
                if self.cache.put(key, payload, generation) and is_new:
                    self.surface.append_line(Panel.RECORD_LIST, key)

        self.surface.apply_mutation(apply)
