"""Pytest configuration and shared fixtures for the stream browser tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from kinesis_browser.config import BrowserConfig, KeyMode, StartPosition
from kinesis_browser.streams.client import NoShardError, StreamClientError
from kinesis_browser.streams.records import StreamRecord
from kinesis_browser.tui.navigation import Navigator
from kinesis_browser.tui.record_cache import RecordCache
from kinesis_browser.tui.surface import LIST_PANELS, Panel

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_record(index: int, data: bytes | None = None) -> StreamRecord:
    """Create a record arriving ``index`` seconds after BASE_TIME."""
    return StreamRecord(
        sequence_number=f"4960{index:016d}",
        data=data if data is not None else f'{{"n":{index}}}'.encode(),
        partition_key="partition-1",
        arrival=BASE_TIME + timedelta(seconds=index),
    )


class FakeStreamClient:
    """In-memory StreamClient that records every call.

    Each stream maps to a list of pages for its first shard. Fetching past
    the last page returns an empty page with a fresh iterator, like an open
    shard with no new data. With ``closed=True`` the last page carries no
    next iterator.
    """

    def __init__(
        self,
        streams: dict[str, list[list[StreamRecord]]] | None = None,
        *,
        shards: dict[str, list[str]] | None = None,
        closed: bool = False,
        fail_on_page: int | None = None,
        put_error: bool = False,
        list_error: bool = False,
    ) -> None:
        self.streams = streams if streams is not None else {}
        self.shards = shards
        self.closed = closed
        self.fail_on_page = fail_on_page
        self.put_error = put_error
        self.list_error = list_error
        self.calls: list[tuple] = []
        self.put_calls: list[tuple[str, bytes]] = []
        self._sequence = 0

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    def list_streams(self) -> list[str]:
        self.calls.append(("list_streams",))
        if self.list_error:
            raise StreamClientError("list_streams failed (AccessDenied)")
        return list(self.streams)

    def list_shards(self, stream_name: str) -> list[str]:
        self.calls.append(("list_shards", stream_name))
        if self.shards is not None:
            shard_ids = self.shards.get(stream_name, [])
        else:
            shard_ids = ["shardId-000000000000"] if stream_name in self.streams else []
        if not shard_ids:
            raise NoShardError(stream_name)
        return shard_ids

    def get_iterator(
        self, shard_id: str, stream_name: str, position: StartPosition
    ) -> str:
        self.calls.append(("get_iterator", shard_id, stream_name, position))
        return f"{stream_name}|0"

    def get_records(self, iterator: str) -> tuple[list[StreamRecord], str | None]:
        self.calls.append(("get_records", iterator))
        stream_name, _, index_text = iterator.partition("|")
        index = int(index_text)
        if self.fail_on_page is not None and index == self.fail_on_page:
            raise StreamClientError("get_records failed (ProvisionedThroughputExceededException)")

        pages = self.streams.get(stream_name, [])
        records = pages[index] if index < len(pages) else []
        if self.closed and index >= len(pages) - 1:
            return records, None
        return records, f"{stream_name}|{index + 1}"

    def put_record(self, stream_name: str, payload: bytes) -> str:
        self.calls.append(("put_record", stream_name, payload))
        self.put_calls.append((stream_name, payload))
        if self.put_error:
            raise StreamClientError("put_record failed (ResourceNotFoundException)")
        self._sequence += 1
        return f"seq-{self._sequence}"


class FakeSurface:
    """UISurface keeping every panel in plain Python state."""

    def __init__(self) -> None:
        self.lines: dict[Panel, list[str]] = {panel: [] for panel in LIST_PANELS}
        self.cursors: dict[Panel, int] = {panel: 0 for panel in LIST_PANELS}
        self.log_lines: list[str] = []
        self.detail = ""
        self.focused: Panel | None = None
        self.overlay_open = False
        self.exited = False
        self.mutations = 0
        self.scrolled = 0

    def apply_mutation(self, fn: Callable[[], None]) -> None:
        self.mutations += 1
        fn()

    def current_line(self, panel: Panel, offset: int = 0) -> str:
        if panel not in LIST_PANELS:
            return ""
        index = self.cursors[panel] + offset
        lines = self.lines[panel]
        if not 0 <= index < len(lines):
            return ""
        return lines[index]

    def move_cursor(self, panel: Panel, delta: int) -> None:
        self.cursors[panel] += delta

    def scroll(self, panel: Panel, delta: int) -> None:
        self.scrolled += delta

    def set_focus(self, panel: Panel) -> None:
        self.focused = panel

    def clear(self, panel: Panel) -> None:
        if panel in LIST_PANELS:
            self.lines[panel] = []
            self.cursors[panel] = 0
        elif panel is Panel.DETAIL_VIEW:
            self.detail = ""
        elif panel is Panel.LOG:
            self.log_lines = []

    def append_line(self, panel: Panel, text: str) -> None:
        if panel in LIST_PANELS:
            self.lines[panel].append(text)
        elif panel is Panel.DETAIL_VIEW:
            self.detail = f"{self.detail}\n{text}" if self.detail else text
        elif panel is Panel.LOG:
            self.log_lines.append(text)

    def set_text(self, panel: Panel, text: str) -> None:
        if panel is Panel.DETAIL_VIEW:
            self.detail = text

    def text(self, panel: Panel) -> str:
        if panel is Panel.DETAIL_VIEW:
            return self.detail
        if panel in LIST_PANELS:
            return "\n".join(self.lines[panel])
        return ""

    def open_overlay(self) -> None:
        self.overlay_open = True

    def close_overlay(self) -> None:
        self.overlay_open = False

    def exit(self) -> None:
        self.exited = True


class DeferredSpawner:
    """Spawner that queues tasks until ``run_all()`` is called."""

    def __init__(self) -> None:
        self.pending: list[Callable[[], object]] = []

    def __call__(self, task: Callable[[], object]) -> None:
        self.pending.append(task)

    def run_all(self) -> None:
        while self.pending:
            self.pending.pop(0)()


def run_inline(task: Callable[[], object]) -> None:
    """Spawner that runs tasks immediately on the calling thread."""
    task()


@pytest.fixture
def config(tmp_path) -> BrowserConfig:
    """Return a config exporting into a temporary directory."""
    return BrowserConfig(page_budget=5, key_mode=KeyMode.TIMESTAMP, output_dir=str(tmp_path))


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def cache() -> RecordCache:
    return RecordCache()


@pytest.fixture
def orders_client() -> FakeStreamClient:
    """Client with an ``orders`` stream holding three records and an empty ``payments``."""
    return FakeStreamClient(
        {
            "orders": [[make_record(0), make_record(1)], [make_record(2)]],
            "payments": [],
        }
    )


@pytest.fixture
def navigator(orders_client, surface, cache, config) -> Navigator:
    """A started navigator whose background tasks run inline."""
    nav = Navigator(
        client=orders_client,
        surface=surface,
        cache=cache,
        config=config,
        spawn=run_inline,
    )
    nav.start()
    return nav
