"""
Navigation state machine for the stream browser.

Exactly one panel owns input focus at a time:

    STREAM_LIST --select--> RECORD_LIST --select--> DETAIL_VIEW
         ^                   |    ^                    |
         +-------back--------+    +-------back---------+

    any list panel --insert--> INSERT_OVERLAY --confirm/cancel--> RECORD_LIST

Selecting a stream starts a new browse session: the record cache is reset
and an ingestion pipeline is spawned in the background. Selecting a record
renders its cached payload in the detail view.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from kinesis_browser.config import BrowserConfig
from kinesis_browser.streams.client import StreamClient, StreamClientError
from kinesis_browser.streams.records import format_payload
from kinesis_browser.tui.ingestion import IngestionPipeline
from kinesis_browser.tui.record_cache import RecordCache
from kinesis_browser.tui.surface import LIST_PANELS, Panel, UISurface

logger = logging.getLogger(__name__)

# Runs a blocking callable off the UI thread
Spawner = Callable[[Callable[[], object]], None]

# Panels that can own navigation focus outside the overlay
FOCUS_PANELS = LIST_PANELS + (Panel.DETAIL_VIEW,)


@dataclass
class BrowseSession:
    """One browse of a chosen stream, until another stream is selected."""

    stream_name: str
    generation: int
    selected_key: str | None = None


class Navigator:
    """Owns panel focus and the transitions between panels."""

    def __init__(
        self,
        client: StreamClient,
        surface: UISurface,
        cache: RecordCache,
        config: BrowserConfig,
        spawn: Spawner,
    ) -> None:
        self.client = client
        self.surface = surface
        self.cache = cache
        self.config = config
        self._spawn = spawn
        self._focus = Panel.STREAM_LIST
        self._session: BrowseSession | None = None
        self._publishing = False

    @property
    def focus(self) -> Panel:
        return self._focus

    @property
    def session(self) -> BrowseSession | None:
        return self._session

    def _set_focus(self, panel: Panel) -> None:
        self._focus = panel
        self.surface.set_focus(panel)

    def adopt_focus(self, panel: Panel) -> None:
        """Follow a focus change made outside the navigator (tab, mouse).

        Ignored while the insert overlay is open and for panels that never
        hold navigation focus.
        """
        if self._focus is Panel.INSERT_OVERLAY or panel not in FOCUS_PANELS:
            return
        self._focus = panel

    # Streams

    def start(self) -> None:
        """Focus the stream list and enumerate streams."""
        self._set_focus(Panel.STREAM_LIST)
        self.refresh_streams()

    def refresh_streams(self) -> None:
        """Clear the stream list and enumerate streams in the background."""
        self.surface.clear(Panel.STREAM_LIST)
        self._spawn(self._load_streams)

    def _load_streams(self) -> None:
        try:
            names = self.client.list_streams()
        except StreamClientError as e:
            logger.error("listing streams failed: %s", e)
            return

        def apply() -> None:
            for name in names:
                self.surface.append_line(Panel.STREAM_LIST, name)

        self.surface.apply_mutation(apply)
        logger.info("found %d streams", len(names))

    # Selection

    def select(self) -> None:
        """Act on the line under the cursor of the focused list."""
        if self._focus is Panel.STREAM_LIST:
            self._browse_stream()
        elif self._focus is Panel.RECORD_LIST:
            self._show_record()

    def select_panel(self, panel: Panel) -> None:
        """Focus ``panel`` and select its current line (mouse click)."""
        if self._focus is Panel.INSERT_OVERLAY or panel not in LIST_PANELS:
            return
        self._set_focus(panel)
        self.select()

    def _browse_stream(self) -> None:
        stream_name = self.surface.current_line(Panel.STREAM_LIST)
        if not stream_name:
            return

        generation = self.cache.reset()
        self.surface.clear(Panel.RECORD_LIST)
        self.surface.clear(Panel.DETAIL_VIEW)
        self._session = BrowseSession(stream_name=stream_name, generation=generation)
        self._set_focus(Panel.RECORD_LIST)

        pipeline = IngestionPipeline(self.client, self.surface, self.cache, self.config)
        self._spawn(lambda: pipeline.run(stream_name, generation))

    def _show_record(self) -> None:
        key = self.surface.current_line(Panel.RECORD_LIST)
        if not key:
            return
        payload = self.cache.get(key)
        if payload is None:
            return

        self.surface.clear(Panel.DETAIL_VIEW)
        self.surface.set_text(Panel.DETAIL_VIEW, format_payload(payload))
        if self._session is not None:
            self._session.selected_key = key
        self._set_focus(Panel.DETAIL_VIEW)

    def back(self) -> None:
        """Return to the previous panel."""
        if self._focus is Panel.RECORD_LIST:
            self._set_focus(Panel.STREAM_LIST)
        elif self._focus is Panel.DETAIL_VIEW:
            self._set_focus(Panel.RECORD_LIST)
        elif self._focus is Panel.INSERT_OVERLAY:
            self.cancel_insert()

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor of the focused panel by ``delta`` lines.

        List cursors only move onto populated lines. The detail view
        scrolls instead.

        Returns:
            True if the cursor moved or the view scrolled.
        """
        if self._focus in LIST_PANELS:
            if not self.surface.current_line(self._focus, delta):
                return False
            self.surface.move_cursor(self._focus, delta)
            return True
        if self._focus is Panel.DETAIL_VIEW:
            self.surface.scroll(Panel.DETAIL_VIEW, delta)
            return True
        return False

    # Side channels

    def export(self) -> Path | None:
        """Write the detail view text to ``<output_dir>/<key>.json``.

        Returns:
            The written path, or None if nothing was exported.
        """
        if self._focus is not Panel.DETAIL_VIEW or self._session is None:
            return None
        key = self._session.selected_key
        text = self.surface.text(Panel.DETAIL_VIEW)
        if not key or not text:
            return None

        path = Path(self.config.output_dir) / f"{key}.json"
        try:
            os.makedirs(self.config.output_dir, exist_ok=True)
            path.write_bytes(text.encode("utf-8"))
        except OSError as e:
            logger.error("export of %s failed: %s", key, e)
            return None

        logger.info("exported %s", path)
        return path

    def open_insert(self) -> None:
        """Open the insert overlay as a modal."""
        if self._focus is Panel.INSERT_OVERLAY:
            return
        self._set_focus(Panel.INSERT_OVERLAY)
        self.surface.open_overlay()

    def cancel_insert(self) -> None:
        """Discard the overlay and return to the record list."""
        if self._focus is not Panel.INSERT_OVERLAY:
            return
        self.surface.close_overlay()
        self._set_focus(Panel.RECORD_LIST)

    def confirm_insert(self, text: str) -> None:
        """Publish ``text`` to the stream under the stream list cursor.

        The overlay closes once the record is accepted; on failure it stays
        open so the operator can retry.
        """
        if self._focus is not Panel.INSERT_OVERLAY or self._publishing:
            return
        stream_name = self.surface.current_line(Panel.STREAM_LIST)
        if not stream_name:
            logger.warning("no stream selected, record not inserted")
            return

        self._publishing = True
        self._spawn(lambda: self._publish(stream_name, text))

    def _publish(self, stream_name: str, text: str) -> None:
        try:
            sequence_number = self.client.put_record(stream_name, text.encode("utf-8"))
        except StreamClientError as e:
            logger.error("insert into %s failed: %s", stream_name, e)
            self.surface.apply_mutation(self._publish_failed)
            return

        logger.info("record inserted into %s: %s", stream_name, sequence_number)
        self.surface.apply_mutation(self._publish_done)

    def _publish_done(self) -> None:
        self._publishing = False
        if self._focus is Panel.INSERT_OVERLAY:
            self.surface.close_overlay()
            self._set_focus(Panel.RECORD_LIST)

    def _publish_failed(self) -> None:
        self._publishing = False

    def quit(self) -> None:
        self.surface.exit()
