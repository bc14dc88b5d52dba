"""
Panel identifiers and the UI surface contract.

The navigator and the ingestion pipeline never touch widgets directly; they
drive an object implementing ``UISurface``. ``TextualSurface`` is the
production implementation, tests use an in-memory one.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol


class Panel(Enum):
    """Screen regions. Values double as widget ids."""

    STREAM_LIST = "stream-list"
    RECORD_LIST = "record-list"
    DETAIL_VIEW = "detail-view"
    INSERT_OVERLAY = "insert-overlay"
    LOG = "log"


# Panels whose lines can be selected
LIST_PANELS = (Panel.STREAM_LIST, Panel.RECORD_LIST)


class UISurface(Protocol):
    """Rendering operations consumed by the browsing engine."""

    def apply_mutation(self, fn: Callable[[], None]) -> None:
        """Run ``fn`` exclusively on the UI thread."""

    def current_line(self, panel: Panel, offset: int = 0) -> str:
        """Return the line at the cursor plus ``offset``, or ``""``."""

    def move_cursor(self, panel: Panel, delta: int) -> None: ...

    def scroll(self, panel: Panel, delta: int) -> None: ...

    def set_focus(self, panel: Panel) -> None: ...

    def clear(self, panel: Panel) -> None: ...

    def append_line(self, panel: Panel, text: str) -> None: ...

    def set_text(self, panel: Panel, text: str) -> None: ...

    def text(self, panel: Panel) -> str: ...

    def open_overlay(self) -> None: ...

    def close_overlay(self) -> None: ...

    def exit(self) -> None: ...
