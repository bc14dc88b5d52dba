"""Scrollable panel showing the payload of the selected record."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static


class DetailView(VerticalScroll):
    """Read-only text panel that remembers exactly what it renders."""

    DEFAULT_CSS = """
    DetailView {
        padding: 0 1;
        background: $surface;
    }

    DetailView > Static {
        width: 100%;
    }
    """

    def __init__(self, id: str | None = None, classes: str | None = None) -> None:
        super().__init__(id=id, classes=classes)
        self._text = ""

    @property
    def text(self) -> str:
        """The text currently rendered, verbatim."""
        return self._text

    def compose(self) -> ComposeResult:
        yield Static(Text(self._text), id=f"{self.id}-body")

    def set_text(self, text: str) -> None:
        """Replace the rendered text. Markup is not interpreted."""
        self._text = text
        self.query_one(Static).update(Text(text))
        self.scroll_home(animate=False)

    def append_text(self, text: str) -> None:
        self.set_text(f"{self._text}\n{text}" if self._text else text)
