"""TUI widgets for the stream browser."""

from kinesis_browser.tui.widgets.detail_view import DetailView

__all__ = ["DetailView"]
