"""Reusable screen components for the TUI application."""

from kinesis_browser.tui.screens.insert_record import InsertRecordScreen

__all__ = [
    "InsertRecordScreen",
]
