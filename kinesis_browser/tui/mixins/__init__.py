"""Mixins for the TUI application."""

from kinesis_browser.tui.mixins.background_task import BackgroundTaskMixin
from kinesis_browser.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "BackgroundTaskMixin",
    "VimNavigationMixin",
]
