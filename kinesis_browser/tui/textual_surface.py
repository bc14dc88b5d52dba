"""
UISurface implementation over the widgets of ``BrowserScreen``.

Lines shown in the two list panels are mirrored in plain Python lists so the
cursor line can be read back without depending on how ``OptionList`` stores
its prompts.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable

from textual.widgets import Log, OptionList
from textual.widgets.option_list import Option

from kinesis_browser.tui.screens.insert_record import InsertRecordScreen
from kinesis_browser.tui.surface import LIST_PANELS, Panel
from kinesis_browser.tui.widgets.detail_view import DetailView

if TYPE_CHECKING:
    from textual.app import App
    from textual.screen import Screen


class TextualSurface:
    """Drives the browser screen on behalf of the navigator and pipeline."""

    def __init__(self, screen: "Screen") -> None:
        """Bind to ``screen``. Must be created on the UI thread."""
        self.screen = screen
        self._app = screen.app
        self._ui_thread_id = threading.get_ident()
        self._lines: dict[Panel, list[str]] = {panel: [] for panel in LIST_PANELS}

    @property
    def app(self) -> "App":
        return self._app

    def _list(self, panel: Panel) -> OptionList:
        return self.screen.query_one(f"#{panel.value}", OptionList)

    def _detail(self) -> DetailView:
        return self.screen.query_one(f"#{Panel.DETAIL_VIEW.value}", DetailView)

    def _log(self) -> Log:
        return self.screen.query_one(f"#{Panel.LOG.value}", Log)

    def apply_mutation(self, fn: Callable[[], None]) -> None:
        """Run ``fn`` on the UI thread, blocking until it has run."""
        if threading.get_ident() == self._ui_thread_id:
            fn()
        else:
            self.app.call_from_thread(fn)

    def current_line(self, panel: Panel, offset: int = 0) -> str:
        if panel not in LIST_PANELS:
            return ""
        cursor = self._list(panel).highlighted
        if cursor is None:
            return ""
        index = cursor + offset
        lines = self._lines[panel]
        if not 0 <= index < len(lines):
            return ""
        return lines[index]

    def move_cursor(self, panel: Panel, delta: int) -> None:
        if panel not in LIST_PANELS:
            return
        option_list = self._list(panel)
        if option_list.highlighted is None:
            return
        option_list.highlighted = option_list.highlighted + delta

    def scroll(self, panel: Panel, delta: int) -> None:
        if panel is Panel.DETAIL_VIEW:
            self._detail().scroll_relative(y=delta, animate=False)
        elif panel is Panel.LOG:
            self._log().scroll_relative(y=delta, animate=False)

    def set_focus(self, panel: Panel) -> None:
        if panel in LIST_PANELS:
            self._list(panel).focus()
        elif panel is Panel.DETAIL_VIEW:
            self._detail().focus()

    def clear(self, panel: Panel) -> None:
        if panel in LIST_PANELS:
            self._lines[panel] = []
            self._list(panel).clear_options()
        elif panel is Panel.DETAIL_VIEW:
            self._detail().set_text("")
        elif panel is Panel.LOG:
            self._log().clear()

    def append_line(self, panel: Panel, text: str) -> None:
        if panel in LIST_PANELS:
            self._lines[panel].append(text)
            option_list = self._list(panel)
            option_list.add_option(Option(text))
            if option_list.highlighted is None:
                option_list.highlighted = 0
        elif panel is Panel.DETAIL_VIEW:
            self._detail().append_text(text)
        elif panel is Panel.LOG:
            self._log().write_line(text)

    def set_text(self, panel: Panel, text: str) -> None:
        if panel is Panel.DETAIL_VIEW:
            self._detail().set_text(text)
        else:
            self.clear(panel)
            for line in text.splitlines():
                self.append_line(panel, line)

    def text(self, panel: Panel) -> str:
        if panel is Panel.DETAIL_VIEW:
            return self._detail().text
        if panel in LIST_PANELS:
            return "\n".join(self._lines[panel])
        return ""

    def open_overlay(self) -> None:
        stream_name = self.current_line(Panel.STREAM_LIST)
        self.app.push_screen(InsertRecordScreen(stream_name=stream_name))

    def close_overlay(self) -> None:
        if isinstance(self.app.screen, InsertRecordScreen):
            self.app.pop_screen()

    def notify_error(self, message: str) -> None:
        self.app.notify(message, severity="error")

    def exit(self) -> None:
        self.app.exit()
