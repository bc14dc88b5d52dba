"""Logging handler that mirrors browser log records into the log panel."""

from __future__ import annotations

import logging

from kinesis_browser.tui.surface import Panel
from kinesis_browser.tui.textual_surface import TextualSurface

PANEL_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"


class PanelLogHandler(logging.Handler):
    """Forward log records to the on-screen log panel.

    Records at ERROR and above additionally raise a toast notification.
    """

    def __init__(self, surface: TextualSurface, level: int | str = logging.INFO) -> None:
        super().__init__(level=level)
        self.surface = surface
        self.setFormatter(logging.Formatter(PANEL_FORMAT, datefmt="%H:%M:%S"))

    def emit(self, record: logging.LogRecord) -> None:
        if not self.surface.app.is_running:
            return
        try:
            line = self.format(record)
            is_error = record.levelno >= logging.ERROR
            message = record.getMessage()

            def apply() -> None:
                self.surface.append_line(Panel.LOG, line)
                if is_error:
                    self.surface.notify_error(message)

            self.surface.apply_mutation(apply)
        except Exception:
            self.handleError(record)
