"""
Background Task Mixin for running blocking stream calls off the UI thread.

Provides a reusable pattern for:
- Running a callable in a Textual thread worker
- Reporting unexpected failures through the logging system

Results travel back to the UI through ``TextualSurface.apply_mutation``,
which the task itself calls.
"""

from __future__ import annotations

import logging
from typing import Callable

from textual import work

logger = logging.getLogger(__name__)


class BackgroundTaskMixin:
    """Mixin providing background task execution for screens.

    Usage:
        class MyScreen(BackgroundTaskMixin, Screen):
            def on_mount(self):
                self.run_in_background(self._load_streams)
    """

    # Worker group shared by every background task of the screen
    BACKGROUND_GROUP: str = "stream-io"

    def run_in_background(self, task: Callable[[], object]) -> None:
        """Run ``task`` in a thread worker.

        Args:
            task: Blocking callable. Its return value is discarded.
        """
        self._run_background_worker(task)

    @work(thread=True, group=BACKGROUND_GROUP, exit_on_error=False)
    def _run_background_worker(self, task: Callable[[], object]) -> None:
        """Background worker for stream tasks."""
        try:
            task()
        except Exception:
            logger.exception("background task failed")
