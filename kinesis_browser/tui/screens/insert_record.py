"""Modal overlay for publishing a new record to the selected stream."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Input, Label


class InsertRecordScreen(ModalScreen[None]):
    """A modal screen holding a single-line payload editor.

    The screen never dismisses itself: it posts ``Confirmed`` or
    ``Cancelled`` and the navigator decides when the overlay closes, so a
    failed publish leaves the text in place for another attempt.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
    ]

    CSS = """
    InsertRecordScreen {
        align: center middle;
    }

    InsertRecordScreen > Vertical {
        width: 70;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    InsertRecordScreen .modal-header {
        width: 100%;
        padding: 0 1;
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    InsertRecordScreen Input {
        margin: 1 0;
    }

    InsertRecordScreen .close-hint {
        width: 100%;
        text-align: center;
        color: $text-muted;
    }
    """

    class Confirmed(Message):
        """Posted when the operator submits the payload."""

        def __init__(self, text: str) -> None:
            self.text = text
            super().__init__()

    class Cancelled(Message):
        """Posted when the operator abandons the insert."""

    def __init__(
        self,
        stream_name: str = "",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the insert overlay.

        Args:
            stream_name: Stream the record will be published to (for display).
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.stream_name = stream_name

    def compose(self) -> ComposeResult:
        """Compose the modal content."""
        title = f"Insert record into {self.stream_name}" if self.stream_name else "Insert record"
        with Vertical():
            yield Label(title, classes="modal-header")
            yield Input(placeholder="record payload", id="insert-input")
            yield Label("enter: publish   esc: cancel", classes="close-hint")

    def on_mount(self) -> None:
        self.query_one("#insert-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Hand the payload over for publishing."""
        event.stop()
        self.post_message(self.Confirmed(event.value))

    def action_cancel(self) -> None:
        self.post_message(self.Cancelled())
