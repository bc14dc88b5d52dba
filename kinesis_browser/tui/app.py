"""
Main Textual application for the Kinesis Stream Browser.

Layout:
    +-----------+--------------+---------------------------+
    | streams   | records      | detail                    |
    |           |              |                           |
    +-----------+--------------+---------------------------+
    | log                                                  |
    +------------------------------------------------------+

Selecting a stream loads its first shard in the background; selecting a
record renders its payload in the detail panel.
"""

from __future__ import annotations

import argparse
import logging
import sys

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Log, OptionList

from kinesis_browser.config import BrowserConfig, KeyMode, StartPosition
from kinesis_browser.streams.client import (
    KinesisStreamClient,
    StreamClient,
    StreamClientError,
)
from kinesis_browser.tui.log_panel import PanelLogHandler
from kinesis_browser.tui.mixins import BackgroundTaskMixin, VimNavigationMixin
from kinesis_browser.tui.navigation import Navigator
from kinesis_browser.tui.record_cache import RecordCache
from kinesis_browser.tui.screens import InsertRecordScreen
from kinesis_browser.tui.surface import Panel
from kinesis_browser.tui.textual_surface import TextualSurface
from kinesis_browser.tui.widgets import DetailView

# Root logger of the package; mirrored into the log panel
PACKAGE_LOGGER = "kinesis_browser"


class BrowserScreen(BackgroundTaskMixin, VimNavigationMixin, Screen):
    """Three-panel browsing screen with a log panel underneath."""

    CSS = """
    BrowserScreen {
        layout: vertical;
    }

    #panels {
        height: 1fr;
    }

    #stream-list {
        width: 32;
        border: solid $primary;
    }

    #record-list {
        width: 36;
        border: solid $primary;
    }

    #detail-view {
        width: 1fr;
        border: solid $primary;
    }

    #stream-list:focus, #record-list:focus, #detail-view:focus {
        border: double $secondary;
    }

    #log {
        height: 8;
        border: solid $primary-darken-2;
    }

    Header {
        dock: top;
    }

    Footer {
        dock: bottom;
    }
    """

    # Screen bindings take priority over the focused widget's own keys
    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("q", "quit", "Quit", priority=True),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("enter", "select", "Select", priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("left", "go_back", "Back", priority=True),
        Binding("escape", "go_back", "Back", show=False, priority=True),
        Binding("e", "export", "Export"),
        Binding("i", "insert", "Insert"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(
        self,
        client: StreamClient,
        config: BrowserConfig,
        cache: RecordCache | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the BrowserScreen.

        Args:
            client: Stream service client used for every call.
            config: Browser settings.
            cache: Record cache to fill; a fresh one is created if None.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.client = client
        self.config = config
        self.cache = cache if cache is not None else RecordCache()
        self.navigator: Navigator | None = None
        self.surface: TextualSurface | None = None
        self._log_handler: PanelLogHandler | None = None

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        with Horizontal(id="panels"):
            yield OptionList(id=Panel.STREAM_LIST.value)
            yield OptionList(id=Panel.RECORD_LIST.value)
            yield DetailView(id=Panel.DETAIL_VIEW.value)
        yield Log(id=Panel.LOG.value)
        yield Footer()

    def on_mount(self) -> None:
        """Wire the surface, navigator and log panel, then list streams."""
        self.title = "Kinesis Stream Browser"
        self.query_one("#stream-list", OptionList).border_title = "streams"
        self.query_one("#record-list", OptionList).border_title = "records"
        self.query_one("#detail-view", DetailView).border_title = "detail"
        log_panel = self.query_one("#log", Log)
        log_panel.border_title = "log"
        # tab cycles the three browsing panels only
        log_panel.can_focus = False

        self.surface = TextualSurface(self)
        self._log_handler = PanelLogHandler(self.surface, level=self.config.log_level)
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(self.config.log_level)
        package_logger.addHandler(self._log_handler)

        self.navigator = Navigator(
            client=self.client,
            surface=self.surface,
            cache=self.cache,
            config=self.config,
            spawn=self.run_in_background,
        )
        self.surface.append_line(Panel.LOG, "starting...")
        self.navigator.start()

    def on_unmount(self) -> None:
        if self._log_handler is not None:
            logging.getLogger(PACKAGE_LOGGER).removeHandler(self._log_handler)
            self._log_handler = None

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        """Keep navigator focus in step with tab and mouse focus changes."""
        if self.navigator is None:
            return
        try:
            panel = Panel(event.widget.id)
        except ValueError:
            return
        self.navigator.adopt_focus(panel)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        """Handle a mouse click on a stream or record line."""
        if self.navigator is None:
            return
        self.navigator.select_panel(Panel(event.option_list.id))

    def action_select(self) -> None:
        if self.navigator is not None:
            self.navigator.select()

    def action_cursor_up(self) -> None:
        if self.navigator is not None:
            self.navigator.move_cursor(-1)

    def action_cursor_down(self) -> None:
        if self.navigator is not None:
            self.navigator.move_cursor(1)

    def action_go_back(self) -> None:
        if self.navigator is not None:
            self.navigator.back()

    def action_export(self) -> None:
        """Export the rendered record to ``<key>.json``."""
        if self.navigator is not None:
            self.navigator.export()

    def action_insert(self) -> None:
        """Open the insert overlay."""
        if self.navigator is not None:
            self.navigator.open_insert()

    def action_refresh(self) -> None:
        """Enumerate streams again."""
        if self.navigator is not None:
            self.navigator.refresh_streams()

    def action_quit(self) -> None:
        """Quit the application."""
        if self.navigator is not None:
            self.navigator.quit()
        else:
            self.app.exit()


class StreamBrowserApp(App):
    """A Textual app for browsing Kinesis stream records."""

    TITLE = "Kinesis Stream Browser"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        client: StreamClient,
        config: BrowserConfig | None = None,
    ) -> None:
        """Initialize the app with a stream client.

        Args:
            client: Stream service client.
            config: Browser settings; defaults are used if None.
        """
        super().__init__()
        self.client = client
        self.config = config or BrowserConfig()
        self.cache = RecordCache()
        self._browser: BrowserScreen | None = None

    @property
    def navigator(self) -> Navigator | None:
        return self._browser.navigator if self._browser is not None else None

    def on_mount(self) -> None:
        """Push the browsing screen."""
        self._browser = BrowserScreen(self.client, self.config, self.cache)
        self.push_screen(self._browser)

    def on_insert_record_screen_confirmed(
        self, message: InsertRecordScreen.Confirmed
    ) -> None:
        """Publish the overlay text to the selected stream."""
        if self.navigator is not None:
            self.navigator.confirm_insert(message.text)

    def on_insert_record_screen_cancelled(
        self, message: InsertRecordScreen.Cancelled
    ) -> None:
        """Close the overlay without publishing."""
        if self.navigator is not None:
            self.navigator.cancel_insert()


def build_parser() -> argparse.ArgumentParser:
    """Return the command line parser for the browser."""
    parser = argparse.ArgumentParser(
        description="Browse Kinesis data stream records in a terminal UI."
    )
    parser.add_argument(
        "--page-budget",
        type=int,
        default=BrowserConfig.page_budget,
        help="Maximum record pages fetched per stream selection (default: %(default)s)",
    )
    parser.add_argument(
        "--key-mode",
        choices=[mode.value for mode in KeyMode],
        default=KeyMode.TIMESTAMP.value,
        help="Record list key: arrival timestamp or sequence number (default: %(default)s)",
    )
    parser.add_argument(
        "--start-position",
        choices=[position.name.lower() for position in StartPosition],
        default=StartPosition.TRIM_HORIZON.name.lower(),
        help="Where the shard iterator starts (default: %(default)s)",
    )
    parser.add_argument(
        "--records-per-page",
        type=int,
        default=BrowserConfig.records_per_page,
        help="Limit passed to each GetRecords call (default: %(default)s)",
    )
    parser.add_argument(
        "--partition-key",
        default=BrowserConfig.partition_key,
        help="Partition key for inserted records (default: %(default)s)",
    )
    parser.add_argument("--region", default=None, help="AWS region")
    parser.add_argument("--profile", default=None, help="AWS profile name")
    parser.add_argument(
        "--endpoint-url",
        default=None,
        help="Kinesis endpoint override, e.g. http://localhost:4566 for LocalStack",
    )
    parser.add_argument(
        "-O",
        "--output-dir",
        default=BrowserConfig.output_dir,
        help="Directory for exported records (default: current directory)",
    )
    parser.add_argument(
        "--log-level",
        default=BrowserConfig.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log panel verbosity (default: %(default)s)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> BrowserConfig:
    """Build a BrowserConfig from parsed arguments.

    Raises:
        ValueError: If a value is out of range.
    """
    return BrowserConfig(
        page_budget=args.page_budget,
        key_mode=KeyMode(args.key_mode),
        start_position=StartPosition.from_name(args.start_position),
        records_per_page=args.records_per_page,
        partition_key=args.partition_key,
        region=args.region,
        profile=args.profile,
        endpoint_url=args.endpoint_url,
        output_dir=args.output_dir,
        log_level=args.log_level,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the application."""
    from textual.logging import TextualHandler

    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(level=logging.WARNING, handlers=[TextualHandler()])

    try:
        client = KinesisStreamClient.from_config(config)
    except StreamClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    app = StreamBrowserApp(client=client, config=config)
    app.run()


if __name__ == "__main__":
    main()
