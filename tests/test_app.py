"""Headless checks of the Textual application wiring.

These drive the real screen through Textual's pilot, with a fake stream
client standing in for Kinesis.
"""

from __future__ import annotations

import asyncio
import json

from textual.widgets import OptionList

from conftest import FakeStreamClient, make_record
from kinesis_browser.config import BrowserConfig
from kinesis_browser.tui.app import StreamBrowserApp
from kinesis_browser.tui.screens import InsertRecordScreen
from kinesis_browser.tui.surface import Panel
from kinesis_browser.tui.widgets import DetailView


async def settle(app, pilot) -> None:
    """Let pending workers finish and their UI mutations land."""
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


def test_browse_render_and_insert(tmp_path):
    client = FakeStreamClient(
        {
            "orders": [[make_record(0, data=b'{"a":1}'), make_record(1), make_record(2)]],
            "payments": [],
        },
        closed=True,
    )
    app = StreamBrowserApp(client=client, config=BrowserConfig(output_dir=str(tmp_path)))

    async def scenario() -> None:
        async with app.run_test(size=(140, 40)) as pilot:
            await settle(app, pilot)
            surface = app._browser.surface
            assert surface.text(Panel.STREAM_LIST) == "orders\npayments"
            assert app.navigator.focus is Panel.STREAM_LIST

            await pilot.press("enter")
            await settle(app, pilot)
            assert app.navigator.focus is Panel.RECORD_LIST
            assert len(app.cache) == 3
            assert surface.text(Panel.RECORD_LIST).splitlines() == app.cache.keys()

            await pilot.press("enter")
            await settle(app, pilot)
            detail = app._browser.query_one(DetailView)
            assert app.navigator.focus is Panel.DETAIL_VIEW
            assert detail.text == json.dumps({"a": 1}, indent=2)

            await pilot.press("e")
            await settle(app, pilot)
            exported = list(tmp_path.glob("*.json"))
            assert len(exported) == 1
            assert exported[0].read_text(encoding="utf-8") == detail.text

            await pilot.press("i")
            await settle(app, pilot)
            assert isinstance(app.screen, InsertRecordScreen)

            await pilot.press("h", "e", "l", "l", "o", "enter")
            await settle(app, pilot)
            assert client.put_calls == [("orders", b"hello")]
            assert not isinstance(app.screen, InsertRecordScreen)
            assert app.navigator.focus is Panel.RECORD_LIST

    asyncio.run(scenario())


def test_escape_cancels_insert():
    client = FakeStreamClient({"orders": []})
    app = StreamBrowserApp(client=client, config=BrowserConfig())

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await settle(app, pilot)

            await pilot.press("i")
            await settle(app, pilot)
            await pilot.press("x", "escape")
            await settle(app, pilot)

            assert client.put_calls == []
            assert not isinstance(app.screen, InsertRecordScreen)
            assert app.navigator.focus is Panel.RECORD_LIST

    asyncio.run(scenario())


def three_record_client() -> FakeStreamClient:
    return FakeStreamClient(
        {"orders": [[make_record(0), make_record(1), make_record(2)]], "payments": []},
        closed=True,
    )


def test_tab_focus_is_followed_by_enter():
    client = three_record_client()
    app = StreamBrowserApp(client=client, config=BrowserConfig())

    async def scenario() -> None:
        async with app.run_test(size=(140, 40)) as pilot:
            await settle(app, pilot)
            await pilot.press("enter")
            await settle(app, pilot)
            await pilot.press("left")
            await settle(app, pilot)
            assert app.navigator.focus is Panel.STREAM_LIST

            await pilot.press("tab")
            await settle(app, pilot)
            assert app.focused.id == Panel.RECORD_LIST.value
            assert app.navigator.focus is Panel.RECORD_LIST

            await pilot.press("enter")
            await settle(app, pilot)
            assert client.count("list_shards") == 1
            assert app.navigator.focus is Panel.DETAIL_VIEW
            assert app._browser.query_one(DetailView).text == '{\n  "n": 0\n}'

    asyncio.run(scenario())


def test_arrow_keys_stay_on_populated_lines():
    client = three_record_client()
    app = StreamBrowserApp(client=client, config=BrowserConfig())

    async def scenario() -> None:
        async with app.run_test(size=(140, 40)) as pilot:
            await settle(app, pilot)
            await pilot.press("enter")
            await settle(app, pilot)
            record_list = app._browser.query_one("#record-list", OptionList)
            surface = app._browser.surface

            await pilot.press("up")
            await settle(app, pilot)
            assert record_list.highlighted == 0

            await pilot.press("down", "down", "down", "down", "down")
            await settle(app, pilot)
            assert record_list.highlighted == 2
            assert surface.current_line(Panel.RECORD_LIST) == app.cache.keys()[2]

            await pilot.press("enter")
            await settle(app, pilot)
            assert app._browser.query_one(DetailView).text == '{\n  "n": 2\n}'

    asyncio.run(scenario())
