"""Integration tests for the demo app using Textual Pilot."""

import pytest
from textual.widgets import Input

from tui_listbox.app import ListboxApp
from tui_listbox.config import save_config
from tui_listbox.demo_data import build_demo_config
from tui_listbox.models import ListDef, Option, ProjectConfig
from tui_listbox.screens.help_screen import HelpScreen
from tui_listbox.screens.picker_screen import PickerScreen
from tui_listbox.widgets.combobox import Combobox
from tui_listbox.widgets.listbox import Listbox


PAUSE = 0.1


@pytest.fixture
def demo_app():
    return ListboxApp(config=build_demo_config(), demo_mode=True)


@pytest.fixture
def named_project(tmp_path):
    config = ProjectConfig(
        name="Kitchen",
        lists=[
            ListDef(
                id="spices",
                attributes={"name": "spice", "label": "Spices"},
                options=[Option(value="salt"), Option(value="pepper")],
            )
        ],
    )
    save_config(tmp_path, config)
    return tmp_path


@pytest.mark.asyncio
async def test_app_starts(demo_app):
    async with demo_app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        assert len(demo_app.query(Listbox)) == 2
        assert len(demo_app.query(Combobox)) == 1
        assert "[DEMO]" in demo_app.title


@pytest.mark.asyncio
async def test_attributes_from_config(demo_app):
    async with demo_app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        fruit = demo_app.query_one("#fruit", Listbox)
        toppings = demo_app.query_one("#toppings", Listbox)
        assert fruit.value == "banana"
        assert fruit.form_name == "fruit"
        assert toppings.multiple is True
        assert toppings.value == ["cheese"]
        assert "anchovies" not in [o.value for o in toppings.controller.items]


@pytest.mark.asyncio
async def test_app_title_from_config(named_project):
    app = ListboxApp(project_dir=named_project)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        assert "Kitchen" in app.title
        assert app.query_one("#spices", Listbox).label == "Spices"


@pytest.mark.asyncio
async def test_empty_project_gets_sample_list(tmp_path):
    app = ListboxApp(project_dir=tmp_path)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        assert app.query_one("#fruit", Listbox)


@pytest.mark.asyncio
async def test_events_are_logged(demo_app):
    async with demo_app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        demo_app.action_clear_log()
        fruit = demo_app.query_one("#fruit", Listbox)
        fruit.focus()
        await pilot.pause(delay=PAUSE)
        await pilot.press("down")
        await pilot.pause(delay=PAUSE)
        kinds = [(host, kind) for host, kind, _ in demo_app.event_log]
        assert ("fruit", "selected") in kinds
        assert ("fruit", "unselected") in kinds
        assert ("fruit", "change", ["orange"]) in demo_app.event_log


@pytest.mark.asyncio
async def test_reset_focused_list(demo_app):
    async with demo_app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        fruit = demo_app.query_one("#fruit", Listbox)
        fruit.focus()
        await pilot.pause(delay=PAUSE)
        await pilot.press("ctrl+r")
        await pilot.pause(delay=PAUSE)
        assert fruit.value is None


@pytest.mark.asyncio
async def test_toggle_multiple(demo_app):
    async with demo_app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        fruit = demo_app.query_one("#fruit", Listbox)
        fruit.focus()
        await pilot.pause(delay=PAUSE)
        await pilot.press("ctrl+t")
        await pilot.pause(delay=PAUSE)
        assert fruit.multiple is True
        assert fruit.value == []


@pytest.mark.asyncio
async def test_help_modal(demo_app):
    async with demo_app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        await pilot.press("question_mark")
        await pilot.pause(delay=PAUSE)
        assert isinstance(demo_app.screen, HelpScreen)
        await pilot.press("escape")
        await pilot.pause(delay=PAUSE)
        assert not isinstance(demo_app.screen, HelpScreen)


@pytest.mark.asyncio
async def test_jump_to_list(demo_app):
    async with demo_app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        demo_app.query_one("#fruit", Listbox).focus()
        await pilot.pause(delay=PAUSE)
        await pilot.press("ctrl+o")
        await pilot.pause(delay=PAUSE)
        assert isinstance(demo_app.screen, PickerScreen)
        # picker opens on the current list; two steps down is the combobox
        await pilot.press("down", "down", "enter")
        await pilot.pause(delay=PAUSE)
        assert not isinstance(demo_app.screen, PickerScreen)
        assert isinstance(demo_app.focused, Input)
        assert demo_app.focused.parent.id == "country"


@pytest.mark.asyncio
async def test_picker_escape_cancels(demo_app):
    async with demo_app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        await pilot.press("ctrl+o")
        await pilot.pause(delay=PAUSE)
        await pilot.press("escape")
        await pilot.pause(delay=PAUSE)
        assert not isinstance(demo_app.screen, PickerScreen)
