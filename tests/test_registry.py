"""Tests for the widget registry."""

import pytest

from tui_listbox.registry import WidgetRegistry, default_registry
from tui_listbox.widgets.combobox import Combobox
from tui_listbox.widgets.listbox import Listbox


class Dummy:
    def __init__(self, *args, **kwargs):
        self.args = args
        self.kwargs = kwargs


class Other:
    pass


def test_register_if_absent():
    registry = WidgetRegistry()
    assert registry.register("thing", Dummy) is True
    assert registry.register("thing", Other) is False
    assert registry.get("thing") is Dummy


def test_unknown_kind():
    with pytest.raises(KeyError, match="nope"):
        WidgetRegistry().get("nope")


def test_create_passes_arguments():
    registry = WidgetRegistry()
    registry.register("thing", Dummy)
    obj = registry.create("thing", 1, 2, id="x")
    assert obj.args == (1, 2)
    assert obj.kwargs == {"id": "x"}


def test_registries_are_independent():
    a = WidgetRegistry()
    b = WidgetRegistry()
    a.register("thing", Dummy)
    assert "thing" in a
    assert "thing" not in b


def test_default_registry():
    registry = default_registry()
    assert registry.kinds() == ["listbox", "combobox"]
    assert registry.get("listbox") is Listbox
    assert registry.get("combobox") is Combobox
