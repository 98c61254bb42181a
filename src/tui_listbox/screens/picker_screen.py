"""Picker screen: choose one entry from a Listbox."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

from tui_listbox.models import Option
from tui_listbox.widgets.listbox import Listbox


class PickerScreen(ModalScreen[str | None]):
    """Modal for picking one item. Arrows browse, Enter picks, Esc cancels."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    DEFAULT_CSS = """
    PickerScreen {
        align: center middle;
    }
    #picker-container {
        width: 50;
        height: auto;
        max-height: 70%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }
    #picker-label {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(self, label: str, options: list[tuple[str, str]], initial_value: str = "") -> None:
        """Create a picker.

        Args:
            label: Title displayed above the list.
            options: List of (value, display_text) tuples.
            initial_value: Value to highlight initially.
        """
        super().__init__()
        self._label = label
        self._options = [Option(value=value, label=display) for value, display in options]
        self._initial_value = initial_value

    def compose(self) -> ComposeResult:
        with Vertical(id="picker-container"):
            yield Static(self._label, id="picker-label")
            yield Listbox(*self._options, focus_only=True, id="picker-list")

    def on_mount(self) -> None:
        listbox = self.query_one("#picker-list", Listbox)
        listbox.focus()
        for option in self._options:
            if option.value == self._initial_value:
                listbox.controller.set_focus(option)
                break

    def on_listbox_selected(self, event: Listbox.Selected) -> None:
        event.stop()
        self.dismiss(event.option.value)

    def action_cancel(self) -> None:
        self.dismiss(None)
