"""Help modal screen showing keybindings."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option


HELP_ITEMS: list[tuple[str, str, str]] = [
    # (key_display, description, action_name_or_empty)
    # -- Single-select list --
    ("↑ / ↓", "Select previous / next (wraps)", ""),
    ("Home / End", "Select first / last", ""),
    # -- Multi-select list --
    ("↑ / ↓", "Multiple: move highlight only", ""),
    ("Shift+↑ / ↓", "Multiple: move and toggle", ""),
    ("Space / Enter", "Select or toggle highlighted option", ""),
    # -- Combobox --
    ("Type", "Combobox: filter options", ""),
    ("Esc", "Combobox: close popup / Close modal", ""),
    # -- App --
    ("Tab", "Next list", ""),
    ("Ctrl+R", "Reset focused list", "reset_list"),
    ("Ctrl+T", "Toggle single / multiple", "toggle_multiple"),
    ("Ctrl+O", "Jump to list", "jump_to_list"),
    ("Ctrl+L", "Clear event log", "clear_log"),
    ("?", "This help", ""),
    ("q", "Quit", "quit_app"),
    # -- CLI --
    ("--demo", "Launch demo mode (tui-listbox --demo)", ""),
]


class HelpScreen(ModalScreen[str]):
    """Modal screen showing keybindings as a selectable list."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("question_mark", "close", "Close"),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    #help-container {
        width: 70;
        max-height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }
    #help-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    #help-list {
        height: auto;
        max-height: 100%;
    }
    """

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help-container"):
            yield Static(
                "[bold]Keybindings[/bold]  (Enter to execute)", id="help-title"
            )
            ol = OptionList(id="help-list")
            for key_display, desc, action in HELP_ITEMS:
                label = f"  {key_display:<16} {desc}"
                ol.add_option(Option(label, id=action or None))
            yield ol

    def on_mount(self) -> None:
        self.query_one("#help-list", OptionList).focus()

    def on_option_list_option_selected(
        self, event: OptionList.OptionSelected
    ) -> None:
        self.dismiss(event.option.id or "")

    def action_close(self) -> None:
        self.dismiss("")
