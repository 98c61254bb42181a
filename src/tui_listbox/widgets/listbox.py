"""Listbox widget: a focusable single- or multi-select list."""

from __future__ import annotations

from textual import events
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.message import Message

from tui_listbox.attributes import LISTBOX_ATTRIBUTES, apply_attributes
from tui_listbox.models import Option
from tui_listbox.widgets.option_host import OptionListHost


class Listbox(OptionListHost, VerticalScroll, can_focus=True):
    """A keyboard-navigable list of options.

    In single mode the arrow keys move the selection itself. In multiple
    mode they only move the highlight; Space/Enter toggle the highlighted
    option and Shift+arrow extends the selection.
    """

    ATTRIBUTES = LISTBOX_ATTRIBUTES

    DEFAULT_CSS = """
    Listbox {
        height: auto;
        max-height: 12;
        border: round $surface-lighten-2;
        border-title-align: left;
    }
    Listbox:focus {
        border: round $accent;
        border-title-color: $accent;
    }
    """

    class Selected(Message):
        """An option became selected."""

        def __init__(self, listbox: Listbox, option: Option) -> None:
            super().__init__()
            self.listbox = listbox
            self.option = option
            self.selected = True

        @property
        def control(self) -> Listbox:
            return self.listbox

    class Unselected(Message):
        """An option was deselected."""

        def __init__(self, listbox: Listbox, option: Option) -> None:
            super().__init__()
            self.listbox = listbox
            self.option = option
            self.selected = False

        @property
        def control(self) -> Listbox:
            return self.listbox

    class Changed(Message):
        """The selection changed. ``selected`` holds every selected value."""

        def __init__(self, listbox: Listbox, selected: list[str]) -> None:
            super().__init__()
            self.listbox = listbox
            self.selected = selected

        @property
        def control(self) -> Listbox:
            return self.listbox

    class FocusChanged(Message):
        """The highlighted option changed, or the highlight was cleared."""

        def __init__(self, listbox: Listbox, option: Option | None) -> None:
            super().__init__()
            self.listbox = listbox
            self.option = option

        @property
        def control(self) -> Listbox:
            return self.listbox

    def __init__(
        self,
        *options: Option,
        name: str = "",
        label: str = "",
        multiple: bool = False,
        disabled: bool = False,
        skip: str | None = None,
        value: str | None = None,
        hover_focus: bool = True,
        focus_only: bool = False,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        # focus_only: single mode where arrows move the highlight and Enter commits
        self._setup_option_list(options, hover_focus=hover_focus, focus_only=focus_only)
        apply_attributes(
            self,
            self.ATTRIBUTES,
            {
                "name": name,
                "label": label,
                "multiple": multiple,
                "disabled": disabled,
                "skip": skip,
                "value": value,
            },
        )

    def compose(self) -> ComposeResult:
        yield from self._make_option_widgets()

    def on_mount(self) -> None:
        self.border_title = self.label or None
        if self.initial_value:
            self.controller.select_value(self.initial_value)
        self.sync_options()

    def on_key(self, event: events.Key) -> None:
        self._forward_key(event)

    def on_focus(self, event: events.Focus) -> None:
        if self.controller.focused_item is not None:
            return
        selected = self.controller.selected_items
        if selected:
            self.controller.set_focus(selected[0])
        else:
            self.controller.focus_first()

    def on_blur(self, event: events.Blur) -> None:
        self.controller.focus_blur()
