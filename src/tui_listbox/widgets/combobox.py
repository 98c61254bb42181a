"""Combobox widget: a filter input over a popup option list."""

from __future__ import annotations

from typing import Any

from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Input, Static

from tui_listbox.attributes import COMBOBOX_ATTRIBUTES, apply_attributes
from tui_listbox.matching import fuzzy_match
from tui_listbox.models import Option, SelectionResult
from tui_listbox.provider import SkipPredicate, parse_skip_selector
from tui_listbox.widgets.option_host import OptionListHost

MATCH_KEY = "match"
_NO_MATCH = parse_skip_selector(f"[{MATCH_KEY}='false']")


class ComboboxPopup(VerticalScroll, can_focus=False):
    """Popup holding the option widgets. Never takes focus from the input."""


class Combobox(OptionListHost, Vertical):
    """Type to filter, Up/Down to browse, Enter to choose.

    Browsing never commits a value: arrows only move the highlight, even in
    single mode. In single mode choosing an option closes the popup and
    writes its label into the input.
    """

    ATTRIBUTES = COMBOBOX_ATTRIBUTES
    FOCUS_ONLY_SINGLE = True

    DEFAULT_CSS = """
    Combobox {
        height: auto;
        border: round $surface-lighten-2;
        border-title-align: left;
    }
    Combobox:focus-within {
        border: round $accent;
        border-title-color: $accent;
    }
    Combobox #combobox-selection {
        height: auto;
        color: $text-muted;
        display: none;
    }
    Combobox.-multiple #combobox-selection {
        display: block;
    }
    Combobox ComboboxPopup {
        height: auto;
        max-height: 10;
        display: none;
    }
    Combobox.-open ComboboxPopup {
        display: block;
    }
    """

    class Selected(Message):
        """An option became selected."""

        def __init__(self, combobox: Combobox, option: Option) -> None:
            super().__init__()
            self.combobox = combobox
            self.option = option
            self.selected = True

        @property
        def control(self) -> Combobox:
            return self.combobox

    class Unselected(Message):
        """An option was deselected."""

        def __init__(self, combobox: Combobox, option: Option) -> None:
            super().__init__()
            self.combobox = combobox
            self.option = option
            self.selected = False

        @property
        def control(self) -> Combobox:
            return self.combobox

    class Changed(Message):
        """The selection changed. ``selected`` holds every selected value."""

        def __init__(self, combobox: Combobox, selected: list[str]) -> None:
            super().__init__()
            self.combobox = combobox
            self.selected = selected

        @property
        def control(self) -> Combobox:
            return self.combobox

    class FocusChanged(Message):
        """The highlighted option changed, or the highlight was cleared."""

        def __init__(self, combobox: Combobox, option: Option | None) -> None:
            super().__init__()
            self.combobox = combobox
            self.option = option

        @property
        def control(self) -> Combobox:
            return self.combobox

    def __init__(
        self,
        *options: Option,
        name: str = "",
        label: str = "",
        multiple: bool = False,
        disabled: bool = False,
        skip: str | None = None,
        value: str | None = None,
        placeholder: str = "",
        size: int | None = None,
        hover_focus: bool = True,
        close_on_select: bool = True,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.placeholder = ""
        self.input_size: int | None = None
        self.close_on_select = close_on_select
        self._synced_text = ""
        self._input: Input | None = None
        self._summary: Static | None = None
        self._setup_option_list(options, hover_focus=hover_focus)
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
                "placeholder": placeholder,
                "size": size,
            },
        )

    def compose(self) -> ComposeResult:
        self._summary = Static("", id="combobox-selection")
        self._input = Input(placeholder=self.placeholder, id="combobox-input")
        yield self._summary
        yield self._input
        with ComboboxPopup(id="combobox-popup"):
            yield from self._make_option_widgets()

    def on_mount(self) -> None:
        self.border_title = self.label or None
        self._apply_size()
        if self.initial_value:
            self.controller.select_value(self.initial_value)
        self.sync_options()
        self._sync_input_from_selection()

    # -- Attributes --

    def attribute_changed(self, name: str, old: Any, new: Any) -> None:
        super().attribute_changed(name, old, new)
        if self._input is None:
            return
        if name == "placeholder":
            self._input.placeholder = new
        elif name == "size":
            self._apply_size()
        elif name == "multiple":
            self._sync_input_from_selection()

    def _apply_size(self) -> None:
        if self.input_size and self._input is not None:
            self._input.styles.width = self.input_size + 4

    def _build_skip(self) -> SkipPredicate | None:
        user_skip = parse_skip_selector(getattr(self, "skip", None))
        if user_skip is None:
            return _NO_MATCH
        return lambda option: _NO_MATCH(option) or user_skip(option)

    # -- Popup --

    @property
    def expanded(self) -> bool:
        return self.has_class("-open")

    def show_popup(self) -> None:
        if self.disabled:
            return
        self.add_class("-open")

    def hide_popup(self) -> None:
        self.remove_class("-open")
        self.controller.focus_blur()

    # -- Filtering --

    def filter_options(self, query: str = "") -> None:
        """Mark options matching *query*; the rest leave the eligible sequence."""
        needle = query.strip().lower()
        for option in self._option_models:
            matched = not needle or fuzzy_match(needle, option.label.lower())
            option.data[MATCH_KEY] = "true" if matched else "false"
        self.controller.revalidate()
        self.sync_options()

    def _is_visible(self, option: Option) -> bool:
        return not option.hidden and option.data.get(MATCH_KEY) != "false"

    def sync_options(self) -> None:
        for option in self._option_models:
            widget = self._option_widgets.get(option.id)
            if widget is not None:
                widget.sync(self.multiple)
                widget.display = self._is_visible(option)

    def _option_container(self) -> ComboboxPopup:
        return self.query_one("#combobox-popup", ComboboxPopup)

    # -- Input text --

    def _sync_input_from_selection(self) -> None:
        # runs from on_mount too, before is_mounted turns true
        if self._input is None or self._summary is None:
            return
        selected = self.controller.selected_items
        if self.multiple:
            self._summary.update(", ".join(o.label for o in selected))
            self._synced_text = ""
        else:
            self._summary.update("")
            self._synced_text = selected[0].label if selected else ""
        self._input.value = self._synced_text

    def _restore_input(self) -> None:
        """Put the input back in sync with the selection and drop the filter."""
        self._sync_input_from_selection()
        self.filter_options("")

    # -- Controller callbacks --

    def _handle_selection_changed(self, result: SelectionResult) -> None:
        super()._handle_selection_changed(result)
        self._sync_input_from_selection()
        if not self.multiple and self.close_on_select:
            self.filter_options("")
            self.hide_popup()

    def _handle_focus_changed(self, option: Option | None) -> None:
        super()._handle_focus_changed(option)
        if option is not None:
            self.show_popup()

    # -- Events --

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        if not self.is_mounted:
            return
        if event.value == self._synced_text:
            # text we wrote ourselves; not a search
            self.filter_options("")
            return
        self.filter_options(event.value)
        if event.value:
            self.show_popup()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.controller.select_focused()

    def on_key(self, event: events.Key) -> None:
        if self.disabled:
            return
        if event.key == "escape":
            if self.expanded:
                event.prevent_default()
                event.stop()
                self.hide_popup()
                self._restore_input()
            return
        # Home/End/Space stay with the text input
        if event.key in ("up", "down", "shift+up", "shift+down"):
            self._forward_key(event)

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        self.show_popup()

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        self.hide_popup()
        self._restore_input()
