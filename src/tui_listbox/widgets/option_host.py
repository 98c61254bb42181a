"""Option widgets and the plumbing shared by every list host."""

from __future__ import annotations

from typing import Any, Iterable

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widgets import Static

from tui_listbox.attributes import AttributeSpec, apply_attribute
from tui_listbox.controller import OptionListController
from tui_listbox.models import KeyPress, Option, SelectionMode, SelectionResult
from tui_listbox.provider import SkipPredicate, parse_skip_selector


class ListboxOption(Static):
    """Renders one Option and reports pointer activity to its host."""

    DEFAULT_CSS = """
    ListboxOption {
        width: 100%;
        height: 1;
        padding: 0 1;
    }
    ListboxOption.-focused {
        background: $accent;
        color: $text;
    }
    ListboxOption.-selected {
        text-style: bold;
    }
    ListboxOption.-disabled {
        color: $text-muted;
        text-style: italic;
    }
    """

    class PointerEntered(Message):
        def __init__(self, item: ListboxOption) -> None:
            super().__init__()
            self.item = item

    class PointerLeft(Message):
        def __init__(self, item: ListboxOption) -> None:
            super().__init__()
            self.item = item

    class Clicked(Message):
        def __init__(self, item: ListboxOption) -> None:
            super().__init__()
            self.item = item

    def __init__(self, option: Option, *, multiple: bool = False) -> None:
        super().__init__(id=option.id)
        self.option = option
        self.sync(multiple)

    def sync(self, multiple: bool = False) -> None:
        """Mirror the option's flags into classes and content."""
        opt = self.option
        if multiple:
            mark = "[x]" if opt.selected else "[ ]"
        else:
            mark = "●" if opt.selected else " "
        self.update(Text(f"{mark} {opt.label}"))
        self.set_class(opt.selected, "-selected")
        self.set_class(opt.focused, "-focused")
        self.set_class(opt.disabled, "-disabled")
        self.display = not opt.hidden

    def on_enter(self, event: events.Enter) -> None:
        self.post_message(self.PointerEntered(self))

    def on_leave(self, event: events.Leave) -> None:
        self.post_message(self.PointerLeft(self))

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Clicked(self))


class OptionListHost:
    """Mixin for Textual widgets that own an option list.

    The host subclass defines the ``Selected``, ``Unselected``, ``Changed``
    and ``FocusChanged`` messages; this mixin posts them in the order
    consumers rely on and keeps the option widgets in sync.
    """

    ATTRIBUTES: dict[str, AttributeSpec] = {}
    FOCUS_ONLY_SINGLE = False

    form_name: str
    label: str
    multiple: bool
    skip: str | None
    initial_value: str | None

    def _setup_option_list(
        self,
        options: Iterable[Option],
        *,
        hover_focus: bool = True,
        focus_only: bool | None = None,
    ) -> None:
        self._focus_only = self.FOCUS_ONLY_SINGLE if focus_only is None else focus_only
        self._option_models: list[Option] = list(options)
        self._option_widgets: dict[str, ListboxOption] = {}
        self.form_name = ""
        self.label = ""
        self.multiple = False
        self.skip = None
        self.initial_value = None
        self.hover_focus = hover_focus
        self.active_descendant: str | None = None
        self.controller = OptionListController(
            self,
            SelectionMode.from_flag(False, focus_only=self._focus_only),
            skip=self._build_skip(),
            on_selection_changed=self._handle_selection_changed,
            on_focus_changed=self._handle_focus_changed,
        )

    # -- Item provider contract --

    @property
    def options(self) -> list[Option]:
        """Every option, eligible or not, in display order."""
        return list(self._option_models)

    # -- Attributes --

    def set_attribute(self, name: str, raw: Any) -> Any:
        return apply_attribute(self, self.ATTRIBUTES, name, raw)

    def attribute_changed(self, name: str, old: Any, new: Any) -> None:
        if name == "label":
            if self.is_mounted:
                self.border_title = new or None
        elif name == "multiple":
            # before mount the options still carry their declared flags
            self.controller.set_mode(
                SelectionMode.from_flag(bool(new), focus_only=self._focus_only),
                reset=self.is_mounted,
            )
            self.active_descendant = None
            self.set_class(bool(new), "-multiple")
            self.sync_options()
        elif name == "skip":
            self.controller.skip = self._build_skip()
        elif name == "disabled":
            if new:
                self.controller.focus_blur()
        elif name == "value":
            if new and self.is_mounted:
                self.controller.select_value(new)

    def _build_skip(self) -> SkipPredicate | None:
        return parse_skip_selector(getattr(self, "skip", None))

    # -- Form value --

    @property
    def value(self) -> str | list[str] | None:
        return self.controller.value

    @property
    def selected_values(self) -> list[str]:
        return self.controller.selected_values

    @property
    def selected_items(self) -> list[Option]:
        return self.controller.selected_items

    @property
    def focused_option(self) -> Option | None:
        return self.controller.focused_item

    def form_value(self) -> str | list[tuple[str, str]] | None:
        """What a form would submit: nothing, one value, or name/value pairs."""
        values = self.selected_values
        if not values:
            return None
        if len(values) == 1:
            return values[0]
        return [(self.form_name, v) for v in values]

    def reset(self) -> None:
        """Form reset: clear selection and focus without posting messages."""
        self.controller.reset()
        self.active_descendant = None
        self.sync_options()

    def select_option(self, option: Option | None) -> SelectionResult | None:
        return self.controller.select(option)

    def select_value(self, value: str) -> SelectionResult | None:
        return self.controller.select_value(value)

    # -- Option widgets --

    def _make_option_widgets(self) -> list[ListboxOption]:
        widgets = [ListboxOption(o, multiple=self.multiple) for o in self._option_models]
        self._option_widgets = {w.option.id: w for w in widgets}
        return widgets

    def _option_container(self) -> Any:
        return self

    def add_option(self, option: Option) -> Any:
        """Append *option*; returns the awaitable from mounting its widget."""
        self._option_models.append(option)
        widget = ListboxOption(option, multiple=self.multiple)
        self._option_widgets[option.id] = widget
        return self._option_container().mount(widget)

    def remove_option(self, option: Option) -> None:
        self._option_models = [o for o in self._option_models if o is not option]
        widget = self._option_widgets.pop(option.id, None)
        if widget is not None:
            widget.remove()
        self.controller.revalidate()

    def clear_options(self) -> None:
        for option in list(self._option_models):
            self.remove_option(option)

    def sync_options(self) -> None:
        for option in self._option_models:
            widget = self._option_widgets.get(option.id)
            if widget is not None:
                widget.sync(self.multiple)

    # -- Controller callbacks --

    def _handle_selection_changed(self, result: SelectionResult) -> None:
        for option in result.items_to_deselect:
            self.post_message(self.Unselected(self, option))
        if result.selected:
            self.post_message(self.Selected(self, result.item))
        else:
            self.post_message(self.Unselected(self, result.item))
        self.post_message(self.Changed(self, self.controller.selected_values))
        self.sync_options()

    def _handle_focus_changed(self, option: Option | None) -> None:
        self.active_descendant = option.id if option is not None else None
        self.post_message(self.FocusChanged(self, option))
        self.sync_options()
        if option is not None:
            widget = self._option_widgets.get(option.id)
            if widget is not None and widget.is_mounted:
                widget.scroll_visible()

    # -- Input forwarding --

    def _forward_key(self, event: events.Key) -> bool:
        press = KeyPress.parse(event.key)
        if self.controller.handle_key(press):
            event.prevent_default()
            event.stop()
            return True
        return False

    def on_listbox_option_pointer_entered(self, message: ListboxOption.PointerEntered) -> None:
        message.stop()
        if self.hover_focus and not self.disabled:
            self.controller.hover(message.item.option)

    def on_listbox_option_pointer_left(self, message: ListboxOption.PointerLeft) -> None:
        message.stop()
        if self.hover_focus and not self.disabled:
            self.controller.unhover(message.item.option)

    def on_listbox_option_clicked(self, message: ListboxOption.Clicked) -> None:
        message.stop()
        if not self.disabled:
            self.controller.click(message.item.option)
