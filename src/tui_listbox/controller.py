"""Option list interaction controller.

Turns a host and its options into a keyboard-navigable single- or
multi-select list with virtual focus. The controller keeps no copy of the
option list: every operation asks the item provider again, so options may be
added, removed, hidden or disabled between calls.

Errors in the operands (``None``, options that belong to another list,
disabled options, a focused option that has since disappeared) are logged and
turned into no-ops. Nothing here raises for them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Sequence

from tui_listbox.models import KeyPress, Option, SelectionMode, SelectionResult, is_option_handle
from tui_listbox.provider import ItemProvider, OptionHost, SkipPredicate

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[SelectionResult], None]
FocusCallback = Callable[[Option | None], None]

# key -> (focus action, select action)
_MOVES: dict[str, tuple[str, str]] = {
    "down": ("focus_next", "select_next"),
    "up": ("focus_prev", "select_prev"),
    "home": ("focus_first", "select_first"),
    "end": ("focus_last", "select_last"),
}

_COMMIT_KEYS = frozenset({"space", "enter"})

# DOM-style key names, accepted for hosts that are not Textual widgets
_KEY_ALIASES: dict[str, str] = {
    "arrowdown": "down",
    "arrowup": "up",
    " ": "space",
    "return": "enter",
}


# ── Pure helpers ────────────────────────────────────────────────


def index_of(items: Sequence[Any], item: Any) -> int:
    """Identity-based index of *item* in *items*, or -1."""
    for i, candidate in enumerate(items):
        if candidate is item:
            return i
    return -1


def first_item(items: Sequence[Option]) -> Option | None:
    return items[0] if items else None


def last_item(items: Sequence[Option]) -> Option | None:
    return items[-1] if items else None


def next_item(items: Sequence[Option], current: Option | None) -> Option | None:
    """The item after *current*, wrapping to the first one."""
    if not items:
        return None
    if current is None:
        return items[0]
    idx = index_of(items, current)
    return items[(idx + 1) % len(items)]


def prev_item(items: Sequence[Option], current: Option | None) -> Option | None:
    """The item before *current*, wrapping to the last one."""
    if not items:
        return None
    if current is None:
        return items[-1]
    idx = index_of(items, current)
    if idx < 0:
        return items[-1]
    return items[(idx - 1) % len(items)]


def selected_items(items: Sequence[Option]) -> list[Option]:
    return [item for item in items if item.selected]


def selected_values(items: Sequence[Option]) -> list[str]:
    return [item.value for item in items if item.selected and item.value]


def compute_selection(
    item: Option,
    items: Sequence[Option],
    focused: Option | None,
    mode: SelectionMode,
    options: Sequence[Option] | None = None,
) -> SelectionResult:
    """Work out what selecting *item* means in *mode*, without mutating anything.

    In the exclusive modes every other selected entry of *options* (all of
    the host's options, eligible or not) is deselected, so an option hidden
    by a filter cannot stay selected next to the new one. Without *options*
    only *items* are considered.
    """
    if mode is SelectionMode.MULTIPLE:
        return SelectionResult(
            item=item,
            items_to_deselect=(),
            should_toggle=True,
            new_focus_target=focused,
        )
    return SelectionResult(
        item=item,
        items_to_deselect=tuple(
            i for i in selected_items(items if options is None else options) if i is not item
        ),
        should_toggle=False,
        new_focus_target=item,
    )


# ── Controller ──────────────────────────────────────────────────


class OptionListController:
    """Navigation, virtual focus and selection over one host's options."""

    def __init__(
        self,
        host: OptionHost,
        mode: SelectionMode = SelectionMode.SINGLE,
        *,
        provider: ItemProvider | None = None,
        skip: SkipPredicate | None = None,
        on_selection_changed: SelectionCallback | None = None,
        on_focus_changed: FocusCallback | None = None,
    ) -> None:
        self.host = host
        self.provider = provider or ItemProvider()
        self.skip = skip
        self.on_selection_changed = on_selection_changed
        self.on_focus_changed = on_focus_changed
        self._mode = mode
        self._focused: Option | None = None

    # -- Queries --

    @property
    def items(self) -> list[Option]:
        """Eligible options, freshly queried."""
        return self.provider.query(self.host, self.skip)

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    @mode.setter
    def mode(self, mode: SelectionMode) -> None:
        """Switching modes clears the selection and the focus."""
        self.set_mode(mode)

    def set_mode(self, mode: SelectionMode, *, reset: bool = True) -> None:
        if mode is self._mode:
            return
        self._mode = mode
        if reset:
            self.reset()

    @property
    def multiple(self) -> bool:
        return self._mode is SelectionMode.MULTIPLE

    @property
    def selected_items(self) -> list[Option]:
        return selected_items(self.items)

    @property
    def selected_values(self) -> list[str]:
        return selected_values(self.items)

    @property
    def value(self) -> str | list[str] | None:
        """First selected value, or every selected value in multiple mode."""
        values = self.selected_values
        if self.multiple:
            return values
        return values[0] if values else None

    @property
    def focused_item(self) -> Option | None:
        """The virtually focused option, re-validated against the provider."""
        return self._current_focus(self.items)

    def revalidate(self) -> Option | None:
        """Drop a focus pointer that went stale; return the valid focus, if any."""
        return self._current_focus(self.items)

    def _current_focus(self, items: Sequence[Option]) -> Option | None:
        focused = self._focused
        if focused is None:
            return None
        if index_of(items, focused) >= 0:
            return focused
        logger.debug("Focused option %r is no longer eligible; clearing focus", focused)
        self._clear_focus()
        return None

    # -- Focus --

    def set_focus(self, item: Option | None) -> Option | None:
        """Give *item* virtual focus. Real input focus stays on the host."""
        if item is None:
            return None
        if index_of(self.items, item) < 0:
            logger.debug("Ignoring focus request for ineligible option %r", item)
            return None
        return self._move_focus(item)

    def focus_first(self) -> Option | None:
        items = self.items
        self._current_focus(items)
        return self._move_focus(first_item(items))

    def focus_last(self) -> Option | None:
        items = self.items
        self._current_focus(items)
        return self._move_focus(last_item(items))

    def focus_next(self) -> Option | None:
        items = self.items
        return self._move_focus(next_item(items, self._current_focus(items)))

    def focus_prev(self) -> Option | None:
        items = self.items
        return self._move_focus(prev_item(items, self._current_focus(items)))

    def focus_blur(self) -> None:
        """Drop virtual focus without moving it anywhere. Always notifies once."""
        self._clear_focus()

    def _move_focus(self, item: Option | None) -> Option | None:
        if item is None:
            return None
        previous = self._focused
        if previous is not None and previous is not item:
            previous.focused = False
        item.focused = True
        self._focused = item
        self._emit_focus(item)
        return item

    def _clear_focus(self) -> None:
        previous = self._focused
        self._focused = None
        if previous is not None:
            previous.focused = False
        self._emit_focus(None)

    # -- Selection --

    def select(self, item: Option | None) -> SelectionResult | None:
        """Select *item* (single modes) or toggle it (multiple mode).

        Returns the applied :class:`SelectionResult`, or ``None`` if the
        request was ignored.
        """
        if item is None:
            return None
        if is_option_handle(item) and item.disabled:
            logger.warning("Attempted to select disabled option %r", item)
            return None
        items = self.items
        if index_of(items, item) < 0:
            logger.error("Attempted to select option not in this list: %r", item)
            return None

        result = compute_selection(
            item, items, self._current_focus(items), self._mode, self.host.options
        )

        for other in result.items_to_deselect:
            other.selected = False
        if result.should_toggle:
            item.selected = not item.selected
        else:
            item.selected = True
            self._move_focus(result.new_focus_target)

        result = replace(result, selected=item.selected)
        if self.on_selection_changed is not None:
            self.on_selection_changed(result)
        return result

    def select_focused(self) -> SelectionResult | None:
        return self.select(self.focused_item)

    def select_first(self) -> SelectionResult | None:
        return self.select(first_item(self.items))

    def select_last(self) -> SelectionResult | None:
        return self.select(last_item(self.items))

    def select_next(self) -> SelectionResult | None:
        items = self.items
        return self.select(next_item(items, self._current_focus(items)))

    def select_prev(self) -> SelectionResult | None:
        items = self.items
        return self.select(prev_item(items, self._current_focus(items)))

    def select_value(self, value: str) -> SelectionResult | None:
        """Select the option carrying *value* unless it already is selected."""
        for item in self.items:
            if item.value == value:
                return None if item.selected else self.select(item)
        logger.debug("No eligible option with value %r", value)
        return None

    def reset(self) -> None:
        """Clear every selection and the focus. Fires no callbacks."""
        for option in self.host.options:
            option.selected = False
        if self._focused is not None:
            self._focused.focused = False
            self._focused = None

    # -- Input --

    def handle_key(self, press: KeyPress) -> bool:
        """Apply one keydown. Returns True if the key was consumed."""
        if press.is_modifier_only or press.ctrl or press.alt or press.meta:
            return False
        key = _KEY_ALIASES.get(press.key.lower(), press.key.lower())

        if key in _COMMIT_KEYS:
            self.select_focused()
        elif key in _MOVES:
            focus_action, select_action = _MOVES[key]
            if self._mode is SelectionMode.SINGLE:
                getattr(self, select_action)()
            else:
                getattr(self, focus_action)()
                if self._mode is SelectionMode.MULTIPLE and press.shift:
                    self.select_focused()
        else:
            return False

        press.prevent_default()
        press.stop()
        return True

    def hover(self, item: Option | None) -> None:
        """Pointer entered *item*: give it virtual focus."""
        if item is None or item.disabled:
            return
        items = self.items
        if index_of(items, item) < 0:
            return
        if self._current_focus(items) is not item:
            self._move_focus(item)

    def unhover(self, item: Option | None) -> None:
        """Pointer left *item*: drop focus if it still holds it."""
        if item is not None and not item.disabled and self._focused is item:
            self.focus_blur()

    def click(self, item: Option | None) -> SelectionResult | None:
        """Pointer clicked *item*. In multiple mode focus moves there first."""
        if item is None or not is_option_handle(item) or item.disabled:
            return None
        if self.multiple:
            self.set_focus(item)
        return self.select(item)

    def _emit_focus(self, item: Option | None) -> None:
        if self.on_focus_changed is not None:
            self.on_focus_changed(item)
