"""Data models for tui-listbox."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class TuiListboxError(Exception):
    """Base class for configuration and programming errors."""


class SelectionMode(Enum):
    """How a list reacts to selection and arrow keys."""

    SINGLE = "single"
    MULTIPLE = "multiple"
    SINGLE_FOCUS = "single-focus"  # single selection, arrows only move focus

    @property
    def exclusive(self) -> bool:
        return self is not SelectionMode.MULTIPLE

    @classmethod
    def from_flag(cls, multiple: bool, *, focus_only: bool = False) -> SelectionMode:
        if multiple:
            return cls.MULTIPLE
        return cls.SINGLE_FOCUS if focus_only else cls.SINGLE


@runtime_checkable
class OptionHandle(Protocol):
    """Anything the controller can select and focus."""

    value: str | None
    selected: bool
    focused: bool
    disabled: bool
    hidden: bool


def is_option_handle(obj: Any) -> bool:
    """Return True if *obj* can be used as an option."""
    return obj is not None and isinstance(obj, OptionHandle)


@dataclass(eq=False)
class Option:
    """A single selectable entry. Compared by identity, like a DOM node."""

    value: str | None = None
    label: str = ""
    selected: bool = False
    focused: bool = False
    disabled: bool = False
    hidden: bool = False
    data: dict[str, str] = field(default_factory=dict)
    id: str = field(default_factory=lambda: f"option-{uuid.uuid4().hex[:8]}")

    def __post_init__(self) -> None:
        if not self.label:
            self.label = self.value or ""

    def __repr__(self) -> str:
        flags = "".join(
            ch for ch, on in (
                ("S", self.selected),
                ("F", self.focused),
                ("D", self.disabled),
                ("H", self.hidden),
            ) if on
        )
        return f"Option({self.value!r}{', ' + flags if flags else ''})"


@dataclass(frozen=True)
class SelectionResult:
    """The computed effect of one select() call.

    ``selected`` is the final state of ``item`` once the result has been
    applied; it is ``None`` on a result that has not been applied yet.
    """

    item: Any
    items_to_deselect: tuple[Any, ...] = ()
    should_toggle: bool = False
    new_focus_target: Any = None
    selected: bool | None = None


MODIFIER_KEYS = frozenset({"shift", "ctrl", "alt", "meta", "super", "hyper"})


@dataclass
class KeyPress:
    """A keydown, independent of any UI toolkit.

    ``key`` uses Textual key names (``down``, ``up``, ``home``, ``end``,
    ``space``, ``enter``); modifiers are split out into flags.
    """

    key: str
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False
    default_prevented: bool = False
    propagation_stopped: bool = False

    @classmethod
    def parse(cls, key: str) -> KeyPress:
        """Build a KeyPress from a Textual key string such as ``shift+down``."""
        parts = key.split("+")
        name = parts[-1]
        mods = {p.lower() for p in parts[:-1]}
        return cls(
            key=name,
            shift="shift" in mods,
            ctrl="ctrl" in mods,
            alt="alt" in mods,
            meta="meta" in mods or "super" in mods,
        )

    @property
    def is_modifier_only(self) -> bool:
        return self.key.lower() in MODIFIER_KEYS

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop(self) -> None:
        self.propagation_stopped = True


@dataclass
class ListDef:
    """A list declared in the project config."""

    id: str
    kind: str = "listbox"
    attributes: dict[str, Any] = field(default_factory=dict)
    options: list[Option] = field(default_factory=list)


@dataclass
class ProjectConfig:
    """Contents of .tui-listbox/config.toml."""

    name: str = ""
    lists: list[ListDef] = field(default_factory=list)

    def ensure_default_list(self) -> None:
        """Add a sample list if none is configured."""
        if self.lists:
            return
        self.lists.append(
            ListDef(
                id="fruit",
                kind="listbox",
                attributes={"name": "fruit", "label": "Fruit"},
                options=[
                    Option(value="apple", label="Apple"),
                    Option(value="banana", label="Banana"),
                    Option(value="orange", label="Orange"),
                ],
            )
        )

    def get_list(self, list_id: str) -> ListDef | None:
        for list_def in self.lists:
            if list_def.id == list_id:
                return list_def
        return None
