"""Attribute reflection: declarative attribute -> property tables.

Each host declares which attributes it understands and how raw values
(strings from a config file or command line, or native TOML values) are
coerced. One generic function applies a change and notifies the host through
its single ``attribute_changed`` handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from tui_listbox.models import TuiListboxError


class UnknownAttributeError(TuiListboxError):
    """Raised when a host is given an attribute it does not declare."""


class AttributeHost(Protocol):
    def attribute_changed(self, name: str, old: Any, new: Any) -> None: ...


_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def to_bool(raw: Any, name: str = "") -> bool:
    """Boolean attribute: presence means True, like an HTML boolean attribute."""
    if raw is None:
        return False
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return bool(raw)
    text = str(raw).strip().lower()
    if text in ("", "true", name.lower()):
        return True
    return text not in _FALSE_STRINGS


def to_str(raw: Any, name: str = "") -> str:
    return "" if raw is None else str(raw)


def to_optional_str(raw: Any, name: str = "") -> str | None:
    if raw is None:
        return None
    text = str(raw)
    return text or None


def to_int(raw: Any, name: str = "") -> int | None:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


Coercer = Callable[[Any, str], Any]


@dataclass(frozen=True)
class AttributeSpec:
    """One reflected attribute."""

    name: str
    prop: str
    coerce: Coercer = to_str


LISTBOX_ATTRIBUTES: dict[str, AttributeSpec] = {
    spec.name: spec
    for spec in (
        AttributeSpec("name", "form_name", to_str),
        AttributeSpec("label", "label", to_str),
        AttributeSpec("multiple", "multiple", to_bool),
        AttributeSpec("disabled", "disabled", to_bool),
        AttributeSpec("skip", "skip", to_optional_str),
        AttributeSpec("value", "initial_value", to_optional_str),
    )
}

COMBOBOX_ATTRIBUTES: dict[str, AttributeSpec] = {
    **LISTBOX_ATTRIBUTES,
    **{
        spec.name: spec
        for spec in (
            AttributeSpec("placeholder", "placeholder", to_str),
            AttributeSpec("size", "input_size", to_int),
        )
    },
}


def apply_attribute(
    host: AttributeHost,
    table: dict[str, AttributeSpec],
    name: str,
    raw: Any,
) -> Any:
    """Coerce *raw*, store it on the mapped property and notify *host*.

    Returns the coerced value. The host is notified even when the value did
    not change, matching attributeChangedCallback semantics.
    """
    spec = table.get(name)
    if spec is None:
        raise UnknownAttributeError(f"Unknown attribute: {name!r}")
    new = spec.coerce(raw, spec.name)
    old = getattr(host, spec.prop, None)
    setattr(host, spec.prop, new)
    host.attribute_changed(spec.name, old, new)
    return new


def apply_attributes(
    host: AttributeHost,
    table: dict[str, AttributeSpec],
    raw: dict[str, Any],
) -> None:
    """Apply several attributes in table order."""
    unknown = set(raw) - set(table)
    if unknown:
        raise UnknownAttributeError(f"Unknown attribute(s): {', '.join(sorted(unknown))}")
    for name in table:
        if name in raw:
            apply_attribute(host, table, name, raw[name])
