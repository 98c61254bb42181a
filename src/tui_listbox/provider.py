"""Item provider: the ordered sequence of eligible options for a host."""

from __future__ import annotations

import re
from typing import Callable, Iterable, Protocol, Sequence

from tui_listbox.models import Option, TuiListboxError

SkipPredicate = Callable[[Option], bool]


class InvalidSelectorError(TuiListboxError):
    """Raised when a skip selector cannot be parsed."""


class OptionHost(Protocol):
    """A host exposes every option it owns, eligible or not, in order."""

    @property
    def options(self) -> Sequence[Option]: ...


# [name], [name=value], [name='value'], [name="value"]
_SELECTOR_RE = re.compile(
    r"""^\[\s*(?P<name>[A-Za-z_][\w-]*)\s*
        (?:=\s*(?:'(?P<sq>[^']*)'|"(?P<dq>[^"]*)"|(?P<bare>[^\]\s]+))\s*)?
        \]$""",
    re.VERBOSE,
)


def _strip_data_prefix(name: str) -> str:
    return name[5:] if name.startswith("data-") else name


def _parse_one(part: str) -> SkipPredicate:
    m = _SELECTOR_RE.match(part.strip())
    if not m:
        raise InvalidSelectorError(f"Invalid skip selector: {part.strip()!r}")
    name = _strip_data_prefix(m.group("name"))
    expected = next(
        (g for g in (m.group("sq"), m.group("dq"), m.group("bare")) if g is not None),
        None,
    )
    if expected is None:
        return lambda option: name in option.data
    return lambda option: option.data.get(name) == expected


def parse_skip_selector(text: str | None) -> SkipPredicate | None:
    """Turn an attribute selector string into a skip predicate.

    Supports ``[key]`` (attribute present) and ``[key=value]`` with optional
    quotes, over ``Option.data``. A leading ``data-`` is ignored so that
    ``[data-match='false']`` and ``[match=false]`` are equivalent. Commas
    separate alternatives; an option is skipped if any alternative matches.
    """
    if text is None or not text.strip():
        return None
    predicates = [_parse_one(part) for part in text.split(",")]
    if len(predicates) == 1:
        return predicates[0]
    return lambda option: any(p(option) for p in predicates)


def is_eligible(option: Option, skip: SkipPredicate | None = None) -> bool:
    if option.hidden or option.disabled:
        return False
    return not (skip is not None and skip(option))


class ItemProvider:
    """Queries a host for its eligible options. Holds no state."""

    def query(self, host: OptionHost, skip: SkipPredicate | None = None) -> list[Option]:
        return filter_eligible(host.options, skip)


def filter_eligible(options: Iterable[Option], skip: SkipPredicate | None = None) -> list[Option]:
    return [option for option in options if is_eligible(option, skip)]
