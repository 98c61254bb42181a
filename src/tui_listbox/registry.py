"""Widget registry mapping kind names to widget classes."""

from __future__ import annotations

from typing import Any


class WidgetRegistry:
    """An explicit registry; nothing is registered globally."""

    def __init__(self) -> None:
        self._classes: dict[str, type] = {}

    def register(self, kind: str, cls: type) -> bool:
        """Register *cls* under *kind* if the name is free.

        Returns False (and keeps the existing class) when *kind* is taken.
        """
        if kind in self._classes:
            return False
        self._classes[kind] = cls
        return True

    def get(self, kind: str) -> type:
        try:
            return self._classes[kind]
        except KeyError:
            raise KeyError(f"Unknown widget kind: {kind!r}") from None

    def create(self, kind: str, *args: Any, **kwargs: Any) -> Any:
        return self.get(kind)(*args, **kwargs)

    def kinds(self) -> list[str]:
        return list(self._classes)

    def __contains__(self, kind: object) -> bool:
        return kind in self._classes


def default_registry() -> WidgetRegistry:
    """A fresh registry with the bundled widgets."""
    from tui_listbox.widgets.combobox import Combobox
    from tui_listbox.widgets.listbox import Listbox

    registry = WidgetRegistry()
    registry.register("listbox", Listbox)
    registry.register("combobox", Combobox)
    return registry
