"""Demo lists for --demo mode and `tui-listbox init`."""

from __future__ import annotations

from tui_listbox.models import ListDef, Option, ProjectConfig


def _options(*values: str, **flags: set[str]) -> list[Option]:
    disabled = flags.get("disabled", set())
    selected = flags.get("selected", set())
    return [
        Option(
            value=v,
            label=v.replace("-", " ").title(),
            disabled=v in disabled,
            selected=v in selected,
        )
        for v in values
    ]


def build_demo_config(name: str = "tui-listbox demo") -> ProjectConfig:
    """A project showing each widget and mode."""
    toppings = _options(
        "cheese", "mushrooms", "olives", "pineapple", "peppers",
        disabled={"pineapple"},
        selected={"cheese"},
    )
    archived = Option(value="anchovies", label="Anchovies", data={"archived": "true"})
    toppings.append(archived)

    countries = _options(
        "argentina", "australia", "austria", "belgium", "brazil", "canada",
        "denmark", "finland", "france", "germany", "iceland", "japan",
        "new-zealand", "norway", "portugal", "spain", "sweden",
    )

    return ProjectConfig(
        name=name,
        lists=[
            ListDef(
                id="fruit",
                kind="listbox",
                attributes={"name": "fruit", "label": "Fruit", "value": "banana"},
                options=_options("apple", "banana", "orange", "pear"),
            ),
            ListDef(
                id="toppings",
                kind="listbox",
                attributes={
                    "name": "toppings",
                    "label": "Toppings (multiple)",
                    "multiple": True,
                    "skip": "[archived]",
                },
                options=toppings,
            ),
            ListDef(
                id="country",
                kind="combobox",
                attributes={
                    "name": "country",
                    "label": "Country",
                    "placeholder": "Type to filter...",
                },
                options=countries,
            ),
        ],
    )
