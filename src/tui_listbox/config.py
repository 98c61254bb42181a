"""Project configuration management using tomlkit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import tomlkit
import yaml

from tui_listbox.models import ListDef, Option, ProjectConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = ".tui-listbox"
CONFIG_FILE = "config.toml"
SETTINGS_FILE = "settings.yaml"

_LIST_KEYS = ("id", "kind", "options")
_OPTION_FLAGS = ("selected", "disabled", "hidden")


def _get_config_path(project_dir: Path) -> Path:
    return project_dir / CONFIG_DIR / CONFIG_FILE


def load_config(project_dir: Path) -> ProjectConfig:
    """Load project configuration from .tui-listbox/config.toml."""
    config_path = _get_config_path(project_dir)
    config = ProjectConfig()

    if not config_path.exists():
        config.ensure_default_list()
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        doc = tomlkit.parse(content)
    except Exception:
        logger.warning("Could not read %s; using defaults", config_path, exc_info=True)
        config.ensure_default_list()
        return config

    project_section = doc.get("project", {})
    config.name = str(project_section.get("name", ""))

    # Parse [[lists]]
    lists_data = doc.get("lists", [])
    if isinstance(lists_data, list):
        for i, list_data in enumerate(lists_data):
            if isinstance(list_data, dict):
                config.lists.append(_parse_list(list_data, i))

    config.ensure_default_list()
    return config


def _parse_list(data: dict, index: int) -> ListDef:
    """Parse a single [[lists]] table."""
    list_def = ListDef(
        id=str(data.get("id", "") or f"list-{index + 1}"),
        kind=str(data.get("kind", "listbox")),
    )
    for key, val in data.items():
        if key in _LIST_KEYS:
            continue
        list_def.attributes[str(key)] = _plain(val)

    options_data = data.get("options", [])
    if isinstance(options_data, list):
        for opt_data in options_data:
            if isinstance(opt_data, dict):
                list_def.options.append(_parse_option(opt_data))
            elif isinstance(opt_data, str):
                list_def.options.append(Option(value=str(opt_data)))
    return list_def


def _parse_option(data: dict) -> Option:
    value = data.get("value")
    option = Option(
        value=str(value) if value is not None else None,
        label=str(data.get("label", "")),
        selected=bool(data.get("selected", False)),
        disabled=bool(data.get("disabled", False)),
        hidden=bool(data.get("hidden", False)),
    )
    extra = data.get("data")
    if isinstance(extra, dict):
        option.data = {str(k): str(v) for k, v in extra.items()}
    return option


def _plain(val: Any) -> Any:
    """Unwrap tomlkit items into plain Python values."""
    unwrap = getattr(val, "unwrap", None)
    return unwrap() if callable(unwrap) else val


def save_config(project_dir: Path, config: ProjectConfig) -> None:
    """Save project configuration to .tui-listbox/config.toml."""
    config_path = _get_config_path(project_dir)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    doc = tomlkit.document()

    # [project]
    project_table = tomlkit.table()
    project_table.add("name", config.name)
    doc.add("project", project_table)

    # [[lists]]
    lists_array = tomlkit.aot()
    for list_def in config.lists:
        list_table = tomlkit.table()
        list_table.add("id", list_def.id)
        list_table.add("kind", list_def.kind)
        for key, val in list_def.attributes.items():
            if val is None:
                continue
            list_table.add(key, val)

        options_array = tomlkit.aot()
        for option in list_def.options:
            opt_table = tomlkit.table()
            if option.value is not None:
                opt_table.add("value", option.value)
            if option.label and option.label != option.value:
                opt_table.add("label", option.label)
            for flag in _OPTION_FLAGS:
                if getattr(option, flag):
                    opt_table.add(flag, True)
            if option.data:
                data_table = tomlkit.inline_table()
                for k, v in option.data.items():
                    data_table.append(k, v)
                opt_table.add("data", data_table)
            options_array.append(opt_table)
        list_table.add("options", options_array)

        lists_array.append(list_table)

    doc.add("lists", lists_array)

    config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")


# ── Settings (YAML) ─────────────────────────────────────────────

def _load_yaml(path: Path) -> dict:
    """Load a YAML file and return a dict (empty dict on error)."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except Exception:
        logger.warning("Could not read settings from %s", path, exc_info=True)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (returns a new dict)."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        elif key in result and isinstance(result[key], list) and isinstance(val, list):
            result[key] = val  # lists are replaced, not appended
        else:
            result[key] = val
    return result


def load_settings(project_dir: Path | None = None) -> dict[str, Any]:
    """Load settings from default_settings.yaml + optional project override.

    1. Load ``default_settings.yaml`` bundled with the package.
    2. If *project_dir* is given and ``{project_dir}/.tui-listbox/settings.yaml``
       exists, deep-merge it on top of the defaults.
    3. Return the merged dict.
    """
    default_path = Path(__file__).parent / "default_settings.yaml"
    data = _load_yaml(default_path)

    if project_dir is not None:
        override_path = project_dir / CONFIG_DIR / SETTINGS_FILE
        if override_path.is_file():
            override = _load_yaml(override_path)
            if override:
                data = _deep_merge(data, override)

    return data


def widget_kwargs(settings: dict[str, Any], kind: str) -> dict[str, Any]:
    """Constructor keyword arguments a widget of *kind* takes from settings."""
    kwargs: dict[str, Any] = {"hover_focus": bool(settings.get("hover_focus", True))}
    if kind == "combobox":
        combobox = settings.get("combobox", {})
        if isinstance(combobox, dict):
            kwargs["close_on_select"] = bool(combobox.get("close_on_select", True))
    return kwargs
