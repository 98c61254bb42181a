"""Tests for project configuration and settings."""

from pathlib import Path

from tui_listbox.config import load_config, load_settings, save_config, widget_kwargs
from tui_listbox.demo_data import build_demo_config
from tui_listbox.models import ListDef, Option, ProjectConfig


class TestLoadConfig:
    def test_load_nonexistent(self, tmp_path):
        config = load_config(tmp_path)
        assert len(config.lists) == 1
        assert config.lists[0].id == "fruit"

    def test_load_existing(self, tmp_path):
        config_dir = tmp_path / ".tui-listbox"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text(
            """
[project]
name = "Groceries"

[[lists]]
id = "veg"
kind = "listbox"
label = "Vegetables"
multiple = true
skip = "[archived]"

  [[lists.options]]
  value = "carrot"
  label = "Carrot"
  selected = true

  [[lists.options]]
  value = "leek"
  disabled = true
  data = { archived = "yes" }

[[lists]]
kind = "combobox"
placeholder = "Search"
options = ["red", "green"]
""",
            encoding="utf-8",
        )
        config = load_config(tmp_path)
        assert config.name == "Groceries"
        assert [l.id for l in config.lists] == ["veg", "list-2"]

        veg = config.get_list("veg")
        assert veg.attributes == {"label": "Vegetables", "multiple": True, "skip": "[archived]"}
        carrot, leek = veg.options
        assert carrot.label == "Carrot" and carrot.selected
        assert leek.label == "leek" and leek.disabled
        assert leek.data == {"archived": "yes"}

        combo = config.lists[1]
        assert combo.kind == "combobox"
        assert combo.attributes == {"placeholder": "Search"}
        assert [o.value for o in combo.options] == ["red", "green"]

    def test_load_invalid_toml(self, tmp_path):
        config_dir = tmp_path / ".tui-listbox"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("[[[ not toml", encoding="utf-8")
        config = load_config(tmp_path)
        assert config.lists[0].id == "fruit"


class TestSaveConfig:
    def test_save_and_reload(self, tmp_path):
        config = ProjectConfig(
            name="Saved",
            lists=[
                ListDef(
                    id="pets",
                    attributes={"label": "Pets", "multiple": True, "value": None},
                    options=[
                        Option(value="cat", label="Cat", selected=True),
                        Option(value="dog", hidden=True, data={"kind": "loud"}),
                    ],
                )
            ],
        )
        save_config(tmp_path, config)
        assert (tmp_path / ".tui-listbox" / "config.toml").exists()

        loaded = load_config(tmp_path)
        assert loaded.name == "Saved"
        pets = loaded.get_list("pets")
        assert pets.attributes == {"label": "Pets", "multiple": True}
        cat, dog = pets.options
        assert (cat.value, cat.label, cat.selected) == ("cat", "Cat", True)
        assert dog.hidden and dog.data == {"kind": "loud"}

    def test_demo_config_survives_save(self, tmp_path):
        save_config(tmp_path, build_demo_config("Demo"))
        loaded = load_config(tmp_path)
        assert [l.id for l in loaded.lists] == ["fruit", "toppings", "country"]
        assert loaded.get_list("toppings").attributes["skip"] == "[archived]"


class TestSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings["hover_focus"] is True
        assert settings["combobox"]["close_on_select"] is True
        assert settings["log_level"] == "WARNING"

    def test_project_override_merges(self, tmp_path):
        config_dir = tmp_path / ".tui-listbox"
        config_dir.mkdir()
        (config_dir / "settings.yaml").write_text(
            "hover_focus: false\ncombobox:\n  close_on_select: false\n",
            encoding="utf-8",
        )
        settings = load_settings(tmp_path)
        assert settings["hover_focus"] is False
        assert settings["combobox"]["close_on_select"] is False
        assert settings["log_level"] == "WARNING"

    def test_broken_override_ignored(self, tmp_path):
        config_dir = tmp_path / ".tui-listbox"
        config_dir.mkdir()
        (config_dir / "settings.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        assert load_settings(tmp_path)["hover_focus"] is True

    def test_widget_kwargs(self):
        settings = {"hover_focus": False, "combobox": {"close_on_select": False}}
        assert widget_kwargs(settings, "listbox") == {"hover_focus": False}
        assert widget_kwargs(settings, "combobox") == {
            "hover_focus": False,
            "close_on_select": False,
        }
