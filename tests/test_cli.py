"""Tests for the Click entry point."""

import logging

from click.testing import CliRunner

from tui_listbox.cli import main
from tui_listbox.config import load_config
from tui_listbox.logs import PACKAGE_LOGGER, configure_logging


def test_init_creates_config(tmp_path):
    runner = CliRunner()
    result = runner.invoke(main, ["init", str(tmp_path), "--name", "Shop"])
    assert result.exit_code == 0, result.output
    assert "Created" in result.output
    config = load_config(tmp_path)
    assert config.name == "Shop"
    assert [l.id for l in config.lists] == ["fruit", "toppings", "country"]


def test_init_refuses_existing(tmp_path):
    runner = CliRunner()
    runner.invoke(main, ["init", str(tmp_path), "--name", "Shop"])
    result = runner.invoke(main, ["init", str(tmp_path), "--name", "Again"])
    assert result.exit_code == 1
    assert load_config(tmp_path).name == "Shop"


def test_run_missing_directory(tmp_path):
    runner = CliRunner()
    result = runner.invoke(main, [str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_run_on_file(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")
    result = CliRunner().invoke(main, ["run", str(target)])
    assert result.exit_code == 1
    assert "not a directory" in result.output


def _write_config(tmp_path, body):
    config_dir = tmp_path / ".tui-listbox"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(body, encoding="utf-8")


def test_run_reports_unknown_attribute(tmp_path):
    _write_config(tmp_path, '[[lists]]\nid = "x"\nbogus = 1\n')
    result = CliRunner().invoke(main, ["--log-level", "ERROR", str(tmp_path)])
    assert result.exit_code == 1
    assert "bogus" in result.output


def test_run_reports_unknown_kind(tmp_path):
    _write_config(tmp_path, '[[lists]]\nid = "x"\nkind = "slider"\n')
    result = CliRunner().invoke(main, ["--log-level", "ERROR", str(tmp_path)])
    assert result.exit_code == 1
    assert "slider" in result.output


class TestConfigureLogging:
    def teardown_method(self):
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)

    def test_level_and_file(self, tmp_path):
        log_file = tmp_path / "listbox.log"
        logger = configure_logging(level="debug", log_file=log_file, force=True)
        assert logger.level == logging.DEBUG
        logging.getLogger("tui_listbox.controller").debug("hello from controller")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from controller" in log_file.read_text(encoding="utf-8")

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("TUI_LISTBOX_LOG_LEVEL", "ERROR")
        monkeypatch.delenv("TUI_LISTBOX_LOG_FILE", raising=False)
        logger = configure_logging(force=True)
        assert logger.level == logging.ERROR
        assert len(logger.handlers) == 1

    def test_second_call_is_noop(self, monkeypatch):
        monkeypatch.delenv("TUI_LISTBOX_LOG_LEVEL", raising=False)
        monkeypatch.delenv("TUI_LISTBOX_LOG_FILE", raising=False)
        configure_logging(level="INFO", force=True)
        logger = configure_logging(level="DEBUG")
        assert logger.level == logging.INFO

    def test_unknown_level_defaults_to_warning(self, monkeypatch):
        monkeypatch.delenv("TUI_LISTBOX_LOG_FILE", raising=False)
        logger = configure_logging(level="chatty", force=True)
        assert logger.level == logging.WARNING
