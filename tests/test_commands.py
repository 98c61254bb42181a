"""Tests for Command Palette provider."""

from __future__ import annotations

import pytest

from tui_listbox.app import ListboxApp
from tui_listbox.commands import COMMANDS, CommandDef, ListboxCommandProvider
from tui_listbox.matching import fuzzy_match, score


# ── COMMANDS list integrity ──


def test_commands_not_empty():
    assert len(COMMANDS) > 0


def test_commands_all_have_required_fields():
    for cmd in COMMANDS:
        assert isinstance(cmd, CommandDef)
        assert cmd.display, f"Missing display for action={cmd.action}"
        assert cmd.action, f"Missing action for display={cmd.display}"


def test_commands_unique_actions():
    actions = [cmd.action for cmd in COMMANDS]
    assert len(actions) == len(set(actions)), "Duplicate actions found"


def test_commands_map_to_app_actions():
    for cmd in COMMANDS:
        assert hasattr(ListboxApp, f"action_{cmd.action}"), cmd.action


def test_app_registers_provider():
    assert ListboxCommandProvider in ListboxApp.COMMANDS


# ── Matching ──


class TestFuzzyMatch:
    def test_subsequence(self):
        assert fuzzy_match("rst", "reset list")
        assert fuzzy_match("", "anything")
        assert not fuzzy_match("zz", "reset list")

    def test_order_matters(self):
        assert not fuzzy_match("tr", "reset")

    @pytest.mark.parametrize(
        "query,text,expected",
        [
            ("help", "help", 1.0),
            ("res", "reset list", 0.9),
            ("list", "reset list", 0.8),
            ("rl", "reset list", 0.7),
            ("", "reset list", 0.5),
        ],
    )
    def test_score(self, query, text, expected):
        assert score(query, text) == expected
