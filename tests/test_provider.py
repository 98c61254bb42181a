"""Tests for the item provider and skip selectors."""

import pytest

from tui_listbox.models import Option
from tui_listbox.provider import (
    InvalidSelectorError,
    ItemProvider,
    filter_eligible,
    is_eligible,
    parse_skip_selector,
)


class Host:
    def __init__(self, options):
        self._options = options

    @property
    def options(self):
        return list(self._options)


class TestParseSkipSelector:
    def test_empty_is_none(self):
        assert parse_skip_selector(None) is None
        assert parse_skip_selector("  ") is None

    def test_presence(self):
        skip = parse_skip_selector("[archived]")
        assert skip(Option(data={"archived": ""}))
        assert not skip(Option())

    @pytest.mark.parametrize(
        "text",
        ["[match=false]", "[match='false']", '[match="false"]', "[data-match='false']"],
    )
    def test_value_forms(self, text):
        skip = parse_skip_selector(text)
        assert skip(Option(data={"match": "false"}))
        assert not skip(Option(data={"match": "true"}))
        assert not skip(Option())

    def test_alternatives(self):
        skip = parse_skip_selector("[archived], [kind=draft]")
        assert skip(Option(data={"archived": "yes"}))
        assert skip(Option(data={"kind": "draft"}))
        assert not skip(Option(data={"kind": "final"}))

    @pytest.mark.parametrize("text", ["archived", "[", "[=x]", "[a b]"])
    def test_invalid(self, text):
        with pytest.raises(InvalidSelectorError):
            parse_skip_selector(text)


class TestEligibility:
    def test_hidden_and_disabled_excluded(self):
        assert is_eligible(Option())
        assert not is_eligible(Option(hidden=True))
        assert not is_eligible(Option(disabled=True))

    def test_skip_excluded(self):
        skip = parse_skip_selector("[gone]")
        assert not is_eligible(Option(data={"gone": "1"}), skip)

    def test_query_preserves_order_and_is_fresh(self):
        a, b, c = Option(value="a"), Option(value="b", disabled=True), Option(value="c")
        host = Host([a, b, c])
        provider = ItemProvider()
        assert provider.query(host) == [a, c]
        b.disabled = False
        assert provider.query(host) == [a, b, c]

    def test_query_has_no_side_effects(self):
        options = [Option(value="a", selected=True), Option(value="b", hidden=True)]
        filter_eligible(options)
        assert options[0].selected and options[1].hidden
