"""
Tests for the multi-select filter selector logic.
"""

from unittest.mock import Mock

import pytest

from components.filter_selector import FilterSelector
from models.data_models import FilterOption

OPTIONS = [
    FilterOption("NG", "Natural Gas"),
    FilterOption("COL", "Coal"),
    FilterOption("WND", "Wind"),
    FilterOption("SUN", "Solar"),
]

def make_selector(selected=(), options=OPTIONS, **kwargs):
    return FilterSelector(
        label="Fuel Types",
        options=options,
        selected=list(selected),
        on_change=Mock(),
        **kwargs
    )

class TestToggle:
    """Test toggling and clearing the selection."""

    def test_toggle_adds_missing_code(self):
        selector = make_selector(["NG"])
        assert selector.toggle("COL") == ["NG", "COL"]
        selector.on_change.assert_called_once_with(["NG", "COL"])

    def test_toggle_removes_present_code(self):
        selector = make_selector(["NG", "COL"])
        assert selector.toggle("NG") == ["COL"]
        selector.on_change.assert_called_once_with(["COL"])

    @pytest.mark.parametrize("initial", [[], ["NG"], ["COL", "WND"], ["NG", "COL", "WND", "SUN"]])
    def test_toggle_twice_restores_membership(self, initial):
        selector = make_selector(initial)
        for code in ("NG", "SUN"):
            was_selected = code in selector.selected
            selector.toggle(code)
            selector.toggle(code)
            assert (code in selector.selected) == was_selected
            assert set(selector.selected) == set(initial)

    @pytest.mark.parametrize("initial", [[], ["NG"], ["NG", "COL", "WND"]])
    def test_clear_all(self, initial):
        selector = make_selector(initial)
        assert selector.clear_all() == []
        selector.on_change.assert_called_once_with([])

    def test_remove_selected_code(self):
        selector = make_selector(["NG", "COL"])
        assert selector.remove("COL") == ["NG"]
        selector.on_change.assert_called_once_with(["NG"])

    def test_remove_unselected_code_is_noop(self):
        selector = make_selector(["NG"])
        assert selector.remove("WND") == ["NG"]
        selector.on_change.assert_not_called()

class TestSummary:
    """Test the trigger label."""

    def test_placeholder_when_empty(self):
        assert make_selector(placeholder="Select Fuel Types...").summary() == "Select Fuel Types..."

    def test_lists_descriptions(self):
        assert make_selector(["NG", "COL"]).summary() == "Natural Gas, Coal"

    def test_overflow_count(self):
        selector = make_selector(["NG", "COL", "WND", "SUN"])
        assert selector.summary() == "Natural Gas, Coal +2 more"

    def test_custom_max_display(self):
        selector = make_selector(["NG", "COL", "WND"], max_display=1)
        assert selector.summary() == "Natural Gas +2 more"

    def test_unknown_code_shows_code(self):
        assert make_selector(["OTH"]).summary() == "OTH"

class TestListing:
    """Test sorting and searching options."""

    def test_sorted_by_description(self):
        selector = make_selector()
        assert [o.description for o in selector.sorted_options()] == ["Coal", "Natural Gas", "Solar", "Wind"]

    def test_empty_query_returns_all(self):
        assert len(make_selector().search("")) == 4
        assert len(make_selector().search(None)) == 4

    def test_substring_match(self):
        assert [o.code for o in make_selector().search("gas")] == ["NG"]

    def test_code_match(self):
        assert [o.code for o in make_selector().search("wnd")] == ["WND"]

    def test_fuzzy_match(self):
        assert "NG" in [o.code for o in make_selector().search("natral gas")]

    def test_no_match(self):
        assert make_selector().search("uranium") == []

    def test_empty_message(self):
        assert make_selector().empty_message == "No fuel types found."
        assert make_selector(options=[]).sorted_options() == []
