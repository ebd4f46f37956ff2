# core/viewer/tests/test_view_mode.py
"""Tests for the view-mode controller."""

from unittest.mock import AsyncMock

import pytest

from core.resources.types import Topic
from core.viewer.view_mode import ViewModeController


class TestCycling:
    def test_cycle_order(self):
        view = ViewModeController()
        assert view.cycle() == "theater"
        assert view.cycle() == "fullscreen"
        assert view.cycle() == "default"

    def test_three_cycles_return_to_default(self):
        view = ViewModeController()
        for _ in range(3):
            view.cycle()
        assert view.mode == "default"


class TestKeyboard:
    def test_f_toggles_fullscreen_directly(self):
        view = ViewModeController()
        assert view.handle_key("f") is True
        assert view.mode == "fullscreen"
        view.handle_key("F")
        assert view.mode == "default"

    def test_t_toggles_theater(self):
        view = ViewModeController()
        view.handle_key("T")
        assert view.mode == "theater"
        view.handle_key("t")
        assert view.mode == "default"

    def test_f_from_theater_goes_fullscreen(self):
        view = ViewModeController()
        view.handle_key("t")
        view.handle_key("f")
        assert view.mode == "fullscreen"

    @pytest.mark.parametrize("keys", [["t"], ["f"], ["t", "f"]])
    def test_escape_returns_to_default(self, keys):
        view = ViewModeController()
        for key in keys:
            view.handle_key(key)
        assert view.handle_key("Escape") is True
        assert view.mode == "default"

    def test_escape_in_default_is_not_handled(self):
        view = ViewModeController()
        assert view.handle_key("Escape") is False
        assert view.mode == "default"

    @pytest.mark.parametrize("focus", ["input", "TEXTAREA"])
    def test_shortcuts_suppressed_while_typing(self, focus):
        view = ViewModeController()
        assert view.handle_key("f", focus=focus) is False
        assert view.mode == "default"

    def test_other_focus_allows_shortcuts(self):
        view = ViewModeController()
        assert view.handle_key("t", focus="button") is True

    def test_unknown_key(self):
        view = ViewModeController()
        assert view.handle_key("x") is False


class TestTheaterBrowsing:
    def test_first_theater_entry_browses_selected_module(self):
        view = ViewModeController()
        view.select_topic(module_id=3, topic_id=30)
        view.cycle()
        assert view.mode == "theater"
        assert view.browsing_module_id == 3

    def test_later_entries_keep_chosen_tab(self):
        view = ViewModeController()
        view.select_topic(3, 30)
        view.handle_key("t")
        view.browsing_module_id = 5  # user switched tabs
        view.handle_key("t")
        view.handle_key("t")
        assert view.browsing_module_id == 5

    def test_new_selection_resyncs_on_next_entry(self):
        view = ViewModeController()
        view.select_topic(3, 30)
        view.handle_key("t")
        view.handle_key("Escape")
        view.select_topic(4, 40)
        view.handle_key("t")
        assert view.browsing_module_id == 4

    @pytest.mark.asyncio
    async def test_switch_tab_loads_topics_without_touching_accordion(self):
        catalog = AsyncMock()
        catalog.get_topics.return_value = [Topic(id=1, title="One")]
        view = ViewModeController(catalog)
        view.expanded_modules = frozenset({2})

        topics = await view.switch_tab(7)

        assert [t.id for t in topics] == [1]
        assert view.browsing_module_id == 7
        assert view.expanded_modules == frozenset({2})
        catalog.get_topics.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_toggle_module_expands_and_collapses(self):
        catalog = AsyncMock()
        catalog.get_topics.return_value = []
        view = ViewModeController(catalog)

        assert await view.toggle_module(2) == []
        assert view.expanded_modules == frozenset({2})
        assert await view.toggle_module(2) is None
        assert view.expanded_modules == frozenset()
        catalog.get_topics.assert_awaited_once_with(2)


def test_reset_clears_everything():
    view = ViewModeController()
    view.select_topic(1, 2)
    view.cycle()
    view.reset()
    assert view.mode == "default"
    assert view.selected is None
    assert view.browsing_module_id is None
