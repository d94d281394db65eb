#!/usr/bin/env python3
"""Tests for the single-slot month cache."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from groupevent.models.calendar_models import DEFAULT_WINDOW, MonthWindow
from groupevent.services.month_cache import MonthCache
from groupevent.services.month_grid_builder import build_month_window


@pytest.fixture
def cache():
    return MonthCache()


class TestMonthCache:

    def test_empty_cache_misses(self, cache):
        assert cache.is_empty
        assert cache.get(date(2024, 3, 15), DEFAULT_WINDOW) is None

    def test_hit_for_same_month_and_window(self, cache):
        months = build_month_window(date(2024, 3, 15), DEFAULT_WINDOW)
        cache.put(date(2024, 3, 15), DEFAULT_WINDOW, months)

        # Any day of the same month hits
        assert cache.get(date(2024, 3, 1), DEFAULT_WINDOW) == months

    def test_miss_for_other_month(self, cache):
        cache.put(date(2024, 3, 15), DEFAULT_WINDOW, build_month_window(date(2024, 3, 15), DEFAULT_WINDOW))
        assert cache.get(date(2024, 4, 15), DEFAULT_WINDOW) is None
        assert cache.get(date(2023, 3, 15), DEFAULT_WINDOW) is None

    def test_miss_for_other_window(self, cache):
        cache.put(date(2024, 3, 15), DEFAULT_WINDOW, build_month_window(date(2024, 3, 15), DEFAULT_WINDOW))
        assert cache.get(date(2024, 3, 15), MonthWindow(-5, 3)) is None

    def test_get_or_build_builds_once(self, cache):
        builder = MagicMock(side_effect=build_month_window)
        reference = date(2024, 3, 15)

        first = cache.get_or_build(reference, DEFAULT_WINDOW, builder)
        second = cache.get_or_build(reference, DEFAULT_WINDOW, builder)

        assert first == second
        assert builder.call_count == 1

    def test_new_window_overwrites_slot(self, cache):
        reference = date(2024, 3, 15)
        cache.get_or_build(reference, DEFAULT_WINDOW)
        wider = cache.get_or_build(reference, MonthWindow(-5, 3))

        assert len(wider) == 8
        assert cache.get(reference, DEFAULT_WINDOW) is None
        assert cache.get(reference, MonthWindow(-5, 3)) == wider

    def test_cached_grids_cannot_be_altered_by_callers(self, cache):
        reference = date(2024, 3, 15)
        months = cache.get_or_build(reference, DEFAULT_WINDOW)

        with pytest.raises(AttributeError):
            months[0].cells.append(99)
        assert cache.get(reference, DEFAULT_WINDOW)[0] == build_month_window(reference, DEFAULT_WINDOW)[0]

    def test_returned_list_is_a_copy(self, cache):
        reference = date(2024, 3, 15)
        months = cache.get_or_build(reference, DEFAULT_WINDOW)
        months.clear()
        assert len(cache.get(reference, DEFAULT_WINDOW)) == 5

    def test_clear(self, cache):
        cache.get_or_build(date(2024, 3, 15), DEFAULT_WINDOW)
        cache.clear()
        assert cache.is_empty
        assert cache.get(date(2024, 3, 15), DEFAULT_WINDOW) is None
