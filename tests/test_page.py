from __future__ import annotations

from datetime import date

import pytest

from calendar_locale import LocaleCache, get_page
from calendar_locale.page import get_month_parts


def test_page_has_full_weeks(en_gb):
    page = get_page(en_gb, 9, 2024)
    assert page.key == "2024-09"
    assert page.title == "September 2024"
    assert len(page.days) == page.month_parts.num_weeks * 7 == 42
    assert len(page.weeks) == 6
    # Monday start: the grid opens on 26 August
    first = page.days[0]
    assert (first.year, first.month, first.day) == (2024, 8, 26)
    assert first.in_month is False
    assert first.weekday == 2
    assert first.weekday_position == 1
    assert page.days[6].id == "2024-09-01"
    assert page.days[6].in_month is True


def test_weekday_labels_follow_first_day_of_week(en_us, en_gb):
    assert get_page(en_us, 9, 2024).weekday_labels == ["S", "M", "T", "W", "T", "F", "S"]
    assert get_page(en_gb, 9, 2024).weekday_labels == ["M", "T", "W", "T", "F", "S", "S"]


def test_page_marks_today(en_us):
    today = date.today()
    page = get_page(en_us, today.month, today.year)
    flagged = [day for day in page.days if day.is_today]
    assert len(flagged) == 1
    assert flagged[0].day == today.day


def test_pages_and_month_parts_are_cached(en_us):
    assert len(en_us.page_cache) == 0
    page = get_page(en_us, 3, 2024)
    assert get_page(en_us, 3, 2024) is page
    assert "2024-03" in en_us.page_cache
    assert (2024, 3, 1) in en_us.month_cache
    assert get_month_parts(en_us, 3, 2024) is page.month_parts


def test_cache_evicts_least_recently_used():
    cache = LocaleCache(max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1
    cache.set("c", 3)
    assert "b" not in cache
    assert cache.keys() == ["a", "c"]
    assert cache.get("missing", "default") == "default"


def test_cache_get_or_compute_calls_factory_once():
    cache = LocaleCache()
    calls = []

    def factory():
        calls.append(1)
        return "value"

    assert cache.get_or_compute("key", factory) == "value"
    assert cache.get_or_compute("key", factory) == "value"
    assert len(calls) == 1
    cache.clear()
    assert len(cache) == 0


def test_cache_rejects_bad_size():
    with pytest.raises(ValueError):
        LocaleCache(max_size=0)
