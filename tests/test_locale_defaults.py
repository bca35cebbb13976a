from __future__ import annotations

from calendar_locale.locale_defaults import get_default_locales


def test_records_are_expanded_with_default_masks():
    table = get_default_locales()
    gb = table["en-GB"]
    assert gb["id"] == "en-GB"
    assert gb["first_day_of_week"] == 2
    assert gb["masks"]["L"] == "DD/MM/YYYY"
    assert gb["masks"]["title"] == "MMMM YYYY"
    assert table["ar"]["first_day_of_week"] == 7


def test_aliases():
    table = get_default_locales()
    assert table["en"]["masks"]["L"] == table["en-US"]["masks"]["L"]
    assert table["en"]["id"] == "en"
    assert table["no"]["first_day_of_week"] == table["nb"]["first_day_of_week"]
    assert "zh" in table and "es" in table


def test_custom_records_merge_over_defaults():
    table = get_default_locales(
        {
            "de": {"masks": {"title": "MMM YYYY"}},
            "x-klingon": {"first_day_of_week": 3, "masks": {"L": "YYYY.MM.DD"}},
        }
    )
    assert table["de"]["masks"]["title"] == "MMM YYYY"
    assert table["de"]["masks"]["L"] == "DD.MM.YYYY"
    assert table["x-klingon"]["first_day_of_week"] == 3
    assert table["x-klingon"]["masks"]["weekdays"] == "W"


def test_each_call_returns_a_fresh_table():
    first = get_default_locales()
    first["de"]["first_day_of_week"] = 5
    assert get_default_locales()["de"]["first_day_of_week"] == 2
