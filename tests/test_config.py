from __future__ import annotations

import copy
import logging

import pytest

import calendar_locale.locale_detector as locale_detector
from calendar_locale.config import LocaleConfig, Masks, resolve_config
from calendar_locale.helpers import clamp, defaults_deep


@pytest.fixture
def table():
    return {
        "en-IE": {
            "id": "en-IE",
            "first_day_of_week": 2,
            "masks": {"hours": "HH:00", "weekdays": "ddd", "L": "DD-MM-YYYY"},
        },
        "en": {"id": "en", "first_day_of_week": 1, "masks": {"L": "MM/DD/YYYY"}},
        "de": {"id": "de", "first_day_of_week": 2, "masks": {"L": "DD.MM.YYYY"}},
        "pt-BR": {"id": "pt-BR", "first_day_of_week": 1, "masks": {"L": "DD/MM/YYYY"}},
    }


def test_string_config_matches_key_case_insensitively(table):
    config = resolve_config("PT-br", table, detected_locale="de")
    assert isinstance(config, LocaleConfig)
    assert config.id == "pt-BR"
    assert config.first_day_of_week == 1
    assert config.masks.L == "DD/MM/YYYY"


def test_mapping_config_keeps_table_key_case(table):
    config = resolve_config({"id": "pt-br"}, table, detected_locale="de")
    assert config.id == "pt-BR"


def test_prefix_fallback_uses_matched_table_key(table):
    # "en-XX" is unknown, the language subtag "en" is in the table
    config = resolve_config("en-XX", table, detected_locale="de")
    assert config.id == "en"
    assert config.masks.L == "MM/DD/YYYY"


def test_unknown_locale_falls_back_to_detected(table):
    config = resolve_config("xx-YY", table, detected_locale="de")
    assert config.id == "de"
    assert config.masks.L == "DD.MM.YYYY"


def test_unknown_detected_locale_uses_fallback_record(table):
    config = resolve_config("xx-YY", table, detected_locale="qq-QQ")
    assert config.id == "qq-QQ"
    assert config.first_day_of_week == 2
    assert config.masks.L == "DD-MM-YYYY"


def test_absent_config_uses_detected_locale(table):
    assert resolve_config(None, table, detected_locale="DE").id == "de"
    assert resolve_config("", table, detected_locale="de").id == "de"


def test_detects_platform_locale_when_not_given(table, monkeypatch):
    monkeypatch.setattr(locale_detector, "detect_locale", lambda: "pt-BR")
    assert resolve_config(None, table).id == "pt-BR"


@pytest.mark.parametrize("value, expected", [(0, 1), (-3, 1), (9, 7), (5, 5)])
def test_first_day_of_week_is_clamped(table, value, expected):
    config = resolve_config({"first_day_of_week": value}, table, detected_locale="de")
    assert config.first_day_of_week == expected


def test_deep_merge_keeps_defaults_for_missing_masks(table):
    config = resolve_config({"masks": {"hours": "h A"}}, table, detected_locale="en-IE")
    assert config.masks.hours == "h A"
    assert config.masks.weekdays == "ddd"
    assert config.masks.L == "DD-MM-YYYY"


def test_config_id_does_not_override_resolved_id(table):
    config = resolve_config(
        {"id": "DE", "first_day_of_week": 7}, table, detected_locale="en"
    )
    assert config.id == "de"
    assert config.first_day_of_week == 7


def test_unknown_mask_names_are_dropped(table, caplog):
    with caplog.at_level(logging.WARNING, logger="calendar_locale.config"):
        config = resolve_config(
            {"masks": {"bogus": "YYYY"}}, table, detected_locale="de"
        )
    assert not hasattr(config.masks, "bogus")
    assert "bogus" in caplog.text


def test_resolution_does_not_mutate_inputs(table):
    user_config = {"id": "de", "masks": {"title": "MMM YYYY"}}
    before_table = copy.deepcopy(table)
    before_config = copy.deepcopy(user_config)
    resolve_config(user_config, table, detected_locale="en")
    assert table == before_table
    assert user_config == before_config


def test_unsupported_config_type_raises(table):
    with pytest.raises(TypeError):
        resolve_config(42, table, detected_locale="de")


def test_default_table_resolution(locales):
    assert resolve_config("en-us", locales, detected_locale="de").first_day_of_week == 1
    fr = resolve_config("fr-BE", locales, detected_locale="de")
    assert fr.id == "fr"
    assert fr.masks.L == "DD/MM/YYYY"
    assert fr.masks.title == "MMMM YYYY"


def test_masks_lookup_by_name():
    masks = Masks()
    assert masks.get("day_popover") == "WWW, MMM D, YYYY"
    assert masks.get("nope") is None
    assert "input_time_24hr" in Masks.names()


def test_defaults_deep_merges_nested_mappings():
    merged = defaults_deep(
        {"a": {"b": 1}, "list": [9], "none": None},
        {"a": {"b": 0, "c": 2}, "list": [1, 2, 3], "none": "kept"},
    )
    assert merged == {"a": {"b": 1, "c": 2}, "list": [9], "none": "kept"}


def test_clamp():
    assert clamp(0, 1, 7) == 1
    assert clamp(8, 1, 7) == 7
    assert clamp(3, 1, 7) == 3


def test_non_numeric_first_day_of_week_uses_record_default(table, caplog):
    with caplog.at_level(logging.WARNING, logger="calendar_locale.config"):
        config = resolve_config({"id": "de", "first_day_of_week": "x"}, table, detected_locale="en")
    assert config.id == "de"
    assert config.first_day_of_week == 2
    assert "first_day_of_week" in caplog.text
