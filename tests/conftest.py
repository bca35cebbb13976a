from __future__ import annotations

import pytest

from calendar_locale import Locale, get_default_locales


@pytest.fixture
def locales():
    return get_default_locales()


@pytest.fixture
def en_us(locales):
    return Locale("en-US", locales=locales, detected_locale="en-US")


@pytest.fixture
def en_gb(locales):
    return Locale("en-GB", locales=locales, detected_locale="en-US")
