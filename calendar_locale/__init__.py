"""Locale resolution and date utilities for calendar widgets.

The main entry point is :class:`Locale`, built from a locale id, a partial
config mapping or nothing at all (platform detection).
"""

from .cache import LocaleCache
from .config import LocaleConfig, Masks, resolve_config
from .date_range import DateRange, DateRangeOptions
from .locale_defaults import get_default_locales
from .locale_detector import LocaleDetector, detect_locale
from .locale_manager import Locale
from .page import CalendarDay, CalendarPage, get_page

__version__ = "0.1.0"

__all__ = [
    "CalendarDay",
    "CalendarPage",
    "DateRange",
    "DateRangeOptions",
    "Locale",
    "LocaleCache",
    "LocaleConfig",
    "LocaleDetector",
    "Masks",
    "detect_locale",
    "get_default_locales",
    "get_page",
    "resolve_config",
]
