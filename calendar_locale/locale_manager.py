"""The calendar ``Locale``: resolved locale settings plus date operations."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from . import date_helpers
from .cache import LocaleCache
from .config import DAYS_IN_WEEK, ConfigSource, Mask, resolve_config
from .date_helpers import (
    DAY_ID_MASK,
    DateOptions,
    DateSource,
    SimpleDateParts,
)
from .date_range import DateRange, DateRangeOptions, DateRangeSource
from .helpers import clamp
from .locale_defaults import get_default_locales

logger = logging.getLogger(__name__)


class Locale:
    """
    Locale settings for one calendar.

    The config is resolved once at construction and the derived name lists
    are computed eagerly. Every date operation forwards to
    :mod:`calendar_locale.date_helpers` with this locale and its timezone.

    ``month_cache`` and ``page_cache`` are owned by the page builder in
    :mod:`calendar_locale.page`; pass your own instances to share them
    between locales.
    """

    am_pm: Tuple[str, str] = date_helpers.AM_PM

    def __init__(
        self,
        config: ConfigSource = None,
        timezone: Optional[str] = None,
        *,
        locales: Optional[Mapping[str, Mapping[str, Any]]] = None,
        detected_locale: Optional[str] = None,
        month_cache: Optional[LocaleCache] = None,
        page_cache: Optional[LocaleCache] = None,
    ):
        resolved = resolve_config(
            config,
            locales if locales is not None else get_default_locales(),
            detected_locale,
        )
        self.id = resolved.id
        self.days_in_week = DAYS_IN_WEEK
        self.first_day_of_week = clamp(resolved.first_day_of_week, 1, DAYS_IN_WEEK)
        self.masks = resolved.masks
        self.timezone = timezone or None
        self.day_names = date_helpers.get_day_names("long", self.id)
        self.day_names_short = date_helpers.get_day_names("short", self.id)
        self.day_names_shorter = [s[:2] for s in self.day_names_short]
        self.day_names_narrow = date_helpers.get_day_names("narrow", self.id)
        self.month_names = date_helpers.get_month_names("long", self.id)
        self.month_names_short = date_helpers.get_month_names("short", self.id)
        self.relative_time_names = date_helpers.get_relative_time_names(self.id)
        self.hour_labels = self.get_hour_labels()
        self.month_cache = month_cache if month_cache is not None else LocaleCache()
        self.page_cache = page_cache if page_cache is not None else LocaleCache()
        logger.debug(
            "Created locale %s (first day %s, timezone %s)",
            self.id,
            self.first_day_of_week,
            self.timezone,
        )

    def __repr__(self) -> str:
        return f"Locale(id={self.id!r}, timezone={self.timezone!r})"

    # ----------------------------------------------------------------------
    # Formatting and parsing
    # ----------------------------------------------------------------------
    def format_date(self, date: Optional[DateSource], masks: Optional[Mask]) -> str:
        return date_helpers.format_date(date, masks, locale=self, timezone=self.timezone)

    def parse_date(self, date_string: str, mask: Optional[Mask]) -> Optional[datetime]:
        return date_helpers.parse_date(
            date_string, mask, locale=self, timezone=self.timezone
        )

    def _date_options(self, options: Union[DateOptions, Mapping[str, Any], None]) -> DateOptions:
        opts = DateOptions.coerce(options)
        opts.locale = self
        if opts.timezone is None:
            opts.timezone = self.timezone
        if opts.first_day_of_week is None:
            opts.first_day_of_week = self.first_day_of_week
        return opts

    def to_date(
        self,
        d: Union[DateSource, date_helpers.DateParts, SimpleDateParts, Mapping[str, int], None],
        options: Union[DateOptions, Mapping[str, Any], None] = None,
    ) -> Optional[datetime]:
        """
        Convert ``d`` to a datetime.

        This locale's first day of week and timezone apply unless
        ``options`` override them.
        """
        return date_helpers.to_date(d, self._date_options(options))

    def from_date(
        self,
        date: Optional[DateSource],
        options: Union[DateOptions, Mapping[str, Any], None] = None,
    ) -> Any:
        return date_helpers.from_date(date, self._date_options(options))

    # ----------------------------------------------------------------------
    # Ranges and date parts
    # ----------------------------------------------------------------------
    def get_date_ranges(
        self,
        ranges: Union[DateRangeSource, Sequence[DateRangeSource]],
        opts: Union[DateRangeOptions, Dict[str, Any], None] = None,
    ) -> List[DateRange]:
        """
        Build date ranges in this locale's week convention and timezone.

        ``opts`` is updated in place: its ``first_day_of_week`` and
        ``timezone`` are overwritten with this locale's values.
        """
        if opts is None:
            opts = {}
        if isinstance(opts, DateRangeOptions):
            opts.first_day_of_week = self.first_day_of_week
            opts.timezone = self.timezone
        else:
            opts["first_day_of_week"] = self.first_day_of_week
            opts["timezone"] = self.timezone
        return DateRange.from_many(ranges, opts)

    def get_date_parts(self, date: Optional[DateSource]) -> Optional[date_helpers.DateParts]:
        return date_helpers.get_date_parts(date, self.first_day_of_week, self.timezone)

    def get_date_from_parts(
        self, parts: Union[SimpleDateParts, Mapping[str, int]]
    ) -> datetime:
        return date_helpers.get_date_from_parts(parts, self.timezone)

    def get_date_from_params(
        self,
        year: int,
        month: int,
        day: int,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
    ) -> datetime:
        return self.get_date_from_parts(
            SimpleDateParts(
                year=year,
                month=month,
                day=day,
                hours=hours,
                minutes=minutes,
                seconds=seconds,
                milliseconds=milliseconds,
            )
        )

    # ----------------------------------------------------------------------
    # Month grids
    # ----------------------------------------------------------------------
    def get_month_parts(self, month: int, year: int) -> date_helpers.MonthParts:
        return date_helpers.get_month_parts(month, year, self.first_day_of_week)

    def get_this_month_parts(self) -> date_helpers.MonthParts:
        return date_helpers.get_this_month_parts(self.first_day_of_week)

    def get_prev_month_parts(self, month: int, year: int) -> date_helpers.MonthParts:
        return date_helpers.get_prev_month_parts(month, year, self.first_day_of_week)

    def get_next_month_parts(self, month: int, year: int) -> date_helpers.MonthParts:
        return date_helpers.get_next_month_parts(month, year, self.first_day_of_week)

    # ----------------------------------------------------------------------
    # Labels
    # ----------------------------------------------------------------------
    def get_hour_labels(self) -> List[str]:
        return [self.format_date(d, self.masks.hours) for d in date_helpers.get_hour_dates()]

    def get_weekday_labels(self, days: Sequence[Any]) -> List[str]:
        """Format the ``date`` of each calendar day with the ``weekdays`` mask."""
        return [self.format_date(day.date, self.masks.weekdays) for day in days]

    def get_day_id(self, date: Optional[DateSource]) -> str:
        """Return the ``YYYY-MM-DD`` key of the calendar day holding ``date``."""
        return self.format_date(date, DAY_ID_MASK)
