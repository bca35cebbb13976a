"""Calendar pages: the day grid for one month of a locale.

Pages and month parts are memoized in the locale's ``page_cache`` and
``month_cache``. This module is the only writer of those caches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import List

from .date_helpers import MonthParts

logger = logging.getLogger(__name__)


@dataclass
class CalendarDay:
    id: str
    date: datetime
    day: int
    month: int
    year: int
    weekday: int
    weekday_position: int
    week: int
    in_month: bool
    is_today: bool = False


@dataclass
class CalendarPage:
    key: str
    month: int
    year: int
    title: str
    weekday_labels: List[str]
    month_parts: MonthParts
    days: List[CalendarDay] = field(default_factory=list)

    @property
    def weeks(self) -> List[List[CalendarDay]]:
        size = 7
        return [self.days[i : i + size] for i in range(0, len(self.days), size)]


def get_month_parts(locale, month: int, year: int) -> MonthParts:
    """Month parts for ``locale``, memoized in ``locale.month_cache``."""
    key = (year, month, locale.first_day_of_week)
    return locale.month_cache.get_or_compute(
        key, lambda: locale.get_month_parts(month, year)
    )


def _build_days(locale, parts: MonthParts) -> List[CalendarDay]:
    offset = (parts.first_weekday - parts.first_day_of_week) % locale.days_in_week
    grid_start = date(parts.year, parts.month, 1) - timedelta(days=offset)
    now = datetime.now(timezone.utc) if locale.timezone else datetime.now()
    today_id = locale.get_day_id(now)
    days = []
    for index in range(parts.num_weeks * locale.days_in_week):
        current = grid_start + timedelta(days=index)
        dt = locale.get_date_from_params(current.year, current.month, current.day)
        day_id = locale.get_day_id(dt)
        weekday = current.isoweekday() % locale.days_in_week + 1
        days.append(
            CalendarDay(
                id=day_id,
                date=dt,
                day=current.day,
                month=current.month,
                year=current.year,
                weekday=weekday,
                weekday_position=index % locale.days_in_week + 1,
                week=index // locale.days_in_week + 1,
                in_month=current.month == parts.month,
                is_today=day_id == today_id,
            )
        )
    return days


def get_page(locale, month: int, year: int) -> CalendarPage:
    """Return the page for ``month``/``year``, memoized in ``locale.page_cache``."""
    key = f"{year:04d}-{month:02d}"

    def build() -> CalendarPage:
        logger.debug("Building calendar page %s for %s", key, locale.id)
        parts = get_month_parts(locale, month, year)
        days = _build_days(locale, parts)
        first = locale.get_date_from_params(year, month, 1)
        return CalendarPage(
            key=key,
            month=month,
            year=year,
            title=locale.format_date(first, locale.masks.title),
            weekday_labels=locale.get_weekday_labels(days[: locale.days_in_week]),
            month_parts=parts,
            days=days,
        )

    return locale.page_cache.get_or_compute(key, build)
