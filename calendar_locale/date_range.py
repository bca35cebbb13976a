"""Day granularity date ranges used to mark calendar days."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

from .date_helpers import TimezoneSource, coerce_datetime

DateRangeSource = Union["DateRange", date, datetime, Sequence[Any], Mapping[str, Any], None]


@dataclass
class DateRangeOptions:
    first_day_of_week: int = 1
    timezone: TimezoneSource = None
    order: int = 0

    @classmethod
    def coerce(
        cls, options: Union["DateRangeOptions", Mapping[str, Any], None]
    ) -> "DateRangeOptions":
        if options is None:
            return cls()
        if isinstance(options, DateRangeOptions):
            return options
        return cls(**options)


class DateRange:
    """
    A closed range of calendar days.

    Sources:
        - a ``date``/``datetime``: that single day
        - a ``(start, end)`` pair
        - a mapping with ``start``, ``end`` and optionally ``span`` (days,
          counted from ``start``)
        - another ``DateRange``

    A ``None`` bound leaves that side of the range open. Datetimes are moved
    into ``options.timezone`` before being reduced to a day.
    """

    def __init__(
        self,
        source: DateRangeSource,
        options: Union[DateRangeOptions, Mapping[str, Any], None] = None,
    ):
        self.options = DateRangeOptions.coerce(options)
        self.order = self.options.order
        self.start, self.end = self._bounds(source)
        if self.start and self.end and self.start > self.end:
            self.start, self.end = self.end, self.start

    def _to_day(self, value: Any) -> Optional[date]:
        if value is None:
            return None
        dt = coerce_datetime(value, self.options.timezone)
        if dt is None:
            raise ValueError(f"Cannot use {value!r} as a date range bound")
        return dt.date()

    def _bounds(self, source: DateRangeSource):
        if isinstance(source, DateRange):
            return source.start, source.end
        if isinstance(source, (date, datetime)):
            day = self._to_day(source)
            return day, day
        if isinstance(source, Mapping):
            start = self._to_day(source.get("start"))
            end = self._to_day(source.get("end"))
            span = source.get("span")
            if span and start is not None:
                end = start + timedelta(days=int(span) - 1)
            return start, end
        if isinstance(source, (list, tuple)) and len(source) == 2:
            return self._to_day(source[0]), self._to_day(source[1])
        raise TypeError(f"Cannot build a date range from {source!r}")

    @classmethod
    def from_many(
        cls,
        ranges: Union[DateRangeSource, Sequence[DateRangeSource]],
        options: Union[DateRangeOptions, Mapping[str, Any], None] = None,
    ) -> List["DateRange"]:
        """Build ranges from one source or a list of sources."""
        if isinstance(ranges, list):
            return [cls(source, options) for source in ranges if source is not None]
        if ranges is None:
            return []
        return [cls(ranges, options)]

    @property
    def is_single_day(self) -> bool:
        return self.start is not None and self.start == self.end

    def contains(self, value: Union[date, datetime]) -> bool:
        day = self._to_day(value)
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    def intersects(self, other: "DateRange") -> bool:
        if self.end is not None and other.start is not None and other.start > self.end:
            return False
        if self.start is not None and other.end is not None and other.end < self.start:
            return False
        return True

    def days(self) -> Iterator[date]:
        if self.start is None or self.end is None:
            raise ValueError("Cannot iterate the days of an open range")
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __repr__(self) -> str:
        return f"DateRange(start={self.start!r}, end={self.end!r})"
