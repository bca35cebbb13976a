"""
Date helpers for calendar locales.

Names (days, months, relative time units) come from Babel's CLDR data and
timezones are IANA names resolved with pytz. Date masks use the calendar
token set::

    D DD Do       day of month (Do adds an English ordinal suffix)
    d dd          weekday number, 1 = Sunday
    W WW WWW WWWW narrow, shorter, short and long weekday names
    M MM MMM MMMM month number, short and long month names
    YY YYYY       year
    h hh H HH     12 and 24 hour clock
    m mm s ss     minutes, seconds
    S SS SSS      fractions of a second
    a A           am/pm marker
    Z ZZ          UTC offset as +01:00 / +0100
    X x           unix timestamp in seconds / milliseconds
    L             the locale date mask

Text inside square brackets is copied literally.

Naive datetimes are read as wall time in the requested timezone; aware ones
are converted into it.
"""

from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass, fields, replace
from datetime import date, datetime, timedelta, timezone as dt_timezone, tzinfo
from functools import lru_cache
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

import pytz
from babel import Locale as BabelLocale, UnknownLocaleError
from babel.dates import TIMEDELTA_UNITS, format_timedelta
from babel.dates import get_day_names as babel_day_names
from babel.dates import get_month_names as babel_month_names

from .config import DAYS_IN_WEEK, Mask, Masks
from .helpers import pad

logger = logging.getLogger(__name__)

days_in_week = DAYS_IN_WEEK
AM_PM = ("am", "pm")
DAY_ID_MASK = "YYYY-MM-DD"

DateSource = Union[datetime, date, str, int, float]
TimezoneSource = Union[str, tzinfo, None]

_NAME_WIDTHS = {"long": "wide", "short": "abbreviated", "narrow": "narrow"}


# ----------------------------------------------------------------------
# Date part types
# ----------------------------------------------------------------------
@dataclass
class SimpleDateParts:
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hours: Optional[int] = None
    minutes: Optional[int] = None
    seconds: Optional[int] = None
    milliseconds: Optional[int] = None

    def to_dict(self) -> Dict[str, int]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class DateParts:
    """A date broken down relative to its month grid."""

    date: datetime
    year: int
    month: int
    day: int
    hours: int
    minutes: int
    seconds: int
    milliseconds: int
    weekday: int
    weekday_position: int
    weekday_ordinal: int
    weekday_ordinal_from_end: int
    day_from_end: int
    week: int
    week_from_end: int
    timezone: Optional[str] = None

    def to_simple(self) -> SimpleDateParts:
        return SimpleDateParts(
            year=self.year,
            month=self.month,
            day=self.day,
            hours=self.hours,
            minutes=self.minutes,
            seconds=self.seconds,
            milliseconds=self.milliseconds,
        )


@dataclass
class MonthParts:
    month: int
    year: int
    first_day_of_week: int
    in_leap_year: bool
    first_weekday: int
    num_days: int
    num_weeks: int
    weeknumbers: List[int]
    iso_weeknumbers: List[int]


@dataclass
class DateOptions:
    """Options for :func:`to_date` and :func:`from_date`."""

    type: str = "auto"
    mask: Optional[Mask] = None
    timezone: TimezoneSource = None
    locale: Any = None
    first_day_of_week: Optional[int] = None

    @classmethod
    def coerce(cls, options: Union["DateOptions", Mapping[str, Any], None]) -> "DateOptions":
        if options is None:
            return cls()
        if isinstance(options, DateOptions):
            return replace(options)
        return cls(**options)


# ----------------------------------------------------------------------
# Babel backed names
# ----------------------------------------------------------------------
@lru_cache(maxsize=64)
def get_babel_locale(locale_id: Optional[str]) -> BabelLocale:
    """Return the Babel locale for a BCP-47 id, degrading to its language, then English."""
    if locale_id:
        identifier = locale_id.replace("-", "_")
        for candidate in (identifier, identifier.split("_")[0]):
            try:
                return BabelLocale.parse(candidate)
            except (UnknownLocaleError, ValueError) as e:
                logger.debug("No CLDR data for %r: %s", candidate, e)
        logger.warning("No CLDR data for locale %r, using English names", locale_id)
    return BabelLocale("en")


def _width(length: str) -> str:
    try:
        return _NAME_WIDTHS[length]
    except KeyError:
        raise ValueError(f"Unknown name length {length!r}") from None


def get_day_names(length: str = "long", locale_id: Optional[str] = None) -> List[str]:
    """Return the seven weekday names starting with Sunday."""
    names = babel_day_names(
        _width(length), context="stand-alone", locale=get_babel_locale(locale_id)
    )
    # CLDR numbers weekdays from Monday = 0
    return [names[6]] + [names[i] for i in range(6)]


def get_month_names(length: str = "long", locale_id: Optional[str] = None) -> List[str]:
    names = babel_month_names(
        _width(length), context="stand-alone", locale=get_babel_locale(locale_id)
    )
    return [names[i] for i in range(1, 13)]


def get_relative_time_names(locale_id: Optional[str] = None) -> Dict[str, str]:
    """
    Return the plural display name of each relative time unit.

    Keys are ``year``, ``month``, ``week``, ``day``, ``hour``, ``minute`` and
    ``second``, e.g. ``{"day": "days", ...}`` for English.
    """
    babel_locale = get_babel_locale(locale_id)
    names = {}
    for unit, secs_per_unit in TIMEDELTA_UNITS:
        text = format_timedelta(
            timedelta(seconds=100 * secs_per_unit),
            granularity=unit,
            threshold=10**9,
            locale=babel_locale,
        )
        names[unit] = text.replace("100", "").strip()
    return names


def get_hour_dates() -> List[datetime]:
    """Return one datetime per hour of 2000-01-01."""
    return [datetime(2000, 1, 1, hour) for hour in range(24)]


class _DefaultNames:
    """Name source used when no locale is passed to a helper."""

    def __init__(self, locale_id: str):
        self.id = locale_id
        self.masks = Masks()
        self.day_names = get_day_names("long", locale_id)
        self.day_names_short = get_day_names("short", locale_id)
        self.day_names_shorter = [s[:2] for s in self.day_names_short]
        self.day_names_narrow = get_day_names("narrow", locale_id)
        self.month_names = get_month_names("long", locale_id)
        self.month_names_short = get_month_names("short", locale_id)
        self.am_pm = AM_PM


@lru_cache(maxsize=1)
def _default_names() -> _DefaultNames:
    return _DefaultNames("en")


def _names_for(locale: Any) -> Any:
    return locale if locale is not None else _default_names()


# ----------------------------------------------------------------------
# Timezones and date coercion
# ----------------------------------------------------------------------
def get_timezone(tz: TimezoneSource) -> Optional[tzinfo]:
    """Resolve an IANA timezone name. Unknown names raise ``pytz.UnknownTimeZoneError``."""
    if not tz:
        return None
    if isinstance(tz, tzinfo):
        return tz
    return pytz.timezone(tz)


def localize(dt: datetime, tz: TimezoneSource) -> datetime:
    """Place ``dt`` in ``tz``: naive values are localized, aware ones converted."""
    zone = get_timezone(tz)
    if zone is None:
        return dt
    if dt.tzinfo is None:
        if hasattr(zone, "localize"):
            return zone.localize(dt)
        return dt.replace(tzinfo=zone)
    converted = dt.astimezone(zone)
    if hasattr(zone, "normalize"):
        return zone.normalize(converted)
    return converted


def _from_timestamp(ms: float, tz: TimezoneSource) -> datetime:
    zone = get_timezone(tz)
    if zone is None:
        return datetime.fromtimestamp(ms / 1000)
    return localize(datetime.fromtimestamp(ms / 1000, tz=dt_timezone.utc), zone)


def _parse_iso(value: str, tz: TimezoneSource) -> Optional[datetime]:
    try:
        dt = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    return localize(dt, tz)


def coerce_datetime(value: Any, tz: TimezoneSource) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return localize(value, tz)
    if isinstance(value, date):
        return localize(datetime(value.year, value.month, value.day), tz)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_timestamp(value, tz)
    if isinstance(value, str):
        return _parse_iso(value, tz)
    raise TypeError(f"Cannot use {type(value).__name__} as a date")


def _weekday(d: Union[date, datetime]) -> int:
    """Weekday number with 1 = Sunday and 7 = Saturday."""
    return d.isoweekday() % DAYS_IN_WEEK + 1


# ----------------------------------------------------------------------
# Masks
# ----------------------------------------------------------------------
_TOKEN_RE = re.compile(
    r"\[([^\]]*)\]|Do|DD?|dd?|W{1,4}|M{1,4}|YYYY|YY|hh?|HH?|mm?|ss?|S{1,3}|ZZ?|[aAXxL]"
)


def normalize_masks(masks: Optional[Mask], locale: Any = None) -> List[str]:
    """
    Turn a mask, a list of masks or mask names into a list of patterns.

    Mask names such as ``"title"`` or ``"input"`` are replaced with the
    locale's patterns for that name. An empty value gives ``["YYYY-MM-DD"]``.
    Names that refer back to themselves raise ``ValueError``.
    """
    named: Masks = _names_for(locale).masks
    pending = [masks] if isinstance(masks, str) else list(masks or [])
    result: List[str] = []
    expansions = 0
    while pending:
        item = pending.pop(0)
        value = named.get(item) if item != "L" else None
        if value is None or value == item:
            result.append(item)
            continue
        expansions += 1
        if expansions > 100:
            raise ValueError(f"Circular mask names in {masks!r}")
        if isinstance(value, str):
            pending.insert(0, value)
        else:
            pending[0:0] = list(value)
    return result or [DAY_ID_MASK]


def _expand_locale_mask(mask: str, masks: Masks) -> str:
    locale_mask = masks.L if masks is not None else DAY_ID_MASK
    if isinstance(locale_mask, list):
        locale_mask = locale_mask[0] if locale_mask else DAY_ID_MASK
    return _TOKEN_RE.sub(
        lambda m: locale_mask if m.group(0) == "L" else m.group(0), mask
    )


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def _utc_offset(dt: datetime, sep: str) -> str:
    offset = dt.utcoffset() if dt.tzinfo else dt.astimezone().utcoffset()
    minutes = int(offset.total_seconds() // 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{pad(hours, 2)}{sep}{pad(minutes, 2)}"


_FORMATTERS: Dict[str, Callable[[datetime, Any], str]] = {
    "D": lambda d, n: str(d.day),
    "DD": lambda d, n: pad(d.day, 2),
    "Do": lambda d, n: _ordinal(d.day),
    "d": lambda d, n: str(_weekday(d)),
    "dd": lambda d, n: pad(_weekday(d), 2),
    "W": lambda d, n: n.day_names_narrow[_weekday(d) - 1],
    "WW": lambda d, n: n.day_names_shorter[_weekday(d) - 1],
    "WWW": lambda d, n: n.day_names_short[_weekday(d) - 1],
    "WWWW": lambda d, n: n.day_names[_weekday(d) - 1],
    "M": lambda d, n: str(d.month),
    "MM": lambda d, n: pad(d.month, 2),
    "MMM": lambda d, n: n.month_names_short[d.month - 1],
    "MMMM": lambda d, n: n.month_names[d.month - 1],
    "YY": lambda d, n: pad(d.year % 100, 2),
    "YYYY": lambda d, n: pad(d.year, 4),
    "h": lambda d, n: str(d.hour % 12 or 12),
    "hh": lambda d, n: pad(d.hour % 12 or 12, 2),
    "H": lambda d, n: str(d.hour),
    "HH": lambda d, n: pad(d.hour, 2),
    "m": lambda d, n: str(d.minute),
    "mm": lambda d, n: pad(d.minute, 2),
    "s": lambda d, n: str(d.second),
    "ss": lambda d, n: pad(d.second, 2),
    "S": lambda d, n: str(d.microsecond // 100000),
    "SS": lambda d, n: pad(d.microsecond // 10000, 2),
    "SSS": lambda d, n: pad(d.microsecond // 1000, 3),
    "a": lambda d, n: n.am_pm[0] if d.hour < 12 else n.am_pm[1],
    "A": lambda d, n: (n.am_pm[0] if d.hour < 12 else n.am_pm[1]).upper(),
    "Z": lambda d, n: _utc_offset(d, ":"),
    "ZZ": lambda d, n: _utc_offset(d, ""),
    "X": lambda d, n: str(int(d.timestamp())),
    "x": lambda d, n: str(int(d.timestamp() * 1000)),
    "L": lambda d, n: _format(d, DAY_ID_MASK, n),
}


def _format(dt: datetime, mask: str, names: Any) -> str:
    mask = _expand_locale_mask(mask, names.masks)

    def replace(match):
        literal = match.group(1)
        if literal is not None:
            return literal
        return _FORMATTERS[match.group(0)](dt, names)

    return _TOKEN_RE.sub(replace, mask)


def format_date(
    date: Optional[DateSource],
    masks: Optional[Mask],
    locale: Any = None,
    timezone: TimezoneSource = None,
) -> str:
    """
    Format a date with the first pattern of ``masks``.

    Args:
        date: datetime, date, ISO string or millisecond timestamp. None
            formats to an empty string.
        masks: A pattern, a list of patterns or a mask name.
        locale: Source of names and named masks (a ``Locale``). English
            names are used when omitted.
        timezone: IANA name the date is shown in.

    Returns:
        str: The formatted date.
    """
    dt = coerce_datetime(date, timezone)
    if dt is None:
        return ""
    names = _names_for(locale)
    return _format(dt, normalize_masks(masks, locale)[0], names)


def _names_pattern(values) -> str:
    ordered = sorted({v for v in values if v}, key=len, reverse=True)
    return "|".join(re.escape(v) for v in ordered)


def _index_of(value: str, values) -> int:
    lowered = value.lower()
    for i, candidate in enumerate(values):
        if candidate.lower() == lowered:
            return i
    raise ValueError(value)


def _set(key: str, scale: int = 1):
    return lambda f, v, n: f.__setitem__(key, int(v) * scale)


def _set_offset(f, v, n):
    if v.upper() == "Z":
        f["offset"] = 0
        return
    sign = -1 if v[0] == "-" else 1
    digits = v[1:].replace(":", "")
    f["offset"] = sign * (int(digits[:2]) * 60 + int(digits[2:]))


def _set_two_digit_year(f, v, n):
    f["year"] = (date.today().year // 100) * 100 + int(v)


# token -> (regex builder, field setter)
_PARSERS: Dict[str, Tuple[Callable[[Any], str], Optional[Callable]]] = {
    "D": (lambda n: r"\d{1,2}", _set("day")),
    "DD": (lambda n: r"\d{2}", _set("day")),
    "Do": (
        lambda n: r"\d{1,2}(?:st|nd|rd|th)?",
        lambda f, v, n: f.__setitem__("day", int(re.match(r"\d+", v).group())),
    ),
    "d": (lambda n: r"\d", None),
    "dd": (lambda n: r"\d{2}", None),
    "W": (lambda n: _names_pattern(n.day_names_narrow), None),
    "WW": (lambda n: _names_pattern(n.day_names_shorter), None),
    "WWW": (lambda n: _names_pattern(n.day_names_short), None),
    "WWWW": (lambda n: _names_pattern(n.day_names), None),
    "M": (lambda n: r"\d{1,2}", _set("month")),
    "MM": (lambda n: r"\d{2}", _set("month")),
    "MMM": (
        lambda n: _names_pattern(n.month_names_short),
        lambda f, v, n: f.__setitem__("month", _index_of(v, n.month_names_short) + 1),
    ),
    "MMMM": (
        lambda n: _names_pattern(n.month_names),
        lambda f, v, n: f.__setitem__("month", _index_of(v, n.month_names) + 1),
    ),
    "YY": (lambda n: r"\d{2}", _set_two_digit_year),
    "YYYY": (lambda n: r"\d{4}", _set("year")),
    "h": (lambda n: r"\d{1,2}", _set("hour")),
    "hh": (lambda n: r"\d{2}", _set("hour")),
    "H": (lambda n: r"\d{1,2}", _set("hour")),
    "HH": (lambda n: r"\d{2}", _set("hour")),
    "m": (lambda n: r"\d{1,2}", _set("minute")),
    "mm": (lambda n: r"\d{2}", _set("minute")),
    "s": (lambda n: r"\d{1,2}", _set("second")),
    "ss": (lambda n: r"\d{2}", _set("second")),
    "S": (lambda n: r"\d", _set("microsecond", 100000)),
    "SS": (lambda n: r"\d{2}", _set("microsecond", 10000)),
    "SSS": (lambda n: r"\d{3}", _set("microsecond", 1000)),
    "a": (
        lambda n: _names_pattern(n.am_pm),
        lambda f, v, n: f.__setitem__("is_pm", v.lower() == n.am_pm[1].lower()),
    ),
    "Z": (lambda n: r"Z|[+-]\d{2}:?\d{2}", _set_offset),
    "ZZ": (lambda n: r"Z|[+-]\d{2}:?\d{2}", _set_offset),
    "X": (lambda n: r"-?\d+", _set("timestamp", 1000)),
    "x": (lambda n: r"-?\d+", _set("timestamp")),
}
_PARSERS["A"] = _PARSERS["a"]


def _parse(text: str, mask: str, names: Any, tz: TimezoneSource) -> Optional[datetime]:
    mask = _expand_locale_mask(mask, names.masks)
    regex_parts = []
    setters = []
    pos = 0
    for match in _TOKEN_RE.finditer(mask):
        regex_parts.append(re.escape(mask[pos : match.start()]))
        pos = match.end()
        literal = match.group(1)
        token = match.group(0)
        if literal is not None:
            regex_parts.append(re.escape(literal))
            continue
        if token not in _PARSERS:
            return None
        build, setter = _PARSERS[token]
        regex_parts.append(f"({build(names)})")
        setters.append(setter)
    regex_parts.append(re.escape(mask[pos:]))

    found = re.fullmatch("".join(regex_parts), text.strip(), re.IGNORECASE)
    if not found:
        return None

    values: Dict[str, Any] = {}
    try:
        for setter, raw in zip(setters, found.groups()):
            if setter is not None:
                setter(values, raw, names)
    except ValueError:
        return None

    if "timestamp" in values:
        return _from_timestamp(values["timestamp"], tz)

    hour = values.get("hour", 0)
    if "is_pm" in values:
        if values["is_pm"] and hour < 12:
            hour += 12
        elif not values["is_pm"] and hour == 12:
            hour = 0
    try:
        dt = datetime(
            values.get("year", date.today().year),
            values.get("month", 1),
            values.get("day", 1),
            hour,
            values.get("minute", 0),
            values.get("second", 0),
            values.get("microsecond", 0),
        )
    except ValueError:
        return None

    if "offset" in values:
        dt = dt.replace(tzinfo=dt_timezone(timedelta(minutes=values["offset"])))
    return localize(dt, tz)


def parse_date(
    date_string: str,
    mask: Optional[Mask],
    locale: Any = None,
    timezone: TimezoneSource = None,
) -> Optional[datetime]:
    """
    Parse ``date_string`` with the first matching pattern of ``mask``.

    Returns:
        Optional[datetime]: The parsed date, or None when no pattern matches
        or the matched values do not form a valid date.
    """
    if not isinstance(date_string, str):
        raise TypeError(f"Expected a date string, got {type(date_string).__name__}")
    names = _names_for(locale)
    for pattern in normalize_masks(mask, locale):
        parsed = _parse(date_string, pattern, names, timezone)
        if parsed is not None:
            return parsed
    logger.debug("Could not parse %r with %r", date_string, mask)
    return None


# ----------------------------------------------------------------------
# Date parts and month grids
# ----------------------------------------------------------------------
def _week_of_year(row_start: date, first_day_of_week: int) -> int:
    # Week 1 is the row holding January 1st
    row_end = row_start + timedelta(days=DAYS_IN_WEEK - 1)
    jan1 = date(row_end.year, 1, 1)
    week1_start = jan1 - timedelta(days=(_weekday(jan1) - first_day_of_week) % DAYS_IN_WEEK)
    return (row_start - week1_start).days // DAYS_IN_WEEK + 1


def get_month_parts(month: int, year: int, first_day_of_week: int = 1) -> MonthParts:
    """Describe the grid of ``month``/``year`` for weeks starting on ``first_day_of_week``."""
    num_days = calendar.monthrange(year, month)[1]
    first = date(year, month, 1)
    first_weekday = _weekday(first)
    offset = (first_weekday - first_day_of_week) % DAYS_IN_WEEK
    num_weeks = -(-(num_days + offset) // DAYS_IN_WEEK)

    grid_start = first - timedelta(days=offset)
    weeknumbers = []
    iso_weeknumbers = []
    for row in range(num_weeks):
        row_start = grid_start + timedelta(days=row * DAYS_IN_WEEK)
        weeknumbers.append(_week_of_year(row_start, first_day_of_week))
        monday = row_start + timedelta(days=(2 - first_day_of_week) % DAYS_IN_WEEK)
        iso_weeknumbers.append(monday.isocalendar()[1])

    return MonthParts(
        month=month,
        year=year,
        first_day_of_week=first_day_of_week,
        in_leap_year=calendar.isleap(year),
        first_weekday=first_weekday,
        num_days=num_days,
        num_weeks=num_weeks,
        weeknumbers=weeknumbers,
        iso_weeknumbers=iso_weeknumbers,
    )


def get_this_month_parts(first_day_of_week: int = 1) -> MonthParts:
    today = date.today()
    return get_month_parts(today.month, today.year, first_day_of_week)


def get_prev_month_parts(month: int, year: int, first_day_of_week: int = 1) -> MonthParts:
    if month == 1:
        return get_month_parts(12, year - 1, first_day_of_week)
    return get_month_parts(month - 1, year, first_day_of_week)


def get_next_month_parts(month: int, year: int, first_day_of_week: int = 1) -> MonthParts:
    if month == 12:
        return get_month_parts(1, year + 1, first_day_of_week)
    return get_month_parts(month + 1, year, first_day_of_week)


def _zone_name(tz: TimezoneSource) -> Optional[str]:
    if tz is None or isinstance(tz, str):
        return tz or None
    return getattr(tz, "zone", None) or str(tz)


def get_date_parts(
    date: Optional[DateSource], first_day_of_week: int = 1, timezone: TimezoneSource = None
) -> Optional[DateParts]:
    """Break ``date`` down into its parts within the month grid."""
    dt = coerce_datetime(date, timezone)
    if dt is None:
        return None
    month_parts = get_month_parts(dt.month, dt.year, first_day_of_week)
    weekday = _weekday(dt)
    day_from_end = month_parts.num_days - dt.day + 1
    offset = (month_parts.first_weekday - first_day_of_week) % DAYS_IN_WEEK
    week = (dt.day + offset - 1) // DAYS_IN_WEEK + 1
    return DateParts(
        date=dt,
        year=dt.year,
        month=dt.month,
        day=dt.day,
        hours=dt.hour,
        minutes=dt.minute,
        seconds=dt.second,
        milliseconds=dt.microsecond // 1000,
        weekday=weekday,
        weekday_position=(weekday - first_day_of_week) % DAYS_IN_WEEK + 1,
        weekday_ordinal=(dt.day - 1) // DAYS_IN_WEEK + 1,
        weekday_ordinal_from_end=(day_from_end - 1) // DAYS_IN_WEEK + 1,
        day_from_end=day_from_end,
        week=week,
        week_from_end=month_parts.num_weeks - week + 1,
        timezone=_zone_name(timezone),
    )


def get_date_from_parts(
    parts: Union[SimpleDateParts, Mapping[str, int]], timezone: TimezoneSource = None
) -> datetime:
    """
    Compose a datetime from parts.

    Missing ``year``/``month``/``day`` default to today, missing time parts to
    zero. Out of range values roll over (month 13 is January next year).
    """
    if isinstance(parts, SimpleDateParts):
        values = parts.to_dict()
    else:
        values = {k: v for k, v in parts.items() if v is not None}

    zone = get_timezone(timezone)
    today = datetime.now(zone).date() if zone else date.today()
    year = values.get("year", today.year)
    month = values.get("month", today.month)
    day = values.get("day", today.day)

    extra_years, month_index = divmod(month - 1, 12)
    dt = datetime(year + extra_years, month_index + 1, 1) + timedelta(
        days=day - 1,
        hours=values.get("hours", 0),
        minutes=values.get("minutes", 0),
        seconds=values.get("seconds", 0),
        milliseconds=values.get("milliseconds", 0),
    )
    return localize(dt, zone)


# ----------------------------------------------------------------------
# Conversions
# ----------------------------------------------------------------------
def to_date(
    d: Union[DateSource, DateParts, SimpleDateParts, Mapping[str, int], None],
    options: Union[DateOptions, Mapping[str, Any], None] = None,
) -> Optional[datetime]:
    """
    Convert a date source into a datetime.

    Strings are parsed with ``options.mask`` (ISO 8601 when the mask is
    missing or ``"iso"``), numbers are millisecond timestamps and mappings are
    date parts.
    """
    opts = DateOptions.coerce(options)
    if d is None:
        return None
    if isinstance(d, DateParts):
        d = d.to_simple()
    if isinstance(d, (SimpleDateParts, Mapping)):
        return get_date_from_parts(d, opts.timezone)
    if isinstance(d, str):
        if opts.mask in (None, "iso"):
            return _parse_iso(d, opts.timezone)
        return parse_date(d, opts.mask, locale=opts.locale, timezone=opts.timezone)
    return coerce_datetime(d, opts.timezone)


def from_date(
    date: Optional[DateSource],
    options: Union[DateOptions, Mapping[str, Any], None] = None,
) -> Any:
    """
    Convert a datetime into the representation named by ``options.type``.

    ``string`` formats with ``options.mask`` (``iso`` by default), ``number``
    gives a millisecond timestamp, ``object`` gives :class:`DateParts` and
    ``date``/``auto`` give the datetime itself.
    """
    opts = DateOptions.coerce(options)
    dt = coerce_datetime(date, opts.timezone)
    if dt is None:
        return None
    if opts.type == "string":
        return format_date(dt, opts.mask or "iso", locale=opts.locale, timezone=opts.timezone)
    if opts.type == "number":
        return int(dt.timestamp() * 1000)
    if opts.type == "object":
        first_day_of_week = opts.first_day_of_week or getattr(opts.locale, "first_day_of_week", 1)
        return get_date_parts(dt, first_day_of_week, opts.timezone)
    if opts.type in ("date", "auto"):
        return dt
    raise ValueError(f"Unknown date type {opts.type!r}")
