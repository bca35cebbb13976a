from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from calendar_locale import DateRange, DateRangeOptions


def test_single_day_range():
    day = DateRange(datetime(2024, 3, 5, 18))
    assert day.is_single_day
    assert day.start == date(2024, 3, 5)
    assert day.contains(datetime(2024, 3, 5, 1))
    assert not day.contains(date(2024, 3, 6))


def test_pair_is_ordered():
    r = DateRange((date(2024, 3, 10), date(2024, 3, 1)))
    assert (r.start, r.end) == (date(2024, 3, 1), date(2024, 3, 10))
    assert len(list(r.days())) == 10


def test_open_ended_range():
    r = DateRange({"start": date(2024, 1, 1), "end": None})
    assert r.contains(date(2099, 1, 1))
    assert not r.contains(date(2023, 12, 31))
    with pytest.raises(ValueError):
        list(r.days())


def test_range_in_timezone():
    late_utc = datetime(2024, 3, 5, 23, 30, tzinfo=timezone.utc)
    r = DateRange(late_utc, DateRangeOptions(timezone="Asia/Tokyo"))
    assert r.start == date(2024, 3, 6)


def test_intersects():
    march = DateRange({"start": date(2024, 3, 1), "end": date(2024, 3, 31)})
    assert march.intersects(DateRange(date(2024, 3, 31)))
    assert not march.intersects(DateRange(date(2024, 4, 1)))
    assert march.intersects(DateRange({"start": None, "end": date(2024, 3, 1)}))


def test_from_many():
    ranges = DateRange.from_many(
        [date(2024, 3, 1), None, {"start": date(2024, 3, 3), "span": 2}],
        {"first_day_of_week": 2},
    )
    assert len(ranges) == 2
    assert ranges[1].end == date(2024, 3, 4)
    assert ranges[0].options.first_day_of_week == 2
    assert DateRange.from_many(None) == []
    assert len(DateRange.from_many(date(2024, 3, 1))) == 1


def test_copy_from_range():
    original = DateRange((date(2024, 3, 1), date(2024, 3, 2)))
    copy = DateRange(original)
    assert (copy.start, copy.end) == (original.start, original.end)


def test_bad_source():
    with pytest.raises(TypeError):
        DateRange(42)


@pytest.mark.parametrize(
    "source",
    [
        ("garbage", "2024-03-05"),
        ("2024-03-01", "not a date"),
        {"start": "someday", "span": 3},
    ],
)
def test_unparsable_bound_raises(source):
    with pytest.raises(ValueError):
        DateRange(source)


def test_none_bound_stays_open():
    r = DateRange((None, "2024-03-05"))
    assert r.start is None
    assert r.end == date(2024, 3, 5)
