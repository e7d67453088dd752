# tests/test_daily.py
from __future__ import annotations

from datetime import date, datetime

from dashagrid.core.antardasha import calculate_antardasha
from dashagrid.core.daily import (
    calculate_daily,
    calculate_hourly,
    calculate_hourly_for_date,
    current_hour_index,
    hour_label,
    hourly_value,
)
from dashagrid.core.models import Period
from dashagrid.core.pratyantardasha import YearBlock, calculate_pratyantardasha


def _single_block(value: int) -> list:
    start, end = date(2023, 1, 1), date(2023, 12, 31)
    return [YearBlock(year=2023, from_date=start, to_date=end, periods=(Period(start, end, value),))]


def test_daily_adds_weekday_number() -> None:
    # Tuesday -> 9; reduce(4 + 9) = 4
    res = calculate_daily(date(2023, 8, 15), _single_block(4))
    assert res is not None
    assert (res.daily_value, res.pratyantardasha, res.weekday_name, res.weekday_number) == (4, 4, "Tuesday", 9)
    assert res.to_dict()["date"] == "15 Aug 2023"

def test_daily_not_found_is_none() -> None:
    assert calculate_daily(date(2030, 1, 1), _single_block(4)) is None
    assert calculate_hourly_for_date(date(2030, 1, 1), _single_block(4)) is None

def test_hour_labels() -> None:
    assert hour_label(0) == "12:00 AM"
    assert hour_label(11) == "11:00 AM"
    assert hour_label(12) == "12:00 PM"
    assert hour_label(23) == "11:00 PM"

def test_hourly_uses_twelve_hour_clock() -> None:
    assert hourly_value(4, 0) == 7     # 4 + 12
    assert hourly_value(4, 12) == 7
    assert hourly_value(4, 13) == 5    # 4 + 1

def test_hourly_has_24_entries() -> None:
    hours = calculate_hourly(4)
    assert len(hours) == 24
    assert [h.hour for h in hours] == list(range(24))
    assert hours[0].to_dict() == {"hour": 0, "hour_label": "12:00 AM", "hourly_value": 7}
    assert all(1 <= h.hourly_value <= 9 for h in hours)

def test_full_chain(birth_2000) -> None:
    tl = calculate_pratyantardasha(birth_2000.day, calculate_antardasha(birth_2000, years_to_calculate=30))
    res = calculate_daily(date(2023, 8, 15), tl)
    assert res is not None
    assert 1 <= res.daily_value <= 9
    assert len(calculate_hourly_for_date(date(2023, 8, 15), tl)) == 24

def test_current_hour_index() -> None:
    assert current_hour_index(datetime(2023, 8, 15, 17, 30)) == 17
