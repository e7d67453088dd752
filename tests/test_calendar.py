# tests/test_calendar.py
from __future__ import annotations

from datetime import date

import pytest
from hypothesis import given, strategies as st

from dashagrid.core.calendar import (
    birthday_in_year,
    day_before,
    format_date,
    parse_date,
    weekday_name,
    weekday_number,
)


def test_format_has_no_padding() -> None:
    assert format_date(date(1998, 1, 5)) == "5 Jan 1998"
    assert format_date(date(2023, 12, 31)) == "31 Dec 2023"

def test_parse_accepts_display_form() -> None:
    assert parse_date("15 Aug 2023") == date(2023, 8, 15)
    assert parse_date("  1 mar 2024 ") == date(2024, 3, 1)

@pytest.mark.parametrize("bad", ["", "2023-08-15", "15 August 2023", "32 Jan 2020", "29 Feb 2023", "5 Foo 2000"])
def test_parse_rejects(bad: str) -> None:
    with pytest.raises(ValueError):
        parse_date(bad)

@given(st.dates(min_value=date(1, 1, 1), max_value=date(9999, 12, 31)))
def test_round_trip(d: date) -> None:
    assert parse_date(format_date(d)) == d

def test_feb_29_birthday_rolls_to_march_in_common_years() -> None:
    assert birthday_in_year(29, 2, 2023) == date(2023, 3, 1)
    assert birthday_in_year(29, 2, 2024) == date(2024, 2, 29)
    assert day_before(birthday_in_year(29, 2, 2025)) == date(2025, 2, 28)

def test_weekday_table() -> None:
    # 13..19 Aug 2023 runs Sunday..Saturday
    got = [weekday_number(date(2023, 8, d)) for d in range(13, 20)]
    assert got == [1, 2, 9, 5, 3, 6, 8]
    assert weekday_name(date(2023, 8, 15)) == "Tuesday"
