# dashagrid/core/calendar.py
from __future__ import annotations

"""
Civil-date helpers shared by every period generator.

- One canonical representation internally: ``datetime.date``.
- ``"D MMM YYYY"`` (e.g. ``"5 Jan 1998"``) only at the serialization boundary.
- Weekday numbers follow a fixed, non-sequential table (Tue = 9); keep it literal.
"""

import re
from datetime import date, timedelta
from typing import Dict, Tuple

__all__ = [
    "MONTH_ABBR",
    "WEEKDAY_NAMES",
    "WEEKDAY_NUMBERS",
    "format_date",
    "parse_date",
    "add_days",
    "day_before",
    "birthday_in_year",
    "weekday_name",
    "weekday_number",
]

MONTH_ABBR: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_MONTH_INDEX: Dict[str, int] = {abbr: i + 1 for i, abbr in enumerate(MONTH_ABBR)}

# Indexed by date.weekday() (Monday == 0)
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

WEEKDAY_NUMBERS: Dict[str, int] = {
    "Sunday": 1,
    "Monday": 2,
    "Tuesday": 9,
    "Wednesday": 5,
    "Thursday": 3,
    "Friday": 6,
    "Saturday": 8,
}

_DISPLAY_RE = re.compile(r"^\s*(?P<d>\d{1,2})\s+(?P<m>[A-Za-z]{3})\s+(?P<y>\d{1,4})\s*$")


# ───────────────────────── boundary format ─────────────────────────
def format_date(d: date) -> str:
    return f"{d.day} {MONTH_ABBR[d.month - 1]} {d.year}"


def parse_date(s: str) -> date:
    """Parse ``"D MMM YYYY"``; raises ValueError on anything else."""
    m = _DISPLAY_RE.match(s or "")
    if not m:
        raise ValueError(f"Invalid date '{s}': expected 'D MMM YYYY'")
    month = _MONTH_INDEX.get(m.group("m").title())
    if month is None:
        raise ValueError(f"Invalid month abbreviation in '{s}'")
    return date(int(m.group("y")), month, int(m.group("d")))


# ───────────────────────── arithmetic ─────────────────────────
def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def day_before(d: date) -> date:
    return d - timedelta(days=1)


def birthday_in_year(day: int, month: int, year: int) -> date:
    """
    The birthday as it falls in ``year``.

    A day that does not exist in that month rolls forward into the next one,
    so a 29 Feb birthday is observed on 1 Mar in common years.
    """
    return date(year, month, 1) + timedelta(days=day - 1)


# ───────────────────────── weekdays ─────────────────────────
def weekday_name(d: date) -> str:
    return WEEKDAY_NAMES[d.weekday()]


def weekday_number(d: date) -> int:
    return WEEKDAY_NUMBERS[weekday_name(d)]
