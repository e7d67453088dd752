# dashagrid/core/mahadasha.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence
import logging

from dashagrid.core.calendar import birthday_in_year, day_before, format_date
from dashagrid.core.models import BirthFacts

__all__ = [
    "DEFAULT_YEARS",
    "MahadashaPeriod",
    "next_number",
    "calculate_mahadasha",
    "mahadasha_for_year",
    "mahadasha_for_date",
    "current_mahadasha",
]

log = logging.getLogger(__name__)

DEFAULT_YEARS = 100


@dataclass(frozen=True)
class MahadashaPeriod:
    year: int           # start year
    number: int         # 1..9, also the length in years
    from_year: int
    to_year: int        # inclusive; year + number - 1
    from_date: date
    to_date: date

    def contains_year(self, y: int) -> bool:
        return self.from_year <= y <= self.to_year

    def contains(self, d: date) -> bool:
        return self.from_date <= d <= self.to_date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "number": self.number,
            "from_year": self.from_year,
            "to_year": self.to_year,
            "from_date": format_date(self.from_date),
            "to_date": format_date(self.to_date),
        }


def next_number(n: int) -> int:
    return 1 if n == 9 else n + 1


def calculate_mahadasha(
    birth: BirthFacts,
    root_number: int,
    years_to_calculate: int = DEFAULT_YEARS,
) -> List[MahadashaPeriod]:
    """
    Root-number driven eras.

    Each era lasts as many years as its own number; numbers cycle 1..9 from
    the root. Generation stops once the start year passes
    birth.year + years_to_calculate.
    """
    end_year = birth.year + years_to_calculate
    year = birth.year
    number = root_number
    out: List[MahadashaPeriod] = []
    while year <= end_year:
        next_year = year + number
        out.append(MahadashaPeriod(
            year=year,
            number=number,
            from_year=year,
            to_year=next_year - 1,
            from_date=birthday_in_year(birth.day, birth.month, year),
            to_date=day_before(birthday_in_year(birth.day, birth.month, next_year)),
        ))
        year = next_year
        number = next_number(number)
    log.debug("mahadasha: %d eras from %d (root=%d)", len(out), birth.year, root_number)
    return out


def mahadasha_for_year(timeline: Sequence[MahadashaPeriod], year: int) -> Optional[MahadashaPeriod]:
    """Last era starting on or before ``year``, or None once ``year`` is past that era's to_year."""
    for entry in reversed(timeline):
        if entry.year <= year:
            return entry if entry.contains_year(year) else None
    return None


def mahadasha_for_date(timeline: Sequence[MahadashaPeriod], d: date) -> Optional[MahadashaPeriod]:
    for entry in timeline:
        if entry.contains(d):
            return entry
    return None


def current_mahadasha(timeline: Sequence[MahadashaPeriod], today: Optional[date] = None) -> Optional[MahadashaPeriod]:
    return mahadasha_for_date(timeline, today or date.today())
