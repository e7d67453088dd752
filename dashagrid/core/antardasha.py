# dashagrid/core/antardasha.py
from __future__ import annotations
from datetime import date
from typing import List, Optional, Sequence
import logging

from dashagrid.core.calendar import birthday_in_year, day_before, weekday_number
from dashagrid.core.digits import reduce_digits
from dashagrid.core.models import BirthFacts, Period

__all__ = [
    "antardasha_number",
    "calculate_antardasha",
    "antardasha_for_date",
    "current_antardasha",
]

log = logging.getLogger(__name__)


def antardasha_number(birth: BirthFacts, target_year: int) -> int:
    """
    Yearly number:
      reduce( reduce(day) + month + (year mod 100) + weekday_number(birthday in year) )
    """
    birthday = birthday_in_year(birth.day, birth.month, target_year)
    total = reduce_digits(birth.day) + birth.month + (target_year % 100) + weekday_number(birthday)
    return reduce_digits(total)


def calculate_antardasha(birth: BirthFacts, years_to_calculate: int = 100) -> List[Period]:
    """One period per birthday, from the birthday to the day before the next one."""
    out: List[Period] = []
    for year in range(birth.year, birth.year + years_to_calculate + 1):
        out.append(Period(
            from_date=birthday_in_year(birth.day, birth.month, year),
            to_date=day_before(birthday_in_year(birth.day, birth.month, year + 1)),
            value=antardasha_number(birth, year),
        ))
    log.debug("antardasha: %d years from %d", len(out), birth.year)
    return out


def antardasha_for_date(timeline: Sequence[Period], d: date) -> Optional[Period]:
    for entry in timeline:
        if entry.contains(d):
            return entry
    return None


def current_antardasha(timeline: Sequence[Period], today: Optional[date] = None) -> Optional[Period]:
    return antardasha_for_date(timeline, today or date.today())
