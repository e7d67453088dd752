# dashagrid/core/pratyantardasha.py
from __future__ import annotations

"""
Pratyantardasha: roughly monthly sub-periods inside each Antardasha year.

Per year block:
  • seed number = previous year's Antardasha value (first block: its own)
  • carry       = birth day
  • each step:  total = 8·n + carry;  months = total // 30;  carry = total % 30
                period = months × 30 days, clamped to [current, block end]
  • numbers cycle 1..9; at most MAX_PERIODS_PER_YEAR periods per block

When ``total < 30`` the period has zero whole months; it is clamped to a single
day rather than producing an inverted range.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from dashagrid.core.calendar import add_days, format_date
from dashagrid.core.mahadasha import next_number
from dashagrid.core.models import Period

__all__ = [
    "DAYS_PER_UNIT",
    "MAX_PERIODS_PER_YEAR",
    "YearBlock",
    "periods_for_year",
    "calculate_pratyantardasha",
    "pratyantardasha_for_date",
    "year_block_for",
]

log = logging.getLogger(__name__)

DAYS_PER_UNIT = 8       # days contributed per unit of the running number
MONTH_DAYS = 30
MAX_PERIODS_PER_YEAR = 50


@dataclass(frozen=True)
class YearBlock:
    year: int
    from_date: date
    to_date: date
    periods: Tuple[Period, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "from_date": format_date(self.from_date),
            "to_date": format_date(self.to_date),
            "periods": [p.to_dict() for p in self.periods],
        }


def periods_for_year(birth_day: int, start: date, end: date, starting_number: int) -> List[Period]:
    out: List[Period] = []
    current = start
    number = starting_number
    carry = birth_day
    while current <= end:
        total = DAYS_PER_UNIT * number + carry
        months, carry = divmod(total, MONTH_DAYS)
        period_end = add_days(current, months * MONTH_DAYS - 1)
        if period_end > end:
            period_end = end
        if period_end < current:
            period_end = current
        out.append(Period(from_date=current, to_date=period_end, value=number))
        current = add_days(period_end, 1)
        number = next_number(number)
        if len(out) >= MAX_PERIODS_PER_YEAR:
            if current <= end:
                log.warning("pratyantardasha: period cap hit for block starting %s", start)
            break
    return out


def calculate_pratyantardasha(birth_day: int, antardasha: Sequence[Period]) -> List[YearBlock]:
    blocks: List[YearBlock] = []
    for i, entry in enumerate(antardasha):
        seed = entry.value if i == 0 else antardasha[i - 1].value
        blocks.append(YearBlock(
            year=entry.from_date.year,
            from_date=entry.from_date,
            to_date=entry.to_date,
            periods=tuple(periods_for_year(birth_day, entry.from_date, entry.to_date, seed)),
        ))
    return blocks


def pratyantardasha_for_date(timeline: Sequence[YearBlock], d: date) -> Optional[Period]:
    for block in timeline:
        if not (block.from_date <= d <= block.to_date):
            continue
        for period in block.periods:
            if period.contains(d):
                return period
    return None


def year_block_for(timeline: Sequence[YearBlock], year: int) -> Optional[YearBlock]:
    for block in timeline:
        if block.year == year:
            return block
    return None
