# dashagrid/core/daily.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from dashagrid.core.calendar import format_date, weekday_name, weekday_number
from dashagrid.core.digits import reduce_digits
from dashagrid.core.pratyantardasha import YearBlock, pratyantardasha_for_date

__all__ = [
    "DailyResult",
    "HourlyResult",
    "calculate_daily",
    "hour_label",
    "hourly_value",
    "calculate_hourly",
    "calculate_hourly_for_date",
    "current_hour_index",
]


@dataclass(frozen=True)
class DailyResult:
    date: date
    daily_value: int
    pratyantardasha: Optional[int]
    weekday_name: str
    weekday_number: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": format_date(self.date),
            "daily_value": self.daily_value,
            "pratyantardasha": self.pratyantardasha,
            "weekday_name": self.weekday_name,
            "weekday_number": self.weekday_number,
        }


@dataclass(frozen=True)
class HourlyResult:
    hour: int           # 0..23
    hour_label: str
    hourly_value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"hour": self.hour, "hour_label": self.hour_label, "hourly_value": self.hourly_value}


def calculate_daily(d: date, timeline: Sequence[YearBlock]) -> Optional[DailyResult]:
    """
    reduce(pratyantardasha + weekday number) for the period containing ``d``.
    Returns None when ``d`` lies outside every computed period.
    """
    period = pratyantardasha_for_date(timeline, d)
    if period is None:
        return None
    wd_num = weekday_number(d)
    return DailyResult(
        date=d,
        daily_value=reduce_digits(period.value + wd_num),
        pratyantardasha=period.value,
        weekday_name=weekday_name(d),
        weekday_number=wd_num,
    )


def _hour12(hour24: int) -> int:
    return hour24 % 12 or 12


def hour_label(hour24: int) -> str:
    return f"{_hour12(hour24)}:00 {'AM' if hour24 < 12 else 'PM'}"


def hourly_value(daily_value: int, hour24: int) -> int:
    return reduce_digits(daily_value + _hour12(hour24))


def calculate_hourly(daily_value: int) -> List[HourlyResult]:
    return [HourlyResult(hour=h, hour_label=hour_label(h), hourly_value=hourly_value(daily_value, h))
            for h in range(24)]


def calculate_hourly_for_date(d: date, timeline: Sequence[YearBlock]) -> Optional[List[HourlyResult]]:
    daily = calculate_daily(d, timeline)
    if daily is None:
        return None
    return calculate_hourly(daily.daily_value)


def current_hour_index(now: Optional[datetime] = None) -> int:
    return (now or datetime.now()).hour
