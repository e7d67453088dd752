# dashagrid/core/models.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict

from dashagrid.core.calendar import format_date
from dashagrid.core.digits import reduce_digits, reduce_sum

__all__ = ["BirthFacts", "Period", "root_number", "destiny_number"]


@dataclass(frozen=True)
class BirthFacts:
    day: int
    month: int
    year: int

    def __post_init__(self) -> None:
        date(self.year, self.month, self.day)  # existence check

    @classmethod
    def from_date(cls, d: date) -> "BirthFacts":
        return cls(day=d.day, month=d.month, year=d.year)

    @classmethod
    def from_iso(cls, s: str) -> "BirthFacts":
        return cls.from_date(date.fromisoformat(s.strip()))

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)

    def digit_string(self) -> str:
        """Day, month and year concatenated in natural decimal form (5 Jan 2000 -> '512000')."""
        return f"{self.day}{self.month}{self.year}"

    def to_dict(self) -> Dict[str, Any]:
        return {"day": self.day, "month": self.month, "year": self.year,
                "date": format_date(self.as_date())}


@dataclass(frozen=True)
class Period:
    """Inclusive civil-date range carrying a single reduced number."""
    from_date: date
    to_date: date
    value: int

    def contains(self, d: date) -> bool:
        return self.from_date <= d <= self.to_date

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from_date": format_date(self.from_date),
            "to_date": format_date(self.to_date),
            "value": self.value,
        }


def root_number(birth: BirthFacts) -> int:
    return reduce_digits(birth.day)


def destiny_number(birth: BirthFacts) -> int:
    return reduce_sum(int(ch) for ch in birth.digit_string())
