# dashagrid/core/loshu.py
from __future__ import annotations

"""
Lo Shu grid composer.

Fixed layout (cell index in brackets):

    3 [0] | 1 [1] | 9 [2]
    6 [3] | 7 [4] | 5 [5]
    2 [6] | 8 [7] | 4 [8]

Cells accumulate tagged digits in order; colliding values from different
sources are all kept, each with its own provenance.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from dashagrid.core.antardasha import antardasha_for_date
from dashagrid.core.mahadasha import MahadashaPeriod, mahadasha_for_date
from dashagrid.core.models import BirthFacts, Period
from dashagrid.core.pratyantardasha import YearBlock, pratyantardasha_for_date

__all__ = [
    "GRID_POSITIONS",
    "CELL_VALUES",
    "MONTH_NAMES",
    "DigitSource",
    "SOURCE_LABELS",
    "ColoredDigit",
    "GridCell",
    "LoShuGrid",
    "extract_natal_digits",
    "has_digit",
    "empty_grid",
    "place_digits",
    "grid_to_rows",
    "natal_grid",
    "basic_grid",
    "destiny_grid",
    "mahadasha_grid",
    "personal_year_grid",
    "monthly_grid",
]

GRID_POSITIONS: Dict[int, int] = {
    3: 0, 1: 1, 9: 2,
    6: 3, 7: 4, 5: 5,
    2: 6, 8: 7, 4: 8,
}
CELL_VALUES: Dict[int, int] = {cell: value for value, cell in GRID_POSITIONS.items()}

MONTH_NAMES: Tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# reference points inside a period, so past/future grids stay well-defined
PERSONAL_YEAR_REF_MONTH, PERSONAL_YEAR_REF_DAY = 7, 1
MONTHLY_REF_DAY = 15


class DigitSource(str, Enum):
    NATAL = "natal"
    ROOT = "root"
    DESTINY = "destiny"
    MAHADASHA = "mahadasha"
    ANTARDASHA = "antardasha"
    PRATYANTARDASHA = "pratyantardasha"

    @property
    def label(self) -> str:
        return SOURCE_LABELS[self]


SOURCE_LABELS: Dict[DigitSource, str] = {
    DigitSource.NATAL: "Natal",
    DigitSource.ROOT: "Root",
    DigitSource.DESTINY: "Destiny",
    DigitSource.MAHADASHA: "Mahadasha",
    DigitSource.ANTARDASHA: "Antardasha",
    DigitSource.PRATYANTARDASHA: "Pratyantardasha",
}


@dataclass(frozen=True)
class ColoredDigit:
    value: int
    source: DigitSource

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "source": self.source.value, "label": self.source.label}


@dataclass(frozen=True)
class GridCell:
    position: int
    digits: Tuple[ColoredDigit, ...] = ()

    @property
    def value(self) -> int:
        """The Lo Shu numeral this cell stands for."""
        return CELL_VALUES[self.position]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "value": self.value,
            "digits": [d.to_dict() for d in self.digits],
        }


LoShuGrid = Tuple[GridCell, ...]


# ───────────────────────── primitives ─────────────────────────
def extract_natal_digits(birth: BirthFacts) -> List[ColoredDigit]:
    return [ColoredDigit(int(ch), DigitSource.NATAL) for ch in birth.digit_string() if ch != "0"]


def has_digit(digits: Iterable[ColoredDigit], value: int) -> bool:
    return any(d.value == value for d in digits)


def empty_grid() -> LoShuGrid:
    return tuple(GridCell(position=i) for i in range(9))


def place_digits(grid: LoShuGrid, digits: Iterable[ColoredDigit]) -> LoShuGrid:
    """Return a new grid with ``digits`` appended to their fixed cells (unknown values ignored)."""
    cells: List[List[ColoredDigit]] = [list(c.digits) for c in grid]
    for digit in digits:
        idx = GRID_POSITIONS.get(digit.value)
        if idx is not None:
            cells[idx].append(digit)
    return tuple(GridCell(position=i, digits=tuple(ds)) for i, ds in enumerate(cells))


def grid_to_rows(grid: LoShuGrid) -> List[List[Dict[str, Any]]]:
    cells = [c.to_dict() for c in grid]
    return [cells[0:3], cells[3:6], cells[6:9]]


# ───────────────────────── digit lists ─────────────────────────
def _base_digits(birth: BirthFacts, root_number: int) -> List[ColoredDigit]:
    natal = extract_natal_digits(birth)
    digits = list(natal)
    if not has_digit(natal, root_number):
        digits.append(ColoredDigit(root_number, DigitSource.ROOT))
    return digits


def _destiny_digits(birth: BirthFacts, root_number: int, destiny_number: int) -> List[ColoredDigit]:
    digits = _base_digits(birth, root_number)
    digits.append(ColoredDigit(destiny_number, DigitSource.DESTINY))
    return digits


def _append_if(digits: List[ColoredDigit], value: Optional[int], source: DigitSource) -> None:
    if value:
        digits.append(ColoredDigit(value, source))


# ───────────────────────── views ─────────────────────────
def natal_grid(birth: BirthFacts) -> LoShuGrid:
    return place_digits(empty_grid(), extract_natal_digits(birth))


def basic_grid(birth: BirthFacts, root_number: int) -> LoShuGrid:
    return place_digits(empty_grid(), _base_digits(birth, root_number))


def destiny_grid(birth: BirthFacts, root_number: int, destiny_number: int) -> LoShuGrid:
    return place_digits(empty_grid(), _destiny_digits(birth, root_number, destiny_number))


def mahadasha_grid(
    birth: BirthFacts,
    root_number: int,
    destiny_number: int,
    mahadasha: Sequence[MahadashaPeriod],
    today: Optional[date] = None,
) -> LoShuGrid:
    digits = _destiny_digits(birth, root_number, destiny_number)
    current = mahadasha_for_date(mahadasha, today or date.today())
    _append_if(digits, current.number if current else None, DigitSource.MAHADASHA)
    return place_digits(empty_grid(), digits)


def personal_year_grid(
    birth: BirthFacts,
    root_number: int,
    destiny_number: int,
    year: int,
    mahadasha: Sequence[MahadashaPeriod],
    antardasha: Sequence[Period],
) -> LoShuGrid:
    ref = date(year, PERSONAL_YEAR_REF_MONTH, PERSONAL_YEAR_REF_DAY)
    digits = _destiny_digits(birth, root_number, destiny_number)
    maha = mahadasha_for_date(mahadasha, ref)
    _append_if(digits, maha.number if maha else None, DigitSource.MAHADASHA)
    antar = antardasha_for_date(antardasha, ref)
    _append_if(digits, antar.value if antar else None, DigitSource.ANTARDASHA)
    return place_digits(empty_grid(), digits)


def monthly_grid(
    birth: BirthFacts,
    root_number: int,
    destiny_number: int,
    year: int,
    month: int,
    mahadasha: Sequence[MahadashaPeriod],
    antardasha: Sequence[Period],
    pratyantardasha: Sequence[YearBlock],
) -> LoShuGrid:
    """``month`` is 1-based; values are read on the 15th of that month."""
    ref = date(year, month, MONTHLY_REF_DAY)
    digits = _destiny_digits(birth, root_number, destiny_number)
    maha = mahadasha_for_date(mahadasha, ref)
    _append_if(digits, maha.number if maha else None, DigitSource.MAHADASHA)
    antar = antardasha_for_date(antardasha, ref)
    _append_if(digits, antar.value if antar else None, DigitSource.ANTARDASHA)
    praty = pratyantardasha_for_date(pratyantardasha, ref)
    _append_if(digits, praty.value if praty else None, DigitSource.PRATYANTARDASHA)
    return place_digits(empty_grid(), digits)
