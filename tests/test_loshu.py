# tests/test_loshu.py
from __future__ import annotations

from datetime import date

from dashagrid.core.antardasha import calculate_antardasha
from dashagrid.core.loshu import (
    CELL_VALUES,
    GRID_POSITIONS,
    ColoredDigit,
    DigitSource,
    basic_grid,
    destiny_grid,
    empty_grid,
    extract_natal_digits,
    grid_to_rows,
    mahadasha_grid,
    monthly_grid,
    natal_grid,
    personal_year_grid,
    place_digits,
)
from dashagrid.core.mahadasha import calculate_mahadasha
from dashagrid.core.pratyantardasha import calculate_pratyantardasha, pratyantardasha_for_date


def _cell(grid, value: int):
    return [(d.value, d.source) for d in grid[GRID_POSITIONS[value]].digits]


def test_layout_is_fixed() -> None:
    assert [CELL_VALUES[i] for i in range(9)] == [3, 1, 9, 6, 7, 5, 2, 8, 4]

def test_natal_digits_skip_zeros(birth_2000) -> None:
    assert [d.value for d in extract_natal_digits(birth_2000)] == [5, 1, 2]

def test_natal_grid(birth_2000) -> None:
    grid = natal_grid(birth_2000)
    assert _cell(grid, 5) == [(5, DigitSource.NATAL)]
    assert _cell(grid, 1) == [(1, DigitSource.NATAL)]
    assert _cell(grid, 2) == [(2, DigitSource.NATAL)]
    assert sum(len(c.digits) for c in grid) == 3

def test_place_digits_returns_new_grid_and_ignores_unknown() -> None:
    base = empty_grid()
    out = place_digits(base, [ColoredDigit(0, DigitSource.NATAL), ColoredDigit(3, DigitSource.ROOT)])
    assert all(not c.digits for c in base)
    assert _cell(out, 3) == [(3, DigitSource.ROOT)]
    assert sum(len(c.digits) for c in out) == 1

def test_basic_grid_adds_root_only_when_absent(birth_2000) -> None:
    assert _cell(basic_grid(birth_2000, 5), 5) == [(5, DigitSource.NATAL)]
    assert _cell(basic_grid(birth_2000, 3), 3) == [(3, DigitSource.ROOT)]

def test_destiny_collision_keeps_both(birth_2000) -> None:
    grid = destiny_grid(birth_2000, 5, 5)
    assert _cell(grid, 5) == [(5, DigitSource.NATAL), (5, DigitSource.DESTINY)]

def test_mahadasha_grid(birth_2000) -> None:
    maha = calculate_mahadasha(birth_2000, 5)
    grid = mahadasha_grid(birth_2000, 5, 8, maha, today=date(2010, 6, 1))
    assert _cell(grid, 6) == [(6, DigitSource.MAHADASHA)]
    assert _cell(grid, 8) == [(8, DigitSource.DESTINY)]

def test_mahadasha_grid_outside_horizon_is_blank(birth_2000) -> None:
    maha = calculate_mahadasha(birth_2000, 5, years_to_calculate=10)
    grid = mahadasha_grid(birth_2000, 5, 8, maha, today=date(2090, 1, 1))
    assert grid == destiny_grid(birth_2000, 5, 8)

def test_personal_year_grid(birth_2000) -> None:
    # 1 Jul 2023: Mahadasha 8 (2018-2025), Antardasha reduce(5+1+23+Thursday 3) = 5
    maha = calculate_mahadasha(birth_2000, 5)
    antar = calculate_antardasha(birth_2000)
    grid = personal_year_grid(birth_2000, 5, 8, 2023, maha, antar)
    assert _cell(grid, 5) == [(5, DigitSource.NATAL), (5, DigitSource.ANTARDASHA)]
    assert _cell(grid, 8) == [(8, DigitSource.DESTINY), (8, DigitSource.MAHADASHA)]

def test_monthly_grid_reads_the_fifteenth(birth_2000) -> None:
    maha = calculate_mahadasha(birth_2000, 5)
    antar = calculate_antardasha(birth_2000)
    praty = calculate_pratyantardasha(birth_2000.day, antar)
    grid = monthly_grid(birth_2000, 5, 8, 2023, 3, maha, antar, praty)
    expected = pratyantardasha_for_date(praty, date(2023, 3, 15)).value
    sources = [d for c in grid for d in c.digits if d.source is DigitSource.PRATYANTARDASHA]
    assert [d.value for d in sources] == [expected]
    assert sum(len(c.digits) for c in grid) == 7

def test_rows_and_dicts(birth_2000) -> None:
    rows = grid_to_rows(natal_grid(birth_2000))
    assert [[c["value"] for c in row] for row in rows] == [[3, 1, 9], [6, 7, 5], [2, 8, 4]]
    assert rows[1][2]["digits"] == [{"value": 5, "source": "natal", "label": "Natal"}]
