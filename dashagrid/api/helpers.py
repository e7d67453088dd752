# dashagrid/api/helpers.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from dashagrid.core.antardasha import calculate_antardasha
from dashagrid.core.loshu import (
    LoShuGrid,
    basic_grid,
    destiny_grid,
    grid_to_rows,
    mahadasha_grid,
    monthly_grid,
    natal_grid,
    personal_year_grid,
)
from dashagrid.core.mahadasha import MahadashaPeriod, calculate_mahadasha
from dashagrid.core.models import BirthFacts, Period, destiny_number, root_number
from dashagrid.core.pratyantardasha import YearBlock, calculate_pratyantardasha
from dashagrid.core.validators import (
    check_horizon,
    parse_base_number,
    parse_birth,
    parse_date_value,
    parse_month,
    parse_year,
    parse_years,
)

# ---- Payload -> core inputs ---------------------------------------------------
# Routes only ever see BirthContext; the core functions never see raw JSON.

@dataclass(frozen=True)
class BirthContext:
    birth: BirthFacts
    root_number: int
    destiny_number: int
    years: int


def birth_context_from_payload(data: Dict[str, Any], cfg) -> BirthContext:
    """
    Build the birth facts plus root/destiny numbers from a request body.
    root_number / destiny_number are derived from the birth date when omitted.
    Raises ValidationError on any bad field.
    """
    birth = parse_birth(data.get("date_of_birth"))
    root = data.get("root_number")
    destiny = data.get("destiny_number")
    years = parse_years(data.get("years"), cfg.years_default, cfg.years_max)
    check_horizon(birth.year, years)
    return BirthContext(
        birth=birth,
        root_number=parse_base_number(root, "root_number") if root is not None else root_number(birth),
        destiny_number=parse_base_number(destiny, "destiny_number") if destiny is not None else destiny_number(birth),
        years=years,
    )


def optional_date(data: Dict[str, Any], key: str) -> date:
    raw = data.get(key)
    return date.today() if raw is None else parse_date_value(raw, key)


def optional_year(data: Dict[str, Any], default: int) -> int:
    raw = data.get("year")
    return default if raw is None else parse_year(raw)


def optional_month(data: Dict[str, Any], default: int) -> int:
    raw = data.get("month")
    return default if raw is None else parse_month(raw)


# ---- Timelines ----------------------------------------------------------------

def mahadasha_timeline(ctx: BirthContext) -> List[MahadashaPeriod]:
    return calculate_mahadasha(ctx.birth, ctx.root_number, ctx.years)


def antardasha_timeline(ctx: BirthContext) -> List[Period]:
    return calculate_antardasha(ctx.birth, ctx.years)


def pratyantardasha_timeline(ctx: BirthContext, antardasha: Optional[List[Period]] = None) -> List[YearBlock]:
    return calculate_pratyantardasha(ctx.birth.day, antardasha if antardasha is not None else antardasha_timeline(ctx))


# ---- Grids --------------------------------------------------------------------

def build_grid(view: str, ctx: BirthContext, *, today: date, year: int, month: int) -> LoShuGrid:
    """Dispatch one grid view; `view` is already validated."""
    b, r, d = ctx.birth, ctx.root_number, ctx.destiny_number
    if view == "natal":
        return natal_grid(b)
    if view == "basic":
        return basic_grid(b, r)
    if view == "destiny":
        return destiny_grid(b, r, d)
    maha = mahadasha_timeline(ctx)
    if view == "mahadasha":
        return mahadasha_grid(b, r, d, maha, today)
    antar = antardasha_timeline(ctx)
    if view == "personal_year":
        return personal_year_grid(b, r, d, year, maha, antar)
    return monthly_grid(b, r, d, year, month, maha, antar, pratyantardasha_timeline(ctx, antar))


def grid_to_json(grid: LoShuGrid) -> Dict[str, Any]:
    return {
        "cells": [c.to_dict() for c in grid],
        "rows": grid_to_rows(grid),
    }
