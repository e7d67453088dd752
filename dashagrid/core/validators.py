# dashagrid/core/validators.py
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from dashagrid.core.calendar import parse_date as parse_display_date
from dashagrid.core.models import BirthFacts

__all__ = [
    "ValidationError",
    "GRID_VIEWS",
    "parse_birth",
    "parse_date_value",
    "parse_base_number",
    "parse_years",
    "check_horizon",
    "parse_year",
    "parse_month",
    "parse_view",
    "parse_name",
]

# ───────────────────────── errors ─────────────────────────

class ValidationError(ValueError):
    """Structured validator error for the routes layer (has .errors())."""
    def __init__(self, details: Union[str, Dict[str, Any], List[Dict[str, Any]]]):
        if isinstance(details, str):
            self._details = [{"loc": [], "msg": details, "type": "value_error"}]
            super().__init__(details)
        elif isinstance(details, dict):
            self._details = [details]
            super().__init__(details.get("msg", "validation_error"))
        elif isinstance(details, list):
            self._details = details
            super().__init__(self._details[0]["msg"] if self._details else "validation_error")
        else:
            self._details = [{"loc": [], "msg": "validation_error", "type": "value_error"}]
            super().__init__("validation_error")

    def errors(self) -> List[Dict[str, Any]]:
        return list(self._details)


def _err(loc: List[str] | str, msg: str, typ: str = "value_error") -> Dict[str, Any]:
    return {"loc": [loc] if isinstance(loc, str) else loc, "msg": msg, "type": typ}


def _as_int(v: Any) -> Optional[int]:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if v.is_integer() else None
    if isinstance(v, str) and re.fullmatch(r"\s*-?\d+\s*", v):
        return int(v)
    return None


# ───────────────────────── atomic parsers ─────────────────────────

GRID_VIEWS = ("natal", "basic", "destiny", "mahadasha", "personal_year", "monthly")

def parse_date_value(v: Any, loc: str = "date") -> date:
    """Accept 'YYYY-MM-DD' or the display form 'D MMM YYYY'."""
    if isinstance(v, date) and not isinstance(v, datetime):
        return v
    if not isinstance(v, str) or not v.strip():
        raise ValidationError(_err(loc, f"{loc} must be 'YYYY-MM-DD' or 'D MMM YYYY'", "value_error.date"))
    s = v.strip()
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        pass
    try:
        return parse_display_date(s)
    except ValueError:
        raise ValidationError(_err(loc, f"{loc} must be 'YYYY-MM-DD' or 'D MMM YYYY'", "value_error.date"))


def parse_birth(v: Any, loc: str = "date_of_birth") -> BirthFacts:
    return BirthFacts.from_date(parse_date_value(v, loc))


def parse_base_number(v: Any, loc: str) -> int:
    n = _as_int(v)
    if n is None:
        raise ValidationError(_err(loc, f"{loc} must be an integer", "type_error.integer"))
    if not 1 <= n <= 9:
        raise ValidationError(_err(loc, f"{loc} must be between 1 and 9", "value_error.range"))
    return n


def parse_years(v: Any, default: int, maximum: int, loc: str = "years") -> int:
    if v is None:
        return default
    n = _as_int(v)
    if n is None:
        raise ValidationError(_err(loc, f"{loc} must be an integer", "type_error.integer"))
    if not 1 <= n <= maximum:
        raise ValidationError(_err(loc, f"{loc} must be between 1 and {maximum}", "value_error.range"))
    return n


def parse_year(v: Any, loc: str = "year") -> int:
    n = _as_int(v)
    if n is None or not 1 <= n <= 9999:
        raise ValidationError(_err(loc, f"{loc} must be a calendar year", "value_error.range"))
    return n


def parse_month(v: Any, loc: str = "month") -> int:
    n = _as_int(v)
    if n is None or not 1 <= n <= 12:
        raise ValidationError(_err(loc, f"{loc} must be between 1 and 12", "value_error.range"))
    return n


# Longest Mahadasha era (9) plus the following birthday must stay inside date.max.
HORIZON_MARGIN = 10

def check_horizon(birth_year: int, years: int) -> None:
    room = date.max.year - HORIZON_MARGIN - birth_year
    if room < 1:
        raise ValidationError(_err("date_of_birth", f"date_of_birth year must be at most {date.max.year - HORIZON_MARGIN - 1}", "value_error.range"))
    if years > room:
        raise ValidationError(_err("years", f"years must be at most {room} for this date_of_birth", "value_error.range"))


def parse_view(v: Any) -> str:
    s = str(v or "").strip().lower().replace("-", "_")
    if s not in GRID_VIEWS:
        raise ValidationError(_err("view", f"view must be one of {', '.join(GRID_VIEWS)}", "value_error.view"))
    return s


def parse_name(v: Any, loc: str = "name") -> str:
    if v is None:
        return ""
    if not isinstance(v, str):
        raise ValidationError(_err(loc, f"{loc} must be a string", "type_error.str"))
    return v.strip()
