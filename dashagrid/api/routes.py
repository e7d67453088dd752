# dashagrid/api/routes.py
"""
Dashagrid API routes
- Numbers: root / destiny / name number + destiny profile
- Timelines: Mahadasha, Antardasha, Pratyantardasha
- Daily + hourly numbers
- Lo Shu grids (natal, basic, destiny, mahadasha, personal_year, monthly)
- Ops: /api/health, /api/config

Notes:
- Dates in responses are "D MMM YYYY"; request dates may be ISO or that form.
- root_number / destiny_number are derived from date_of_birth when not sent.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from dashagrid.version import VERSION
from dashagrid.utils.config import load_config
from dashagrid.utils.ratelimit import rate_limit
from dashagrid.api.helpers import (
    birth_context_from_payload,
    antardasha_timeline,
    build_grid,
    grid_to_json,
    mahadasha_timeline,
    optional_date,
    optional_month,
    optional_year,
    pratyantardasha_timeline,
)
from dashagrid.core.antardasha import current_antardasha
from dashagrid.core.calendar import format_date
from dashagrid.core.daily import calculate_daily, calculate_hourly, current_hour_index
from dashagrid.core.loshu import MONTH_NAMES
from dashagrid.core.mahadasha import current_mahadasha
from dashagrid.core.name_number import name_breakdown, name_number, split_first_last
from dashagrid.core.pratyantardasha import year_block_for
from dashagrid.core.profiles import profile_for_destiny
from dashagrid.core.validators import GRID_VIEWS, ValidationError, parse_name, parse_view

log = logging.getLogger(__name__)
api = Blueprint("api", __name__)

DEBUG_VERBOSE = os.getenv("DASHA_DEBUG_VERBOSE", "0").lower() in ("1", "true", "yes", "on")


# ───────────────────────── helpers ─────────────────────────
def _cfg():
    cfg = getattr(current_app, "cfg", None)
    if not cfg:
        cfg = load_config()
        current_app.cfg = cfg  # type: ignore[attr-defined]
    return cfg


def _rl(name: str):
    """Per-endpoint cap (calls per minute) resolved from config at request time."""
    return lambda: int(_cfg().rate_limits.get(name, 60))


def _json_error(code: str, details: Any = None, http: int = 400):
    out: Dict[str, Any] = {"ok": False, "error": code}
    if details is not None:
        out["details"] = details
    return jsonify(out), http


def _body() -> Dict[str, Any]:
    data = request.get_json(force=True, silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError({"loc": ["body"], "msg": "JSON body must be an object", "type": "type_error.dict"})
    return data


def _internal(route: str, e: Exception):
    log.exception("%s failed: %s", route, e)
    return _json_error("internal_error", str(e) if DEBUG_VERBOSE else None, 500)


# ───────────────────────── ops ─────────────────────────
@api.get("/api/health")
def health():
    return jsonify({"ok": True, "status": "up", "version": VERSION}), 200


@api.get("/api/config")
@rate_limit(30)
def config_info():
    cfg = _cfg()
    return jsonify({
        "ok": True,
        "version": VERSION,
        "years_default": cfg.years_default,
        "years_max": cfg.years_max,
        "rate_limits": dict(cfg.rate_limits),
        "grid_views": list(GRID_VIEWS),
        "debug_verbose": DEBUG_VERBOSE,
    }), 200


# ───────────────────────── numbers ─────────────────────────
@api.post("/api/numbers")
@rate_limit(_rl("numbers"))
def numbers_endpoint():
    try:
        body = _body()
        ctx = birth_context_from_payload(body, _cfg())
        name = parse_name(body.get("name"))
        out: Dict[str, Any] = {
            "ok": True,
            "birth": ctx.birth.to_dict(),
            "root_number": ctx.root_number,
            "destiny_number": ctx.destiny_number,
            "profile": profile_for_destiny(ctx.destiny_number),
        }
        if name:
            first, last = split_first_last(name)
            out["name"] = {
                "first_name": first,
                "last_name": last,
                "name_number": name_number(first, last),
                "letters": name_breakdown(first + last),
            }
        return jsonify(out), 200
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)
    except Exception as e:
        return _internal("numbers", e)


# ───────────────────────── timelines ─────────────────────────
@api.post("/api/mahadasha")
@rate_limit(_rl("mahadasha"))
def mahadasha_endpoint():
    try:
        body = _body()
        ctx = birth_context_from_payload(body, _cfg())
        today = optional_date(body, "today")
        timeline = mahadasha_timeline(ctx)
        current = current_mahadasha(timeline, today)
        return jsonify({
            "ok": True,
            "root_number": ctx.root_number,
            "years": ctx.years,
            "today": format_date(today),
            "current": current.to_dict() if current else None,
            "timeline": [p.to_dict() for p in timeline],
        }), 200
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)
    except Exception as e:
        return _internal("mahadasha", e)


@api.post("/api/antardasha")
@rate_limit(_rl("antardasha"))
def antardasha_endpoint():
    try:
        body = _body()
        ctx = birth_context_from_payload(body, _cfg())
        today = optional_date(body, "today")
        timeline = antardasha_timeline(ctx)
        current = current_antardasha(timeline, today)
        return jsonify({
            "ok": True,
            "years": ctx.years,
            "today": format_date(today),
            "current": current.to_dict() if current else None,
            "timeline": [p.to_dict() for p in timeline],
        }), 200
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)
    except Exception as e:
        return _internal("antardasha", e)


@api.post("/api/pratyantardasha")
@rate_limit(_rl("pratyantardasha"))
def pratyantardasha_endpoint():
    """All year blocks, or just the block starting in `year` when it is sent."""
    try:
        body = _body()
        ctx = birth_context_from_payload(body, _cfg())
        timeline = pratyantardasha_timeline(ctx)
        if body.get("year") is not None:
            year = optional_year(body, date.today().year)
            block = year_block_for(timeline, year)
            blocks = [block] if block else []
        else:
            blocks = timeline
        return jsonify({
            "ok": True,
            "years": ctx.years,
            "blocks": [b.to_dict() for b in blocks],
        }), 200
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)
    except Exception as e:
        return _internal("pratyantardasha", e)


@api.post("/api/daily")
@rate_limit(_rl("daily"))
def daily_endpoint():
    try:
        body = _body()
        ctx = birth_context_from_payload(body, _cfg())
        day = optional_date(body, "date")
        daily = calculate_daily(day, pratyantardasha_timeline(ctx))
        if daily is None:
            return jsonify({"ok": True, "found": False, "date": format_date(day)}), 200
        return jsonify({
            "ok": True,
            "found": True,
            "daily": daily.to_dict(),
            "hourly": [h.to_dict() for h in calculate_hourly(daily.daily_value)],
            # only meaningful when the requested day is today
            "current_hour": current_hour_index() if day == date.today() else None,
        }), 200
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)
    except Exception as e:
        return _internal("daily", e)


# ───────────────────────── grids ─────────────────────────
@api.post("/api/grids")
@rate_limit(_rl("grids"))
def grids_endpoint():
    try:
        body = _body()
        ctx = birth_context_from_payload(body, _cfg())
        view = parse_view(body.get("view"))
        today = optional_date(body, "today")
        year = optional_year(body, today.year)
        month = optional_month(body, today.month)
        grid = build_grid(view, ctx, today=today, year=year, month=month)
        out: Dict[str, Any] = {
            "ok": True,
            "view": view,
            "root_number": ctx.root_number,
            "destiny_number": ctx.destiny_number,
            "grid": grid_to_json(grid),
        }
        if view == "personal_year":
            out["year"] = year
        elif view == "monthly":
            out.update(year=year, month=month, month_name=MONTH_NAMES[month - 1])
        return jsonify(out), 200
    except ValidationError as e:
        return _json_error("validation_error", e.errors(), 400)
    except Exception as e:
        return _internal("grids", e)
