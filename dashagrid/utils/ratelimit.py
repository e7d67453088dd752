# dashagrid/utils/ratelimit.py
from __future__ import annotations

"""
In-process token-bucket rate limiter for the dashagrid Flask routes.

- One bucket per client IP + route (or any key function you pass)
- Thread-safe (per-process) via RLock
- X-RateLimit-* headers on every limited route, Retry-After on 429
- Env toggles (read per request, so tests can flip them):
    DASHA_RL_DISABLE       -> disable limiter entirely
    DASHA_RL_ALLOWLIST     -> comma-separated list of client ids/IPs to skip
"""

import math
import os
import time
from dataclasses import dataclass
from functools import wraps
from threading import RLock
from typing import Any, Callable, Dict, Optional, Set

from flask import request, jsonify, make_response

__all__ = ["rate_limit", "endpoint_key", "reset_buckets"]

# ───────────────────────── storage / globals ─────────────────────────
_buckets: Dict[str, "Bucket"] = {}  # in-memory; per-process
_lock = RLock()


def _disabled() -> bool:
    return os.getenv("DASHA_RL_DISABLE", "0").lower() in ("1", "true", "yes", "on")


def _allowlist() -> Set[str]:
    return {s.strip() for s in os.getenv("DASHA_RL_ALLOWLIST", "").split(",") if s.strip()}


def reset_buckets() -> None:
    with _lock:
        _buckets.clear()


# ───────────────────────── key functions ─────────────────────────
def _first_forwarded_for(req) -> str:
    xff = req.headers.get("X-Forwarded-For", "")
    return (xff.split(",")[0].strip() if xff else "") or (req.remote_addr or "anon")


def endpoint_key(req) -> str:
    """Bucket per client IP + endpoint (route-scoped)."""
    return f"{_first_forwarded_for(req)}:{(req.endpoint or req.path) or '*'}"


# ───────────────────────── bucket / math ─────────────────────────
@dataclass
class Bucket:
    tokens: float       # current tokens
    capacity: float     # burst capacity
    rate: float         # tokens per second
    ts: float           # last refill time (monotonic)
    limit: int          # advertised limit (per minute)


def _now() -> float:
    return time.monotonic()


def _refill(b: Bucket, now: float) -> None:
    if now > b.ts:
        b.tokens = min(b.capacity, b.tokens + (now - b.ts) * b.rate)
        b.ts = now


def _cleanup(now: float) -> None:
    """Evict idle, full buckets at most every 30s so memory stays bounded."""
    last = getattr(_cleanup, "_last", 0.0)
    if now - last < 30.0:
        return
    setattr(_cleanup, "_last", now)
    stale = [k for k, b in _buckets.items() if b.tokens >= b.capacity and (now - b.ts) > 180.0]
    for k in stale:
        _buckets.pop(k, None)


def _limited_response(b: Bucket, retry_after: int):
    payload = {
        "ok": False,
        "error": "rate_limited",
        "details": {"retry_after_seconds": retry_after},
    }
    resp = make_response(jsonify(payload), 429)
    resp.headers["Retry-After"] = str(retry_after)
    resp.headers["X-RateLimit-Limit"] = str(b.limit)
    resp.headers["X-RateLimit-Remaining"] = "0"
    resp.headers["X-RateLimit-Reset"] = str(retry_after)
    return resp


# ───────────────────────── public decorator ─────────────────────────
def rate_limit(
    max_per_minute: int | Callable[[], int],
    key_fn: Optional[Callable[[Any], str]] = None,
    *,
    burst: Optional[int] = None,
):
    """
    Token-bucket rate limiter.

    `max_per_minute` may be a callable so the limit can come from config that is
    loaded after the blueprint module is imported.

    On limit, returns 429 JSON:
        {"ok": False, "error": "rate_limited", "details": {"retry_after_seconds": N}}
    """
    if not callable(max_per_minute) and max_per_minute <= 0:
        raise ValueError("max_per_minute must be > 0")

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if _disabled() or request.method in ("HEAD", "OPTIONS"):
                return f(*args, **kwargs)

            bucket_key = str((key_fn or endpoint_key)(request))
            allow = _allowlist()
            if bucket_key in allow or bucket_key.split(":", 1)[0] in allow:
                return f(*args, **kwargs)

            limit = int(max_per_minute() if callable(max_per_minute) else max_per_minute)
            limit = max(limit, 1)
            capacity = float(burst if burst is not None else limit)
            now = _now()
            with _lock:
                _cleanup(now)
                b = _buckets.get(bucket_key)
                if b is None:
                    b = Bucket(tokens=capacity, capacity=capacity, rate=limit / 60.0, ts=now, limit=limit)
                    _buckets[bucket_key] = b
                else:
                    _refill(b, now)

                if b.tokens + 1e-12 < 1.0:
                    retry_after = max(1, math.ceil((1.0 - b.tokens) / b.rate))
                    return _limited_response(b, retry_after)

                b.tokens -= 1.0
                remaining = max(0, int(b.tokens))

            resp = make_response(f(*args, **kwargs))
            resp.headers.setdefault("X-RateLimit-Limit", str(limit))
            resp.headers["X-RateLimit-Remaining"] = str(remaining)
            return resp

        return wrapper

    return decorator
