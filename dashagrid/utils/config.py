# dashagrid/utils/config.py
import os
import logging
from typing import Optional

import yaml

log = logging.getLogger(__name__)

YEARS_HARD_CEILING = 150

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "..", "..", "config", "defaults.yaml"
)

_BUILTIN = {
    "years_default": 100,
    "years_max": YEARS_HARD_CEILING,
    "rate_limits": {
        "numbers": 120,
        "mahadasha": 60,
        "antardasha": 60,
        "pratyantardasha": 30,
        "daily": 120,
        "grids": 60,
    },
}


class AttrDict(dict):
    """Dict that also supports attribute access: cfg.years_max and cfg['years_max'] both work."""
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e
    def __setattr__(self, key, value):
        self[key] = value

def _to_attr(obj):
    if isinstance(obj, dict):
        return AttrDict({k: _to_attr(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return [_to_attr(x) for x in obj]
    return obj

def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring non-integer %s=%r", name, raw)
        return None

def load_config(path: Optional[str] = None):
    """
    Load YAML config from `path` (or DASHA_CONFIG, or config/defaults.yaml) on top of
    built-in defaults, then apply env overrides:
      - DASHA_YEARS_DEFAULT
      - DASHA_YEARS_MAX          (never above 150)
      - DASHA_RL_<NAME>_PER_MIN  (per-endpoint rate limits)
    Returns an AttrDict for convenient access.
    """
    path = path or os.getenv("DASHA_CONFIG") or DEFAULT_CONFIG_PATH

    data = {k: (dict(v) if isinstance(v, dict) else v) for k, v in _BUILTIN.items()}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        limits = loaded.pop("rate_limits", None) or {}
        data.update(loaded)
        data["rate_limits"].update(limits)
    else:
        log.info("Config file %s not found; using built-in defaults", path)

    years_default = _env_int("DASHA_YEARS_DEFAULT")
    if years_default is not None:
        data["years_default"] = years_default
    years_max = _env_int("DASHA_YEARS_MAX")
    if years_max is not None:
        data["years_max"] = years_max

    for name in list(data["rate_limits"]):
        per_min = _env_int(f"DASHA_RL_{name.upper()}_PER_MIN")
        if per_min is not None:
            data["rate_limits"][name] = per_min

    data["years_max"] = max(1, min(int(data["years_max"]), YEARS_HARD_CEILING))
    data["years_default"] = max(1, min(int(data["years_default"]), data["years_max"]))

    return _to_attr(data)
