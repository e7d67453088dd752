# dashagrid/core/profiles.py
from __future__ import annotations
import os
from functools import lru_cache
from typing import Any, Dict, Optional

import yaml

__all__ = ["PROFILES_PATH", "load_profiles", "profile_for_destiny", "theme_for_destiny"]

PROFILES_PATH = os.path.join(os.path.dirname(__file__), "..", "data", "destiny_profiles.yaml")


@lru_cache(maxsize=4)
def load_profiles(path: str = PROFILES_PATH) -> Dict[int, Dict[str, Any]]:
    """Destiny-number table from YAML, keyed by int 1..9."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return {int(k): dict(v) for k, v in (data.get("profiles") or {}).items()}


def profile_for_destiny(destiny_number: int) -> Optional[Dict[str, Any]]:
    prof = load_profiles().get(int(destiny_number))
    return dict(prof) if prof is not None else None


def theme_for_destiny(destiny_number: int) -> Dict[str, str]:
    # unknown numbers fall back to the theme for 1
    profiles = load_profiles()
    prof = profiles.get(int(destiny_number)) or profiles[1]
    return dict(prof["theme"])
