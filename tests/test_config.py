# tests/test_config.py
from __future__ import annotations

from dashagrid.utils.config import YEARS_HARD_CEILING, load_config


def test_packaged_defaults(monkeypatch) -> None:
    for k in ("DASHA_CONFIG", "DASHA_YEARS_DEFAULT", "DASHA_YEARS_MAX", "DASHA_RL_GRIDS_PER_MIN"):
        monkeypatch.delenv(k, raising=False)
    cfg = load_config()
    assert cfg.years_default == 100
    assert cfg.years_max == 150
    assert cfg.rate_limits.grids == 60
    assert cfg["rate_limits"]["daily"] == 120

def test_yaml_file_and_env_overrides(tmp_path, monkeypatch) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("years_default: 40\nrate_limits:\n  grids: 5\n", encoding="utf-8")
    monkeypatch.setenv("DASHA_YEARS_MAX", "80")
    monkeypatch.setenv("DASHA_RL_DAILY_PER_MIN", "7")
    cfg = load_config(str(path))
    assert cfg.years_default == 40
    assert cfg.years_max == 80
    assert cfg.rate_limits.grids == 5
    assert cfg.rate_limits.daily == 7
    assert cfg.rate_limits.numbers == 120

def test_ceiling_and_default_clamp(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("DASHA_YEARS_MAX", "500")
    monkeypatch.setenv("DASHA_YEARS_DEFAULT", "999")
    cfg = load_config(str(tmp_path / "missing.yaml"))
    assert cfg.years_max == YEARS_HARD_CEILING
    assert cfg.years_default == YEARS_HARD_CEILING

def test_bad_env_is_ignored(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("DASHA_YEARS_DEFAULT", "lots")
    monkeypatch.delenv("DASHA_YEARS_MAX", raising=False)
    cfg = load_config(str(tmp_path / "missing.yaml"))
    assert cfg.years_default == 100
