# tests/conftest.py
from __future__ import annotations

"""
Pytest configuration for the dashagrid suite.

- Registers Hypothesis profiles for local dev and CI.
- Provides a Flask test client with the rate limiter switched off.
- Adds a 'slow' marker for the long-horizon timeline checks.
"""

import os
import pytest
from hypothesis import settings, HealthCheck


# ──────────────────────────────────────────────────────────────────────────────
# Hypothesis profiles
# ──────────────────────────────────────────────────────────────────────────────
settings.register_profile(
    "dev",
    settings(
        deadline=None,           # timelines over 100 years can be slow on small runners
        max_examples=60,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=120,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: mark test as slow")


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


# ──────────────────────────────────────────────────────────────────────────────
# Global fixtures
# ──────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("DASHA_RL_DISABLE", "1")
    monkeypatch.delenv("DASHA_CONFIG", raising=False)
    from dashagrid.main import create_app
    application = create_app()
    application.testing = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def birth_2000():
    from dashagrid.core.models import BirthFacts
    return BirthFacts(day=5, month=1, year=2000)
