# tests/test_ratelimit.py
from __future__ import annotations

import pytest
from flask import Flask, jsonify

from dashagrid.utils.ratelimit import rate_limit, reset_buckets


@pytest.fixture
def limited_client(monkeypatch):
    monkeypatch.delenv("DASHA_RL_DISABLE", raising=False)
    monkeypatch.delenv("DASHA_RL_ALLOWLIST", raising=False)
    reset_buckets()
    app = Flask(__name__)

    @app.get("/ping")
    @rate_limit(2)
    def ping():
        return jsonify(ok=True), 200

    yield app.test_client()
    reset_buckets()


def test_third_call_is_limited(limited_client) -> None:
    r1 = limited_client.get("/ping")
    assert r1.status_code == 200
    assert r1.headers["X-RateLimit-Limit"] == "2"
    assert r1.headers["X-RateLimit-Remaining"] == "1"
    assert limited_client.get("/ping").status_code == 200
    r3 = limited_client.get("/ping")
    assert r3.status_code == 429
    assert r3.get_json()["error"] == "rate_limited"
    assert int(r3.headers["Retry-After"]) >= 1

def test_disable_and_allowlist(limited_client, monkeypatch) -> None:
    monkeypatch.setenv("DASHA_RL_DISABLE", "1")
    for _ in range(5):
        assert limited_client.get("/ping").status_code == 200
    monkeypatch.setenv("DASHA_RL_DISABLE", "0")
    monkeypatch.setenv("DASHA_RL_ALLOWLIST", "10.0.0.9")
    for _ in range(5):
        assert limited_client.get("/ping", headers={"X-Forwarded-For": "10.0.0.9"}).status_code == 200

def test_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        rate_limit(0)
