from __future__ import annotations

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from tienda_api.core import rate_limiter
from tienda_api.core.rate_limiter import RateLimiter, client_ip


def _request(host: str, forwarded: str | None = None) -> Request:
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({"type": "http", "method": "POST", "path": "/", "headers": headers, "client": (host, 1234)})


def test_expired_windows_are_dropped(monkeypatch):
    limiter = RateLimiter()
    now = [1000.0]
    monkeypatch.setattr(rate_limiter.time, "time", lambda: now[0])

    for i in range(500):
        limiter.check(f"auth:register:10.0.0.{i}", limit=3, window_seconds=60)
    assert len(limiter._hits) == 500

    now[0] += 61
    limiter.check("auth:register:10.0.1.1", limit=3, window_seconds=60)

    assert list(limiter._hits) == ["auth:register:10.0.1.1"]


def test_limit_applies_within_window_and_resets_after(monkeypatch):
    limiter = RateLimiter()
    now = [1000.0]
    monkeypatch.setattr(rate_limiter.time, "time", lambda: now[0])

    limiter.check("k", limit=1, window_seconds=10)
    with pytest.raises(HTTPException) as excinfo:
        limiter.check("k", limit=1, window_seconds=10)
    assert excinfo.value.status_code == 429

    now[0] += 11
    limiter.check("k", limit=1, window_seconds=10)


def test_forwarded_header_ignored_unless_trusted():
    request = _request("192.0.2.7", forwarded="203.0.113.9, 10.0.0.1")

    assert client_ip(request) == "192.0.2.7"
    assert client_ip(request, trust_proxy_headers=True) == "203.0.113.9"
