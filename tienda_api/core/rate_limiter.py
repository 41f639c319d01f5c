from __future__ import annotations

import threading
import time
from typing import Dict, Tuple

from fastapi import HTTPException, Request


class RateLimiter:
    """Fixed-window hit counter keyed by scope and client address."""

    def __init__(self) -> None:
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        expired = [key for key, (_count, reset) in self._hits.items() if now > reset]
        for key in expired:
            del self._hits[key]

    def check(self, key: str, limit: int, window_seconds: int) -> None:
        if limit <= 0:
            return
        now = time.time()
        with self._lock:
            self._prune(now)
            count, reset = self._hits.get(key, (0, now + window_seconds))
            count += 1
            self._hits[key] = (count, reset)
            if count > limit:
                raise HTTPException(429, "Demasiadas solicitudes. Intenta de nuevo en unos instantes.")


def client_ip(request: Request, *, trust_proxy_headers: bool = False) -> str:
    if trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_ip(
    limiter: RateLimiter,
    request: Request,
    scope: str,
    *,
    limit: int,
    window_seconds: int,
    trust_proxy_headers: bool = False,
) -> None:
    key = f"{scope}:{client_ip(request, trust_proxy_headers=trust_proxy_headers)}"
    limiter.check(key, limit, window_seconds)
