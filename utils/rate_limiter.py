"""Per-client rate limiting for endpoints that spend generation quota."""

import asyncio
import logging
import time
from collections import deque
from typing import Iterable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
BURST_WINDOW_SECONDS = 5


class RateLimiter:
    """
    Sliding-window limiter keyed by client.

    A client may make ``requests_per_minute`` calls per minute, and no more
    than ``burst_limit`` of them within any 5 second span. Clients with no
    calls inside the window are forgotten.
    """

    def __init__(self, requests_per_minute: int = 30, burst_limit: int = 10):
        self.requests_per_minute = requests_per_minute
        self.burst_limit = burst_limit
        self._history: dict[str, deque[float]] = {}
        self._last_sweep = 0.0
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._history)

    def _prune(self, client_id: str, now: float) -> deque[float]:
        history = self._history.get(client_id)
        if history is None:
            return deque()
        while history and history[0] <= now - WINDOW_SECONDS:
            history.popleft()
        if not history:
            del self._history[client_id]
        return history

    def _sweep(self, now: float) -> None:
        """Drop every client whose whole history has left the window; at most once per window."""
        if now - self._last_sweep < WINDOW_SECONDS:
            return
        self._last_sweep = now
        for client_id in list(self._history):
            self._prune(client_id, now)

    async def is_allowed(self, client_id: str) -> tuple[bool, int]:
        """Record a call if permitted. Returns (allowed, retry_after_seconds)."""
        async with self._lock:
            now = time.time()
            self._sweep(now)
            history = self._prune(client_id, now)

            in_burst = sum(1 for t in reversed(history) if t > now - BURST_WINDOW_SECONDS)
            if in_burst >= self.burst_limit:
                return False, BURST_WINDOW_SECONDS

            if len(history) >= self.requests_per_minute:
                # history is time-ordered, so the head is the next to expire
                retry_after = int(history[0] + WINDOW_SECONDS - now) + 1
                return False, max(1, retry_after)

            history.append(now)
            self._history[client_id] = history
            return True, 0


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Apply rate limiting to POSTs on the given paths; everything else passes through.

    ``X-Forwarded-For`` is only honoured with ``trust_forwarded_for``; callers
    control that header, so rotating it would otherwise evade the limit.
    """

    def __init__(self, app, rate_limiter: RateLimiter, paths: Iterable[str], trust_forwarded_for: bool = False):
        super().__init__(app)
        self.rate_limiter = rate_limiter
        self.paths = frozenset(paths)
        self.trust_forwarded_for = trust_forwarded_for

    def client_id(self, request: Request) -> str:
        client_ip = request.client.host if request.client else "unknown"
        if self.trust_forwarded_for:
            client_ip = request.headers.get("X-Forwarded-For", client_ip)
        return client_ip.split(",")[0].strip()

    async def dispatch(self, request: Request, call_next):
        if request.method != "POST" or request.url.path not in self.paths:
            return await call_next(request)

        client_ip = self.client_id(request)
        allowed, retry_after = await self.rate_limiter.is_allowed(client_ip)

        if not allowed:
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={
                    "error": "Rate limit exceeded",
                    "retry_after": retry_after,
                    "message": f"Too many requests. Please retry after {retry_after} seconds.",
                },
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
