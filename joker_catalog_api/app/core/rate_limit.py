"""
Per-client request throttling.

``FixedWindowRateLimiter`` counts requests per client key (the remote
host) in fixed windows.  Once a client exceeds ``max_requests`` within
a window, further requests are rejected with HTTP 429 until the window
resets.  Every response carries the draft IETF ``RateLimit-*`` headers
so clients can pace themselves.

State lives in process memory; behind several workers each worker
enforces its own budget.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float

    def headers(self) -> Dict[str, str]:
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(max(0, math.ceil(self.reset_after))),
        }


class FixedWindowRateLimiter:
    """Allow ``max_requests`` per ``window_seconds`` for each client key."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: Dict[str, list] = {}

    def hit(self, key: str) -> RateLimitDecision:
        """Record one request for ``key`` and decide whether it may proceed."""
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now - window[0] >= self.window_seconds:
                window = [now, 0]
                self._windows[key] = window
                self._prune(now)
            window[1] += 1
            count = window[1]
            reset_after = window[0] + self.window_seconds - now
        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=reset_after,
        )

    def _prune(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for k in expired:
            del self._windows[k]


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit_middleware(limiter: FixedWindowRateLimiter):
    """Build an HTTP middleware enforcing ``limiter``."""

    async def middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        key = _client_key(request)
        decision = limiter.hit(key)
        if not decision.allowed:
            logger.info("Rate limit exceeded for %s", key)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": RATE_LIMIT_MESSAGE},
                headers=decision.headers(),
            )
        response = await call_next(request)
        response.headers.update(decision.headers())
        return response

    return middleware
