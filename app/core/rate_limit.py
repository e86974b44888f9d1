"""Sliding-window admission control for outbound API calls.

Each named resource ("gemini", "openweather") keeps the timestamps of the
calls admitted within the trailing window. A call is admitted while fewer
than ``max_requests`` timestamps remain; otherwise the caller learns how long
to wait until the oldest one leaves the window.

``SlidingWindowRateLimiter`` keeps that state in process memory and is only
correct for a single instance. ``RedisRateLimiter`` keeps it in a sorted set
per key so several instances share one budget.
"""
from __future__ import annotations

import asyncio
import logging
import math
import time
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Protocol

from app.core.config import settings

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class RateLimitConfig:
    max_requests: int
    window_s: float


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    wait_s: float
    remaining: int


RATE_LIMITS: Dict[str, RateLimitConfig] = {
    "gemini": RateLimitConfig(settings.RATE_LIMIT_GEMINI_MAX, settings.RATE_LIMIT_GEMINI_WINDOW_S),
    "openweather": RateLimitConfig(settings.RATE_LIMIT_OPENWEATHER_MAX, settings.RATE_LIMIT_OPENWEATHER_WINDOW_S),
}


class RateLimiter(Protocol):
    async def check(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        ...

    async def wait(self, key: str, config: RateLimitConfig) -> None:
        ...


class _WaitMixin:
    sleep: Callable[[float], Awaitable[None]]

    async def check(self, key: str, config: RateLimitConfig) -> RateLimitDecision:  # pragma: no cover
        raise NotImplementedError

    async def wait(self, key: str, config: RateLimitConfig) -> None:
        while True:
            decision = await self.check(key, config)
            if decision.allowed:
                return
            logger.info("ratelimit: %s waiting %.3fs", key, decision.wait_s)
            # a zero wait means the oldest entry expires this instant
            await self.sleep(max(decision.wait_s, 0.001))


class SlidingWindowRateLimiter(_WaitMixin):
    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._clock = clock
        self.sleep = sleep
        self._requests: Dict[str, List[float]] = {}

    async def check(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        return self.check_now(key, config)

    def check_now(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        now = self._clock()
        window_start = now - config.window_s
        requests = [ts for ts in self._requests.get(key, []) if ts > window_start]
        self._requests[key] = requests
        if len(requests) >= config.max_requests:
            wait_s = requests[0] + config.window_s - now
            return RateLimitDecision(allowed=False, wait_s=max(0.0, wait_s), remaining=0)
        requests.append(now)
        return RateLimitDecision(allowed=True, wait_s=0.0, remaining=config.max_requests - len(requests))

    def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            self._requests.clear()
        else:
            self._requests.pop(key, None)


class RedisRateLimiter(_WaitMixin):
    def __init__(
        self,
        redis=None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        prefix: str = "ratelimit",
    ):
        self._redis = redis
        self._clock = clock
        self.sleep = sleep
        self.prefix = prefix

    def _client(self):
        if self._redis is None:
            from app.core.cache import get_redis

            self._redis = get_redis()
        return self._redis

    async def check(self, key: str, config: RateLimitConfig) -> RateLimitDecision:
        r = self._client()
        rkey = f"{self.prefix}:{key}"
        now = self._clock()
        await r.zremrangebyscore(rkey, 0, now - config.window_s)
        count = await r.zcard(rkey)
        if count >= config.max_requests:
            oldest = await r.zrange(rkey, 0, 0, withscores=True)
            oldest_ts = float(oldest[0][1]) if oldest else now
            return RateLimitDecision(allowed=False, wait_s=max(0.0, oldest_ts + config.window_s - now), remaining=0)
        await r.zadd(rkey, {f"{now}:{uuid.uuid4().hex}": now})
        await r.expire(rkey, int(math.ceil(config.window_s)))
        return RateLimitDecision(allowed=True, wait_s=0.0, remaining=config.max_requests - count - 1)


_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    global _limiter
    if _limiter is None:
        if (settings.RATE_LIMIT_BACKEND or "memory").lower() == "redis":
            _limiter = RedisRateLimiter()
        else:
            _limiter = SlidingWindowRateLimiter()
    return _limiter
