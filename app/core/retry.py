from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger("uvicorn.error")

T = TypeVar("T")


def _always(exc: BaseException) -> bool:
    return True


@dataclass
class RetryPolicy:
    """Exponential backoff: attempt n (n >= 1) waits base_delay_s * multiplier ** (n - 1)."""

    max_attempts: int = 3
    base_delay_s: float = 1.0
    multiplier: float = 2.0
    is_retryable: Callable[[BaseException], bool] = _always
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")

    def delay_for(self, retry_no: int) -> float:
        return self.base_delay_s * (self.multiplier ** (retry_no - 1))

    async def run(self, fn: Callable[[], Awaitable[T]], *, label: str = "call") -> T:
        attempt = 0
        while True:
            try:
                return await fn()
            except Exception as e:
                attempt += 1
                if not self.is_retryable(e):
                    raise
                logger.warning("retry: %s attempt %s failed reason=%s", label, attempt, e)
                if attempt >= self.max_attempts:
                    raise RetryExhausted(self.max_attempts, e) from e
            delay = self.delay_for(attempt)
            logger.warning("retry: %s retry %s/%s after %.1fs", label, attempt, self.max_attempts - 1, delay)
            await self.sleep(delay)


class RetryExhausted(Exception):
    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"gave up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error
