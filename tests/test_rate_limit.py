import pytest

from app.core.rate_limit import RateLimitConfig, RedisRateLimiter, SlidingWindowRateLimiter


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeSleep:
    def __init__(self, clock):
        self.clock = clock
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)
        self.clock.now += seconds


class FakeRedis:
    """Just enough of the sorted set API."""

    def __init__(self):
        self.sets = {}
        self.ttl = {}

    async def zremrangebyscore(self, key, lo, hi):
        members = self.sets.get(key, {})
        for m in [m for m, s in members.items() if lo <= s <= hi]:
            del members[m]

    async def zcard(self, key):
        return len(self.sets.get(key, {}))

    async def zrange(self, key, start, end, withscores=False):
        ordered = sorted(self.sets.get(key, {}).items(), key=lambda kv: kv[1])
        return ordered[start : end + 1]

    async def zadd(self, key, mapping):
        self.sets.setdefault(key, {}).update(mapping)

    async def expire(self, key, seconds):
        self.ttl[key] = seconds


CONFIG = RateLimitConfig(max_requests=5, window_s=60)


@pytest.mark.asyncio
async def test_allows_max_requests_then_rejects():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(clock=clock)
    for i in range(5):
        decision = await limiter.check("gemini", CONFIG)
        assert decision.allowed
        assert decision.remaining == 4 - i
        clock.now += 1
    decision = await limiter.check("gemini", CONFIG)
    assert not decision.allowed
    # oldest call was at t=1000, now is t=1005
    assert decision.wait_s == pytest.approx(55)


@pytest.mark.asyncio
async def test_allows_again_once_oldest_call_leaves_window():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(clock=clock)
    for _ in range(5):
        await limiter.check("gemini", CONFIG)
    clock.now += 60
    assert (await limiter.check("gemini", CONFIG)).allowed


@pytest.mark.asyncio
async def test_rejected_calls_do_not_consume_budget():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(clock=clock)
    for _ in range(5):
        await limiter.check("k", CONFIG)
    for _ in range(3):
        assert not (await limiter.check("k", CONFIG)).allowed
    clock.now += 60.5
    for _ in range(5):
        assert (await limiter.check("k", CONFIG)).allowed


@pytest.mark.asyncio
async def test_keys_are_independent():
    limiter = SlidingWindowRateLimiter(clock=FakeClock())
    one = RateLimitConfig(max_requests=1, window_s=60)
    assert (await limiter.check("gemini", one)).allowed
    assert not (await limiter.check("gemini", one)).allowed
    assert (await limiter.check("openweather", one)).allowed


@pytest.mark.asyncio
async def test_wait_sleeps_until_slot_frees():
    clock = FakeClock()
    sleep = FakeSleep(clock)
    limiter = SlidingWindowRateLimiter(clock=clock, sleep=sleep)
    cfg = RateLimitConfig(max_requests=2, window_s=10)
    await limiter.wait("k", cfg)
    clock.now += 4
    await limiter.wait("k", cfg)
    await limiter.wait("k", cfg)
    assert sleep.calls == [pytest.approx(6)]


@pytest.mark.asyncio
async def test_reset_clears_state():
    limiter = SlidingWindowRateLimiter(clock=FakeClock())
    one = RateLimitConfig(max_requests=1, window_s=60)
    await limiter.check("k", one)
    limiter.reset("k")
    assert (await limiter.check("k", one)).allowed


@pytest.mark.asyncio
async def test_redis_backend_shares_the_same_semantics():
    clock = FakeClock()
    redis = FakeRedis()
    limiter = RedisRateLimiter(redis=redis, clock=clock)
    cfg = RateLimitConfig(max_requests=2, window_s=30)
    assert (await limiter.check("gemini", cfg)).allowed
    clock.now += 10
    assert (await limiter.check("gemini", cfg)).allowed
    decision = await limiter.check("gemini", cfg)
    assert not decision.allowed
    assert decision.wait_s == pytest.approx(20)
    assert redis.ttl["ratelimit:gemini"] == 30
    clock.now += 21
    assert (await limiter.check("gemini", cfg)).allowed
