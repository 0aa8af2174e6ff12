import asyncio

import fakeredis.aioredis
import pytest
import pytest_asyncio

from workbench_equip.services.throttle_store import MemoryThrottleStore, RedisThrottleStore


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest_asyncio.fixture
async def redis():
    r = fakeredis.aioredis.FakeRedis(decode_responses=True)
    await r.flushall()
    yield r
    await r.flushall()
    await r.aclose()


@pytest.mark.asyncio
async def test_memory_entry_expires_lazily():
    clock = FakeClock()
    store = MemoryThrottleStore(window_seconds=1.0, clock=clock)

    assert await store.try_acquire(7, 3) is True
    assert await store.try_acquire(7, 3) is False
    entry = store.get_entry(7)
    assert entry.required_tier == 3
    assert entry.expires_at == 1.0

    clock.now = 0.999
    assert await store.is_pending(7)

    clock.now = 1.0
    assert not await store.is_pending(7)
    # просроченная запись удаляется при обращении
    assert len(store) == 0
    assert await store.try_acquire(7, 2) is True


@pytest.mark.asyncio
async def test_memory_clear():
    store = MemoryThrottleStore(window_seconds=5.0, clock=FakeClock())
    await store.try_acquire(1, 3)
    await store.try_acquire(2, 3)

    await store.clear(1)
    assert not await store.is_pending(1)
    assert await store.is_pending(2)

    await store.clear_all()
    assert len(store) == 0


@pytest.mark.asyncio
async def test_redis_acquire_and_clear(redis):
    store = RedisThrottleStore(redis, window_seconds=1.0, key_prefix="weq")

    assert await store.try_acquire(42, 3) is True
    assert await store.try_acquire(42, 3) is False
    assert await redis.get("weq:warned:42") == "3"
    assert 0 < await redis.pttl("weq:warned:42") <= 1000

    await store.clear(42)
    assert not await store.is_pending(42)
    assert await store.try_acquire(42, 3) is True


@pytest.mark.asyncio
async def test_redis_entry_expires(redis):
    store = RedisThrottleStore(redis, window_seconds=0.05, key_prefix="weq")

    assert await store.try_acquire(1, 2) is True
    await asyncio.sleep(0.1)
    assert await store.try_acquire(1, 2) is True


@pytest.mark.asyncio
async def test_redis_clear_all_only_touches_own_keys(redis):
    store = RedisThrottleStore(redis, window_seconds=10.0, key_prefix="weq")
    await redis.set("other:key", "1")
    await store.try_acquire(1, 3)
    await store.try_acquire(2, 3)

    await store.clear_all()

    assert not await store.is_pending(1)
    assert not await store.is_pending(2)
    assert await redis.get("other:key") == "1"


class BrokenRedis:
    async def set(self, *args, **kwargs):
        raise ConnectionError("redis is down")

    async def exists(self, *args):
        raise ConnectionError("redis is down")

    async def delete(self, *args):
        raise ConnectionError("redis is down")


@pytest.mark.asyncio
async def test_redis_errors_fall_back_to_memory_window():
    clock = FakeClock()
    store = RedisThrottleStore(BrokenRedis(), window_seconds=1.0, clock=clock)

    assert await store.try_acquire(1, 3) is True
    assert await store.try_acquire(1, 3) is False
    assert await store.is_pending(1) is True

    clock.now = 1.0
    assert await store.try_acquire(1, 3) is True

    await store.clear(1)
    assert await store.is_pending(1) is False
