"""Unit tests for the fixed-window RateLimiter."""

from datetime import datetime, timedelta, timezone

import pytest

from guest_registration.application.interfaces import RecordStore
from guest_registration.application.services import RateLimiter
from guest_registration.domain.exceptions import RecordStoreError
from guest_registration.infrastructure.store import InMemoryRecordStore


class SteppingClock:
    """Manually advanced clock shared by the limiter and the store."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def epoch(self) -> float:
        return self.now.timestamp()

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingStore(InMemoryRecordStore):
    """In-memory store that remembers the TTL of every write."""

    def __init__(self, clock):
        super().__init__(clock=clock)
        self.ttls: list[int | None] = []

    async def set(self, key, value, ttl_seconds=None):
        self.ttls.append(ttl_seconds)
        await super().set(key, value, ttl_seconds)


class BrokenStore(RecordStore):
    async def get(self, key):
        raise RecordStoreError("GET", key, "connection refused")

    async def set(self, key, value, ttl_seconds=None):
        raise RecordStoreError("SET", key, "connection refused")

    async def ping(self):
        return False


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock(datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock) -> RecordingStore:
    return RecordingStore(clock=clock.epoch)


@pytest.fixture
def limiter(store, clock) -> RateLimiter:
    return RateLimiter(store, window_seconds=900, max_requests=3, clock=clock)


@pytest.mark.asyncio
async def test_allows_up_to_the_ceiling(limiter: RateLimiter):
    results = [await limiter.allow("10.0.0.1") for _ in range(4)]
    assert results == [True, True, True, False]


@pytest.mark.asyncio
async def test_denied_calls_do_not_extend_the_window(limiter, clock):
    for _ in range(3):
        await limiter.allow("10.0.0.1")
    clock.advance(minutes=5)
    assert await limiter.allow("10.0.0.1") is False
    clock.advance(minutes=10, seconds=1)
    assert await limiter.allow("10.0.0.1") is True


@pytest.mark.asyncio
async def test_window_resets_after_expiry(limiter, store, clock):
    for _ in range(3):
        await limiter.allow("10.0.0.1")
    clock.advance(seconds=901)

    assert await limiter.allow("10.0.0.1") is True
    counter = await store.get("rate_limit:10.0.0.1")
    assert counter["count"] == 1


@pytest.mark.asyncio
async def test_window_boundary_is_still_inside_the_window(store, clock):
    # store entries must outlive the boundary so the limiter itself decides
    limiter = RateLimiter(store, window_seconds=900, max_requests=1, clock=clock)
    assert await limiter.allow("10.0.0.1") is True

    counter = await store.get("rate_limit:10.0.0.1")
    await store.set("rate_limit:10.0.0.1", counter, ttl_seconds=3600)

    clock.advance(seconds=900)
    assert await limiter.allow("10.0.0.1") is False
    clock.advance(seconds=1)
    assert await limiter.allow("10.0.0.1") is True


@pytest.mark.asyncio
async def test_identities_are_counted_separately(limiter):
    for _ in range(3):
        assert await limiter.allow("10.0.0.1")
    assert await limiter.allow("10.0.0.2") is True


@pytest.mark.asyncio
async def test_counter_document_shape(limiter, store, clock):
    await limiter.allow("10.0.0.1")
    counter = await store.get("rate_limit:10.0.0.1")
    expected_reset = int(clock.now.timestamp() * 1000) + 900_000
    assert counter == {"count": 1, "resetTime": expected_reset}


@pytest.mark.asyncio
async def test_ttl_tracks_the_remaining_window(limiter, store, clock):
    await limiter.allow("10.0.0.1")
    clock.advance(minutes=5)
    await limiter.allow("10.0.0.1")
    assert store.ttls == [900, 600]


@pytest.mark.asyncio
async def test_retry_after_reports_remaining_window(limiter, clock):
    for _ in range(4):
        await limiter.allow("10.0.0.1")
    clock.advance(minutes=5)
    assert await limiter.retry_after("10.0.0.1") == 600


@pytest.mark.asyncio
async def test_store_failure_fails_open(clock):
    limiter = RateLimiter(BrokenStore(), clock=clock)
    assert all([await limiter.allow("10.0.0.1") for _ in range(10)])
    assert await limiter.retry_after("10.0.0.1") == 900
