"""Fixed-window submission rate limiter backed by the record store."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from guest_registration.application.interfaces import RecordStore
from guest_registration.domain.entities import RateLimitCounter

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """Allows at most ``max_requests`` calls per identity per window.

    The counter lives in the record store under ``<key_prefix><identity>``
    and expires with its window. Read-then-write is not atomic: two
    concurrent calls for the same identity may both read the same count.
    Store failures fail open.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        window_seconds: int = 15 * 60,
        max_requests: int = 3,
        key_prefix: str = "rate_limit:",
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._window_ms = window_seconds * 1000
        self._max_requests = max_requests
        self._key_prefix = key_prefix
        self._clock = clock

    @property
    def window_seconds(self) -> int:
        return self._window_ms // 1000

    async def allow(self, identity: str) -> bool:
        """Record one call for *identity* and report whether it is allowed."""
        key = f"{self._key_prefix}{identity}"
        now_ms = int(self._clock().timestamp() * 1000)

        try:
            raw = await self._store.get(key)
            counter = RateLimitCounter.from_dict(raw) if raw else None

            if counter is None or counter.is_expired(now_ms):
                fresh = RateLimitCounter(count=1, reset_time=now_ms + self._window_ms)
                await self._store.set(key, fresh.to_dict(), ttl_seconds=self.window_seconds)
                return True

            if counter.count >= self._max_requests:
                logger.info("Rate limit reached for %s (%d calls)", identity, counter.count)
                return False

            counter.count += 1
            await self._store.set(
                key, counter.to_dict(), ttl_seconds=counter.remaining_seconds(now_ms)
            )
            return True
        except Exception:
            logger.exception("Rate limiting error for %s, allowing request", identity)
            return True

    async def retry_after(self, identity: str) -> int:
        """Seconds until the identity's current window resets (best effort)."""
        now_ms = int(self._clock().timestamp() * 1000)
        try:
            raw = await self._store.get(f"{self._key_prefix}{identity}")
        except Exception:
            logger.warning("Could not read rate limit window for %s", identity)
            return self.window_seconds
        if not raw:
            return self.window_seconds
        return RateLimitCounter.from_dict(raw).remaining_seconds(now_ms)
