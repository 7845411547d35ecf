"""Ephemeral process-local record store.

Not durable and not shared between processes or instances. Intended for
development, tests, and as the local half of ``FallbackRecordStore``.
"""

import json
import time
from collections.abc import Callable
from typing import Any

from guest_registration.application.interfaces import RecordStore


class InMemoryRecordStore(RecordStore):
    """Dictionary-backed store with lazy per-key expiry.

    Values are kept as JSON text so callers never share mutable state with
    the store (a read always returns a fresh copy).
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._entries: dict[str, tuple[str, float | None]] = {}
        self._clock = clock

    async def get(self, key: str) -> dict[str, Any] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        raw, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return json.loads(raw)

    async def set(
        self, key: str, value: dict[str, Any], ttl_seconds: int | None = None
    ) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds else None
        self._entries[key] = (json.dumps(value), expires_at)

    async def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)
