"""Primary store with a best-effort local fallback (development aid)."""

import logging
from typing import Any

from guest_registration.application.interfaces import RecordStore
from guest_registration.domain.exceptions import RecordStoreError

logger = logging.getLogger(__name__)


class FallbackRecordStore(RecordStore):
    """Writes and reads go to *primary*; failures are absorbed by *fallback*.

    - ``set``: primary, or fallback when the primary fails.
    - ``get``: primary; on failure or miss, whatever the fallback holds.

    Masks store outages, so persistence errors no longer reach the caller.
    Do not enable where durable storage is a hard requirement.
    """

    def __init__(self, primary: RecordStore, fallback: RecordStore):
        self._primary = primary
        self._fallback = fallback

    async def get(self, key: str) -> dict[str, Any] | None:
        try:
            value = await self._primary.get(key)
            if value is not None:
                return value
        except RecordStoreError as e:
            logger.warning("Primary store GET failed, reading fallback: %s", e)
        return await self._fallback.get(key)

    async def set(
        self, key: str, value: dict[str, Any], ttl_seconds: int | None = None
    ) -> None:
        try:
            await self._primary.set(key, value, ttl_seconds)
        except RecordStoreError as e:
            logger.warning("Primary store SET failed, writing fallback: %s", e)
            await self._fallback.set(key, value, ttl_seconds)

    async def ping(self) -> bool:
        return await self._primary.ping() or await self._fallback.ping()

    async def close(self) -> None:
        await self._primary.close()
        await self._fallback.close()
