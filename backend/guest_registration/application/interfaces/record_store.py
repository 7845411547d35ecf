"""Abstract interface (port) for the key-value record store."""

from abc import ABC, abstractmethod
from typing import Any


class RecordStore(ABC):
    """Port for an opaque key-value service with per-key expiry.

    Values are JSON-compatible objects. Implementations wrap their driver
    failures in ``RecordStoreError``.
    """

    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        """Return the value stored under *key*, or None when absent or expired."""
        ...

    @abstractmethod
    async def set(
        self, key: str, value: dict[str, Any], ttl_seconds: int | None = None
    ) -> None:
        """Store *value* under *key*, expiring after *ttl_seconds* when given."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Return True when the backend is reachable."""
        ...

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
        return None
