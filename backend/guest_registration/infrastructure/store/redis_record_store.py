"""Durable record store backed by Redis (redis-py asyncio client)."""

import json
import logging
from typing import Any

import redis.asyncio as aioredis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from guest_registration.application.interfaces import RecordStore
from guest_registration.domain.exceptions import RecordStoreError

logger = logging.getLogger(__name__)


class RedisRecordStore(RecordStore):
    """Infrastructure adapter storing JSON documents in Redis with per-key expiry."""

    def __init__(self, client: Redis):
        self._redis = client

    @classmethod
    def from_url(cls, url: str, timeout_seconds: float = 5.0) -> "RedisRecordStore":
        """Build a store from a ``redis://`` URL. Connects lazily on first use."""
        client = aioredis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
        )
        return cls(client)

    async def get(self, key: str) -> dict[str, Any] | None:
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            logger.error("Redis GET error for %s: %s", key, e)
            raise RecordStoreError("GET", key, str(e)) from e

        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            raise RecordStoreError("GET", key, "stored value is not valid JSON") from e
        if not isinstance(value, dict):
            raise RecordStoreError("GET", key, "stored value is not a JSON object")
        return value

    async def set(
        self, key: str, value: dict[str, Any], ttl_seconds: int | None = None
    ) -> None:
        payload = json.dumps(value, separators=(",", ":"))
        try:
            if ttl_seconds:
                await self._redis.set(key, payload, ex=max(1, int(ttl_seconds)))
            else:
                await self._redis.set(key, payload)
        except RedisError as e:
            logger.error("Redis SET error for %s: %s", key, e)
            raise RecordStoreError("SET", key, str(e)) from e

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            logger.warning("Redis PING failed: %s", e)
            return False

    async def close(self) -> None:
        await self._redis.aclose()
        logger.info("Redis disconnected")
