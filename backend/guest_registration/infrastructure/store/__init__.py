import logging

from guest_registration.application.interfaces import RecordStore
from guest_registration.config import Settings

from .fallback_record_store import FallbackRecordStore
from .memory_record_store import InMemoryRecordStore
from .redis_record_store import RedisRecordStore

logger = logging.getLogger(__name__)


def build_record_store(settings: Settings) -> RecordStore:
    """Select the store implementation from settings."""
    if not settings.redis_url.strip():
        logger.warning(
            "REDIS_URL is not configured; using the in-memory record store (not durable)."
        )
        return InMemoryRecordStore()

    store: RecordStore = RedisRecordStore.from_url(
        settings.redis_url, timeout_seconds=settings.redis_timeout_seconds
    )
    if settings.store_memory_fallback:
        logger.warning("Record store memory fallback enabled; outages will be masked.")
        store = FallbackRecordStore(store, InMemoryRecordStore())
    return store


__all__ = [
    "FallbackRecordStore",
    "InMemoryRecordStore",
    "RedisRecordStore",
    "build_record_store",
]
