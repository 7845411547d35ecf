"""FastAPI dependency injection — wires infrastructure to application layer."""

from functools import lru_cache
from zoneinfo import ZoneInfo

from fastapi import Depends, Request

from guest_registration.config import get_settings
from guest_registration.application.interfaces import RecordStore
from guest_registration.application.services import (
    ClientContext,
    DocumentService,
    RateLimiter,
    RegistrationService,
    SpamDetector,
)
from guest_registration.application.services.rate_limiter import Clock, utc_now
from guest_registration.infrastructure.documents import PdfRegistrationRenderer
from guest_registration.infrastructure.repositories import KeyValueRegistrationRepository
from guest_registration.infrastructure.store import build_record_store


@lru_cache
def get_record_store() -> RecordStore:
    """Process-wide record store (one Redis connection pool per worker)."""
    return build_record_store(get_settings())


def get_clock() -> Clock:
    return utc_now


def _property_zone() -> ZoneInfo:
    return ZoneInfo(get_settings().property_timezone)


def get_registration_repository(
    store: RecordStore = Depends(get_record_store),
) -> KeyValueRegistrationRepository:
    settings = get_settings()
    return KeyValueRegistrationRepository(
        store,
        retention_seconds=settings.retention_seconds,
        key_prefix=settings.registration_key_prefix,
    )


def get_registration_service(
    store: RecordStore = Depends(get_record_store),
    repository: KeyValueRegistrationRepository = Depends(get_registration_repository),
    clock: Clock = Depends(get_clock),
) -> RegistrationService:
    """Provides a RegistrationService with its limiter and repository wired up."""
    settings = get_settings()
    rate_limiter = RateLimiter(
        store,
        window_seconds=settings.rate_limit_window_seconds,
        max_requests=settings.rate_limit_max_requests,
        key_prefix=settings.rate_limit_key_prefix,
        clock=clock,
    )
    return RegistrationService(
        repository,
        rate_limiter,
        SpamDetector(),
        zone=_property_zone(),
        clock=clock,
    )


def get_document_service(
    repository: KeyValueRegistrationRepository = Depends(get_registration_repository),
) -> DocumentService:
    """Provides a DocumentService backed by the reportlab renderer."""
    settings = get_settings()
    renderer = PdfRegistrationRenderer(
        title=settings.document_title,
        jurisdiction=settings.document_jurisdiction,
        host_name=settings.host_business_name,
        host_address=settings.host_business_address,
        legal_notice=settings.legal_notice,
        zone=_property_zone(),
        compress=settings.pdf_compression,
    )
    return DocumentService(repository, renderer)


def get_client_context(request: Request) -> ClientContext:
    """Derive the caller identity used for rate limiting and record metadata.

    Order: first ``X-Forwarded-For`` entry, ``X-Real-IP``, the socket peer,
    then ``"unknown"``. Proxy headers are ignored unless trusted in settings.
    """
    ip = None
    if get_settings().trust_forwarded_headers:
        forwarded = request.headers.get("x-forwarded-for", "")
        ip = forwarded.split(",")[0].strip() or request.headers.get("x-real-ip", "").strip()
    if not ip and request.client is not None:
        ip = request.client.host
    return ClientContext(
        ip_address=ip or "unknown",
        user_agent=request.headers.get("user-agent", ""),
    )
