from .rate_limiter import RateLimiter
from .spam_detector import SpamDetector
from .registration_service import ClientContext, RegistrationService
from .document_service import DocumentService, RenderedDocument

__all__ = [
    "RateLimiter",
    "SpamDetector",
    "ClientContext",
    "RegistrationService",
    "DocumentService",
    "RenderedDocument",
]
