from .record_store import RecordStore
from .registration_repository import RegistrationRepository
from .document_renderer import DocumentRenderer

__all__ = [
    "RecordStore",
    "RegistrationRepository",
    "DocumentRenderer",
]
