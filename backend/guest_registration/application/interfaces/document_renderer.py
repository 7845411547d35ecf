"""Abstract interface (port) for turning a stored registration into a document."""

from abc import ABC, abstractmethod

from guest_registration.domain.entities import RegistrationRecord


class DocumentRenderer(ABC):
    """Port for document rendering — implemented in the infrastructure layer."""

    media_type: str = "application/octet-stream"
    file_extension: str = "bin"

    @abstractmethod
    def render(self, record: RegistrationRecord) -> bytes:
        """Render the full multi-page document for *record*.

        Per-image failures must degrade to a placeholder; only failures that
        make the whole document impossible may raise.
        """
        ...
