"""Abstract repository interface (port) for RegistrationRecord persistence."""

from abc import ABC, abstractmethod

from guest_registration.domain.entities import RegistrationRecord


class RegistrationRepository(ABC):
    """Port for registration persistence — implemented in the infrastructure layer.

    Append-only: records are created once and read afterwards. There is no
    update or delete; records disappear when the store's retention TTL elapses.
    """

    @abstractmethod
    async def get_by_id(self, registration_id: str) -> RegistrationRecord | None:
        """Retrieve a single record by its identifier."""
        ...

    @abstractmethod
    async def create(self, record: RegistrationRecord) -> RegistrationRecord:
        """Persist a new record and return it."""
        ...
