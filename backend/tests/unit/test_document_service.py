"""Unit tests for the DocumentService."""

import pytest

from guest_registration.application.interfaces import (
    DocumentRenderer,
    RegistrationRepository,
)
from guest_registration.application.services import DocumentService
from guest_registration.domain.entities import RegistrationRecord
from guest_registration.domain.exceptions import (
    DocumentRenderError,
    EntityNotFoundError,
    InvalidIdentifierError,
)


class FakeRegistrationRepository(RegistrationRepository):
    def __init__(self, *records: RegistrationRecord):
        self.records = {r.id: r for r in records}
        self.lookups: list[str] = []

    async def get_by_id(self, registration_id: str) -> RegistrationRecord | None:
        self.lookups.append(registration_id)
        return self.records.get(registration_id)

    async def create(self, record: RegistrationRecord) -> RegistrationRecord:
        self.records[record.id] = record
        return record


class FakeRenderer(DocumentRenderer):
    media_type = "text/plain"
    file_extension = "txt"

    def render(self, record: RegistrationRecord) -> bytes:
        return f"registration {record.id}".encode()


class ExplodingRenderer(DocumentRenderer):
    def render(self, record: RegistrationRecord) -> bytes:
        raise RuntimeError("font table corrupted")


@pytest.mark.asyncio
async def test_render_returns_document(sample_record):
    service = DocumentService(FakeRegistrationRepository(sample_record), FakeRenderer())

    document = await service.render(sample_record.id)

    assert document.content == f"registration {sample_record.id}".encode()
    assert document.media_type == "text/plain"
    assert document.filename == f"guest-registration-{sample_record.id}.txt"


@pytest.mark.asyncio
async def test_malformed_id_is_rejected_without_lookup():
    repository = FakeRegistrationRepository()
    service = DocumentService(repository, FakeRenderer())

    with pytest.raises(InvalidIdentifierError):
        await service.render("../../etc/passwd")
    assert repository.lookups == []


@pytest.mark.asyncio
async def test_unknown_id_is_not_found():
    service = DocumentService(FakeRegistrationRepository(), FakeRenderer())
    with pytest.raises(EntityNotFoundError):
        await service.render("3f2b8c1e-9a4d-4e7f-8b6a-1c2d3e4f5a6b")


@pytest.mark.asyncio
async def test_uppercase_id_passes_the_format_check(sample_record):
    upper = sample_record.id.upper()
    repository = FakeRegistrationRepository(sample_record)
    service = DocumentService(repository, FakeRenderer())

    with pytest.raises(EntityNotFoundError):
        await service.render(upper)
    assert repository.lookups == [upper]


@pytest.mark.asyncio
async def test_renderer_failure_is_wrapped(sample_record):
    service = DocumentService(FakeRegistrationRepository(sample_record), ExplodingRenderer())

    with pytest.raises(DocumentRenderError) as exc_info:
        await service.render(sample_record.id)
    assert exc_info.value.registration_id == sample_record.id
    assert "font table corrupted" in str(exc_info.value)


@pytest.mark.asyncio
async def test_id_with_trailing_newline_is_rejected(sample_record):
    repository = FakeRegistrationRepository(sample_record)
    service = DocumentService(repository, FakeRenderer())

    with pytest.raises(InvalidIdentifierError):
        await service.render(sample_record.id + "\n")
    assert repository.lookups == []
