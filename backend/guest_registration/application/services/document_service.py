"""Application service (use case) for rendering a stored registration as a document."""

import asyncio
from dataclasses import dataclass

from guest_registration.application.interfaces import (
    DocumentRenderer,
    RegistrationRepository,
)
from guest_registration.domain.entities import is_valid_registration_id
from guest_registration.domain.exceptions import (
    DocumentRenderError,
    EntityNotFoundError,
    InvalidIdentifierError,
)
from guest_registration.infrastructure.logging.pipeline_logger import (
    PipelineLogger,
    PipelineStage,
)

plog = PipelineLogger("DocumentPipeline")


@dataclass(frozen=True)
class RenderedDocument:
    """Finished document bytes plus what the transport layer needs to serve them."""

    registration_id: str
    content: bytes
    media_type: str
    filename: str


class DocumentService:
    """Reconstructs a registration document on demand. Read-only."""

    def __init__(self, repository: RegistrationRepository, renderer: DocumentRenderer):
        self._repository = repository
        self._renderer = renderer

    async def render(self, registration_id: str) -> RenderedDocument:
        """Render the document for *registration_id*.

        Raises:
            InvalidIdentifierError: the id is not in canonical form (no lookup made).
            EntityNotFoundError: no record is stored under the id.
            DocumentRenderError: the document could not be produced.
        """
        if not is_valid_registration_id(registration_id):
            raise InvalidIdentifierError(registration_id)

        with plog.timed_step(PipelineStage.LOOKUP, "Loading registration", id=registration_id):
            record = await self._repository.get_by_id(registration_id)
        if record is None:
            raise EntityNotFoundError("Registration", registration_id)

        try:
            with plog.timed_step(PipelineStage.RENDER, "Rendering document", id=registration_id):
                content = await asyncio.to_thread(self._renderer.render, record)
        except Exception as exc:
            plog.step_error(PipelineStage.ERROR, "Document could not be produced", error=exc)
            raise DocumentRenderError(registration_id, str(exc)) from exc

        return RenderedDocument(
            registration_id=registration_id,
            content=content,
            media_type=self._renderer.media_type,
            filename=f"guest-registration-{registration_id}.{self._renderer.file_extension}",
        )
