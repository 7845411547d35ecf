"""Registration document endpoint."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from guest_registration.application.services import DocumentService
from guest_registration.domain.exceptions import (
    DocumentRenderError,
    EntityNotFoundError,
    InvalidIdentifierError,
    RecordStoreError,
)
from guest_registration.infrastructure.dependencies import get_document_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])

NO_CACHE_HEADERS = {
    "Cache-Control": "private, no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.get(
    "/{registration_id}",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def get_registration_document(
    registration_id: str,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """Render the stored registration as a downloadable PDF."""
    try:
        document = await service.render(registration_id)
    except InvalidIdentifierError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid ID format"}
        )
    except EntityNotFoundError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": "Registration not found"}
        )
    except (DocumentRenderError, RecordStoreError):
        logger.exception("Document generation failed for %s", registration_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to generate PDF"},
        )

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": f'inline; filename="{document.filename}"',
            **NO_CACHE_HEADERS,
        },
    )
