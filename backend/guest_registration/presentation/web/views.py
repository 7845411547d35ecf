"""Server-rendered confirmation pages shown after a registration is submitted."""

import logging
from datetime import datetime
from pathlib import Path
from urllib.parse import urlencode
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from guest_registration.application.services import RegistrationService
from guest_registration.config import get_settings
from guest_registration.domain.exceptions import EntityNotFoundError, RecordStoreError
from guest_registration.infrastructure.dependencies import get_registration_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Web"], include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

QR_CODE_SIZE = 120


def _human_datetime(value: datetime) -> str:
    """e.g. ``March 5, 2027 at 2:00 PM``"""
    hour = value.hour % 12 or 12
    return f"{value:%B} {value.day}, {value:%Y} at {hour}:{value:%M %p}"


def _qr_code_url(service_url: str, data: str) -> str:
    query = urlencode({
        "size": f"{QR_CODE_SIZE}x{QR_CODE_SIZE}",
        "data": data,
        "format": "png",
        "ecc": "M",
    })
    return f"{service_url}?{query}"


def _not_found(request: Request) -> HTMLResponse:
    settings = get_settings()
    return templates.TemplateResponse(
        request,
        "not_found.html",
        {
            "contact_email": settings.contact_email,
            "contact_phone": settings.contact_phone,
        },
        status_code=status.HTTP_404_NOT_FOUND,
    )


@router.get("/success/{registration_id}", response_class=HTMLResponse)
async def registration_success(
    request: Request,
    registration_id: str,
    service: RegistrationService = Depends(get_registration_service),
) -> HTMLResponse:
    """Confirmation page with the stay summary, document link and QR code."""
    try:
        record = await service.get_registration(registration_id)
    except EntityNotFoundError:
        return _not_found(request)
    except RecordStoreError:
        logger.exception("Could not load registration %s for the confirmation page", registration_id)
        return _not_found(request)

    settings = get_settings()
    zone = ZoneInfo(settings.property_timezone)
    data = record.data
    document_url = request.url_for(
        "get_registration_document", registration_id=record.id
    )

    return templates.TemplateResponse(
        request,
        "success.html",
        {
            "registration_id": record.id,
            "full_name": data.full_name,
            "submitted": _human_datetime(record.created_at_datetime.astimezone(zone)),
            "check_in": _human_datetime(data.check_in.astimezone(zone)),
            "check_out": _human_datetime(data.check_out.astimezone(zone)),
            "guests": data.guests,
            "nights": data.nights,
            "document_path": document_url.path,
            "qr_code_url": _qr_code_url(settings.qr_code_service_url, str(document_url)),
            "contact_email": settings.contact_email,
            "contact_phone": settings.contact_phone,
            "legal_notice": settings.legal_notice,
        },
    )
