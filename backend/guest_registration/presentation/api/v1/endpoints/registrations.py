"""Guest registration submission endpoints."""

import json
import logging
import math
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from guest_registration.application.schemas import (
    ErrorResponse,
    SubmissionResponse,
    ValidationErrorResponse,
    registration_json_schema,
)
from guest_registration.application.services import ClientContext, RegistrationService
from guest_registration.domain.exceptions import (
    RateLimitExceededError,
    RecordStoreError,
    RegistrationValidationError,
    SubmissionRejectedError,
)
from guest_registration.infrastructure.dependencies import (
    get_client_context,
    get_registration_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/registrations", tags=["Registrations"])

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmissionResponse,
    responses={
        400: {"model": ValidationErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def submit_registration(
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
    client: ClientContext = Depends(get_client_context),
):
    """Accept a guest registration.

    The body is read raw so that malformed JSON is reported through the
    same validation error shape as a rule violation, after rate limiting.
    """
    payload = await _read_json(request)
    try:
        record = await service.submit(payload, client)
    except RateLimitExceededError as e:
        minutes = max(1, math.ceil(e.retry_after_seconds / 60))
        unit = "minute" if minutes == 1 else "minutes"
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=ErrorResponse(
                error="Rate limit exceeded",
                message=f"Too many submissions. Please try again in {minutes} {unit}.",
            ).model_dump(),
            headers={"Retry-After": str(e.retry_after_seconds)},
        )
    except RegistrationValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationErrorResponse(
                details=[err.to_dict() for err in e.errors]
            ).model_dump(),
        )
    except SubmissionRejectedError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Submission rejected"},
        )
    except RecordStoreError:
        logger.exception("Submission could not be stored")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                message="Failed to process registration. Please try again.",
            ).model_dump(),
        )

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=SubmissionResponse(id=record.id).model_dump(),
        headers=SECURITY_HEADERS,
    )


@router.get("/schema")
async def get_registration_schema() -> dict:
    """JSON Schema of the submission payload, so clients can mirror the rules."""
    return registration_json_schema()


async def _read_json(request: Request) -> Any:
    body = await request.body()
    try:
        return json.loads(body)
    except (UnicodeDecodeError, ValueError):
        return None
