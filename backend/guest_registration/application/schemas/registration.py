"""Pydantic DTOs and the authoritative validation schema for guest registrations.

``RegistrationCreate`` is the single rule set: the submission service enforces
it before anything is persisted, and ``registration_json_schema()`` exports the
same constraints so interactive clients can mirror them for responsive UX.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from guest_registration.domain.entities import ImageData
from guest_registration.domain.exceptions import (
    FieldError,
    NotAnImageDataUrlError,
    RegistrationValidationError,
    UndecodableImageDataError,
)

MAX_STAY = timedelta(days=365)
_MB = 1024 * 1024
IMAGE_SIZE_LIMITS: dict[str, int] = {
    "selfie": 5 * _MB,
    "id_image": 5 * _MB,
    "signature": 1 * _MB,
}


class RegistrationCreate(BaseModel):
    """Schema for a guest registration submission (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Personal information
    full_name: str = Field(
        ..., alias="fullName", min_length=2, max_length=100,
        pattern=r"^[a-zA-Z\s\-'\.]+$", examples=["Jane Doe"],
    )
    id_or_passport: str = Field(
        ..., alias="idOrPassport", min_length=4, max_length=20,
        pattern=r"^[a-zA-Z0-9\-]+$", examples=["A12345678"],
    )
    nationality: str = Field(
        ..., min_length=2, max_length=50, pattern=r"^[a-zA-Z\s]+$",
        examples=["South African"],
    )
    residence_status: str = Field(
        ..., alias="residenceStatus", min_length=2, max_length=100,
        examples=["Tourist Visa"],
    )
    home_address: str = Field(..., alias="homeAddress", min_length=5, max_length=300)

    # Contact information
    phone: str = Field(
        ..., min_length=6, max_length=20, pattern=r"^[\+]?[\d\s\-\(\)]+$",
        examples=["+27 12 345 6789"],
    )
    email: str = Field(..., max_length=100, examples=["jane@example.org"])

    # Stay details
    check_in: datetime = Field(..., alias="checkIn")
    check_out: datetime = Field(..., alias="checkOut")
    guests: int = Field(..., ge=1, le=20, strict=True)

    # Documents
    selfie: str = Field(
        ..., json_schema_extra={"maxDecodedBytes": IMAGE_SIZE_LIMITS["selfie"]},
    )
    id_image: str = Field(
        ..., alias="idImage",
        json_schema_extra={"maxDecodedBytes": IMAGE_SIZE_LIMITS["id_image"]},
    )
    signature: str = Field(
        ..., json_schema_extra={"maxDecodedBytes": IMAGE_SIZE_LIMITS["signature"]},
    )

    # Consents
    popia_consent: bool = Field(..., alias="popiaConsent", strict=True)
    non_refund_ack: bool = Field(..., alias="nonRefundAck", strict=True)

    # ── Field rules ─────────────────────────────────────────────────

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise PydanticCustomError("email_invalid", "Invalid email address") from exc
        return value.lower()

    @field_validator("check_in")
    @classmethod
    def _check_in_in_future(cls, value: datetime, info: ValidationInfo) -> datetime:
        value = _localise(value, info)
        if value <= _context_now(info):
            raise PydanticCustomError(
                "check_in_not_future", "Check-in date must be in the future"
            )
        return value

    @field_validator("check_out")
    @classmethod
    def _check_out_after_check_in(cls, value: datetime, info: ValidationInfo) -> datetime:
        value = _localise(value, info)
        check_in = info.data.get("check_in")
        if check_in is None:
            # check-in already failed; its own error is reported
            return value
        if value <= check_in:
            raise PydanticCustomError(
                "check_out_not_after_check_in",
                "Check-out date must be after check-in date",
            )
        if value - check_in > MAX_STAY:
            raise PydanticCustomError(
                "stay_too_long", "Stay duration cannot exceed 365 days"
            )
        return value

    @field_validator("selfie", "id_image", "signature")
    @classmethod
    def _valid_image(cls, value: str, info: ValidationInfo) -> str:
        limit = IMAGE_SIZE_LIMITS[info.field_name]
        try:
            image = ImageData.parse(value)
        except NotAnImageDataUrlError as exc:
            raise PydanticCustomError(
                "image_not_data_url", "Value is not an image data URL"
            ) from exc
        except UndecodableImageDataError as exc:
            raise PydanticCustomError(
                "image_undecodable", "Image data could not be decoded"
            ) from exc
        if image.size > limit:
            raise PydanticCustomError(
                "image_too_large",
                "Image exceeds {max_bytes} bytes",
                {"max_bytes": limit},
            )
        return value

    @field_validator("popia_consent", "non_refund_ack")
    @classmethod
    def _must_be_granted(cls, value: bool) -> bool:
        if value is not True:
            raise PydanticCustomError("consent_required", "Consent is required")
        return value


class FieldErrorSchema(BaseModel):
    field: str
    message: str


class SubmissionResponse(BaseModel):
    """Returned with HTTP 201 after a registration is stored."""

    success: bool = True
    id: str
    message: str = "Registration submitted successfully"


class ValidationErrorResponse(BaseModel):
    error: str = "Validation failed"
    details: list[FieldErrorSchema]


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None


# ── Validation entry point ──────────────────────────────────────────

def parse_registration(
    payload: Any,
    *,
    now: datetime | None = None,
    zone: tzinfo | None = None,
) -> RegistrationCreate:
    """Validate an untyped payload into a fully-typed registration.

    Never partially accepts: either every rule holds or
    ``RegistrationValidationError`` is raised with all violations.

    Args:
        payload: Decoded JSON body.
        now: Reference time for the "check-in in the future" rule.
        zone: Zone applied to stay dates that carry no offset.
    """
    if not isinstance(payload, dict):
        raise RegistrationValidationError(
            [FieldError("body", "Request body must be a JSON object")]
        )
    try:
        return RegistrationCreate.model_validate(
            payload, context={"now": now, "timezone": zone}
        )
    except ValidationError as exc:
        raise RegistrationValidationError(field_errors_from(exc)) from exc


def registration_json_schema() -> dict[str, Any]:
    """JSON Schema of the submission contract, keyed by wire (camelCase) names."""
    return RegistrationCreate.model_json_schema(by_alias=True)


def field_errors_from(exc: ValidationError) -> list[FieldError]:
    """Translate pydantic errors into field-attributed, human-readable messages."""
    errors: list[FieldError] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        errors.append(FieldError(field=field, message=_message_for(field, error)))
    return errors


_LABELS: dict[str, str] = {
    "fullName": "Full name",
    "idOrPassport": "ID/Passport",
    "nationality": "Nationality",
    "residenceStatus": "Residence status",
    "homeAddress": "Home address",
    "phone": "Phone number",
    "email": "Email",
    "checkIn": "Check-in date",
    "checkOut": "Check-out date",
    "guests": "Number of guests",
    "selfie": "Selfie",
    "idImage": "ID/Passport image",
    "signature": "Digital signature",
}

_PATTERN_MESSAGES: dict[str, str] = {
    "fullName": "Full name contains invalid characters",
    "idOrPassport": "ID/Passport contains invalid characters",
    "nationality": "Nationality contains invalid characters",
    "phone": "Invalid phone number format",
}

_CONSENT_MESSAGES: dict[str, str] = {
    "popiaConsent": "POPIA consent is required",
    "nonRefundAck": "Non-refund policy acknowledgment is required",
}


def _message_for(field: str, error: dict[str, Any]) -> str:
    if field in _CONSENT_MESSAGES:
        return _CONSENT_MESSAGES[field]

    label = _LABELS.get(field, field)
    kind = error["type"]
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f"{label} is required"
    if kind == "string_type":
        return f"{label} must be text"
    if kind == "string_too_short":
        return f"{label} must be at least {ctx['min_length']} characters"
    if kind == "string_too_long":
        return f"{label} must be at most {ctx['max_length']} characters"
    if kind == "string_pattern_mismatch":
        return _PATTERN_MESSAGES.get(field, f"{label} contains invalid characters")
    if kind.startswith(("datetime_", "date_")):
        return f"{label} must be a valid date"
    if kind.startswith("int_"):
        return f"{label} must be a whole number"
    if kind == "greater_than_equal":
        return f"{label} must be at least {ctx['ge']}"
    if kind == "less_than_equal":
        return f"{label} must be at most {ctx['le']}"
    if kind == "image_not_data_url":
        return f"{label} must be an image data URL"
    if kind == "image_undecodable":
        return f"{label} could not be decoded"
    if kind == "image_too_large":
        return f"{label} is too large (max {ctx['max_bytes'] // _MB}MB)"
    return error["msg"]


def _context_now(info: ValidationInfo) -> datetime:
    now = (info.context or {}).get("now")
    return now if now is not None else datetime.now(timezone.utc)


def _localise(value: datetime, info: ValidationInfo) -> datetime:
    if value.tzinfo is not None:
        return value
    zone = (info.context or {}).get("timezone") or timezone.utc
    return value.replace(tzinfo=zone)
