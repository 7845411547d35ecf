from .registration import (
    IMAGE_SIZE_LIMITS,
    ErrorResponse,
    FieldErrorSchema,
    RegistrationCreate,
    SubmissionResponse,
    ValidationErrorResponse,
    field_errors_from,
    parse_registration,
    registration_json_schema,
)

__all__ = [
    "IMAGE_SIZE_LIMITS",
    "ErrorResponse",
    "FieldErrorSchema",
    "RegistrationCreate",
    "SubmissionResponse",
    "ValidationErrorResponse",
    "field_errors_from",
    "parse_registration",
    "registration_json_schema",
]
