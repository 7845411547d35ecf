from .image_data import ImageData
from .registration import (
    GuestRegistration,
    RateLimitCounter,
    RegistrationRecord,
    RequestMetadata,
    is_valid_registration_id,
    new_registration_id,
)

__all__ = [
    "ImageData",
    "GuestRegistration",
    "RateLimitCounter",
    "RegistrationRecord",
    "RequestMetadata",
    "is_valid_registration_id",
    "new_registration_id",
]
