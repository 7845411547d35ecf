"""Shared fixtures: real image data URLs, a valid payload and a stored record."""

from datetime import datetime, timezone
from io import BytesIO

import pytest
from PIL import Image

from guest_registration.domain.entities import (
    GuestRegistration,
    ImageData,
    RegistrationRecord,
    RequestMetadata,
)

FIXED_NOW = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


def image_data_url(
    size: tuple[int, int] = (40, 30), fmt: str = "PNG", color: str = "navy"
) -> str:
    """Encode a small generated image as a ``data:image/...;base64`` URL."""
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    media_type = "image/jpeg" if fmt == "JPEG" else f"image/{fmt.lower()}"
    return ImageData.to_data_url(media_type, buffer.getvalue())


@pytest.fixture
def png_data_url() -> str:
    return image_data_url()


@pytest.fixture
def jpeg_data_url() -> str:
    return image_data_url((60, 80), fmt="JPEG", color="teal")


@pytest.fixture
def valid_payload(png_data_url: str, jpeg_data_url: str) -> dict:
    """A submission that passes every rule when validated at FIXED_NOW."""
    return {
        "fullName": "Jane Doe",
        "idOrPassport": "A1234567",
        "nationality": "South African",
        "residenceStatus": "Citizen",
        "homeAddress": "12 Long Street, Cape Town",
        "phone": "+27 82 555 0199",
        "email": "Jane.Doe@guesthouse.co.za",
        "checkIn": "2026-02-01T14:00:00Z",
        "checkOut": "2026-02-04T10:00:00Z",
        "guests": 2,
        "selfie": png_data_url,
        "idImage": jpeg_data_url,
        "signature": png_data_url,
        "popiaConsent": True,
        "nonRefundAck": True,
    }


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_image_data_url():
    return image_data_url


@pytest.fixture
def sample_record(png_data_url: str, jpeg_data_url: str) -> RegistrationRecord:
    """A stored registration as the repository would return it."""
    return RegistrationRecord(
        id="3f2b8c1e-9a4d-4e7f-8b6a-1c2d3e4f5a6b",
        created_at=int(FIXED_NOW.timestamp() * 1000),
        data=GuestRegistration(
            full_name="Jane Doe",
            id_or_passport="A1234567",
            nationality="South African",
            residence_status="Citizen",
            home_address="12 Long Street, Cape Town",
            phone="+27 82 555 0199",
            email="jane.doe@guesthouse.co.za",
            check_in=datetime(2026, 2, 1, 14, 0, tzinfo=timezone.utc),
            check_out=datetime(2026, 2, 4, 10, 0, tzinfo=timezone.utc),
            guests=2,
            selfie=png_data_url,
            id_image=jpeg_data_url,
            signature=png_data_url,
            popia_consent=True,
            non_refund_ack=True,
        ),
        metadata=RequestMetadata(
            ip="196.25.1.1",
            user_agent="pytest",
            timestamp=FIXED_NOW.isoformat(),
        ),
    )
