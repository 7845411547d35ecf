"""Unit tests for the reportlab registration renderer."""

import dataclasses
import random
import re
from io import BytesIO
from zoneinfo import ZoneInfo

import pytest
from PIL import Image

from guest_registration.domain.entities import ImageData
from guest_registration.infrastructure.documents import PdfRegistrationRenderer


@pytest.fixture
def renderer() -> PdfRegistrationRenderer:
    # uncompressed so the page text can be searched in the raw bytes
    return PdfRegistrationRenderer(
        host_name="Kloof Street Guesthouse",
        host_address="7 Kloof Street, Cape Town",
        legal_notice="Records are kept under the Immigration Act 13 of 2002.",
        compress=False,
    )


def test_renders_a_pdf(renderer, sample_record):
    pdf = renderer.render(sample_record)
    assert pdf.startswith(b"%PDF-")
    assert pdf.rstrip().endswith(b"%%EOF")


def test_contains_the_registration_details(renderer, sample_record):
    pdf = renderer.render(sample_record)

    for text in (
        b"Guest Registration & Agreement",
        b"Republic of South Africa",
        b"Submission ID: 3f2b8c1e-9a4d-4e7f-8b6a-1c2d3e4f5a6b",
        b"Host: Kloof Street Guesthouse",
        b"Address: 7 Kloof Street, Cape Town",
        b"GUEST INFORMATION",
        b"Jane Doe",
        b"A1234567",
        b"jane.doe@guesthouse.co.za",
        b"ACCOMMODATION DETAILS",
        b"2026-02-01 14:00",
        b"2026-02-04 10:00",
        b"POPIA Consent: Granted",
        b"Non-Refund Policy: Acknowledged",
        b"UPLOADED DOCUMENTS",
        b"--- End of Registration ---",
    ):
        assert text in pdf, text


def test_timestamps_come_from_the_record(renderer, sample_record):
    pdf = renderer.render(sample_record)
    assert b"Registered on 2026-01-10 12:00:00" in pdf


def test_registration_time_shown_in_property_zone(sample_record):
    renderer = PdfRegistrationRenderer(zone=ZoneInfo("Africa/Johannesburg"), compress=False)
    pdf = renderer.render(sample_record)
    assert b"Registered on 2026-01-10 14:00:00" in pdf


def test_rendering_is_deterministic(sample_record):
    renderer = PdfRegistrationRenderer()
    assert renderer.render(sample_record) == renderer.render(sample_record)


def test_embeds_uploaded_images(renderer, sample_record):
    pdf = renderer.render(sample_record)
    assert b"/Subtype /Image" in pdf
    assert b"[Image processing failed]" not in pdf


def test_broken_image_degrades_to_placeholder(renderer, sample_record):
    data = dataclasses.replace(
        sample_record.data, signature="data:image/png;base64,aGVsbG8="
    )
    pdf = renderer.render(dataclasses.replace(sample_record, data=data))

    assert b"Digital Signature: [Image processing failed]" in pdf
    assert b"Selfie Photo:" in pdf
    assert b"--- End of Registration ---" in pdf


def test_long_values_are_wrapped(renderer, sample_record):
    address = (
        "Unit 4, The Old Biscuit Mill, 373-375 Albert Road, Woodstock, "
        "Cape Town, 7925, Western Cape, South Africa"
    )
    data = dataclasses.replace(sample_record.data, home_address=address)
    pdf = renderer.render(dataclasses.replace(sample_record, data=data))

    assert address.encode() not in pdf
    assert b"Unit 4, The Old Biscuit Mill" in pdf


def test_media_type_and_extension():
    renderer = PdfRegistrationRenderer()
    assert renderer.media_type == "application/pdf"
    assert renderer.file_extension == "pdf"


def _truncated_png_data_url() -> str:
    noise = random.Random(7).randbytes(64 * 64 * 3)
    buffer = BytesIO()
    Image.frombytes("RGB", (64, 64), noise).save(buffer, format="PNG")
    content = buffer.getvalue()
    return ImageData.to_data_url("image/png", content[: len(content) // 2])


def _page_count(pdf: bytes) -> int:
    return max(int(n) for n in re.findall(rb"/Count (\d+)", pdf))


def test_truncated_image_degrades_to_placeholder(renderer, sample_record):
    data = dataclasses.replace(sample_record.data, signature=_truncated_png_data_url())
    pdf = renderer.render(dataclasses.replace(sample_record, data=data))

    assert b"Digital Signature: [Image processing failed]" in pdf
    assert b"Selfie Photo:" in pdf
    assert b"ID/Passport Document:" in pdf
    assert b"--- End of Registration ---" in pdf


def test_missing_image_renders_placeholder(renderer, sample_record):
    data = dataclasses.replace(sample_record.data, id_image="")
    pdf = renderer.render(dataclasses.replace(sample_record, data=data))

    assert b"ID/Passport Document: [Image processing failed]" in pdf


def test_content_overflows_onto_new_pages(sample_record, make_image_data_url):
    tall = make_image_data_url((30, 300))
    renderer = PdfRegistrationRenderer(
        legal_notice=" ".join(["Personal information is retained as required by law."] * 40),
        compress=False,
    )
    data = dataclasses.replace(
        sample_record.data, selfie=tall, id_image=tall, signature=tall
    )
    pdf = renderer.render(dataclasses.replace(sample_record, data=data))

    assert _page_count(pdf) >= 2
    for label in (b"Selfie Photo:", b"ID/Passport Document:", b"Digital Signature:"):
        assert label in pdf
    assert b"[Image processing failed]" not in pdf


def test_single_long_word_is_broken_to_fit(renderer, sample_record):
    email = "a" * 60 + "@" + "b" * 32 + ".com"
    data = dataclasses.replace(sample_record.data, email=email)
    pdf = renderer.render(dataclasses.replace(sample_record, data=data))

    assert email.encode() not in pdf
    assert b"a" * 40 in pdf
