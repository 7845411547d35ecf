from .pdf_registration_renderer import PdfRegistrationRenderer

__all__ = [
    "PdfRegistrationRenderer",
]
