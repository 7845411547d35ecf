"""Value object for self-describing image blobs (``data:image/...;base64,...``)."""

import base64
import binascii
from dataclasses import dataclass

from guest_registration.domain.exceptions import (
    NotAnImageDataUrlError,
    UndecodableImageDataError,
)

_PREFIX = "data:image/"


@dataclass(frozen=True)
class ImageData:
    """Decoded image blob: the declared media type and the raw bytes."""

    media_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def parse(cls, data_url: str) -> "ImageData":
        """Parse and decode a base64 image data URL.

        Raises:
            NotAnImageDataUrlError: the value does not declare an image.
            UndecodableImageDataError: the payload is absent or not valid base64.
        """
        if not isinstance(data_url, str) or not data_url.startswith(_PREFIX):
            raise NotAnImageDataUrlError("value is not an image data URL")

        header, _, payload = data_url.partition(",")
        if not payload:
            raise UndecodableImageDataError("image data URL has no payload")
        if not header.endswith(";base64"):
            raise UndecodableImageDataError("image data URL is not base64 encoded")

        try:
            content = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise UndecodableImageDataError(f"invalid base64 payload: {exc}") from exc
        if not content:
            raise UndecodableImageDataError("image payload is empty")

        media_type = header[len("data:"):].split(";", 1)[0].lower()
        return cls(media_type=media_type, content=content)

    @staticmethod
    def to_data_url(media_type: str, content: bytes) -> str:
        return f"data:{media_type};base64,{base64.b64encode(content).decode('ascii')}"
