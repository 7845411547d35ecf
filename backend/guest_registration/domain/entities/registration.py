"""Domain entities — pure Python business objects for guest registrations."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

_REGISTRATION_ID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def new_registration_id() -> str:
    """Generate a fresh random 128-bit identifier in canonical dashed hex form."""
    return str(uuid4())


def is_valid_registration_id(value: str | None) -> bool:
    """Check that a value has the canonical identifier shape (no storage lookup)."""
    return bool(value) and _REGISTRATION_ID_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class GuestRegistration:
    """The validated, typed field set a guest submitted."""

    # Identity
    full_name: str
    id_or_passport: str
    nationality: str
    residence_status: str
    home_address: str

    # Contact
    phone: str
    email: str

    # Stay
    check_in: datetime
    check_out: datetime
    guests: int

    # Documents (image data URLs)
    selfie: str
    id_image: str
    signature: str

    # Consents
    popia_consent: bool
    non_refund_ack: bool

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


@dataclass(frozen=True)
class RequestMetadata:
    """Server-attached request context, never user-editable."""

    ip: str
    user_agent: str
    timestamp: str  # ISO-8601


@dataclass(frozen=True)
class RegistrationRecord:
    """One stored registration. Immutable once created (append-only store)."""

    id: str
    created_at: int  # milliseconds since epoch
    data: GuestRegistration
    metadata: RequestMetadata

    @property
    def created_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.created_at / 1000, tz=timezone.utc)


@dataclass
class RateLimitCounter:
    """Per-identity request counter for one fixed rate window."""

    count: int
    reset_time: int  # milliseconds since epoch

    def is_expired(self, now_ms: int) -> bool:
        return now_ms > self.reset_time

    def remaining_seconds(self, now_ms: int) -> int:
        return max(1, (self.reset_time - now_ms) // 1000)

    def to_dict(self) -> dict[str, int]:
        return {"count": self.count, "resetTime": self.reset_time}

    @classmethod
    def from_dict(cls, data: dict) -> "RateLimitCounter":
        return cls(count=int(data["count"]), reset_time=int(data["resetTime"]))
