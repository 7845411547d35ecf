"""Key-value implementation of the RegistrationRepository port.

Stored document layout under ``<prefix><id>``::

    {"id": ..., "createdAt": <epoch ms>,
     "data": {"fullName": ..., "checkIn": <ISO-8601>, ..., "nonRefundAck": true},
     "metadata": {"userAgent": ..., "ip": ..., "timestamp": <ISO-8601>}}
"""

import logging
from datetime import datetime
from typing import Any

from guest_registration.application.interfaces import RecordStore, RegistrationRepository
from guest_registration.domain.entities import (
    GuestRegistration,
    RegistrationRecord,
    RequestMetadata,
)
from guest_registration.domain.exceptions import RecordStoreError

logger = logging.getLogger(__name__)


class KeyValueRegistrationRepository(RegistrationRepository):
    """Append-only registration storage on top of a RecordStore."""

    def __init__(
        self,
        store: RecordStore,
        *,
        retention_seconds: int,
        key_prefix: str = "guest:",
    ):
        self._store = store
        self._retention_seconds = retention_seconds
        self._key_prefix = key_prefix

    def _key(self, registration_id: str) -> str:
        return f"{self._key_prefix}{registration_id}"

    async def get_by_id(self, registration_id: str) -> RegistrationRecord | None:
        document = await self._store.get(self._key(registration_id))
        if document is None:
            return None
        try:
            return self._to_entity(document)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Stored registration %s is malformed: %s", registration_id, e)
            raise RecordStoreError("GET", self._key(registration_id), "malformed record") from e

    async def create(self, record: RegistrationRecord) -> RegistrationRecord:
        await self._store.set(
            self._key(record.id),
            self._to_document(record),
            ttl_seconds=self._retention_seconds,
        )
        return record

    # ── Mapping ─────────────────────────────────────────────────────

    @staticmethod
    def _to_document(record: RegistrationRecord) -> dict[str, Any]:
        d = record.data
        return {
            "id": record.id,
            "createdAt": record.created_at,
            "data": {
                "fullName": d.full_name,
                "idOrPassport": d.id_or_passport,
                "nationality": d.nationality,
                "residenceStatus": d.residence_status,
                "homeAddress": d.home_address,
                "phone": d.phone,
                "email": d.email,
                "checkIn": d.check_in.isoformat(),
                "checkOut": d.check_out.isoformat(),
                "guests": d.guests,
                "selfie": d.selfie,
                "idImage": d.id_image,
                "signature": d.signature,
                "popiaConsent": d.popia_consent,
                "nonRefundAck": d.non_refund_ack,
            },
            "metadata": {
                "userAgent": record.metadata.user_agent,
                "ip": record.metadata.ip,
                "timestamp": record.metadata.timestamp,
            },
        }

    @staticmethod
    def _to_entity(document: dict[str, Any]) -> RegistrationRecord:
        d = document["data"]
        meta = document.get("metadata") or {}
        return RegistrationRecord(
            id=document["id"],
            created_at=int(document["createdAt"]),
            data=GuestRegistration(
                full_name=d["fullName"],
                id_or_passport=d["idOrPassport"],
                nationality=d["nationality"],
                residence_status=d["residenceStatus"],
                home_address=d["homeAddress"],
                phone=d["phone"],
                email=d["email"],
                check_in=datetime.fromisoformat(d["checkIn"]),
                check_out=datetime.fromisoformat(d["checkOut"]),
                guests=int(d["guests"]),
                selfie=d.get("selfie", ""),
                id_image=d.get("idImage", ""),
                signature=d.get("signature", ""),
                popia_consent=bool(d.get("popiaConsent")),
                non_refund_ack=bool(d.get("nonRefundAck")),
            ),
            metadata=RequestMetadata(
                ip=meta.get("ip", "unknown"),
                user_agent=meta.get("userAgent", ""),
                timestamp=meta.get("timestamp", ""),
            ),
        )
