"""Application service (use case) for guest registration submission and lookup."""

from dataclasses import dataclass
from datetime import tzinfo
from typing import Any

from guest_registration.application.interfaces import RegistrationRepository
from guest_registration.application.schemas.registration import (
    RegistrationCreate,
    parse_registration,
)
from guest_registration.application.services.rate_limiter import (
    Clock,
    RateLimiter,
    utc_now,
)
from guest_registration.application.services.spam_detector import SpamDetector
from guest_registration.domain.entities import (
    GuestRegistration,
    RegistrationRecord,
    RequestMetadata,
    is_valid_registration_id,
    new_registration_id,
)
from guest_registration.domain.exceptions import (
    EntityNotFoundError,
    RateLimitExceededError,
    RegistrationValidationError,
    SubmissionRejectedError,
)
from guest_registration.infrastructure.logging.pipeline_logger import (
    PipelineLogger,
    PipelineStage,
)

plog = PipelineLogger("RegistrationPipeline")


@dataclass(frozen=True)
class ClientContext:
    """Network identity and agent of the caller, as seen by the server."""

    ip_address: str = "unknown"
    user_agent: str = ""


class RegistrationService:
    """Orchestrates the submission pipeline and record lookups.

    Sequence for ``submit``: rate limit → validate → spam check →
    assign identifier → persist. Store errors during persistence propagate
    unchanged; there is no retry.
    """

    def __init__(
        self,
        repository: RegistrationRepository,
        rate_limiter: RateLimiter,
        spam_detector: SpamDetector | None = None,
        *,
        zone: tzinfo | None = None,
        clock: Clock = utc_now,
    ):
        self._repository = repository
        self._rate_limiter = rate_limiter
        self._spam_detector = spam_detector or SpamDetector()
        self._zone = zone
        self._clock = clock

    async def submit(self, payload: Any, client: ClientContext) -> RegistrationRecord:
        """Validate and store a registration submitted by *client*.

        Raises:
            RateLimitExceededError: the client used up its window allowance.
            RegistrationValidationError: one or more field rules failed.
            SubmissionRejectedError: the spam heuristic matched.
            RecordStoreError: the record could not be persisted.
        """
        if not await self._rate_limiter.allow(client.ip_address):
            retry_after = await self._rate_limiter.retry_after(client.ip_address)
            plog.step_warning(
                PipelineStage.RATE_LIMIT, "Submission rate limited", ip=client.ip_address
            )
            raise RateLimitExceededError(client.ip_address, retry_after)

        now = self._clock()
        try:
            data = parse_registration(payload, now=now, zone=self._zone)
        except RegistrationValidationError as exc:
            plog.step_warning(
                PipelineStage.VALIDATE,
                "Submission failed validation",
                ip=client.ip_address,
                fields=",".join(sorted(exc.fields)),
            )
            raise

        if self._spam_detector.is_spam(data):
            plog.step_warning(
                PipelineStage.SPAM_CHECK,
                "Spam pattern detected",
                ip=client.ip_address,
                email=data.email,
            )
            raise SubmissionRejectedError()

        record = RegistrationRecord(
            id=new_registration_id(),
            created_at=int(now.timestamp() * 1000),
            data=_to_entity(data),
            metadata=RequestMetadata(
                ip=client.ip_address,
                user_agent=client.user_agent,
                timestamp=now.isoformat(),
            ),
        )

        with plog.timed_step(PipelineStage.PERSIST, "Storing registration", id=record.id):
            await self._repository.create(record)

        plog.step_complete(
            PipelineStage.COMPLETE,
            "Guest registration submitted",
            id=record.id,
            check_in=data.check_in.isoformat(),
            guests=data.guests,
            ip=client.ip_address,
        )
        return record

    async def get_registration(self, registration_id: str) -> RegistrationRecord:
        """Look up a stored registration.

        Malformed identifiers are reported as not found rather than as a
        validation problem.
        """
        if not is_valid_registration_id(registration_id):
            raise EntityNotFoundError("Registration", registration_id)
        record = await self._repository.get_by_id(registration_id)
        if record is None:
            raise EntityNotFoundError("Registration", registration_id)
        return record


def _to_entity(data: RegistrationCreate) -> GuestRegistration:
    return GuestRegistration(
        full_name=data.full_name,
        id_or_passport=data.id_or_passport,
        nationality=data.nationality,
        residence_status=data.residence_status,
        home_address=data.home_address,
        phone=data.phone,
        email=data.email,
        check_in=data.check_in,
        check_out=data.check_out,
        guests=data.guests,
        selfie=data.selfie,
        id_image=data.id_image,
        signature=data.signature,
        popia_consent=data.popia_consent,
        non_refund_ack=data.non_refund_ack,
    )
