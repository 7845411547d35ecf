"""Domain-specific exceptions — framework-independent."""

from dataclasses import dataclass


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class InvalidIdentifierError(Exception):
    """Raised when an identifier does not have the canonical registration id shape."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"'{value}' is not a valid registration id")


@dataclass(frozen=True)
class FieldError:
    """A single violated rule, attributed to the (wire) field name."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class RegistrationValidationError(Exception):
    """Raised when a submission violates one or more schema rules.

    Carries every violation so the caller can surface them all at once.
    """

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        fields = ", ".join(e.field for e in errors)
        super().__init__(f"Registration failed validation on: {fields}")

    @property
    def fields(self) -> set[str]:
        return {e.field for e in self.errors}


class RateLimitExceededError(Exception):
    """Raised when a client exceeds its submission allowance for the current window."""

    def __init__(self, identity: str, retry_after_seconds: int):
        self.identity = identity
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"Rate limit exceeded for '{identity}'")


class SubmissionRejectedError(Exception):
    """Raised when a submission trips the spam heuristic.

    Intentionally carries no detail about which rule matched.
    """

    def __init__(self) -> None:
        super().__init__("Submission rejected")


class RecordStoreError(Exception):
    """Raised when the key-value record store fails an operation.

    Backend-agnostic: Redis, in-memory, or any future adapter wraps its
    driver errors in this type.
    """

    def __init__(self, operation: str, key: str, message: str):
        self.operation = operation
        self.key = key
        self.message = message
        super().__init__(f"[{operation}] {key}: {message}")


class DocumentRenderError(Exception):
    """Raised when a registration document cannot be produced at all."""

    def __init__(self, registration_id: str, message: str):
        self.registration_id = registration_id
        self.message = message
        super().__init__(f"Failed to render document for '{registration_id}': {message}")


class InvalidImageDataError(ValueError):
    """Raised when an image data blob cannot be interpreted."""


class NotAnImageDataUrlError(InvalidImageDataError):
    """The value does not start with an image data declaration."""


class UndecodableImageDataError(InvalidImageDataError):
    """The declaration is present but the payload is missing or not valid base64."""
