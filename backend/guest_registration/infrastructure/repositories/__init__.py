from .registration_repository import KeyValueRegistrationRepository

__all__ = [
    "KeyValueRegistrationRepository",
]
