from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)

_DEFAULT_LEGAL_NOTICE = (
    "This record is maintained in compliance with the Immigration Act 13 of 2002 and the "
    "Protection of Personal Information Act (POPIA). Personal information may be disclosed "
    "to authorities when lawfully required."
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Guest Registration API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Record store: an empty URL selects the ephemeral in-memory store
    redis_url: str = ""
    redis_timeout_seconds: float = 5.0
    store_memory_fallback: bool = False
    registration_key_prefix: str = "guest:"
    rate_limit_key_prefix: str = "rate_limit:"

    # Retention & abuse protection
    retention_days: int = 7 * 365
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 3
    trust_forwarded_headers: bool = True

    # Stay dates without an explicit offset are read in this zone
    property_timezone: str = "UTC"

    # Rendered document
    host_business_name: str = "[Your Business Name]"
    host_business_address: str = "[Your Business Address]"
    document_title: str = "Guest Registration & Agreement"
    document_jurisdiction: str = "Republic of South Africa"
    legal_notice: str = _DEFAULT_LEGAL_NOTICE
    pdf_compression: bool = True

    # Success view
    qr_code_service_url: str = "https://api.qrserver.com/v1/create-qr-code/"
    contact_email: str = "guest@yourhost.com"
    contact_phone: str = "+27 12 345 6789"

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_store: str = "WARNING"         # redis client internals
    log_level_http: str = "WARNING"          # httpx / httpcore
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_pipeline: str = "INFO"         # submission / render pipeline
    log_level_pdf: str = "WARNING"           # reportlab / Pillow

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def retention_seconds(self) -> int:
        return self.retention_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
