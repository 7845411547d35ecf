"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(e.g. the Redis client, reportlab/Pillow image decoding) can be silenced
without affecting other parts of the application.

Usage:
    from guest_registration.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once at startup (in the lifespan)
"""

import logging
import sys

from guest_registration.config import get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_store": [
        "redis",
        "guest_registration.infrastructure.store",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_pipeline": [
        "RegistrationPipeline",
        "DocumentPipeline",
    ],
    "log_level_pdf": [
        "reportlab",
        "PIL",
    ],
}


def setup_logging() -> None:
    """Configure Python logging levels from application settings.

    Call this once during startup (e.g. in the FastAPI lifespan).
    """
    settings = get_settings()
    root_level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # uvicorn usually installs a handler; tests and scripts may not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(levelname)-8s %(name)s — %(message)s",
            )
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, store=%s, http=%s, uvicorn=%s, pipeline=%s, pdf=%s",
        settings.log_level,
        settings.log_level_store,
        settings.log_level_http,
        settings.log_level_uvicorn,
        settings.log_level_pipeline,
        settings.log_level_pdf,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
