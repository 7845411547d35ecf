"""Colored pipeline logger — ANSI-colored console logging for registration flows.

Traces a submission (rate limit → validation → spam check → persist) and a
document render (lookup → render) stage by stage in the terminal.

Color scheme:
    🟡 Yellow  — Rate limiting
    🔵 Blue    — Validation / spam check
    🟢 Green   — Persistence / completion
    🟣 Magenta — Document rendering
    🔴 Red     — Errors

Never pass image payloads or full request bodies as details.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


Stage = tuple[str, str, str]


class PipelineStage:
    """Predefined pipeline stages with colors and icons."""

    RATE_LIMIT: Stage = ("RATE_LIMIT", _Colors.YELLOW, "⏱️")
    VALIDATE: Stage = ("VALIDATE", _Colors.BLUE, "🔎")
    SPAM_CHECK: Stage = ("SPAM_CHECK", _Colors.BLUE, "🛡️")
    PERSIST: Stage = ("PERSIST", _Colors.GREEN, "💾")
    LOOKUP: Stage = ("LOOKUP", _Colors.CYAN, "📇")
    RENDER: Stage = ("RENDER", _Colors.MAGENTA, "📄")
    COMPLETE: Stage = ("COMPLETE", _Colors.GREEN, "✅")
    ERROR: Stage = ("ERROR", _Colors.RED, "❌")


def _format_details(kwargs: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in kwargs.items())


class PipelineLogger:
    """Color-coded logger for the registration pipeline.

    Usage:
        log = PipelineLogger("RegistrationPipeline")
        log.step_start(PipelineStage.VALIDATE, "Validating submission", ip="10.0.0.1")
        log.step_complete(PipelineStage.PERSIST, "Stored registration", id=record.id)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: Stage, message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_complete(self, stage: Stage, message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_warning(self, stage: Stage, message: str, **kwargs: Any) -> None:
        """Log an expected rejection (rate limit, validation, spam) in yellow."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.YELLOW}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.YELLOW}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.warning(formatted)

    def step_error(self, stage: Stage, message: str, error: Exception | None = None) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **kwargs: Any) -> Iterator[None]:
        """Context manager that logs start/end with elapsed time.

        Usage:
            with log.timed_step(PipelineStage.RENDER, "Rendering document", id=record_id):
                pdf = renderer.render(record)
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s", **kwargs)
