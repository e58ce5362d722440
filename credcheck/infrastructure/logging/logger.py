"""Structured logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3", "asyncio")

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    silence_noisy_loggers: bool = True,
) -> None:
    """Configure the root logger once for the whole process."""
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())

    if silence_noisy_loggers:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


class StructuredLogger:
    """Structured logger for service steps."""

    def __init__(self, name: str = __name__):
        """Initialize structured logger."""
        self.logger = logging.getLogger(name)

    def log_step(
        self,
        step: str,
        state: dict[str, Any],
        duration_ms: float | None = None,
    ) -> None:
        """Log a service step."""
        log_data: dict[str, Any] = {
            "step": step,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "state": state,
        }
        if duration_ms:
            log_data["duration_ms"] = round(duration_ms, 1)

        self.logger.info(json.dumps(log_data, ensure_ascii=False))

    def log_error(
        self,
        step: str,
        error: Exception,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Log an error with context."""
        log_data: dict[str, Any] = {
            "step": step,
            "error": str(error),
            "error_type": type(error).__name__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if context:
            log_data["context"] = context

        self.logger.error(json.dumps(log_data, ensure_ascii=False), exc_info=True)
