"""Structured logging configuration for the AI Prioritizer & Mediator service."""

import logging
import sys
from typing import Any

# Fields that must never reach the log stream (BYOK credentials)
_REDACTED_FIELDS = {"api_key", "x_ai_api_key", "authorization"}


class StructuredFormatter(logging.Formatter):
    """key=value structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured output."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        if hasattr(record, "request_id"):
            log_data["request_id"] = record.request_id

        if hasattr(record, "extra_data"):
            for key, value in record.extra_data.items():
                log_data[key] = "***" if key.lower() in _REDACTED_FIELDS else value

        parts = [f"{k}={_quote(v)}" for k, v in log_data.items()]
        line = " ".join(parts)

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _quote(value: Any) -> str:
    text = str(value)
    if " " in text and not text.startswith('"'):
        return f'"{text}"'
    return text


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        # Set level based on environment
        try:
            from app.core.config import get_settings

            settings = get_settings()
            if settings.MEDIATOR_ENV == "dev":
                logger.setLevel(logging.DEBUG)
            else:
                logger.setLevel(logging.INFO)
        except Exception:
            # Settings not loadable (e.g. missing Supabase env in a CLI run)
            logger.setLevel(logging.INFO)

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """
    Log with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        **kwargs: Additional context fields (e.g., request_id, project_id)
    """
    extra: dict[str, Any] = {}
    if "request_id" in kwargs:
        extra["request_id"] = kwargs.pop("request_id")
    extra["extra_data"] = kwargs

    logger.log(level, msg, extra=extra)
