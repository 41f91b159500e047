"""
Structured logging for yubikiller.

Provides:
- get_logger(): Get a structlog logger bound to a module name
- setup_logging(): Configure stdlib logging and structlog processors
- JSON output when LOG_FORMAT=json, pretty console output otherwise
- Redaction of OTP, nonce and other secret-looking fields
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor

from yubikiller.config import LoggingSettings

# Fields never written to logs verbatim (compared lowercased)
REDACTED_FIELDS = {
    "otp",
    "nonce",
    "token",
    "secret",
    "api_key",
    "authorization",
    "cookie",
}

_SENSITIVE_FRAGMENTS = ("otp", "nonce", "token", "secret", "key")
_KEEP_FIELDS = ("level", "event", "timestamp", "logger")


def get_logger(name: str) -> BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("otp_invalidated", public_id="cccccccccccc")
    """
    return structlog.get_logger(name)


def add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO format timestamp to event dict."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact sensitive fields from logs."""
    for key in list(event_dict.keys()):
        if key in _KEEP_FIELDS:
            continue
        if key.lower() in REDACTED_FIELDS or any(
            fragment in key.lower() for fragment in _SENSITIVE_FRAGMENTS
        ):
            event_dict[key] = "***REDACTED***"
    return event_dict


def configure_structlog(log_format: str) -> None:
    """
    Configure structlog processors.

    json: one JSON object per line
    anything else: colourised console output
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True, pad_event=15, sort_keys=False)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_stdlib_logging(log_level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    # httpx logs every request at INFO, including the full query string
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def setup_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Initialize logging. Call once at process start (the CLI does this);
    library code only uses get_logger().
    """
    settings = settings or LoggingSettings()

    configure_stdlib_logging(settings.log_level)
    configure_structlog(settings.log_format or "console")

    get_logger(__name__).debug(
        "logging_initialized",
        env=settings.env,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )
