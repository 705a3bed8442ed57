"""structlog setup for the copy-to-llm CLI.

Everything is written to stderr so that stdout carries only the extracted
text. Page titles and URLs show up in events, so every event passes through a
processor that strips terminal control sequences and redacts secrets before
it is rendered.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from enum import StrEnum
from pathlib import Path
from typing import Any

import structlog

from copy_to_llm.utils.security import SecretRedactor, sanitize_for_logging

SERVICE_NAME = "copy-to-llm"


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_redactor: SecretRedactor | None = None


def _log_redactor() -> SecretRedactor:
    global _redactor
    if _redactor is None:
        _redactor = SecretRedactor()
    return _redactor


def sanitize_log_value(value: Any) -> Any:
    """Clean a log value, descending into dicts, lists and tuples.

    Strings lose ANSI codes and control characters and have secrets replaced
    with ``[REDACTED]``; other scalars are returned unchanged.
    """
    if isinstance(value, str):
        return _log_redactor().redact(sanitize_for_logging(value))
    if isinstance(value, dict):
        return {key: sanitize_log_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_log_value(item) for item in value)
    return value


def secret_sanitizer(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Processor applying :func:`sanitize_log_value` to the whole event."""
    return {key: sanitize_log_value(item) for key, item in event_dict.items()}


def add_service_info(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Processor tagging events with the service name and package version."""
    from copy_to_llm._version import __version__

    event_dict["service"] = SERVICE_NAME
    event_dict["version"] = __version__
    return event_dict


def _renderer(log_format: LogFormat) -> Any:
    if log_format == LogFormat.JSON:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def _handlers(
    level: int,
    file_path: Path | str | None,
    file_enabled: bool,
) -> list[logging.Handler]:
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    handlers: list[logging.Handler] = [stderr_handler]

    if not (file_enabled and file_path):
        return handlers

    path = Path(file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path)
    except OSError as e:
        # Keep logging to stderr only
        logging.getLogger("copy_to_llm.logging").warning(f"Could not open log file {path}: {e}")
        return handlers

    file_handler.setLevel(level)
    handlers.append(file_handler)
    return handlers


def configure_logging(
    level: LogLevel | str = LogLevel.WARNING,
    log_format: LogFormat | str = LogFormat.CONSOLE,
    file_path: Path | str | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; the CLI configures early from its flags and
    again once the config file has been read.

    Args:
        level: Minimum level, as a LogLevel or a case-insensitive name
        log_format: "json" for one object per line, "console" for humans
        file_path: Optional log file, also written when file_enabled is set
        file_enabled: Whether to add the file handler

    Raises:
        ValueError: If level or log_format is not a known name
    """
    level = LogLevel(level.upper()) if isinstance(level, str) else level
    log_format = LogFormat(log_format.lower()) if isinstance(log_format, str) else log_format
    numeric_level = getattr(logging, level.value)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_service_info,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            secret_sanitizer,
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=_handlers(numeric_level, file_path, file_enabled),
        force=True,
    )


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs (e.g. the page URL) to every later event."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with :func:`bind_context`."""
    structlog.contextvars.clear_contextvars()


class LogEventNames:
    """Standard log event names for consistency."""

    # CLI lifecycle
    EXTRACTION_STARTED = "extraction_started"
    EXTRACTION_COMPLETE = "extraction_complete"
    INPUT_READ_ERROR = "input_read_error"
    OUTPUT_WRITE_ERROR = "output_write_error"
    FATAL_ERROR = "fatal_error"

    # Classification
    ERROR_PAGE_DETECTED = "error_page_detected"
    GENERIC_PAGE_DETECTED = "generic_page_detected"

    # Security events
    REMOTE_URL_REJECTED = "remote_url_rejected"
    SENSITIVE_DATA_DETECTED = "sensitive_data_detected"
    SENSITIVE_DATA_REDACTED = "sensitive_data_redacted"

    # Configuration
    CONFIG_LOADED = "config_loaded"
    CONFIG_FILE_NOT_FOUND = "config_file_not_found"
    CONFIG_INVALID = "config_invalid"
