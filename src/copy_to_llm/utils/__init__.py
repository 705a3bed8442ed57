"""Utility functions and helpers.

- html: Title and rendered-text recovery from page markup
- logging: Structured logging with secret sanitization
- security: Secret redaction, local-URL checks
"""

from copy_to_llm.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
)
from copy_to_llm.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
    is_local_url,
)

__all__ = [
    # Logging
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
    "is_local_url",
]
