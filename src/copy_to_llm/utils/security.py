"""Secret detection and address checks for copied page content.

Development error pages routinely echo request parameters, session data and
environment values. Before text leaves the machine it can be scanned for
credentials and redacted, and the CLI only accepts pages served from local or
private-network hosts unless told otherwise.

Redaction is fail-closed: if a pattern fails to compile or run, an exception
is raised rather than returning text that may still hold a secret.
"""

from __future__ import annotations

import ipaddress
import re
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()


class SecurityError(Exception):
    """Base exception for security-related errors."""


class RedactionError(SecurityError):
    """Raised when secret redaction fails."""


# Hostnames that always refer to the local machine
LOCAL_HOSTNAMES = frozenset({"localhost", "127.0.0.1", "0.0.0.0", "::1"})

# Private network ranges a development server is commonly reached on
PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
)


class SecretRedactor:
    """Detects and redacts secrets from text.

    Usage:
        redactor = SecretRedactor()
        safe_text = redactor.redact(page_text)

    Attributes:
        patterns: List of compiled regex patterns to detect secrets.
        placeholder: The string to replace secrets with (default: "[REDACTED]").
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        # ENV and config dumps: KEY=value / key: value
        (
            r"(?i)(api[_-]?key|secret|token|password|credential)\s*[=:]\s*[\"']?[\w-]{16,}",
            "Generic secret",
        ),
        # "Parameters:" dump in Ruby hash syntax; Rails filters passwords
        # but not the CSRF token or API keys sent as params
        (
            r"(?i)\"(authenticity_token|api_key|access_token|token|secret)\"\s*=>\s*\"[^\"]{8,}\"",
            "Request parameter secret",
        ),
        (r"(?i)secret_key_base\s*[=:]\s*[\"']?[a-f0-9]{64,}", "Rails secret key base"),
        (r"(?i)rails_master_key\s*[=:]\s*[\"']?[a-f0-9]{32}", "Rails master key"),
        # Session cookie from the request headers section
        (r"\b_[a-z0-9_]+_session=[^;\s\"]{16,}", "Rails session cookie"),
        # Active Storage / S3 credentials
        (r"AKIA[0-9A-Z]{16}", "AWS access key ID"),
        (
            r"(?i)aws[_-]?secret[_-]?access[_-]?key\s*[=:]\s*[\"']?[a-zA-Z0-9/+=]{40}",
            "AWS secret access key",
        ),
        # DATABASE_URL / REDIS_URL
        (
            r"(?i)(postgres(?:ql)?|mysql2?|mongodb(?:\+srv)?|redis|amqp)://[^:\s]+:[^@\s]+@[^\s]+",
            "Database connection string",
        ),
        (
            r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----",
            "Private key header",
        ),
        # Bearer tokens in the Authorization header
        (
            r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*",
            "JWT token",
        ),
    )

    def __init__(
        self,
        placeholder: str = "[REDACTED]",
        custom_patterns: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        """Initialize the SecretRedactor.

        Args:
            placeholder: String to replace detected secrets with.
            custom_patterns: Additional (pattern, name) tuples to detect.

        Raises:
            RedactionError: If any pattern fails to compile.
        """
        self.placeholder = placeholder
        self._pattern_names: dict[re.Pattern[str], str] = {}

        all_patterns = list(self.DEFAULT_PATTERNS)
        if custom_patterns:
            all_patterns.extend(custom_patterns)

        for pattern_str, name in all_patterns:
            try:
                compiled = re.compile(pattern_str)
            except re.error as e:
                log.error("pattern_compilation_failed", pattern=pattern_str, error=str(e))
                msg = f"Failed to compile secret pattern '{pattern_str}': {e}"
                raise RedactionError(msg) from e
            self._pattern_names[compiled] = name

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Return the list of compiled patterns."""
        return list(self._pattern_names.keys())

    def redact(self, text: str) -> str:
        """Redact all secrets from the given text.

        Args:
            text: The text to scan and redact secrets from.

        Returns:
            The text with all detected secrets replaced with placeholder.

        Raises:
            RedactionError: If redaction fails for any reason.
        """
        if not text:
            return text

        try:
            result = text
            for pattern in self._pattern_names:
                result = pattern.sub(self.placeholder, result)
            return result
        except Exception as e:
            log.error("redaction_failed", error=str(e))
            raise RedactionError(f"Redaction failed: {e}") from e

    def scan(self, text: str) -> list[tuple[str, str, int, int]]:
        """Scan text for secrets without redacting.

        Args:
            text: The text to scan for secrets.

        Returns:
            List of (pattern_name, matched_text_preview, start, end) tuples.
            The preview shows only the first/last few characters.

        Raises:
            RedactionError: If scanning fails for any reason.
        """
        if not text:
            return []

        try:
            findings: list[tuple[str, str, int, int]] = []
            for pattern, name in self._pattern_names.items():
                for match in pattern.finditer(text):
                    matched = match.group()
                    if len(matched) > 10:
                        preview = f"{matched[:4]}...{matched[-4:]}"
                    else:
                        preview = f"{matched[:2]}..."
                    findings.append((name, preview, match.start(), match.end()))
            return findings
        except Exception as e:
            log.error("scan_failed", error=str(e))
            raise RedactionError(f"Scanning failed: {e}") from e


def is_local_url(url: str) -> bool:
    """Check whether a URL points at the local machine or a private network.

    Accepts localhost names and addresses plus the private IPv4 ranges
    10.0.0.0/8, 172.16.0.0/12 and 192.168.0.0/16.

    Args:
        url: Page address to check.

    Returns:
        True for local or private hosts, False otherwise (including
        unparseable URLs and URLs without a host).
    """
    if not url:
        return False

    try:
        host = urlparse(url).hostname
    except ValueError:
        return False

    if not host:
        return False

    if host in LOCAL_HOSTNAMES:
        return True

    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False  # A name other than localhost

    if ip.is_loopback:
        return True
    return any(ip in network for network in PRIVATE_NETWORKS)


def sanitize_for_logging(text: str) -> str:
    """Remove ANSI escape codes and control characters from text.

    Titles and URLs come straight from the page being copied.

    Args:
        text: The text to sanitize.

    Returns:
        The text with ANSI codes and control characters removed.
    """
    if not text:
        return text

    text = re.sub(r"\x1b\[[0-9;]*m", "", text)
    return re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
