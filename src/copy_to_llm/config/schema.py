"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClassifierConfig(BaseModel):
    """Signals that identify a framework error page."""

    # Matched against the lower-cased page title
    title_keywords: list[str] = ["error", "exception", "template"]
    # Matched case-sensitively against the page body
    body_markers: list[str] = ["Rails.root:", "Application Trace", "Extracted source"]

    @field_validator("title_keywords")
    @classmethod
    def lowercase_keywords(cls, v: list[str]) -> list[str]:
        """Store title keywords lower-cased to match the lower-cased title."""
        return [keyword.lower() for keyword in v]

    @field_validator("title_keywords", "body_markers")
    @classmethod
    def validate_not_empty(cls, v: list[str]) -> list[str]:
        """Reject empty signal lists, which would disable classification."""
        if not v or any(not item for item in v):
            raise ValueError("Signal lists must contain at least one non-empty entry")
        return v


class ErrorReportConfig(BaseModel):
    """Lookahead windows and message patterns for error report scans.

    Each window counts the lines examined: the heading and message windows
    from the top of the page, the others after their section marker.
    """

    heading_window: int = Field(5, ge=1)
    message_window: int = Field(25, ge=1)
    search_path_window: int = Field(19, ge=1)
    source_window: int = Field(19, ge=1)
    trace_window: int = Field(4, ge=1)
    raw_fallback_lines: int = Field(10, ge=0)

    message_prefixes: list[str] = [
        "undefined method",
        "undefined local variable",
        "No route matches",
        "wrong number of arguments",
        "Couldn't find",
    ]
    message_substrings: list[str] = ["uninitialized constant"]
    template_message_prefixes: list[str] = [
        "Missing template",
        "Missing partial",
        "No view template for interactive request",
    ]
    # Start of an inspected-object dump in generic messages
    message_truncation_marker: str = " for #<"


class ContentConfig(BaseModel):
    """Generic page content extraction settings."""

    selectors: list[str] = [
        "main",
        "article",
        '[role="main"]',
        "#main-content",
        ".main-content",
        "#content",
        ".content",
    ]
    min_region_length: int = Field(100, ge=0)
    min_selection_length: int = Field(20, ge=0)
    max_body_length: int = Field(5000, ge=1)
    truncation_marker: str = "\n\n[Content truncated...]"


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("copy-to-llm.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class SecurityConfig(BaseModel):
    """Which page addresses the CLI accepts."""

    allow_remote_urls: bool = False


class ExtractionConfig(BaseSettings):
    """Root configuration for copy-to-llm."""

    classifier: ClassifierConfig = ClassifierConfig()
    error_report: ErrorReportConfig = ErrorReportConfig()
    content: ContentConfig = ContentConfig()
    logging: LoggingConfig = LoggingConfig()
    security: SecurityConfig = SecurityConfig()

    model_config = SettingsConfigDict(
        env_prefix="COPY_TO_LLM_",
        env_nested_delimiter="__",
    )
