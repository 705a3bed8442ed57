"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    ClassifierConfig,
    ContentConfig,
    ErrorReportConfig,
    ExtractionConfig,
    FileLoggingConfig,
    LoggingConfig,
    SecurityConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "ExtractionConfig",
    # Extraction configs
    "ClassifierConfig",
    "ErrorReportConfig",
    "ContentConfig",
    # Ambient configs
    "LoggingConfig",
    "FileLoggingConfig",
    "SecurityConfig",
]
