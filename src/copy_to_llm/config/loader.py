"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import yaml

from .schema import ExtractionConfig


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path | None = None) -> ExtractionConfig:
    """
    Load configuration from a YAML file with environment variable substitution.

    Without a path, the defaults (plus any COPY_TO_LLM_* environment
    overrides) are returned.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated ExtractionConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If environment variables are missing or config is invalid
        ValidationError: If config doesn't match schema
    """
    if path is None:
        return ExtractionConfig()

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)

    # An empty file means "all defaults"
    config_dict = yaml.safe_load(yaml_with_env) or {}
    if not isinstance(config_dict, dict):
        raise ValueError(f"Configuration root must be a mapping: {path}")

    config = ExtractionConfig.model_validate(config_dict)

    validate_config(config)

    return config


def validate_config(config: ExtractionConfig) -> None:
    """
    Perform additional cross-field validation.

    Args:
        config: Configuration to validate

    Raises:
        ValueError: If settings contradict each other
    """
    if not config.content.selectors:
        raise ValueError("At least one content selector is required")

    if not config.content.truncation_marker:
        raise ValueError("content.truncation_marker must not be empty")

    report = config.error_report
    if not (report.message_prefixes or report.message_substrings):
        raise ValueError("At least one error message prefix or substring is required")
