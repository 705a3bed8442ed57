"""Command-line entry point for copy-to-llm.

Reads a saved page (HTML, or plain text with --text), runs the extractor and
prints the result, ready to paste into an AI assistant. It handles:
- Configuration loading
- Logging setup with secret sanitization
- The local-URL gate
- Secret detection and optional redaction of the output
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

import structlog

from copy_to_llm._version import __version__

log = structlog.get_logger()


def setup_logging(debug: bool = False, log_format: str = "console") -> None:
    """Configure structured logging for the CLI.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from copy_to_llm.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING
    configure_logging(level=level, log_format=LogFormat(log_format.lower()))


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="copy-to-llm",
        description="Extract page content or a framework error report for an AI assistant",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "input",
        help="Saved page to read (HTML unless --text is given); '-' reads stdin",
    )

    parser.add_argument(
        "-u",
        "--url",
        required=True,
        help="Address the page was loaded from",
    )

    parser.add_argument(
        "--text",
        action="store_true",
        help="Treat the input as rendered page text instead of HTML",
    )

    parser.add_argument(
        "--title",
        help="Page title (required with --text; overrides <title> for HTML)",
    )

    parser.add_argument(
        "--selection",
        default="",
        help="Text the user had selected on the page",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the result to this file instead of stdout",
    )

    parser.add_argument(
        "--allow-remote",
        action="store_true",
        help="Accept pages from hosts outside localhost and private networks",
    )

    parser.add_argument(
        "--redact",
        action="store_true",
        help="Replace detected secrets in the output with [REDACTED]",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default=None,
        help="Log output format (default: console, or the config file setting)",
    )

    args = parser.parse_args(argv)
    if args.text and args.title is None:
        parser.error("--title is required with --text")
    return args


def read_input(source: str) -> str:
    """Read page content from a file path or stdin.

    Raises:
        OSError: If the file cannot be read
    """
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run(args: argparse.Namespace) -> int:
    """Run one extraction.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    import yaml

    from copy_to_llm.config.loader import load_config
    from copy_to_llm.core.extractor import extract
    from copy_to_llm.models.snapshot import PageSnapshot
    from copy_to_llm.utils.logging import LogEventNames, bind_context, configure_logging
    from copy_to_llm.utils.security import SecretRedactor, is_local_url

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        log.error(LogEventNames.CONFIG_FILE_NOT_FOUND, path=str(args.config), error=str(e))
        return 1
    except ValueError as e:
        log.error(LogEventNames.CONFIG_INVALID, error=str(e))
        return 1
    except yaml.YAMLError as e:
        log.error(LogEventNames.CONFIG_INVALID, path=str(args.config), error=str(e))
        return 1

    if not args.debug:
        # Config file settings take over unless debugging was asked for
        configure_logging(
            level=config.logging.level,
            log_format=args.format or config.logging.format,
            file_path=config.logging.file.path if config.logging.file.enabled else None,
            file_enabled=config.logging.file.enabled,
        )

    if args.config is not None:
        log.info(LogEventNames.CONFIG_LOADED, path=str(args.config))

    bind_context(url=args.url)

    if not (args.allow_remote or config.security.allow_remote_urls or is_local_url(args.url)):
        log.error(LogEventNames.REMOTE_URL_REJECTED, hint="pass --allow-remote to override")
        return 1

    try:
        raw = read_input(args.input)
    except OSError as e:
        log.error(LogEventNames.INPUT_READ_ERROR, source=args.input, error=str(e))
        return 1

    log.info(LogEventNames.EXTRACTION_STARTED, source=args.input, text_mode=args.text)

    if args.text:
        snapshot = PageSnapshot(
            title=args.title,
            url=args.url,
            body_text=raw,
            selection=args.selection,
        )
    else:
        snapshot = PageSnapshot.from_html(raw, args.url, selection=args.selection)
        if args.title is not None:
            snapshot = replace(snapshot, title=args.title)

    result = extract(snapshot, config)

    redactor = SecretRedactor()
    findings = redactor.scan(result)
    if findings:
        log.warning(
            LogEventNames.SENSITIVE_DATA_DETECTED,
            kinds=sorted({name for name, _, _, _ in findings}),
            count=len(findings),
        )
        if args.redact:
            result = redactor.redact(result)
            log.info(LogEventNames.SENSITIVE_DATA_REDACTED, count=len(findings))

    if args.output is not None:
        try:
            args.output.write_text(result + "\n", encoding="utf-8")
        except OSError as e:
            log.error(LogEventNames.OUTPUT_WRITE_ERROR, path=str(args.output), error=str(e))
            return 1
    else:
        sys.stdout.write(result + "\n")

    log.info(LogEventNames.EXTRACTION_COMPLETE, length=len(result))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.format or "console")

    from copy_to_llm.utils.logging import LogEventNames, clear_context

    try:
        return run(args)
    except KeyboardInterrupt:
        log.info("interrupted")
        return 130
    except Exception as e:
        log.exception(LogEventNames.FATAL_ERROR, error=str(e))
        return 1
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
