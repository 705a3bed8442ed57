"""Extraction of compact summaries from framework error pages.

This module implements the ErrorReportExtractor class, which recovers the
interesting parts of a Rails development error page from its rendered text:
- Error class and the controller action it was raised in
- The human-readable error message
- Source file and line number
- The numbered source excerpt, with the failing line highlighted
- Template search paths for missing-template errors
- Application stack frames

The page has no stable markup, so every scan works on the normalized line
stream and looks for stereotyped section markers. Each scan is independent,
examines a bounded number of lines, and leaves its field unset when it finds
nothing. The first match wins everywhere.
"""

from __future__ import annotations

import re
from collections.abc import Callable

import structlog

from copy_to_llm.config.schema import ErrorReportConfig
from copy_to_llm.core.formatter import format_sections, url_line
from copy_to_llm.models.report import CodeLine, ErrorReport, LineStream

log = structlog.get_logger()


class ErrorReportExtractor:
    """Heuristic parser for framework error pages.

    Example:
        extractor = ErrorReportExtractor()
        report = extractor.extract(normalize_lines(page_text))
        print(report.error_type, report.source_location)
    """

    # e.g. "NameError in Projects#index",
    # "ActionView::MissingTemplate in Projects::Integrations#show"
    HEADING_PATTERN = re.compile(r"^([\w:]+(?:Error|Exception|Template))\s+in\s+(.+)$")
    SHOWING_PATTERN = re.compile(r"Showing\s+(.+?)\s+where\s+line\s+#?(\d{1,9})(?!\d)")
    TRACE_LOCATION_PATTERN = re.compile(r"\b(app/[^:\s]+):(\d{1,9}):")
    TRACE_METHOD_SUFFIX = re.compile(r":in\s+`(.+?)'$")
    # Longer digit runs are page noise, not line numbers
    LINE_NUMBER_PATTERN = re.compile(r"[0-9]{1,9}")

    SEARCHED_IN_MARKER = "Searched in:"
    SOURCE_MARKER = "Extracted source"
    ROOT_MARKER = "Rails.root:"
    TRACE_MARKER = "Application Trace"
    ALTERNATE_TRACE_MARKERS = ("Framework Trace", "Full Trace")
    APP_PATH_MARKER = "app/"
    BULLET = "* "

    def __init__(self, config: ErrorReportConfig | None = None) -> None:
        """Initialize the extractor.

        Args:
            config: Window sizes and message patterns (defaults if omitted)
        """
        self.config = config or ErrorReportConfig()

    def extract(self, lines: LineStream) -> ErrorReport:
        """Run every scan over the line stream and collect the results.

        Args:
            lines: Normalized page lines

        Returns:
            ErrorReport with whatever fields could be recovered
        """
        error_type, location = self.scan_error_heading(lines) or (None, None)
        file_path, line_number = self.scan_source_location(lines) or (None, None)

        report = ErrorReport(
            error_type=error_type,
            location=location,
            message=self.scan_message(lines, error_type),
            file_path=file_path,
            line_number=line_number,
            search_paths=self.scan_search_paths(lines, error_type),
            code_window=self.scan_code_window(lines, line_number),
            trace_entries=self.scan_trace(lines),
        )

        log.debug(
            "error_report_extracted",
            error_type=report.error_type,
            has_message=report.message is not None,
            source_location=report.source_location,
            code_lines=len(report.code_window),
            search_paths=len(report.search_paths),
            trace_entries=len(report.trace_entries),
        )
        return report

    def scan_error_heading(self, lines: LineStream) -> tuple[str, str] | None:
        """Find the ``<ErrorClass> in <location>`` heading near the top.

        Returns:
            Tuple of (error_type, location), or None
        """
        for line in lines[: self.config.heading_window]:
            match = self.HEADING_PATTERN.match(line)
            if match:
                return (match.group(1), match.group(2))
        return None

    def scan_message(self, lines: LineStream, error_type: str | None = None) -> str | None:
        """Find the error message line.

        Missing-template errors are matched against the template message
        prefixes only. Other messages are cut at the start of an inspected
        object dump, which can run to thousands of characters.

        Args:
            lines: Normalized page lines
            error_type: Error class found by the heading scan, if any

        Returns:
            The message text, or None
        """
        missing_template = error_type is not None and "MissingTemplate" in error_type

        for line in lines[: self.config.message_window]:
            if missing_template:
                if line.startswith(tuple(self.config.template_message_prefixes)):
                    return line
                continue

            if line.startswith(tuple(self.config.message_prefixes)) or any(
                substring in line for substring in self.config.message_substrings
            ):
                return self._truncate_message(line)

        return None

    def scan_source_location(self, lines: LineStream) -> tuple[str, int] | None:
        """Find the file and line number the error was raised at.

        The ``Showing <path> where line #N`` banner is preferred. Pages
        without one (controller and model errors) fall back to the first
        application frame of the stack trace.

        Returns:
            Tuple of (file_path, line_number), or None
        """
        showing = self._find_index(lines, lambda line: line.startswith("Showing"))
        if showing is not None:
            match = self.SHOWING_PATTERN.search(lines[showing])
            if match:
                return (match.group(1), int(match.group(2)))

        for line in self._trace_section(lines):
            match = self.TRACE_LOCATION_PATTERN.search(line)
            if match:
                return (match.group(1), int(match.group(2)))

        return None

    def scan_search_paths(
        self,
        lines: LineStream,
        error_type: str | None = None,
    ) -> tuple[str, ...]:
        """Collect the bulleted ``Searched in:`` paths of a missing-template error.

        Args:
            lines: Normalized page lines
            error_type: Error class found by the heading scan

        Returns:
            Paths with the bullet stripped; empty for other error types
        """
        if error_type is None or "MissingTemplate" not in error_type:
            return ()

        start = self._find_index(lines, lambda line: line == self.SEARCHED_IN_MARKER)
        if start is None:
            return ()

        section_markers = (self.SOURCE_MARKER, self.ROOT_MARKER, self.TRACE_MARKER)
        paths: list[str] = []
        for line in self._window(lines, start, self.config.search_path_window):
            if any(marker in line for marker in section_markers) or not line.startswith("*"):
                break
            if line.startswith(self.BULLET):
                paths.append(line[len(self.BULLET) :].strip())

        return tuple(paths)

    def scan_code_window(
        self,
        lines: LineStream,
        error_line: int | None = None,
    ) -> tuple[CodeLine, ...]:
        """Pair numbered lines of the extracted source block with their code.

        A line of one to nine digits is a source line number; the next
        line, if it is not another number, is the code. The first pair whose
        number equals ``error_line`` is marked as the error line.

        Args:
            lines: Normalized page lines
            error_line: Line number found by the location scan

        Returns:
            Code lines in page order
        """
        start = self._find_index(lines, lambda line: self.SOURCE_MARKER in line)
        if start is None:
            return ()

        end = min(len(lines), start + 1 + self.config.source_window)
        code_lines: list[CodeLine] = []
        highlighted = False

        i = start + 1
        while i < end:
            line = lines[i]
            if self.ROOT_MARKER in line or self.TRACE_MARKER in line:
                break

            # The code text may sit just past the window edge
            if self._is_line_number(line) and i + 1 < len(lines):
                code = lines[i + 1]
                if not self._is_line_number(code) and self.ROOT_MARKER not in code:
                    number = int(line)
                    is_error_line = not highlighted and number == error_line
                    highlighted = highlighted or is_error_line
                    code_lines.append(CodeLine(number, code, is_error_line))
                    i += 1

            i += 1

        return tuple(code_lines)

    def scan_trace(self, lines: LineStream) -> tuple[str, ...]:
        """Collect application frames from the start of the trace section.

        Returns:
            Cleaned frames that point into the application tree
        """
        entries: list[str] = []
        for line in self._trace_section(lines):
            cleaned = self.TRACE_METHOD_SUFFIX.sub(r":in `\1`", line.lstrip())
            if self.APP_PATH_MARKER in cleaned:
                entries.append(cleaned)
        return tuple(entries)

    def _trace_section(self, lines: LineStream) -> list[str]:
        """Lines in the trace window, minus headings of the other trace tabs."""
        start = self._find_index(lines, lambda line: line.startswith(self.TRACE_MARKER))
        if start is None:
            return []
        return [
            line
            for line in self._window(lines, start, self.config.trace_window)
            if not any(marker in line for marker in self.ALTERNATE_TRACE_MARKERS)
        ]

    def _truncate_message(self, message: str) -> str:
        marker = self.config.message_truncation_marker
        if marker and marker in message:
            truncated = message.split(marker, 1)[0].rstrip()
            if truncated:
                return truncated
        return message

    def _is_line_number(self, line: str) -> bool:
        return self.LINE_NUMBER_PATTERN.fullmatch(line) is not None

    @staticmethod
    def _window(lines: LineStream, start: int, size: int) -> LineStream:
        """The ``size`` lines following index ``start``."""
        return lines[start + 1 : start + 1 + size]

    @staticmethod
    def _find_index(lines: LineStream, predicate: Callable[[str], bool]) -> int | None:
        for index, line in enumerate(lines):
            if predicate(line):
                return index
        return None


def render_error_report(
    report: ErrorReport,
    url: str,
    lines: LineStream = (),
    raw_fallback_lines: int = 10,
) -> str:
    """Render a report as labeled plain-text sections.

    Sections appear in a fixed order and are dropped when their data is
    missing. The URL line always comes last. When nothing at all was
    recovered, the first few page lines are included instead so the output
    still says something about the page.

    Args:
        report: Extracted report
        url: Address of the error page
        lines: Normalized page lines, used only for the empty-report fallback
        raw_fallback_lines: Number of page lines shown in that fallback

    Returns:
        Newline-joined report text
    """
    heading: list[str] = []
    if report.error_type:
        heading.append(f"Rails Error: {report.error_type}")
    if report.location:
        heading.append(f"Location: {report.location}")

    details: list[str] = []
    if report.source_location:
        details.append(f"File: {report.source_location}")
    if report.message:
        details.append(f"Message: {report.message}")

    code_context: list[str] = []
    if report.code_window:
        code_context = ["Code Context:", *(line.render() for line in report.code_window)]

    search_paths: list[str] = []
    if report.is_missing_template and report.search_paths:
        search_paths = ["Template Search Paths:", *(f"  {path}" for path in report.search_paths)]

    trace: list[str] = []
    if report.trace_entries:
        trace = ["Stack Trace:", *(f"- {entry}" for entry in report.trace_entries)]

    raw_content: list[str] = []
    if report.is_empty and lines and raw_fallback_lines:
        raw_content = ["Page Content:", *lines[:raw_fallback_lines]]

    return format_sections(
        [heading, details, code_context, search_paths, trace, raw_content, [url_line(url)]]
    )
