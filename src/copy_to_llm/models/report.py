"""Data models for framework error reports."""

from dataclasses import dataclass

# Trimmed, non-blank page lines in document order.
LineStream = tuple[str, ...]


@dataclass(frozen=True)
class CodeLine:
    """A single numbered line from the page's extracted source block."""

    line_number: int
    code: str
    is_error_line: bool = False

    def render(self) -> str:
        """Render as ``N: > code`` for the error line, ``N:   code`` otherwise."""
        marker = ">" if self.is_error_line else " "
        return f"{self.line_number}: {marker} {self.code}"


@dataclass(frozen=True)
class ErrorReport:
    """Fields recovered from a framework error page.

    Every field is optional. A missing value means the corresponding scan
    found nothing, not that extraction failed.
    """

    error_type: str | None = None  # e.g., "ActionView::MissingTemplate"
    location: str | None = None  # e.g., "Projects#index"
    message: str | None = None
    file_path: str | None = None  # e.g., "app/views/projects/index.html.erb"
    line_number: int | None = None
    search_paths: tuple[str, ...] = ()
    code_window: tuple[CodeLine, ...] = ()
    trace_entries: tuple[str, ...] = ()

    @property
    def is_missing_template(self) -> bool:
        """Whether the error type denotes a missing view template."""
        return self.error_type is not None and "MissingTemplate" in self.error_type

    @property
    def source_location(self) -> str | None:
        """``path:line`` when both parts were found."""
        if self.file_path and self.line_number is not None:
            return f"{self.file_path}:{self.line_number}"
        return None

    @property
    def highlighted_line(self) -> CodeLine | None:
        """The code window entry marked as the error line, if any."""
        for code_line in self.code_window:
            if code_line.is_error_line:
                return code_line
        return None

    @property
    def is_empty(self) -> bool:
        """True when no scan recovered anything."""
        return not any(
            (
                self.error_type,
                self.location,
                self.message,
                self.source_location,
                self.search_paths,
                self.code_window,
                self.trace_entries,
            )
        )
