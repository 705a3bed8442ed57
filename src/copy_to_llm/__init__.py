"""Copy page content and framework error reports for AI assistants."""

from copy_to_llm._version import __version__
from copy_to_llm.config import ExtractionConfig, load_config
from copy_to_llm.core import ErrorReportExtractor, extract, is_error_page, normalize_lines
from copy_to_llm.models import CodeLine, ErrorReport, PageSnapshot

__all__ = [
    "CodeLine",
    "ErrorReport",
    "ErrorReportExtractor",
    "ExtractionConfig",
    "PageSnapshot",
    "__version__",
    "extract",
    "is_error_page",
    "load_config",
    "normalize_lines",
]
