"""Core extraction components.

This module exports the extraction pipeline:
- extract: Classifies a page snapshot and produces clipboard text
- ErrorReportExtractor: Reduces framework error pages to labeled reports
- extract_generic_content: Main-content fallback for ordinary pages
- is_error_page: Two-signal error page classifier
- normalize_lines: Trimmed, non-blank line stream
"""

from copy_to_llm.core.classifier import is_error_page
from copy_to_llm.core.content import extract_generic_content, find_main_region
from copy_to_llm.core.error_report import ErrorReportExtractor, render_error_report
from copy_to_llm.core.extractor import extract
from copy_to_llm.core.formatter import format_sections
from copy_to_llm.core.lines import normalize_lines

__all__ = [
    "ErrorReportExtractor",
    "extract",
    "extract_generic_content",
    "find_main_region",
    "format_sections",
    "is_error_page",
    "normalize_lines",
    "render_error_report",
]
