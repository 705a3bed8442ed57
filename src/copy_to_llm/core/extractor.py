"""Entry point that turns a page snapshot into clipboard text.

Pipeline: classify the page, then either reduce a framework error page to a
labeled report or fall back to generic content extraction. Nothing is
cached between calls, so repeated calls on the same snapshot return the same
text.
"""

from __future__ import annotations

import structlog

from copy_to_llm.config.schema import ExtractionConfig
from copy_to_llm.core.classifier import is_error_page
from copy_to_llm.core.content import extract_generic_content
from copy_to_llm.core.error_report import ErrorReportExtractor, render_error_report
from copy_to_llm.core.lines import normalize_lines
from copy_to_llm.models.snapshot import PageSnapshot
from copy_to_llm.utils.logging import LogEventNames

log = structlog.get_logger()


def extract(snapshot: PageSnapshot, config: ExtractionConfig | None = None) -> str:
    """Extract the text to copy for a page.

    Args:
        snapshot: Page state at the moment of the copy action
        config: Extraction settings (defaults if omitted)

    Returns:
        Newline-joined plain text ending with or containing the page URL
    """
    config = config or ExtractionConfig()

    if not is_error_page(snapshot.title, snapshot.body_text, config.classifier):
        log.debug(LogEventNames.GENERIC_PAGE_DETECTED, title=snapshot.title)
        return extract_generic_content(snapshot, config.content)

    log.debug(LogEventNames.ERROR_PAGE_DETECTED, title=snapshot.title)
    lines = normalize_lines(snapshot.body_text)
    report = ErrorReportExtractor(config.error_report).extract(lines)

    return render_error_report(
        report,
        snapshot.url,
        lines,
        raw_fallback_lines=config.error_report.raw_fallback_lines,
    )
