"""Fallback extraction of readable content from ordinary pages."""

from __future__ import annotations

import structlog

from copy_to_llm.config.schema import ContentConfig
from copy_to_llm.core.formatter import format_sections, url_line
from copy_to_llm.models.snapshot import PageSnapshot
from copy_to_llm.utils.html import parse_html, select_text

log = structlog.get_logger()


def find_main_region(snapshot: PageSnapshot, config: ContentConfig | None = None) -> str | None:
    """Text of the first content landmark that holds enough text.

    Selectors are tried in priority order; for each, only the first matching
    element is considered.

    Args:
        snapshot: Page snapshot; needs markup for any lookup to succeed
        config: Selector list and minimum length

    Returns:
        Stripped region text, or None when no landmark qualifies
    """
    config = config or ContentConfig()
    if not snapshot.html:
        return None

    soup = parse_html(snapshot.html)
    for selector in config.selectors:
        text = select_text(soup, selector)
        if text is not None and len(text) > config.min_region_length:
            log.debug("content_region_selected", selector=selector, length=len(text))
            return text
    return None


def extract_generic_content(
    snapshot: PageSnapshot,
    config: ContentConfig | None = None,
) -> str:
    """Extract page content for pages that are not framework error pages.

    Preference order: a main-content landmark, then the user's selection,
    then the whole body text cut at the configured maximum length.

    Args:
        snapshot: Page snapshot
        config: Content extraction settings

    Returns:
        Title and URL lines, a blank line, then the content
    """
    config = config or ContentConfig()

    source = "region"
    content = find_main_region(snapshot, config)

    if content is None:
        selection = snapshot.selection.strip()
        if len(selection) > config.min_selection_length:
            source = "selection"
            content = selection
        else:
            source = "body"
            content = snapshot.body_text.strip()
            if len(content) > config.max_body_length:
                source = "body_truncated"
                content = content[: config.max_body_length] + config.truncation_marker

    log.debug("generic_content_extracted", source=source, length=len(content))

    return format_sections(
        [
            [f"Page Title: {snapshot.title}", url_line(snapshot.url)],
            [content] if content else [],
        ]
    )
