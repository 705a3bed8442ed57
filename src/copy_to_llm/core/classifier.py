"""Detection of framework-generated error pages."""

from __future__ import annotations

from copy_to_llm.config.schema import ClassifierConfig


def is_error_page(
    title: str,
    body_text: str,
    config: ClassifierConfig | None = None,
) -> bool:
    """Check whether a page is a framework error page.

    Both signals must be present: the lower-cased title contains an error
    keyword, and the body contains one of the section markers those pages
    render. A title alone is not enough, since ordinary pages often mention
    "error" in prose.

    Args:
        title: Page title as shown by the browser
        body_text: Rendered page body text
        config: Keyword and marker sets (defaults if omitted)

    Returns:
        True if both signals are present, False otherwise
    """
    config = config or ClassifierConfig()
    if not title or not body_text:
        return False

    title_lower = title.lower()
    if not any(keyword in title_lower for keyword in config.title_keywords):
        return False

    return any(marker in body_text for marker in config.body_markers)
