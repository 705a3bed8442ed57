"""Assembly of extracted sections into clipboard text."""

from collections.abc import Iterable, Sequence


def format_sections(sections: Iterable[Sequence[str]]) -> str:
    """Join sections into newline-delimited text, one blank line between them.

    Empty sections are skipped entirely, so callers can pass every candidate
    section and let missing data drop out.
    """
    return "\n\n".join("\n".join(section) for section in sections if section)


def url_line(url: str) -> str:
    """The closing ``URL:`` line every output carries."""
    return f"URL: {url}"
