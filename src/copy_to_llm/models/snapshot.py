"""Data model for the page state handed to the extractors."""

from __future__ import annotations

from dataclasses import dataclass

from copy_to_llm.utils.html import body_text, page_title, parse_html


@dataclass(frozen=True)
class PageSnapshot:
    """Read-only view of a loaded page at the moment of extraction."""

    title: str
    url: str
    body_text: str
    html: str | None = None  # Markup used for structural region lookups
    selection: str = ""  # Text the user currently has selected

    @classmethod
    def from_html(cls, html: str, url: str, selection: str = "") -> PageSnapshot:
        """Build a snapshot from raw page markup.

        Args:
            html: Full page HTML
            url: Address the page was loaded from
            selection: Currently selected text, if any

        Returns:
            PageSnapshot with title and body text derived from the markup
        """
        soup = parse_html(html)
        return cls(
            title=page_title(soup),
            url=url,
            body_text=body_text(soup),
            html=html,
            selection=selection,
        )
