"""HTML helpers that approximate what a browser exposes as page text.

The extractors work on plain text. When a caller only has markup, these
helpers recover the document title and a rendered-text view of an element
(line breaks around block elements, nothing from scripts or styles), which is
close enough to ``innerText`` for the line-oriented scans.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

# Elements whose text is never rendered
HIDDEN_TAGS = frozenset(
    {"script", "style", "noscript", "template", "head", "title", "meta", "link"}
)

# Elements that start and end a line when rendered
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "dd", "details", "dialog", "div",
        "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2",
        "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre",
        "section", "summary", "table", "tbody", "tfoot", "thead", "tr", "ul",
    }
)  # fmt: skip

# Paragraphs are separated by a blank line, other blocks by a single break
PARAGRAPH_BREAK = 2
BLOCK_BREAK = 1

_INLINE_WHITESPACE = re.compile(r"[ \t\r\f\v]+")


def parse_html(html: str) -> BeautifulSoup:
    """Parse markup with the standard-library backend."""
    return BeautifulSoup(html, "html.parser")


def page_title(soup: BeautifulSoup) -> str:
    """Return the stripped ``<title>`` text, or an empty string."""
    if soup.title is None:
        return ""
    return soup.title.get_text().strip()


def inner_text(element: Tag) -> str:
    """Render an element's visible text with block-level line breaks.

    Whitespace inside ``<pre>`` is kept verbatim; elsewhere runs of spaces
    collapse to one. Breaks requested by adjacent blocks do not add up: the
    largest one wins, and breaks at the very start or end are dropped.
    """
    parts: list[str | int] = []
    _collect_text(element, parts, preformatted=element.name == "pre")

    rendered: list[str] = []
    pending_break = 0
    for part in parts:
        if isinstance(part, int):
            pending_break = max(pending_break, part)
            continue
        if pending_break and rendered:
            rendered.append("\n" * pending_break)
        pending_break = 0
        rendered.append(part)

    lines = "".join(rendered).split("\n")
    return "\n".join(line.rstrip() for line in lines).strip()


def _collect_text(element: Tag, parts: list[str | int], preformatted: bool) -> None:
    for child in element.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            text = str(child)
            if not preformatted:
                text = _INLINE_WHITESPACE.sub(" ", text.replace("\n", " "))
                if _at_line_start(parts):
                    text = text.lstrip()
            if text:
                parts.append(text)
            continue
        if not isinstance(child, Tag) or child.name in HIDDEN_TAGS:
            continue
        if child.name == "br":
            parts.append("\n")
            continue

        line_break = 0
        if child.name == "p":
            line_break = PARAGRAPH_BREAK
        elif child.name in BLOCK_TAGS:
            line_break = BLOCK_BREAK

        if line_break:
            parts.append(line_break)
        _collect_text(child, parts, preformatted or child.name == "pre")
        if line_break:
            parts.append(line_break)
        elif child.name in ("td", "th"):
            parts.append("\t")


def _at_line_start(parts: list[str | int]) -> bool:
    if not parts:
        return True
    last = parts[-1]
    return isinstance(last, int) or last.endswith("\n")


def body_text(soup: BeautifulSoup) -> str:
    """Rendered text of ``<body>``, or of the whole document if it has none."""
    body = soup.body if soup.body is not None else soup
    return inner_text(body)


def select_text(soup: BeautifulSoup, selector: str) -> str | None:
    """Rendered text of the first element matching a CSS selector.

    Returns:
        The element's stripped text, or None when nothing matches
    """
    element = soup.select_one(selector)
    if element is None:
        return None
    return inner_text(element)
