"""Line normalization for text-based page scans."""

from copy_to_llm.models.report import LineStream


def normalize_lines(text: str) -> LineStream:
    """Split text into trimmed, non-blank lines, preserving order.

    Args:
        text: Raw page text

    Returns:
        Immutable tuple of lines; empty for empty or whitespace-only input
    """
    if not text:
        return ()
    return tuple(stripped for line in text.split("\n") if (stripped := line.strip()))
