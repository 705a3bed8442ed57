"""Data models and transfer objects."""

from .report import CodeLine, ErrorReport, LineStream
from .snapshot import PageSnapshot

__all__ = [
    # Report models
    "CodeLine",
    "ErrorReport",
    "LineStream",
    # Input models
    "PageSnapshot",
]
