"""Export TDEE results to terminal, JSON and Markdown."""

from __future__ import annotations

from preppy.export.formatters import (
    JSONFormatter,
    MarkdownFormatter,
    TableFormatter,
    format_result,
)

__all__ = ["JSONFormatter", "MarkdownFormatter", "TableFormatter", "format_result"]
