"""Rendering helpers for highlighted search results."""

from __future__ import annotations

from rich.text import Text

from rlocate.models import HighlightedLine

HIGHLIGHT_STYLE = "bold red"

ANSI_RED = "\x1b[31m"
ANSI_RESET = "\x1b[0m"


def highlight_text(line: HighlightedLine, *, style: str = HIGHLIGHT_STYLE) -> Text:
    """Build a rich ``Text`` with the matched segment styled."""
    text = Text(line.text)
    if line.match:
        text.stylize(style, line.start, line.end)
    return text


def highlight_ansi(line: HighlightedLine) -> str:
    """Wrap the matched segment in raw ANSI red escapes."""
    return f"{line.prefix}{ANSI_RED}{line.match}{ANSI_RESET}{line.suffix}"
