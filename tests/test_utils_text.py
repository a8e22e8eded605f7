"""Tests for result rendering helpers."""

from __future__ import annotations

from rlocate.models import HighlightedLine, PathEntry
from rlocate.utils.text import ANSI_RED, ANSI_RESET, highlight_ansi, highlight_text


def _line() -> HighlightedLine:
    return HighlightedLine(
        entry=PathEntry.from_path("/home/foo/bar.txt"),
        prefix="/home/",
        match="foo",
        suffix="/bar.txt",
    )


class TestHighlightText:
    """Test rich Text rendering."""

    def test_plain_text_preserved(self) -> None:
        assert highlight_text(_line()).plain == "/home/foo/bar.txt"

    def test_match_span_styled(self) -> None:
        text = highlight_text(_line(), style="red")

        assert len(text.spans) == 1
        span = text.spans[0]
        assert (span.start, span.end, span.style) == (6, 9, "red")

    def test_empty_match_has_no_span(self) -> None:
        line = HighlightedLine(entry=PathEntry.from_path("/a"), prefix="", match="", suffix="/a")

        assert highlight_text(line).spans == []

    def test_markup_not_interpreted(self) -> None:
        entry = PathEntry.from_path("/tmp/[bold]x")
        line = HighlightedLine(entry=entry, prefix="/tmp/", match="[bold]x")

        assert highlight_text(line).plain == "/tmp/[bold]x"


class TestHighlightAnsi:
    """Test raw ANSI rendering."""

    def test_escape_codes(self) -> None:
        assert highlight_ansi(_line()) == f"/home/{ANSI_RED}foo{ANSI_RESET}/bar.txt"
        assert ANSI_RED == "\x1b[31m"
        assert ANSI_RESET == "\x1b[0m"
