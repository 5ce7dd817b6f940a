"""Shared report formatting.

This module provides:
1. section_header() - Banner lines opening each component report
2. context_segment() - A short window of text around a position
3. word_context_lines() - Numbered source lines showing a word in context
4. summary_table() - Terminal-friendly tables (tabulate)
5. render_text() - Concatenate a CheckReport into plain text
"""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import regex
from tabulate import tabulate

if TYPE_CHECKING:
    from proofcheck.models import CheckReport

BANNER_WIDTH = 80

# Code points shown on each side of a context position
CONTEXT_RADIUS = 30


def section_header(title: str) -> list[str]:
    """Return the banner lines that open a component report."""
    return [
        "",
        "*" * BANNER_WIDTH,
        f"* {title:<{BANNER_WIDTH - 4}} *",
        "*" * BANNER_WIDTH,
        "",
    ]


def context_segment(text: str, position: int, radius: int = CONTEXT_RADIUS) -> str:
    """Return about ``2 * radius`` code points of ``text`` around ``position``.

    The window is widened to whole words and runs of spaces are collapsed.
    Positions are code-point indexes; a negative position shows the end
    of the text.

    Args:
        text: Line or paragraph to cut from
        position: Centre of the window
        radius: Code points on each side of the centre

    Returns:
        The trimmed segment
    """
    width = 2 * radius
    if len(text) <= width:
        return " ".join(text.split())
    if position < 0:
        position = len(text)

    left = position - radius
    right = position + radius
    if left < 0:
        left, right = 0, width
    if right > len(text):
        left, right = len(text) - width, len(text)

    while left > 0 and text[left] != " ":
        left -= 1
    while right < len(text) and text[right] != " ":
        right += 1

    return " ".join(text[left:right].split())


def find_word(line: str, word: str) -> int:
    """Code-point index of ``word`` as a whole word in ``line``, or -1."""
    match = regex.search(r"(?<![\p{L}\p{N}])" + regex.escape(word) + r"(?![\p{L}\p{N}])", line)
    return match.start() if match else -1


def format_line_ref(number: int, text: str) -> str:
    """Format one numbered source line."""
    return f"  {number:6d}: {text}"


def word_context_lines(
    word: str,
    line_numbers: list[int],
    lines: list[str],
    limit: int | None = 2,
) -> list[str]:
    """Show ``word`` in context on the given 1-based source lines.

    Args:
        word: Token to show
        line_numbers: Lines where the token occurs
        lines: The working buffer
        limit: Maximum lines to show (None for all)

    Returns:
        Formatted context lines, plus a "more" line when truncated
    """
    out = []
    for shown, number in enumerate(line_numbers):
        if limit is not None and shown >= limit:
            out.append(f"  ...{len(line_numbers) - limit:6d} more")
            break
        line = lines[number - 1]
        out.append(format_line_ref(number, context_segment(line, find_word(line, word))))
    return out


def wrap_paragraph(text: str, width: int = 70, indent: str = "  ") -> list[str]:
    """Rewrap a paragraph for display, never splitting words."""
    return textwrap.wrap(
        text,
        width=width,
        initial_indent=indent,
        subsequent_indent=indent,
        break_long_words=False,
        break_on_hyphens=False,
    )


def summary_table(rows: list[list[object]], headers: list[str]) -> list[str]:
    """Render rows as a plain-text table, one string per line."""
    table = tabulate(rows, headers=headers, tablefmt="simple")
    return ["  " + line for line in table.splitlines()]


def render_text(report: CheckReport) -> str:
    """Concatenate every section of a report into one string."""
    return "\n".join(report.lines()) + "\n"
