"""
Word tokenization and the document frequency model.

Tokens are maximal runs of letters and numbers. Hyphens, apostrophes
and opening single quotes between two letters are kept inside the
token ("high-flying", "fo’c’s’le", "M‘Donnell"), and an apostrophe that
starts a word is kept with it ("’tis"). Case is never altered.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

import regex

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Private-use placeholders for protected joiners (never letters or numbers)
_MARKS = {
    "-": "\ue000",
    "’": "\ue001",
    "'": "\ue002",
    "‘": "\ue003",
}
_RESTORE = {mark: char for char, mark in _MARKS.items()}

# Joiners flanked by letters. Lookarounds make chained forms such as
# "r-u-d-e" and "fo’c’s’le" resolve in a single pass.
_INTERNAL_JOINERS = [
    (regex.compile(r"(?<=\p{L})" + regex.escape(char) + r"(?=\p{L})"), mark)
    for char, mark in _MARKS.items()
]

# Elided forms: ’tis, ’em
_LEAD_APOSTROPHE = regex.compile(r"(?<!\p{L})’(?=\p{L})")

_SPLIT = regex.compile(r"[^\p{L}\p{N}" + "".join(_MARKS.values()) + r"]+")


# =============================================================================
# TOKENIZER
# =============================================================================


def tokenize_line(line: str) -> list[str]:
    """
    Split one line into case-preserving word tokens.

    Args:
        line: A single line of text.

    Returns:
        Tokens in order of appearance; empty for an empty line.

    Example:
        >>> tokenize_line("’Tis a high-flying fo’c’s’le, isn’t it?")
        ['’Tis', 'a', 'high-flying', 'fo’c’s’le', 'isn’t', 'it']
    """
    if not line:
        return []

    protected = line
    for pattern, mark in _INTERNAL_JOINERS:
        protected = pattern.sub(mark, protected)
    protected = _LEAD_APOSTROPHE.sub(_MARKS["’"], protected)

    tokens = []
    for piece in _SPLIT.split(protected):
        if not piece:
            continue
        for mark, char in _RESTORE.items():
            piece = piece.replace(mark, char)
        tokens.append(piece)
    return tokens


# =============================================================================
# FREQUENCY MODEL
# =============================================================================


@dataclass
class WordIndex:
    """
    Document-wide word statistics built in one pass over the lines.

    Attributes:
        frequencies: Token -> occurrence count across the document.
        line_words: Ordered tokens for each line (index 0 is line 1).
        word_lines: Token -> 1-based line numbers where it occurs,
            ascending and without repeats.
    """

    frequencies: Counter[str] = field(default_factory=Counter)
    line_words: list[list[str]] = field(default_factory=list)
    word_lines: dict[str, list[int]] = field(default_factory=dict)

    def count(self, word: str) -> int:
        """Occurrences of exactly this token."""
        return self.frequencies.get(word, 0)

    def lines_for(self, word: str) -> list[int]:
        """Line numbers containing exactly this token."""
        return self.word_lines.get(word, [])

    def first_line(self, word: str) -> int | None:
        """Line number of the first occurrence, if any."""
        lines = self.word_lines.get(word)
        return lines[0] if lines else None

    @property
    def distinct_words(self) -> int:
        return len(self.frequencies)


def build_word_index(lines: list[str]) -> WordIndex:
    """
    Tokenize every line and build the frequency model.

    Args:
        lines: The working buffer, one entry per source line.

    Returns:
        WordIndex with frequencies, per-line token lists and line refs.
    """
    index = WordIndex()
    for number, line in enumerate(lines, start=1):
        words = tokenize_line(line)
        index.line_words.append(words)
        index.frequencies.update(words)
        for word in dict.fromkeys(words):
            index.word_lines.setdefault(word, []).append(number)

    logger.debug(
        "Indexed %d lines: %d tokens, %d distinct",
        len(lines),
        sum(index.frequencies.values()),
        index.distinct_words,
    )
    return index
