"""Loading of manuscripts and word-list data files.

The manuscript is required: failing to read it raises DocumentLoadError.
Data files (dictionary, good words, he/be tables) are optional; a
missing file logs a warning and yields empty data so the run continues
in a degraded mode.
"""

from __future__ import annotations

import logging
from pathlib import Path

from proofcheck.exceptions import DataFileError, DocumentLoadError
from proofcheck.heuristics.jeebies import HeBeTables
from proofcheck.models import TextBuffer, split_lines
from proofcheck.spelling.dictionary import Dictionary

logger = logging.getLogger(__name__)

BOM = "\ufeff"

HE_SECTION = ("*** BEGIN HE ***", "*** END HE ***")
BE_SECTION = ("*** BEGIN BE ***", "*** END BE ***")


def _strip_bom(lines: list[str]) -> list[str]:
    if lines and lines[0].startswith(BOM):
        lines[0] = lines[0][len(BOM) :]
    return lines


def read_text(path: str | Path) -> list[str]:
    """Read a UTF-8 manuscript into a list of lines.

    Args:
        path: Path to the text file.

    Returns:
        Lines without line endings, BOM removed.

    Raises:
        DocumentLoadError: If the file is missing, unreadable, or not UTF-8.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DocumentLoadError(f"Document not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Failed to read document {path}: {e}") from e

    lines = _strip_bom(split_lines(text))
    logger.info("Read %s: %d lines", path, len(lines))
    return lines


def read_buffer(path: str | Path) -> TextBuffer:
    """Read a manuscript into a TextBuffer (lines plus paragraphs)."""
    return TextBuffer(lines=read_text(path), source=str(path))


def read_word_list(path: str | Path) -> list[str]:
    """Read one word per line; a missing file gives an empty list.

    Raises:
        DataFileError: If the file exists but cannot be read as UTF-8.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Word list not found: %s", path)
        return []
    except (OSError, UnicodeDecodeError) as e:
        raise DataFileError(f"Failed to read word list {path}: {e}") from e
    words = [line.strip() for line in _strip_bom(split_lines(text))]
    return [w for w in words if w]


def read_good_words(path: str | Path) -> list[str]:
    """Read the user's good-word list.

    Straight apostrophes become curly. Lowercase entries also contribute
    their capitalized and uppercase forms; capitalized entries their
    uppercase form.

    Example:
        For a file containing ``don't`` and ``Eliza``, returns
        ``["don’t", "Eliza", "Don’t", "DON’T", "ELIZA"]``.
    """
    words = [w.replace("'", "’") for w in read_word_list(path)]
    extra = []
    for word in words:
        if word == word.lower():
            extra.append(word[:1].upper() + word[1:])
            extra.append(word.upper())
        elif word[:1].isupper():
            extra.append(word.upper())
    merged = list(dict.fromkeys(words + extra))
    logger.info("Good words: %d entries (%d with case variants)", len(words), len(merged))
    return merged


def load_dictionary(path: str | Path, good_words: list[str] | None = None) -> Dictionary:
    """Load a curated dictionary and merge in the good words.

    A missing dictionary file is not fatal: the result holds only the
    good words.
    """
    words = read_word_list(path)
    if not words:
        logger.warning("Dictionary %s is missing or empty; spellcheck will be degraded", path)
    dictionary = Dictionary.from_words(words, good_words)
    logger.info("Dictionary: %d words", len(dictionary))
    return dictionary


def parse_hebe_lines(lines: list[str]) -> HeBeTables:
    """Parse he/be table lines of the form ``w1|he|w2:count``.

    Only lines between the BEGIN/END markers are read. Lines without a
    valid count are skipped.
    """
    tables = HeBeTables()
    current: dict[str, int] | None = None
    for number, line in enumerate(_strip_bom(list(lines)), start=1):
        line = line.strip()
        if line in (HE_SECTION[0], BE_SECTION[0]):
            current = tables.he if line == HE_SECTION[0] else tables.be
            continue
        if line in (HE_SECTION[1], BE_SECTION[1]):
            current = None
            continue
        if current is None or not line:
            continue

        phrase, sep, count = line.rpartition(":")
        if not sep or not phrase:
            logger.debug("Skipping malformed he/be line %d: %r", number, line)
            continue
        try:
            current[phrase.replace("|", " ")] = int(count)
        except ValueError:
            logger.debug("Skipping he/be line %d with bad count: %r", number, line)
    return tables


def read_hebe_tables(path: str | Path) -> HeBeTables:
    """Read the he/be frequency data file; a missing file gives empty tables."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("He/be data file not found: %s", path)
        return HeBeTables()
    except (OSError, UnicodeDecodeError) as e:
        raise DataFileError(f"Failed to read he/be data {path}: {e}") from e
    tables = parse_hebe_lines(split_lines(text))
    logger.info("He/be tables: %d he phrases, %d be phrases", len(tables.he), len(tables.be))
    return tables
