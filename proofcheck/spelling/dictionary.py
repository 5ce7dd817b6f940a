"""
Known-good word list for suspect resolution.

The dictionary is a sorted list searched with bisection. It is built
once, merged with the user's good-word list, and never changes during
analysis. Lookups are exact (case-sensitive); callers decide which
case variants to try.

Apostrophes are normalized to the curly form on both sides, so a word
list written with straight apostrophes still matches typeset text.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spellchecker import SpellChecker

logger = logging.getLogger(__name__)


def normalize_apostrophes(word: str) -> str:
    """Replace straight apostrophes with curly ones."""
    return word.replace("'", "’")


@dataclass
class Dictionary:
    """
    Sorted, immutable set of known-good words with binary-search lookup.

    Attributes:
        words: Sorted, de-duplicated word list.

    Example:
        >>> d = Dictionary.from_words(["house", "cloud", "don't"])
        >>> "cloud" in d
        True
        >>> "don’t" in d
        True
        >>> "Cloud" in d
        False
    """

    words: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Normalize and sort the word list."""
        self.words = sorted({normalize_apostrophes(w) for w in self.words if w})

    @classmethod
    def from_words(
        cls,
        words: Iterable[str],
        good_words: Iterable[str] | None = None,
    ) -> Dictionary:
        """
        Build a dictionary, merging the good-word list before sorting.

        Args:
            words: Curated dictionary words.
            good_words: Optional user-supplied good words.

        Returns:
            A new Dictionary.
        """
        merged = list(words)
        if good_words:
            merged.extend(good_words)
        return cls(words=merged)

    @classmethod
    def from_spellchecker(
        cls,
        language: str = "en",
        good_words: Iterable[str] | None = None,
        spell: SpellChecker | None = None,
    ) -> Dictionary:
        """
        Seed a dictionary from pyspellchecker's word frequency list.

        pyspellchecker stores lowercase words only; capitalized forms are
        approved later through the lowercase rule.

        Args:
            language: pyspellchecker language code (one language per run).
            good_words: Optional user-supplied good words.
            spell: Pre-built SpellChecker instance (mainly for tests).

        Returns:
            A new Dictionary.
        """
        if spell is None:
            from spellchecker import SpellChecker

            spell = SpellChecker(language=language)
        words = list(spell.word_frequency.keys())
        logger.info("Loaded %d words from pyspellchecker (%s)", len(words), language)
        return cls.from_words(words, good_words)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        probe = normalize_apostrophes(word)
        i = bisect_left(self.words, probe)
        return i != len(self.words) and self.words[i] == probe

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(self.words)

    def lookup(self, word: str) -> bool:
        """Exact membership test."""
        return word in self

    def lookup_any_case(self, word: str) -> bool:
        """Membership of the word as written or lowercased."""
        return word in self or word.lower() in self
