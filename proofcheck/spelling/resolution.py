"""
Suspect-word resolution.

Every distinct token starts unresolved. Approval rules run in a fixed
order; each rule is applied to all still-unresolved words before the
next one starts, and an approved word is never tested again. Whatever
is left at the end is the suspect list.

The order matters for the per-rule counts in the report, so it must not
change between runs.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Callable
from dataclasses import dataclass, field

import regex

from proofcheck.reports import section_header, summary_table, word_context_lines
from proofcheck.spelling.dictionary import Dictionary, normalize_apostrophes
from proofcheck.spelling.tokenizer import WordIndex

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_FREQUENCY_AMNESTY = 4

CONTRACTION_SUFFIXES = ("’ll", "’ve", "’d", "n’t", "’s")

ORDINAL_PATTERN = regex.compile(r"^[0-9]+(?:st|nd|rd|th)$", regex.IGNORECASE)

NO_SUSPECTS_LINE = "no spellcheck suspect words"


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class ResolutionRule:
    """One approval rule: a label for the report and a predicate."""

    name: str
    label: str
    accepts: Callable[[str, int], bool]


@dataclass
class SuspectWord:
    """A word no rule could approve."""

    word: str
    count: int
    lines: list[int]  # 1-based source lines, first occurrence first


@dataclass
class Resolution:
    """
    Outcome of suspect resolution.

    ``approved`` and ``unresolved`` partition the document's distinct
    tokens. ``suspects`` is ``unresolved`` de-duplicated ignoring case
    and sorted for reporting.
    """

    approved: dict[str, int] = field(default_factory=dict)
    unresolved: dict[str, int] = field(default_factory=dict)
    rule_counts: dict[str, int] = field(default_factory=dict)
    rule_labels: dict[str, str] = field(default_factory=dict)
    suspects: list[SuspectWord] = field(default_factory=list)

    @property
    def suspect_words(self) -> list[str]:
        return [s.word for s in self.suspects]

    @property
    def approved_words(self) -> list[str]:
        """Approved words in a stable, case-insensitive order."""
        return sorted(self.approved, key=lambda w: (w.lower(), w))

    def report_lines(
        self,
        lines: list[str],
        context_lines: int = 2,
        verbose: bool = False,
    ) -> list[str]:
        """
        Build the spellcheck report.

        Args:
            lines: The working buffer, for showing suspects in context.
            context_lines: Context lines per suspect unless verbose.
            verbose: Show every occurrence.

        Returns:
            Report lines: header, per-rule table, suspects, totals.
        """
        rs = section_header("SPELLCHECK SUSPECT WORDS")
        total = len(self.approved) + len(self.unresolved)
        rs.append(f"  unique words in text: {total} words")
        rows: list[list[object]] = [
            [self.rule_labels.get(name, name), count] for name, count in self.rule_counts.items()
        ]
        rows.append(["unresolved", len(self.unresolved)])
        rs.extend(summary_table(rows, headers=["Approved by", "Words"]))
        rs.append("")

        if not self.suspects:
            rs.append(NO_SUSPECTS_LINE)
            return rs

        limit = None if verbose else context_lines
        for suspect in self.suspects:
            rs.append(suspect.word)
            rs.extend(word_context_lines(suspect.word, suspect.lines, lines, limit))
            rs.append("")

        rs.append(f"  good words in text: {len(self.approved)} words")
        rs.append(f"  suspect words in text: {len(self.suspects)} words")
        return rs


# =============================================================================
# HELPERS
# =============================================================================


def normalize_fractions(word: str) -> str:
    """Replace vulgar-fraction code points (½, ¾, ⅛...) with a digit."""
    return "".join(
        "0" if unicodedata.name(ch, "").startswith("VULGAR FRACTION") else ch for ch in word
    )


def is_all_caps(word: str) -> bool:
    """True for words like "BRITISH" (at least two cased letters, all upper)."""
    return word.isupper() and sum(1 for ch in word if ch.isalpha()) > 1


# =============================================================================
# SUSPECT RESOLVER
# =============================================================================


class SuspectResolver:
    """
    Reduces the document's distinct tokens to a minimal suspect list.

    Rules, in order:
    1. exact dictionary membership
    2. possessive whose stem is a dictionary word
    3. simple plural whose stem is a dictionary word
    4. contraction whose stem (or lowercase stem) is a dictionary word
    5. lowercase form in the dictionary
    6. all-caps word whose title-case form is in the dictionary
    7. hyphenated compound whose parts all pass lookup
    8. pure numerals (vulgar fractions count as digits)
    9. numeral with an ordinal suffix
    10. frequency amnesty

    Attributes:
        dictionary: Known-good words, already merged with good words.
        frequency_amnesty: Count at which an unresolved word is accepted.

    Example:
        >>> from proofcheck.spelling import Dictionary, build_word_index
        >>> resolver = SuspectResolver(Dictionary.from_words(["cloud"]))
        >>> resolution = resolver.resolve(build_word_index(["clond cloud"]))
        >>> resolution.suspect_words
        ['clond']
    """

    def __init__(
        self,
        dictionary: Dictionary,
        frequency_amnesty: int = DEFAULT_FREQUENCY_AMNESTY,
    ):
        self.dictionary = dictionary
        self.frequency_amnesty = frequency_amnesty
        self.rules = [
            ResolutionRule("dictionary", "dictionary", self._in_dictionary),
            ResolutionRule("possessive", "depossessive", self._is_possessive),
            ResolutionRule("plural", "plural stem", self._is_plural),
            ResolutionRule("contraction", "contraction stem", self._is_contraction),
            ResolutionRule("lowercase", "lowercase form", self._lowercase_known),
            ResolutionRule("all_caps", "title-case form", self._title_case_known),
            ResolutionRule("hyphenated", "dehyphenation", self._is_hyphenated_compound),
            ResolutionRule("numeral", "pure numerals", self._is_numeral),
            ResolutionRule("ordinal", "ordinal numerals", self._is_ordinal),
            ResolutionRule("frequency", "frequency", self._is_frequent),
        ]

    # -- rules ---------------------------------------------------------------

    def _in_dictionary(self, word: str, count: int) -> bool:
        return word in self.dictionary

    def _is_possessive(self, word: str, count: int) -> bool:
        w = normalize_apostrophes(word)
        return len(w) > 2 and w.endswith("’s") and w[:-2] in self.dictionary

    def _is_plural(self, word: str, count: int) -> bool:
        return len(word) > 1 and word.endswith("s") and word[:-1] in self.dictionary

    def _is_contraction(self, word: str, count: int) -> bool:
        w = normalize_apostrophes(word)
        for suffix in CONTRACTION_SUFFIXES:
            if len(w) > len(suffix) and w.endswith(suffix):
                stem = w[: -len(suffix)]
                if self.dictionary.lookup_any_case(stem):
                    return True
        return False

    def _lowercase_known(self, word: str, count: int) -> bool:
        return word.lower() in self.dictionary

    def _title_case_known(self, word: str, count: int) -> bool:
        return is_all_caps(word) and word.capitalize() in self.dictionary

    def _is_hyphenated_compound(self, word: str, count: int) -> bool:
        parts = word.split("-")
        if len(parts) < 2:
            return False
        return all(part and self.dictionary.lookup_any_case(part) for part in parts)

    def _is_numeral(self, word: str, count: int) -> bool:
        return normalize_fractions(word).isdecimal()

    def _is_ordinal(self, word: str, count: int) -> bool:
        return bool(ORDINAL_PATTERN.match(word))

    def _is_frequent(self, word: str, count: int) -> bool:
        return count >= self.frequency_amnesty

    # -- pipeline ------------------------------------------------------------

    def resolve(self, index: WordIndex) -> Resolution:
        """
        Partition the document's tokens into approved and suspect words.

        Args:
            index: Frequency model and line references for the document.

        Returns:
            Resolution with approved words, suspects and per-rule counts.
        """
        unresolved = dict(index.frequencies)
        resolution = Resolution()

        for rule in self.rules:
            accepted = [word for word, count in unresolved.items() if rule.accepts(word, count)]
            # Move only after the full pass so no rule sees a partial state
            for word in accepted:
                resolution.approved[word] = unresolved.pop(word)
            resolution.rule_counts[rule.name] = len(accepted)
            resolution.rule_labels[rule.name] = rule.label
            logger.debug("Approved by %s: %d words", rule.name, len(accepted))

        resolution.unresolved = unresolved
        resolution.suspects = self._collect_suspects(unresolved, index)
        logger.info(
            "Spellcheck: %d approved, %d suspect words",
            len(resolution.approved),
            len(resolution.suspects),
        )
        return resolution

    def _collect_suspects(self, unresolved: dict[str, int], index: WordIndex) -> list[SuspectWord]:
        """De-duplicate ignoring case (first seen wins) and sort."""
        seen: dict[str, SuspectWord] = {}
        for word, count in unresolved.items():
            key = word.lower()
            if key in seen:
                continue
            seen[key] = SuspectWord(word=word, count=count, lines=index.lines_for(word))
        return sorted(seen.values(), key=lambda s: (s.word.lower(), s.word))
