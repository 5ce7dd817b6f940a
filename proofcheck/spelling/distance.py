"""
Edit-distance matching of suspect words against approved words.

A suspect that is one edit away from a word used elsewhere in the
document is a likely misrecognition ("clond" beside "cloud"). The search
is the full cross product of suspects and approved words, so it is the
one stage that can fan out to a process pool. Batches are merged and
sorted before reporting; the output never depends on worker count.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Literal

from proofcheck.reports import context_segment, find_word, format_line_ref, section_header
from proofcheck.spelling.resolution import Resolution
from proofcheck.spelling.tokenizer import WordIndex

logger = logging.getLogger(__name__)

HEADER = "LEVENSHTEIN (EDIT DISTANCE) CHECKS"
NO_MATCHES_LINE = "no Levenshtein edit distance queries reported"

# Words made only of these are numerals or lowercase Roman numerals
_NUMERAL_CHARS = "0123456789ivxlc"

# Ligatures spelled as two letters, the second an "e" lookalike, so that
# "cæsar" and "caesar" are one edit apart
_LIGATURES = {"æ": "a\U0001d68e", "œ": "o\U0001d68e"}


def levenshtein(s1: str, s2: str) -> int:
    """
    Unit-cost Levenshtein distance over code points.

    Uses a single DP row sized to the shorter string.

    Example:
        >>> levenshtein("clond", "cloud")
        1
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if not s2:
        return len(s1)

    row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        diagonal, row[0] = row[0], i
        for j, c2 in enumerate(s2, start=1):
            above = row[j]
            row[j] = min(
                above + 1,  # deletion
                row[j - 1] + 1,  # insertion
                diagonal + (c1 != c2),  # substitution
            )
            diagonal = above
    return row[-1]


def expand_ligatures(word: str) -> str:
    """Spell out æ and œ for distance measurement."""
    for ligature, spelled in _LIGATURES.items():
        word = word.replace(ligature, spelled)
    return word


def _is_numeral_word(word: str) -> bool:
    return not word.strip(_NUMERAL_CHARS)


def is_candidate_pair(suspect: str, word: str, max_distance: int = 1) -> bool:
    """
    Whether a lowercased suspect/approved pair is worth measuring.

    Skips identical words (case-only variants), trailing-s plurals,
    hyphenation-only differences, numeral pairs, and pairs whose length
    difference alone exceeds ``max_distance``.
    """
    if suspect == word:
        return False
    if suspect == word + "s" or word == suspect + "s":
        return False
    if suspect.replace("-", "") == word.replace("-", ""):
        return False
    if _is_numeral_word(suspect) and _is_numeral_word(word):
        return False
    return abs(len(suspect) - len(word)) <= max_distance


def _match_batch(
    suspects: list[str],
    approved: list[str],
    min_length: int,
    max_distance: int,
    backend: str,
) -> list[tuple[str, str, int]]:
    """
    Find the first close approved word for each suspect in a batch.

    Module-level so it can be sent to worker processes.
    """
    if backend == "rapidfuzz":
        from rapidfuzz.distance import Levenshtein

        def distance(a: str, b: str) -> int:
            return Levenshtein.distance(a, b, score_cutoff=max_distance)

    else:
        distance = levenshtein

    approved_lower = [(word, word.lower()) for word in approved]
    found = []
    for suspect in suspects:
        suspect_lc = expand_ligatures(suspect.lower())
        if len(suspect_lc) < min_length:
            continue
        for word, word_lc in approved_lower:
            if not is_candidate_pair(suspect_lc, word_lc, max_distance):
                continue
            d = distance(suspect_lc, word_lc)
            if d <= max_distance:
                found.append((suspect, word, d))
                break
    return found


@dataclass
class EditDistanceMatch:
    """A suspect and the approved word it is probably a misreading of."""

    suspect: str
    neighbor: str
    distance: int
    suspect_count: int
    neighbor_count: int
    suspect_line: int | None
    neighbor_line: int | None


class EditDistanceMatcher:
    """
    Pairs suspects with near-identical approved words.

    Attributes:
        min_length: Suspects shorter than this (in code points) are skipped.
        max_distance: Largest distance reported.
        max_workers: Process-pool size; 1 runs in-process.
        backend: "native" (pure Python DP) or "rapidfuzz".
    """

    def __init__(
        self,
        min_length: int = 5,
        max_distance: int = 1,
        max_workers: int = 1,
        backend: Literal["native", "rapidfuzz"] = "native",
    ):
        self.min_length = min_length
        self.max_distance = max_distance
        self.max_workers = max_workers
        self.backend = backend

    def match(self, resolution: Resolution, index: WordIndex) -> list[EditDistanceMatch]:
        """
        Search every suspect against every approved word.

        Args:
            resolution: Output of the suspect resolver.
            index: Frequency model, for counts and first-occurrence lines.

        Returns:
            Matches sorted by suspect (ignoring case), at most one per suspect.
        """
        suspects = resolution.suspect_words
        approved = resolution.approved_words

        if self.max_workers > 1 and len(suspects) > 1:
            raw = self._match_parallel(suspects, approved)
        else:
            raw = _match_batch(
                suspects, approved, self.min_length, self.max_distance, self.backend
            )

        raw.sort(key=lambda m: (m[0].lower(), m[0], m[1].lower(), m[1]))
        matches = [
            EditDistanceMatch(
                suspect=suspect,
                neighbor=neighbor,
                distance=distance,
                suspect_count=index.count(suspect),
                neighbor_count=index.count(neighbor),
                suspect_line=index.first_line(suspect),
                neighbor_line=index.first_line(neighbor),
            )
            for suspect, neighbor, distance in raw
        ]
        logger.info(
            "Edit distance: %d suspects checked against %d approved words, %d matches",
            len(suspects),
            len(approved),
            len(matches),
        )
        return matches

    def _match_parallel(self, suspects: list[str], approved: list[str]) -> list[tuple[str, str, int]]:
        size = -(-len(suspects) // self.max_workers)
        batches = [suspects[i : i + size] for i in range(0, len(suspects), size)]
        logger.debug("Matching %d suspects in %d batches", len(suspects), len(batches))

        results: list[tuple[str, str, int]] = []
        with ProcessPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(
                    _match_batch,
                    batch,
                    approved,
                    self.min_length,
                    self.max_distance,
                    self.backend,
                )
                for batch in batches
            ]
            for future in futures:
                results.extend(future.result())
        return results

    @staticmethod
    def disabled_lines() -> list[str]:
        """Report lines when the stage is switched off."""
        return section_header(f"{HEADER} disabled")

    @staticmethod
    def report_lines(matches: list[EditDistanceMatch], lines: list[str]) -> list[str]:
        """
        Build the edit-distance report.

        Each match shows ``suspect(count):neighbor(count)`` followed by the
        first source line of each word.
        """
        rs = section_header(HEADER)
        if not matches:
            rs.append(NO_MATCHES_LINE)
            return rs

        for m in matches:
            rs.append(f"{m.suspect}({m.suspect_count}):{m.neighbor}({m.neighbor_count})")
            rs.append(_first_line_ref(m.neighbor, m.neighbor_line, lines))
            rs.append("          ----")
            rs.append(_first_line_ref(m.suspect, m.suspect_line, lines))
            rs.append("")
        rs.append(f"  {len(matches)} edit distance queries reported")
        return rs


def _first_line_ref(word: str, number: int | None, lines: list[str]) -> str:
    if number is None:
        return format_line_ref(0, "")
    line = lines[number - 1]
    return format_line_ref(number, context_segment(line, find_word(line, word)))
