"""
He/be substitution heuristic ("jeebies").

OCR engines often read "he" as "be" and vice versa. Every three-word
phrase with "be" (or "he") in the middle is looked up in a corpus
frequency table and compared with the same phrase using the other word.
When the other form is much more common, the phrase is flagged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import regex

from proofcheck.config import JeebiesConfig
from proofcheck.reports import context_segment, section_header

logger = logging.getLogger(__name__)

HEADER = "JEEBIES REPORT"
NO_FINDINGS_LINE = "no jeebies checks reported"
UNSEEN = "unseen"

_PHRASE_PATTERNS = {
    "be": regex.compile(r"[a-z’']+ be [a-z’']+"),
    "he": regex.compile(r"[a-z’']+ he [a-z’']+"),
}
_SWAP = {"be": "he", "he": "be"}


@dataclass
class HeBeTables:
    """Corpus frequencies of three-word phrases, keyed "w1 he w2" / "w1 be w2"."""

    he: dict[str, int] = field(default_factory=dict)
    be: dict[str, int] = field(default_factory=dict)

    def table(self, middle: str) -> dict[str, int]:
        return self.he if middle == "he" else self.be

    def __bool__(self) -> bool:
        return bool(self.he or self.be)


@dataclass
class JeebiesFinding:
    """
    A phrase whose he/be alternative is more likely.

    ``ratio`` is alternative/phrase frequency, or None when the phrase
    itself never occurs in the corpus.
    """

    phrase: str
    alternative: str
    ratio: float | None
    context: str
    paragraph_index: int

    @property
    def ratio_text(self) -> str:
        return UNSEEN if self.ratio is None else f"{self.ratio:.1f}"


def find_phrases(paragraph: str, middle: str) -> list[str]:
    """
    Three-word phrases with ``middle`` as the middle word.

    Each match is cut out of the (lowercased) paragraph before the next
    search, so matches never overlap.

    Example:
        >>> find_phrases("It must be taken, and will be done.", "be")
        ['must be taken', 'will be done']
    """
    pattern = _PHRASE_PATTERNS[middle]
    text = paragraph.lower()
    phrases = []
    while True:
        m = pattern.search(text)
        if m is None:
            return phrases
        phrases.append(m.group(0))
        text = text[: m.start()] + text[m.end() :]


def alternative_phrase(phrase: str) -> str:
    """Swap the middle word: "must be taken" -> "must he taken"."""
    first, middle, last = phrase.split(" ")
    return f"{first} {_SWAP[middle]} {last}"


class JeebiesChecker:
    """
    Flags likely he/be misreadings.

    Attributes:
        tables: Corpus phrase frequencies.
        threshold: Flag when alternative/phrase exceeds this ratio.

    Example:
        >>> checker = JeebiesChecker(HeBeTables(he={"must he taken": 5}))
        >>> [f.ratio_text for f in checker.check(["It must be taken."])]
        ['unseen']
    """

    def __init__(self, tables: HeBeTables, config: JeebiesConfig | None = None):
        self.tables = tables
        self.threshold = (config or JeebiesConfig()).threshold

    def check(self, paragraphs: list[str]) -> list[JeebiesFinding]:
        findings = []
        # All "be" phrases first, then all "he" phrases
        for middle in ("be", "he"):
            for n, paragraph in enumerate(paragraphs):
                for phrase in find_phrases(paragraph, middle):
                    finding = self._evaluate(phrase, middle, paragraph, n)
                    if finding is not None:
                        findings.append(finding)
        logger.info("Jeebies: %d phrases flagged", len(findings))
        return findings

    def _evaluate(
        self, phrase: str, middle: str, paragraph: str, index: int
    ) -> JeebiesFinding | None:
        alternative = alternative_phrase(phrase)
        own = self.tables.table(middle).get(phrase, 0)
        alt = self.tables.table(_SWAP[middle]).get(alternative, 0)
        if alt <= 0:
            return None
        if own == 0:
            ratio = None
        elif alt / own > self.threshold:
            ratio = alt / own
        else:
            return None
        where = paragraph.lower().find(phrase)
        return JeebiesFinding(
            phrase=phrase,
            alternative=alternative,
            ratio=ratio,
            context=context_segment(paragraph, where),
            paragraph_index=index,
        )

    @staticmethod
    def disabled_lines() -> list[str]:
        return section_header(f"{HEADER} disabled")

    @staticmethod
    def report_lines(findings: list[JeebiesFinding]) -> list[str]:
        rs = section_header(HEADER)
        if not findings:
            rs.append(NO_FINDINGS_LINE)
            return rs
        for f in findings:
            rs.append(f"{f.phrase} ({f.ratio_text})")
            rs.append(f"    {f.context}")
            rs.append("")
        return rs
