"""
Quotation-mark balance scanner.

Each paragraph is walked left to right with one stack of open quotes.
Only the four curly characters “ ” ‘ ’ take part; other quotation styles
(guillemets, low-9 quotes) pass through unseen. Apostrophes are marked
beforehand by ApostropheResolver, so a remaining ’ is treated as a
possible closing quote and never flagged on its own.

At most one anomaly is reported per paragraph, the first one found.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from proofcheck.config import QuoteScanConfig
from proofcheck.punctuation.apostrophes import (
    MIXED_QUOTES_LINE,
    ApostropheResolver,
    has_mixed_quotes,
    restore_markers,
)
from proofcheck.reports import section_header, wrap_paragraph
from proofcheck.spelling.dictionary import Dictionary

logger = logging.getLogger(__name__)

HEADER = "PUNCTUATION SCAN REPORT"
NO_ANOMALIES_LINE = "no punctuation scan queries reported"


class AnomalyKind(Enum):
    """Quote anomalies, with their report codes."""

    CONSECUTIVE_OPEN_DOUBLE = ("CODQ", "consecutive open double quote")
    CONSECUTIVE_CLOSE_DOUBLE = ("CCDQ", "consecutive close double quote")
    UNMATCHED_CLOSE_DOUBLE = ("UCDQ", "unmatched close double quote")
    CONSECUTIVE_OPEN_SINGLE = ("COSQ", "consecutive open single quote")
    UNCLOSED_PARAGRAPH = ("UCPA", "unclosed paragraph")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


@dataclass
class QuoteAnomaly:
    """The first quote anomaly found in one paragraph."""

    kind: AnomalyKind
    paragraph_index: int
    text: str  # paragraph with markers restored


@dataclass
class QuoteScanResult:
    """Scanner output: anomalies, or the reason the scan was skipped."""

    anomalies: list[QuoteAnomaly] = field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    def report_lines(self, wrap_width: int = 70) -> list[str]:
        rs = section_header(HEADER)
        if self.skipped_reason:
            rs.append(f"  {self.skipped_reason}")
            return rs
        if not self.anomalies:
            rs.append(NO_ANOMALIES_LINE)
            return rs
        for anomaly in self.anomalies:
            rs.append(f"[{anomaly.kind.code}] {anomaly.kind.label}")
            rs.extend(wrap_paragraph(anomaly.text, width=wrap_width))
            rs.append("")
        return rs


def scan_paragraph(paragraph: str, next_paragraph: str | None = None) -> AnomalyKind | None:
    """
    Run the quote automaton over one (already marked) paragraph.

    Args:
        paragraph: Paragraph text with apostrophes marked.
        next_paragraph: The following paragraph, for the continued-quote
            convention; None at the end of the document.

    Returns:
        The first anomaly, or None if the paragraph balances.

    Example:
        >>> scan_paragraph("“Hello,” she said.") is None
        True
        >>> scan_paragraph("“Hello, she said.").code
        'UCPA'
    """
    stack: list[str] = []
    last_double = None
    for ch in paragraph:
        if ch == "“":
            if stack and stack[-1] == "“":
                return AnomalyKind.CONSECUTIVE_OPEN_DOUBLE
            stack.append(ch)
            last_double = ch
        elif ch == "”":
            if last_double == "”":
                return AnomalyKind.CONSECUTIVE_CLOSE_DOUBLE
            if not stack or stack[-1] != "“":
                return AnomalyKind.UNMATCHED_CLOSE_DOUBLE
            stack.pop()
            last_double = ch
        elif ch == "‘":
            if stack and stack[-1] == "‘":
                return AnomalyKind.CONSECUTIVE_OPEN_SINGLE
            stack.append(ch)
        elif ch == "’":
            if stack and stack[-1] == "‘":
                stack.pop()

    if not stack:
        return None
    # A quotation running on into the next paragraph leaves one “ open
    if stack == ["“"] and next_paragraph is not None and next_paragraph.lstrip().startswith("“"):
        return None
    return AnomalyKind.UNCLOSED_PARAGRAPH


class QuoteScanner:
    """
    Checks quote nesting paragraph by paragraph.

    Example:
        >>> scanner = QuoteScanner(Dictionary.from_words(["hello"]))
        >>> result = scanner.scan(["“Hello,” she said.", "“Goodbye."])
        >>> [a.kind.code for a in result.anomalies]
        ['UCPA']
    """

    def __init__(
        self,
        dictionary: Dictionary,
        good_words: Iterable[str] = (),
        frequencies: Mapping[str, int] | None = None,
        config: QuoteScanConfig | None = None,
    ):
        self.config = config or QuoteScanConfig()
        self.resolver = ApostropheResolver(
            dictionary,
            good_words=good_words,
            frequencies=frequencies,
            proper_name_min_frequency=self.config.proper_name_min_frequency,
        )

    def scan(self, paragraphs: list[str]) -> QuoteScanResult:
        """Mark apostrophes, then scan every paragraph."""
        if has_mixed_quotes(paragraphs):
            logger.warning("Mixed straight and curly quotes; quote scan skipped")
            return QuoteScanResult(skipped_reason=MIXED_QUOTES_LINE)

        marked = self.resolver.resolve(paragraphs)
        result = QuoteScanResult()
        for n, paragraph in enumerate(marked):
            following = marked[n + 1] if n + 1 < len(marked) else None
            kind = scan_paragraph(paragraph, following)
            if kind is not None:
                result.anomalies.append(
                    QuoteAnomaly(kind=kind, paragraph_index=n, text=restore_markers(paragraph))
                )

        logger.info("Quote scan: %d paragraphs, %d queries", len(marked), len(result.anomalies))
        return result

    @staticmethod
    def disabled_lines() -> list[str]:
        """Report lines when the stage is switched off."""
        return section_header(f"{HEADER} disabled")
