"""
Quotation-mark checks.

Apostrophes are disambiguated first (ApostropheResolver), then each
paragraph runs through the quote automaton (QuoteScanner).

Example:
    >>> from proofcheck.punctuation import QuoteScanner
    >>> from proofcheck.spelling import Dictionary
    >>> result = QuoteScanner(Dictionary()).scan(["“Hello,” she said."])
    >>> result.anomalies
    []
"""

from proofcheck.punctuation.apostrophes import (
    APOSTROPHE_MARK,
    COMMON_FORMS,
    OPEN_QUOTE_MARK,
    ApostropheResolver,
    ApostropheRule,
    has_mixed_quotes,
    restore_markers,
)
from proofcheck.punctuation.quotes import (
    AnomalyKind,
    QuoteAnomaly,
    QuoteScanner,
    QuoteScanResult,
    scan_paragraph,
)

__all__ = [
    # Apostrophes
    "ApostropheResolver",
    "ApostropheRule",
    "COMMON_FORMS",
    "APOSTROPHE_MARK",
    "OPEN_QUOTE_MARK",
    "has_mixed_quotes",
    "restore_markers",
    # Quotes
    "QuoteScanner",
    "QuoteScanResult",
    "QuoteAnomaly",
    "AnomalyKind",
    "scan_paragraph",
]
