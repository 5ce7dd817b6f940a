"""
proofcheck: Integrity checks for OCR'd book manuscripts.

This library reads a UTF-8 plain-text manuscript and reports likely
transcription errors for a human proofreader: unrecognized words,
near-duplicates of words used elsewhere ("clond" beside "cloud"),
unbalanced quotation marks and he/be substitutions. It only flags;
the manuscript is never changed.

Example:
    >>> import proofcheck
    >>> config = proofcheck.CheckConfig(dictionary_path="words.txt")
    >>> report = proofcheck.check_file("book.txt", config)
    >>> print(proofcheck.render_text(report))
"""

from proofcheck.check import ProofChecker, check, check_batch, check_file
from proofcheck.config import CheckConfig, JeebiesConfig, QuoteScanConfig, SpellcheckConfig
from proofcheck.exceptions import (
    ConfigurationError,
    DataFileError,
    DocumentLoadError,
    ProofCheckError,
)
from proofcheck.models import CheckReport, SectionReport, TextBuffer
from proofcheck.reports import render_text

__version__ = "0.1.0"
__all__ = [
    # Main API
    "check",
    "check_file",
    "check_batch",
    "ProofChecker",
    "render_text",
    # Configuration
    "CheckConfig",
    "SpellcheckConfig",
    "QuoteScanConfig",
    "JeebiesConfig",
    # Data
    "TextBuffer",
    "CheckReport",
    "SectionReport",
    # Exceptions
    "ProofCheckError",
    "DocumentLoadError",
    "DataFileError",
    "ConfigurationError",
]


# Public API functions are imported from proofcheck.check:
# - check(source, config) -> CheckReport
# - check_file(path, config) -> CheckReport
# - check_batch(paths, config) -> Iterator
