"""
Manuscript check orchestrator.

This module provides `check()` and `check_file()`, which run every
component over one manuscript in a fixed order:
- SuspectResolver (spellcheck suspects)
- EditDistanceMatcher (likely misrecognitions among the suspects)
- QuoteScanner (quotation-mark balance)
- JeebiesChecker (he/be substitutions)

Each component returns its own report lines. A failure inside one
component is contained to its section; the others still run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from proofcheck.config import CheckConfig
from proofcheck.exceptions import DataFileError
from proofcheck.heuristics.jeebies import HeBeTables, JeebiesChecker
from proofcheck.models import CheckReport, SectionReport, TextBuffer
from proofcheck.punctuation.quotes import QuoteScanner
from proofcheck.readers.text_reader import (
    load_dictionary,
    read_buffer,
    read_good_words,
    read_hebe_tables,
)
from proofcheck.reports import section_header
from proofcheck.spelling.dictionary import Dictionary
from proofcheck.spelling.distance import EditDistanceMatcher
from proofcheck.spelling.resolution import Resolution, SuspectResolver
from proofcheck.spelling.tokenizer import WordIndex, build_word_index

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


# ═══════════════════════════════════════════════════════════════════════════════
# Checker
# ═══════════════════════════════════════════════════════════════════════════════


class ProofChecker:
    """
    Runs all checks over a TextBuffer with one set of data files.

    Data files are loaded once in the constructor, so a checker can be
    reused across manuscripts. Pass ``dictionary``, ``good_words`` or
    ``hebe_tables`` to skip loading from disk; a supplied dictionary is
    expected to contain the good words already.
    """

    def __init__(
        self,
        config: CheckConfig | None = None,
        dictionary: Dictionary | None = None,
        good_words: list[str] | None = None,
        hebe_tables: HeBeTables | None = None,
    ) -> None:
        self.config = config or CheckConfig()
        self.good_words = good_words if good_words is not None else self._load_good_words()
        self.dictionary = dictionary if dictionary is not None else self._load_dictionary()
        self.hebe_tables = hebe_tables if hebe_tables is not None else self._load_hebe_tables()

    # -- data loading ----------------------------------------------------------

    def _load_good_words(self) -> list[str]:
        path = self.config.good_words_path
        if path is None:
            return []
        try:
            return read_good_words(path)
        except DataFileError as e:
            logger.warning("Ignoring good words file: %s", e)
            return []

    def _load_dictionary(self) -> Dictionary:
        path = self.config.dictionary_path
        if path is not None:
            try:
                return load_dictionary(path, self.good_words)
            except DataFileError as e:
                logger.warning("Ignoring dictionary: %s", e)
                return Dictionary.from_words([], self.good_words)

        if self.config.use_builtin_dictionary:
            return Dictionary.from_spellchecker(self.config.language, self.good_words)

        logger.warning("No dictionary configured; every word relies on the other rules")
        return Dictionary.from_words([], self.good_words)

    def _load_hebe_tables(self) -> HeBeTables:
        path = self.config.hebe_path
        if path is None:
            return HeBeTables()
        try:
            return read_hebe_tables(path)
        except DataFileError as e:
            logger.warning("Ignoring he/be data: %s", e)
            return HeBeTables()

    # -- run -------------------------------------------------------------------

    def run(self, buffer: TextBuffer) -> CheckReport:
        """
        Check one manuscript.

        Args:
            buffer: The manuscript lines and paragraphs.

        Returns:
            CheckReport with a summary and one section per component.
        """
        index = build_word_index(buffer.lines)
        report = CheckReport(source=buffer.source, summary=self._summary(buffer, index))

        resolution: Resolution | None = None

        def spellcheck() -> SectionReport:
            nonlocal resolution
            resolution = self._resolve(index)
            return SectionReport(
                name="spellcheck",
                lines=resolution.report_lines(
                    buffer.lines,
                    context_lines=self.config.spellcheck.context_lines,
                    verbose=self.config.verbose,
                ),
                findings=len(resolution.suspects),
            )

        report.sections.append(self._run_component("spellcheck", spellcheck))

        if resolution is None:
            report.sections.append(
                SectionReport(
                    name="edit_distance",
                    lines=section_header("LEVENSHTEIN (EDIT DISTANCE) CHECKS")
                    + ["  not run: spellcheck failed"],
                    failed=True,
                )
            )
        else:
            resolved = resolution
            report.sections.append(
                self._run_component(
                    "edit_distance", lambda: self._edit_distance(resolved, index, buffer)
                )
            )

        if self.config.quotes.enabled:
            report.sections.append(
                self._run_component("quotes", lambda: self._quotes(buffer, index))
            )
        else:
            report.sections.append(
                SectionReport(name="quotes", lines=QuoteScanner.disabled_lines())
            )

        if self.config.jeebies.enabled:
            report.sections.append(self._run_component("jeebies", lambda: self._jeebies(buffer)))
        else:
            report.sections.append(
                SectionReport(name="jeebies", lines=JeebiesChecker.disabled_lines())
            )

        logger.info("Checked %s: %d findings", buffer.source, report.total_findings)
        return report

    def _run_component(self, name: str, func: Callable[[], SectionReport]) -> SectionReport:
        try:
            return func()
        except Exception as e:
            if self.config.on_component_error == "raise":
                raise
            logger.exception("Component %s failed", name)
            return SectionReport(
                name=name,
                lines=section_header(name.upper()) + [f"  {name} failed: {e}"],
                failed=True,
            )

    # -- components ------------------------------------------------------------

    def _resolve(self, index: WordIndex) -> Resolution:
        resolver = SuspectResolver(
            self.dictionary, frequency_amnesty=self.config.spellcheck.frequency_amnesty
        )
        return resolver.resolve(index)

    def _edit_distance(
        self, resolution: Resolution, index: WordIndex, buffer: TextBuffer
    ) -> SectionReport:
        cfg = self.config.spellcheck
        if not cfg.run_edit_distance:
            return SectionReport(name="edit_distance", lines=EditDistanceMatcher.disabled_lines())
        matcher = EditDistanceMatcher(
            min_length=cfg.min_suspect_length,
            max_distance=cfg.max_edit_distance,
            max_workers=cfg.max_workers,
            backend=cfg.backend,
        )
        matches = matcher.match(resolution, index)
        return SectionReport(
            name="edit_distance",
            lines=matcher.report_lines(matches, buffer.lines),
            findings=len(matches),
        )

    def _quotes(self, buffer: TextBuffer, index: WordIndex) -> SectionReport:
        scanner = QuoteScanner(
            self.dictionary,
            good_words=self.good_words,
            frequencies=index.frequencies,
            config=self.config.quotes,
        )
        result = scanner.scan(buffer.paragraphs)
        return SectionReport(
            name="quotes",
            lines=result.report_lines(wrap_width=self.config.quotes.wrap_width),
            findings=len(result.anomalies),
        )

    def _jeebies(self, buffer: TextBuffer) -> SectionReport:
        if not self.hebe_tables:
            logger.warning("No he/be data loaded; jeebies check will find nothing")
        checker = JeebiesChecker(self.hebe_tables, self.config.jeebies)
        findings = checker.check(buffer.paragraphs)
        return SectionReport(
            name="jeebies", lines=checker.report_lines(findings), findings=len(findings)
        )

    def _summary(self, buffer: TextBuffer, index: WordIndex) -> list[str]:
        rs = section_header(f"PROOFCHECK {__version__} RUN REPORT")
        rs.append(f"  file: {buffer.source}")
        rs.append(f"  lines: {len(buffer.lines)}, paragraphs: {len(buffer.paragraphs)}")
        rs.append(f"  unique words: {index.distinct_words}")
        rs.append(f"  punctuation style: {buffer.punctuation_style}")
        rs.append(f"  dictionary: {len(self.dictionary)} words")
        if self.good_words:
            rs.append(f"  good words: {len(self.good_words)} words")
        else:
            rs.append("  no good words file specified")
        return rs


# ═══════════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════════


def check(
    source: TextBuffer | list[str] | str,
    config: CheckConfig | None = None,
    dictionary: Dictionary | None = None,
    good_words: list[str] | None = None,
    hebe_tables: HeBeTables | None = None,
) -> CheckReport:
    """
    Check a manuscript held in memory.

    Args:
        source: A TextBuffer, a list of lines, or the whole text as one string
        config: Run configuration (uses defaults if None)
        dictionary: Pre-built dictionary (skips loading config.dictionary_path)
        good_words: Pre-loaded good words
        hebe_tables: Pre-loaded he/be tables

    Returns:
        CheckReport with every component's report lines

    Example:
        >>> from proofcheck.spelling import Dictionary
        >>> report = check("The clond and the cloud.", dictionary=Dictionary.from_words(
        ...     ["the", "and", "cloud"]))
        >>> report.section("spellcheck").findings
        1
    """
    if isinstance(source, str):
        buffer = TextBuffer.from_text(source)
    elif isinstance(source, TextBuffer):
        buffer = source
    else:
        buffer = TextBuffer(lines=list(source))

    checker = ProofChecker(config, dictionary, good_words, hebe_tables)
    return checker.run(buffer)


def check_file(path: str | Path, config: CheckConfig | None = None) -> CheckReport:
    """
    Check a UTF-8 manuscript on disk.

    Raises:
        DocumentLoadError: If the manuscript cannot be read
    """
    buffer = read_buffer(path)
    return ProofChecker(config).run(buffer)


def check_batch(
    paths: list[str | Path],
    config: CheckConfig | None = None,
) -> Iterator[tuple[Path, CheckReport | Exception]]:
    """
    Check several manuscripts with one set of data files.

    Yields:
        (path, result) tuples where result is a CheckReport or the
        exception raised while reading that manuscript
    """
    checker = ProofChecker(config)
    for path in paths:
        path = Path(path)
        try:
            yield (path, checker.run(read_buffer(path)))
        except Exception as e:
            logger.warning("Check failed for %s: %s", path, e)
            yield (path, e)
