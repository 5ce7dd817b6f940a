"""
Integration tests for the full check pipeline.

These run every component over tests/fixtures/sample.txt with the
fixture data files.
"""

import importlib.util
import logging
from dataclasses import replace

import pytest

from proofcheck import (
    CheckConfig,
    DocumentLoadError,
    JeebiesConfig,
    QuoteScanConfig,
    SpellcheckConfig,
    check,
    check_batch,
    check_file,
    render_text,
)
from proofcheck.heuristics.jeebies import JeebiesChecker
from proofcheck.spelling import Dictionary
from proofcheck.spelling.resolution import SuspectResolver

HAS_SPELLCHECKER = importlib.util.find_spec("spellchecker") is not None


@pytest.fixture(scope="module")
def sample_report(fixtures_dir, sample_config):
    return check_file(fixtures_dir / "sample.txt", sample_config)


class TestCheckFile:
    """Tests for check_file() over the sample manuscript."""

    def test_sections_in_order(self, sample_report):
        assert [s.name for s in sample_report.sections] == [
            "spellcheck",
            "edit_distance",
            "quotes",
            "jeebies",
        ]
        assert not any(s.failed for s in sample_report.sections)

    def test_findings(self, sample_report):
        assert sample_report.section("spellcheck").findings == 1
        assert sample_report.section("edit_distance").findings == 1
        assert sample_report.section("quotes").findings == 0
        assert sample_report.section("jeebies").findings == 1
        assert sample_report.total_findings == 3

    def test_summary(self, sample_report):
        summary = "\n".join(sample_report.summary)
        assert "PROOFCHECK 0.1.0 RUN REPORT" in summary
        assert "sample.txt" in summary
        assert "lines: 13, paragraphs: 6" in summary
        assert "punctuation style: American" in summary
        assert "good words: 2 words" in summary

    def test_rendered_text(self, sample_report):
        text = render_text(sample_report)
        assert text.endswith("\n")
        assert "SPELLCHECK SUSPECT WORDS" in text
        assert "LEVENSHTEIN (EDIT DISTANCE) CHECKS" in text
        assert "PUNCTUATION SCAN REPORT" in text
        assert "JEEBIES REPORT" in text
        assert "must be taken (unseen)" in text

    def test_edit_distance_pairs_clond_with_cloud(self, sample_report):
        lines = sample_report.section("edit_distance").lines
        pair = next(line for line in lines if line.startswith("clond(1):"))
        assert pair.lower().startswith("clond(1):cloud(")

    def test_continued_quotation_not_flagged(self, sample_report):
        lines = sample_report.section("quotes").lines
        assert not any(line.startswith("[UCPA]") for line in lines)

    def test_missing_document(self, tmp_path, sample_config):
        with pytest.raises(DocumentLoadError):
            check_file(tmp_path / "missing.txt", sample_config)


class TestComponentIsolation:
    """A failing component does not stop the others."""

    def test_failure_contained(self, fixtures_dir, sample_config, monkeypatch, caplog):
        def boom(self, paragraphs):
            raise RuntimeError("boom")

        monkeypatch.setattr(JeebiesChecker, "check", boom)
        with caplog.at_level(logging.ERROR):
            report = check_file(fixtures_dir / "sample.txt", sample_config)

        jeebies = report.section("jeebies")
        assert jeebies.failed
        assert "  jeebies failed: boom" in jeebies.lines
        assert report.section("spellcheck").findings == 1
        assert "jeebies" in caplog.text

    def test_spellcheck_failure_skips_edit_distance(self, fixtures_dir, sample_config, monkeypatch):
        def boom(self, index):
            raise RuntimeError("boom")

        monkeypatch.setattr(SuspectResolver, "resolve", boom)
        report = check_file(fixtures_dir / "sample.txt", sample_config)

        assert report.section("spellcheck").failed
        edit_distance = report.section("edit_distance")
        assert edit_distance.failed
        assert "  not run: spellcheck failed" in edit_distance.lines
        assert report.section("jeebies").findings == 1

    def test_raise_mode(self, fixtures_dir, sample_config, monkeypatch):
        def boom(self, paragraphs):
            raise RuntimeError("boom")

        monkeypatch.setattr(JeebiesChecker, "check", boom)
        config = replace(sample_config, on_component_error="raise")
        with pytest.raises(RuntimeError, match="boom"):
            check_file(fixtures_dir / "sample.txt", config)


class TestConfiguration:
    """Components switched on and off through CheckConfig."""

    def test_edit_distance_disabled(self, fixtures_dir, sample_config):
        config = replace(sample_config, spellcheck=SpellcheckConfig(run_edit_distance=False))
        report = check_file(fixtures_dir / "sample.txt", config)
        lines = report.section("edit_distance").lines
        assert any("LEVENSHTEIN (EDIT DISTANCE) CHECKS disabled" in line for line in lines)
        assert report.section("edit_distance").findings == 0

    def test_quotes_disabled(self, fixtures_dir, sample_config):
        config = replace(sample_config, quotes=QuoteScanConfig(enabled=False))
        report = check_file(fixtures_dir / "sample.txt", config)
        quotes = report.section("quotes")
        assert any("PUNCTUATION SCAN REPORT disabled" in line for line in quotes.lines)
        assert quotes.findings == 0
        assert report.section("jeebies").findings == 1

    def test_jeebies_disabled(self, fixtures_dir, sample_config):
        config = replace(sample_config, jeebies=JeebiesConfig(enabled=False))
        report = check_file(fixtures_dir / "sample.txt", config)
        assert [s.name for s in report.sections] == [
            "spellcheck",
            "edit_distance",
            "quotes",
            "jeebies",
        ]
        jeebies = report.section("jeebies")
        assert any("JEEBIES REPORT disabled" in line for line in jeebies.lines)
        assert report.total_findings == 2

    def test_parallel_matches_serial(self, fixtures_dir, sample_config, sample_report):
        config = replace(sample_config, spellcheck=SpellcheckConfig(max_workers=2))
        report = check_file(fixtures_dir / "sample.txt", config)
        assert report.section("edit_distance").lines == sample_report.section("edit_distance").lines

    def test_missing_data_files_degrade(self, fixtures_dir, tmp_path, caplog):
        config = CheckConfig(
            dictionary_path=tmp_path / "none.txt",
            hebe_path=tmp_path / "none.txt",
        )
        with caplog.at_level(logging.WARNING):
            report = check_file(fixtures_dir / "sample.txt", config)
        assert not any(s.failed for s in report.sections)
        assert report.section("jeebies").findings == 0
        assert "  no good words file specified" in report.summary


class TestCheckInMemory:
    """Tests for check() with in-memory sources."""

    def test_clond_and_cloud(self, small_dictionary):
        report = check("The clond hung over the house.\n\nA cloud.\n", dictionary=small_dictionary)
        assert report.section("spellcheck").findings == 1
        assert report.section("edit_distance").findings == 1

    def test_list_of_lines(self, small_dictionary):
        report = check(["The clond hung", "over the house."], dictionary=small_dictionary)
        assert report.source == "<memory>"
        assert report.section("spellcheck").findings == 1

    def test_line_numbers_follow_newlines(self):
        dictionary = Dictionary.from_words(["first", "second"])
        report = check("first\x0csecond\nclond\n", dictionary=dictionary)
        assert "       2: clond" in report.section("spellcheck").lines

    def test_mixed_quotes_short_circuit(self, small_dictionary):
        text = "“The house,” a cloud.\n\n\"The house\" hung over.\n\n“Unclosed the house.\n"
        report = check(text, dictionary=small_dictionary)
        quotes = report.section("quotes")
        assert quotes.findings == 0
        assert quotes.lines[-1] == "  mixed straight and curly quotes; scan not performed"

    @pytest.mark.skipif(not HAS_SPELLCHECKER, reason="pyspellchecker not installed")
    def test_builtin_dictionary(self):
        report = check(
            "The clond hung over the house.",
            config=CheckConfig(use_builtin_dictionary=True),
        )
        spellcheck = report.section("spellcheck")
        assert any(line.startswith("clond") for line in spellcheck.lines)


class TestCheckBatch:
    """Tests for check_batch()."""

    def test_batch_yields_errors(self, fixtures_dir, sample_config, tmp_path):
        paths = [fixtures_dir / "sample.txt", tmp_path / "missing.txt"]
        results = list(check_batch(paths, sample_config))

        assert [path.name for path, _ in results] == ["sample.txt", "missing.txt"]
        assert results[0][1].total_findings == 3
        assert isinstance(results[1][1], DocumentLoadError)
