"""
Unit tests for proofcheck data models.
"""

import pytest

from proofcheck.models import (
    CheckReport,
    SectionReport,
    TextBuffer,
    build_paragraphs,
    detect_punctuation_style,
)


class TestBuildParagraphs:
    """Tests for build_paragraphs()."""

    def test_joins_with_single_space(self):
        assert build_paragraphs(["One", "two.", "", "Three."]) == ["One two.", "Three."]

    def test_repeated_blank_lines(self):
        assert build_paragraphs(["", "", "One", "", "", "", "Two", ""]) == ["One", "Two"]

    def test_whitespace_only_line_separates(self):
        assert build_paragraphs(["One", "   ", "Two"]) == ["One", "Two"]

    def test_empty(self):
        assert build_paragraphs([]) == []


class TestPunctuationStyle:
    @pytest.mark.parametrize(
        "lines,style",
        [
            (["He said ‘yes.’", "She said ‘no.’"], "British"),
            (["He said “yes.”"], "American"),
            (["He said ‘yes.’", "She said “no.”"], "American"),
            ([], "American"),
        ],
    )
    def test_detect(self, lines, style):
        assert detect_punctuation_style(lines) == style


class TestTextBuffer:
    """Tests for TextBuffer."""

    def test_paragraphs_built(self):
        buffer = TextBuffer(lines=["One", "two.", "", "Three."])
        assert buffer.paragraphs == ["One two.", "Three."]
        assert buffer.source == "<memory>"

    def test_from_text_strips_bom(self):
        buffer = TextBuffer.from_text("﻿First line\nSecond line\n", source="book.txt")
        assert buffer.lines == ["First line", "Second line"]
        assert buffer.source == "book.txt"

    def test_from_text_splits_on_newlines_only(self):
        buffer = TextBuffer.from_text("first\x0csecond\r\nthird\u2028more\n")
        assert buffer.lines == ["first\x0csecond", "third\u2028more"]

    def test_from_text_empty(self):
        assert TextBuffer.from_text("").lines == []

    def test_punctuation_style(self):
        assert TextBuffer(lines=["He said ‘yes.’"]).punctuation_style == "British"


class TestCheckReport:
    """Tests for CheckReport."""

    @pytest.fixture
    def report(self):
        return CheckReport(
            source="book.txt",
            summary=["summary"],
            sections=[
                SectionReport(name="spellcheck", lines=["a", "b"], findings=2),
                SectionReport(name="jeebies", lines=["c"], findings=1),
            ],
        )

    def test_section_lookup(self, report):
        assert report.section("jeebies").findings == 1
        assert report.section("quotes") is None

    def test_total_findings(self, report):
        assert report.total_findings == 3

    def test_lines_concatenated_in_order(self, report):
        assert report.lines() == ["summary", "a", "b", "c"]
