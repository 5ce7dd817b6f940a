"""
Data models for proofcheck.

A manuscript is held as a working buffer of lines (1:1 with the source
file) plus a paragraph buffer derived from it. Component reports are
ordered line sequences; the caller concatenates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


def build_paragraphs(lines: list[str]) -> list[str]:
    """
    Join runs of non-blank lines into single-line paragraphs.

    Blank lines separate paragraphs; consecutive blank lines do not
    produce empty paragraphs.

    Example:
        >>> build_paragraphs(["One", "two.", "", "", "Three."])
        ['One two.', 'Three.']
    """
    paragraphs = []
    current: list[str] = []
    for line in lines:
        if line.strip() == "":
            if current:
                paragraphs.append(" ".join(current))
                current = []
        else:
            current.append(line)
    if current:
        paragraphs.append(" ".join(current))
    return paragraphs


def split_lines(text: str) -> list[str]:
    """
    Split text into lines on "\\n" only.

    Form feeds and other Unicode line separators stay inside their line,
    so line numbers match the source file.

    Example:
        >>> split_lines("first\\x0csecond\\r\\nthird\\n")
        ['first\\x0csecond', 'third']
    """
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines[-1] == "":
        lines.pop()
    return lines


def detect_punctuation_style(lines: list[str]) -> Literal["American", "British"]:
    """Guess the punctuation convention from terminal quote placement."""
    british = sum(1 for line in lines if ".’" in line)
    american = sum(1 for line in lines if ".”" in line)
    return "British" if british > american else "American"


@dataclass
class TextBuffer:
    """
    The manuscript under review.

    Attributes:
        lines: Working buffer, one entry per source line (BOM stripped).
        paragraphs: Paragraph buffer, one entry per paragraph.
        source: Where the text came from (a path, or "<memory>").
    """

    lines: list[str]
    paragraphs: list[str] = field(default_factory=list)
    source: str = "<memory>"

    def __post_init__(self) -> None:
        if not self.paragraphs:
            self.paragraphs = build_paragraphs(self.lines)

    @classmethod
    def from_text(cls, text: str, source: str = "<memory>") -> TextBuffer:
        """Build a buffer from a single string."""
        if text.startswith("\ufeff"):
            text = text[1:]
        return cls(lines=split_lines(text), source=source)

    @property
    def punctuation_style(self) -> Literal["American", "British"]:
        return detect_punctuation_style(self.lines)


@dataclass
class SectionReport:
    """Report lines produced by one component."""

    name: str
    lines: list[str]
    findings: int = 0
    failed: bool = False


@dataclass
class CheckReport:
    """All component reports for one manuscript, in run order."""

    source: str
    summary: list[str] = field(default_factory=list)
    sections: list[SectionReport] = field(default_factory=list)

    def section(self, name: str) -> SectionReport | None:
        """Return the named section, if that component ran."""
        for section in self.sections:
            if section.name == name:
                return section
        return None

    @property
    def total_findings(self) -> int:
        return sum(s.findings for s in self.sections)

    def lines(self) -> list[str]:
        """Concatenate the summary and every section."""
        out = list(self.summary)
        for section in self.sections:
            out.extend(section.lines)
        return out
