"""
Unit tests for Levenshtein distance and the edit-distance matcher.
"""

import importlib.util

import pytest

from proofcheck.spelling import (
    Dictionary,
    EditDistanceMatcher,
    SuspectResolver,
    build_word_index,
    is_candidate_pair,
    levenshtein,
)
from proofcheck.spelling.distance import NO_MATCHES_LINE, expand_ligatures

HAS_RAPIDFUZZ = importlib.util.find_spec("rapidfuzz") is not None

PAIRS = [
    ("kitten", "sitting"),
    ("", "abc"),
    ("clond", "cloud"),
    ("flaw", "lawn"),
    ("naïve", "naive"),
    ("fo’c’s’le", "forecastle"),
    ("same", "same"),
    ("", ""),
]


class TestLevenshtein:
    """Tests for levenshtein()."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("clond", "cloud", 1),
            ("flaw", "lawn", 2),
            ("naïve", "naive", 1),
            ("abc", "abc", 0),
        ],
    )
    def test_known_distances(self, a, b, expected):
        assert levenshtein(a, b) == expected

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_symmetric(self, a, b):
        assert levenshtein(a, b) == levenshtein(b, a)

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_identity(self, a, b):
        assert levenshtein(a, a) == 0

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_length_lower_bound(self, a, b):
        assert levenshtein(a, b) >= abs(len(a) - len(b))

    @pytest.mark.skipif(not HAS_RAPIDFUZZ, reason="rapidfuzz not installed")
    @pytest.mark.parametrize("a,b", PAIRS)
    def test_agrees_with_rapidfuzz(self, a, b):
        from rapidfuzz.distance import Levenshtein

        assert levenshtein(a, b) == Levenshtein.distance(a, b)


class TestCandidatePair:
    """Tests for is_candidate_pair()."""

    @pytest.mark.parametrize(
        "suspect,word",
        [
            ("cloud", "cloud"),  # case-only variant once lowercased
            ("clouds", "cloud"),  # plural
            ("cloud", "clouds"),
            ("to-day", "today"),  # hyphenation only
            ("xiv", "xvi"),  # both Roman numerals
            ("1851", "1850"),  # both numerals
            ("abcdefg", "abc"),  # too far apart in length
        ],
    )
    def test_skipped(self, suspect, word):
        assert not is_candidate_pair(suspect, word)

    def test_real_candidate(self):
        assert is_candidate_pair("clond", "cloud")


class TestEditDistanceMatcher:
    """Tests for EditDistanceMatcher."""

    @staticmethod
    def run(lines, words, **kwargs):
        index = build_word_index(lines)
        resolution = SuspectResolver(Dictionary.from_words(words)).resolve(index)
        return EditDistanceMatcher(**kwargs).match(resolution, index)

    def test_scenario_clond(self):
        matches = self.run(["The clond hung.", "A cloud."], ["the", "hung", "a", "cloud"])
        assert len(matches) == 1
        m = matches[0]
        assert (m.suspect, m.neighbor, m.distance) == ("clond", "cloud", 1)
        assert (m.suspect_count, m.neighbor_count) == (1, 1)
        assert (m.suspect_line, m.neighbor_line) == (1, 2)

    def test_short_suspects_skipped(self):
        assert self.run(["clod cloud"], ["cloud"]) == []

    def test_min_length_configurable(self):
        matches = self.run(["clod cloud"], ["cloud"], min_length=4)
        assert [(m.suspect, m.neighbor) for m in matches] == [("clod", "cloud")]

    def test_first_match_wins(self):
        """Approved words are tried in sorted order; the first close one is kept."""
        matches = self.run(["bount mount count"], ["mount", "count"])
        assert [(m.suspect, m.neighbor) for m in matches] == [("bount", "count")]

    def test_distance_two_not_reported(self):
        assert self.run(["clxnd cloud"], ["cloud"]) == []

    def test_results_sorted(self):
        lines = ["zlond zlone cloud", "clond", "Xouse house"]
        matches = self.run(lines, ["cloud", "house", "zlone"])
        assert [m.suspect for m in matches] == ["clond", "Xouse", "zlond"]

    def test_ligature_spelled_out(self):
        assert expand_ligatures("cæsar") == "ca\U0001d68esar"
        assert levenshtein(expand_ligatures("cæsar"), "caesar") == 1
        assert levenshtein(expand_ligatures("manœuvre"), "manoeuvre") == 1

    def test_ligature_matches_spelled_form(self):
        """A ligature suspect is reported beside its spelled-out neighbour."""
        matches = self.run(["Cæsar came.", "Caesar saw."], ["came", "saw", "caesar"])
        assert [(m.suspect, m.neighbor, m.distance) for m in matches] == [
            ("Cæsar", "Caesar", 1)
        ]
        lines = EditDistanceMatcher.report_lines(matches, ["Cæsar came.", "Caesar saw."])
        assert "Cæsar(1):Caesar(1)" in lines

    def test_parallel_matches_sequential(self):
        lines = ["clond cloud hovse house mounf mount bount count"]
        words = ["cloud", "house", "mount", "count"]
        sequential = self.run(lines, words)
        parallel = self.run(lines, words, max_workers=2)
        assert parallel == sequential
        assert len(sequential) == 4

    @pytest.mark.skipif(not HAS_RAPIDFUZZ, reason="rapidfuzz not installed")
    def test_rapidfuzz_backend_matches_native(self):
        lines = ["clond cloud hovse house clxnd"]
        words = ["cloud", "house"]
        assert self.run(lines, words, backend="rapidfuzz") == self.run(lines, words)

    def test_report_lines(self):
        lines = ["The clond hung.", "A cloud."]
        matches = self.run(lines, ["the", "hung", "a", "cloud"])
        report = EditDistanceMatcher.report_lines(matches, lines)
        assert "clond(1):cloud(1)" in report
        assert "       2: A cloud." in report
        assert "       1: The clond hung." in report

    def test_report_empty(self):
        report = EditDistanceMatcher.report_lines([], [])
        assert report[-1] == NO_MATCHES_LINE

    def test_disabled_lines(self):
        report = EditDistanceMatcher.disabled_lines()
        assert any("LEVENSHTEIN (EDIT DISTANCE) CHECKS disabled" in line for line in report)
