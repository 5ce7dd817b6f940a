"""Statistical substitution heuristics."""

from proofcheck.heuristics.jeebies import (
    HeBeTables,
    JeebiesChecker,
    JeebiesFinding,
    alternative_phrase,
    find_phrases,
)

__all__ = [
    "HeBeTables",
    "JeebiesChecker",
    "JeebiesFinding",
    "alternative_phrase",
    "find_phrases",
]
