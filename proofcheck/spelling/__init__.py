"""
Spellcheck stages: tokenizing, suspect resolution and edit-distance matching.

Example:
    >>> from proofcheck.spelling import Dictionary, SuspectResolver, build_word_index
    >>> index = build_word_index(["The clond hung over the house.", "A cloud."])
    >>> resolver = SuspectResolver(Dictionary.from_words(["the", "hung", "over", "house", "cloud", "a"]))
    >>> resolver.resolve(index).suspect_words
    ['clond']
"""

from proofcheck.spelling.dictionary import Dictionary, normalize_apostrophes
from proofcheck.spelling.distance import (
    EditDistanceMatch,
    EditDistanceMatcher,
    is_candidate_pair,
    levenshtein,
)
from proofcheck.spelling.resolution import (
    Resolution,
    ResolutionRule,
    SuspectResolver,
    SuspectWord,
)
from proofcheck.spelling.tokenizer import WordIndex, build_word_index, tokenize_line

__all__ = [
    # Tokenizer
    "tokenize_line",
    "build_word_index",
    "WordIndex",
    # Dictionary
    "Dictionary",
    "normalize_apostrophes",
    # Resolution
    "SuspectResolver",
    "Resolution",
    "ResolutionRule",
    "SuspectWord",
    # Edit distance
    "EditDistanceMatcher",
    "EditDistanceMatch",
    "levenshtein",
    "is_candidate_pair",
]
