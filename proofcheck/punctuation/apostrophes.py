"""
Apostrophe disambiguation for the quote-balance scan.

Typeset text uses ’ both as an apostrophe and as a closing single quote.
Before the quote automaton runs, every ’ that is probably an apostrophe
is rewritten to APOSTROPHE_MARK so the automaton never sees it. Opening
single quotes around protected scare-quoted words become OPEN_QUOTE_MARK.

Steps run in a fixed order, each over the whole paragraph buffer:
1. plural possessives ("horses’")
2. apostrophes between two letters ("don’t")
3. a table of common elided forms ("’tis", "o’", "’cordin’")
4. dropped-g forms ("goin’")
5. one- and two-word scare quotes ("‘nice’")
6. possessives of proper names ("Jones’", "Eliza’s")

Markers are restored before any paragraph is shown to the user.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import regex

from proofcheck.spelling.dictionary import Dictionary

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

APOSTROPHE_MARK = "◳"
OPEN_QUOTE_MARK = "◰"

STRAIGHT_QUOTES = "\"'"
CURLY_QUOTES = "“”‘’"

MIXED_QUOTES_LINE = "mixed straight and curly quotes; scan not performed"

# Elided forms written with a leading apostrophe. Internal apostrophes
# have already been marked when this table is applied.
LEAD_FORMS = [
    "em", "twill", "twon◳t", "twas", "tain◳t", "taint", "twouldn◳t",
    "twasn◳t", "twere", "twould", "tis", "twarn◳t", "tisn◳t", "twixt",
    "till", "bout", "casion", "shamed", "lowance", "n", "s", "d", "m",
    "ave", "cordingly", "baccy", "cept", "stead", "spose", "chute", "im",
    "u◳d", "tend", "rickshaw", "appen", "oo", "urt", "ud", "ope", "ow",
    "specially",
    # likelier to be real quotes
    "most", "cause", "way",
]  # fmt: skip

# Elided forms written with a trailing apostrophe
TAIL_FORMS = [
    "especial", "o", "ol", "tha", "canna", "an", "d", "ha", "tak", "th",
    "i", "wi", "yo", "ver", "don", "jes", "aroun", "wan", "M◳sieu",
    "nuthin",
]  # fmt: skip

# Forms with an apostrophe on both sides
BOTH_FORMS = ["cordin", "a", "n"]

_PROPER_NAME = regex.compile(r"^\p{Lu}\p{Ll}")
_PLURAL_POSSESSIVE = regex.compile(r"(\p{L}+)s’")
_INTERNAL = regex.compile(r"(?<=\p{L})’(?=\p{L})")
_DROPPED_G = regex.compile(r"(\p{L}+in)’")
_QUOTED_WORD = regex.compile(r"‘(\S+)’")
_QUOTED_PAIR = regex.compile(r"‘(\S+) (\S+)’")


# =============================================================================
# RULE TABLE
# =============================================================================


@dataclass(frozen=True)
class ApostropheRule:
    """
    One (pattern, replacement) entry of the common-forms table.

    Example:
        >>> rule = lead_form_rule("tis")
        >>> rule.apply("’Tis the season.")
        '◳Tis the season.'
    """

    name: str
    pattern: regex.Pattern
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def lead_form_rule(form: str) -> ApostropheRule:
    """Rule protecting ``’form`` as a whole word, ignoring case."""
    pattern = regex.compile(
        r"(?<!\p{L})’(" + regex.escape(form) + r")(?!\p{L})", regex.IGNORECASE
    )
    return ApostropheRule(f"’{form}", pattern, APOSTROPHE_MARK + r"\1")


def tail_form_rule(form: str) -> ApostropheRule:
    """Rule protecting ``form’`` where the form starts a word.

    Case-sensitive, unlike lead forms: a capitalized "I’" or "O’" is more
    often a closing single quote than a dialect form.
    """
    pattern = regex.compile(r"(?<![\p{L}" + APOSTROPHE_MARK + r"])(" + regex.escape(form) + r")’")
    return ApostropheRule(f"{form}’", pattern, r"\1" + APOSTROPHE_MARK)


def both_form_rule(form: str) -> ApostropheRule:
    """Rule protecting ``’form’`` as a whole word."""
    pattern = regex.compile(r"(?<!\p{L})’(" + regex.escape(form) + r")’(?!\p{L})")
    return ApostropheRule(f"’{form}’", pattern, APOSTROPHE_MARK + r"\1" + APOSTROPHE_MARK)


# Both-sided forms go first so "’a’" is not half-consumed by a lead form
COMMON_FORMS: list[ApostropheRule] = (
    [both_form_rule(f) for f in BOTH_FORMS]
    + [lead_form_rule(f) for f in LEAD_FORMS]
    + [tail_form_rule(f) for f in TAIL_FORMS]
)


# =============================================================================
# HELPERS
# =============================================================================


def has_mixed_quotes(paragraphs: Iterable[str]) -> bool:
    """True if the text uses both straight and curly quote characters."""
    straight = curly = False
    for paragraph in paragraphs:
        straight = straight or any(ch in paragraph for ch in STRAIGHT_QUOTES)
        curly = curly or any(ch in paragraph for ch in CURLY_QUOTES)
        if straight and curly:
            return True
    return False


def restore_markers(text: str) -> str:
    """Put the original quote characters back."""
    return text.replace(APOSTROPHE_MARK, "’").replace(OPEN_QUOTE_MARK, "‘")


# =============================================================================
# RESOLVER
# =============================================================================


class ApostropheResolver:
    """
    Marks probable apostrophes so only real quotes reach the automaton.

    Attributes:
        dictionary: Known-good words (merged with good words).
        good_words: User good-word list; every entry is a proper-name
            candidate.
        frequencies: Document frequency model.
        proper_name_min_frequency: Count at which a capitalized,
            non-dictionary word is taken as a proper name.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        good_words: Iterable[str] = (),
        frequencies: Mapping[str, int] | None = None,
        proper_name_min_frequency: int = 5,
        rules: list[ApostropheRule] | None = None,
    ):
        self.dictionary = dictionary
        self.good_words = list(good_words)
        self.frequencies = frequencies or {}
        self.proper_name_min_frequency = proper_name_min_frequency
        self.rules = COMMON_FORMS if rules is None else rules
        self.name_rules = self._build_name_rules()

    def resolve(self, paragraphs: list[str]) -> list[str]:
        """Run every step in order and return the marked paragraphs."""
        steps = [
            self.mark_plural_possessives,
            self.mark_internal,
            self.mark_common_forms,
            self.mark_dropped_g,
            self.mark_quoted_words,
            self.mark_proper_names,
        ]
        marked = list(paragraphs)
        for step in steps:
            marked = [step(p) for p in marked]
        return marked

    def mark_plural_possessives(self, paragraph: str) -> str:
        """``horses’`` -> ``horses◳`` when "horse" is a dictionary word."""
        # An open single quote means the ’ may be a real closer
        if "‘" in paragraph:
            return paragraph

        def replace(m: regex.Match) -> str:
            if m.group(1).lower() in self.dictionary:
                return m.group(1) + "s" + APOSTROPHE_MARK
            return m.group(0)

        return _PLURAL_POSSESSIVE.sub(replace, paragraph)

    def mark_internal(self, paragraph: str) -> str:
        return _INTERNAL.sub(APOSTROPHE_MARK, paragraph)

    def mark_common_forms(self, paragraph: str) -> str:
        for rule in self.rules:
            paragraph = rule.apply(paragraph)
        return paragraph

    def mark_dropped_g(self, paragraph: str) -> str:
        """``goin’`` -> ``goin◳`` when "going" is a word and "goin" is not."""

        def replace(m: regex.Match) -> str:
            stem = m.group(1).lower()
            if stem + "g" in self.dictionary and stem not in self.dictionary:
                return m.group(1) + APOSTROPHE_MARK
            return m.group(0)

        return _DROPPED_G.sub(replace, paragraph)

    def mark_quoted_words(self, paragraph: str) -> str:
        """Protect one- and two-word spans in single quotes."""
        paragraph = _QUOTED_WORD.sub(OPEN_QUOTE_MARK + r"\1" + APOSTROPHE_MARK, paragraph)
        return _QUOTED_PAIR.sub(OPEN_QUOTE_MARK + r"\1 \2" + APOSTROPHE_MARK, paragraph)

    def proper_names(self) -> list[str]:
        """Good-word entries plus frequent capitalized non-dictionary words."""
        names = set(self.good_words)
        for word, count in self.frequencies.items():
            if (
                count >= self.proper_name_min_frequency
                and _PROPER_NAME.match(word)
                and "’" not in word
                and not self.dictionary.lookup_any_case(word)
            ):
                names.add(word)
        return sorted(n for n in names if n)

    def mark_proper_names(self, paragraph: str) -> str:
        """``Jones’`` -> ``Jones◳`` and ``Eliza’s`` -> ``Eliza◳s``."""
        for pattern, replacement in self.name_rules:
            paragraph = pattern.sub(lambda _m, r=replacement: r, paragraph)
        return paragraph

    def _build_name_rules(self) -> list[tuple[regex.Pattern, str]]:
        rules = []
        for name in self.proper_names():
            prefix = r"(?<!\p{L})" + regex.escape(name)
            if name.endswith("s"):
                rules.append((regex.compile(prefix + "’"), name + APOSTROPHE_MARK))
            else:
                rules.append((regex.compile(prefix + "’s"), name + APOSTROPHE_MARK + "s"))
        logger.debug("Protecting possessives of %d proper names", len(rules))
        return rules
