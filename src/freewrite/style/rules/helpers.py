"""Shared lexicons and helper functions used by multiple rule modules."""


import re
from collections.abc import Iterator

from freewrite.linguistics import Token
from freewrite.ranges import TextRange

STOPWORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "of", "to", "in", "on", "for",
        "with", "at", "from", "by", "as", "that", "this", "it", "be", "is",
        "are", "was", "were", "i", "you", "he", "she", "we", "they", "them",
        "their", "our", "your", "my", "me", "so", "if", "then", "than", "also",
    }
)  # fmt: skip

WEAK_INTENSIFIERS = frozenset(
    {"very", "really", "just", "quite", "basically", "literally", "pretty"}
)

HEDGE_PHRASES: tuple[str, ...] = (
    "i think",
    "kind of",
    "sort of",
    "maybe",
    "perhaps",
    "i feel like",
    "a bit",
    "a little",
)

VAGUE_PRONOUNS = frozenset({"this", "that", "it", "there"})

FILLER_NOUNS = frozenset({"thing", "stuff", "things"})

EXPLETIVE_STARTS: tuple[str, ...] = (
    "there is",
    "there are",
    "it is",
    "it was",
    "it seems",
    "it appears",
    "it feels",
)

WORDY_PHRASES: dict[str, str] = {
    "in order to": "to",
    "due to the fact that": "because",
    "at this point in time": "now",
    "for the purpose of": "to",
}

NOUN_TAGS = frozenset({"NOUN", "PROPN"})
ADVERB_TAG = "ADV"

_WORD_RE = re.compile(r"\w+")


def is_content_lemma(lemma: str) -> bool:
    """Return whether a lemma carries meaning beyond grammar glue."""
    return bool(lemma) and lemma not in STOPWORDS


def content_lemmas(tokens: list[Token]) -> set[str]:
    """Collect the non-stopword lemmas of a token run."""
    return {token.lemma for token in tokens if is_content_lemma(token.lemma)}


def find_phrase(text: str, phrase: str) -> Iterator[TextRange]:
    """Yield ranges of case-insensitive, non-overlapping ``phrase`` hits."""
    if not phrase:
        return
    for match in re.finditer(re.escape(phrase), text, re.IGNORECASE):
        yield TextRange.from_bounds(match.start(), match.end())


def first_word(text: str) -> str | None:
    """Return the first run of word characters in ``text``."""
    match = _WORD_RE.search(text)
    return match.group(0) if match else None


def match_case(original: str, replacement: str) -> str:
    """Capitalize ``replacement`` when ``original`` starts with a capital."""
    if original[:1].isupper() and replacement:
        return replacement[0].upper() + replacement[1:]
    return replacement


def covering_range(tokens: list[Token]) -> TextRange:
    """Return the range from the first token's start to the last token's end."""
    return TextRange.from_bounds(tokens[0].range.offset, tokens[-1].range.end)
