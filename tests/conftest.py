"""Shared fixtures for analyzer and highlighter tests."""

from __future__ import annotations

import re

import pytest

from freewrite.linguistics import Token
from freewrite.ranges import TextRange
from freewrite.style import StyleAnalyzer, StyleDocument
from freewrite.style.rules import Pipeline

_WORD_RE = re.compile(r"[A-Za-z0-9]+(?:'[A-Za-z]+)?")
_SENTENCE_BREAK_RE = re.compile(r"[.!?]+\s+")

_NOUNS = frozenset(
    {
        "budget", "build", "cat", "deadlines", "dog", "door", "fact", "garden",
        "mat", "meeting", "module", "parser", "plan", "reasons", "release",
        "report", "room", "stress", "team", "word",
    }
)  # fmt: skip


class StubLinguisticService:
    """Deterministic tokenizer used instead of a trained spaCy model.

    Lemmas are lowercased words; a handful of nouns are tagged ``NOUN`` and
    words ending in ``ly`` are tagged ``ADV``.
    """

    def tokens(self, text: str) -> list[Token]:
        """Return regex word tokens."""
        tokens: list[Token] = []
        for match in _WORD_RE.finditer(text):
            word = match.group(0)
            lemma = word.lower()
            if lemma in _NOUNS:
                part_of_speech: str | None = "NOUN"
            elif lemma.endswith("ly") and len(lemma) > 3:
                part_of_speech = "ADV"
            else:
                part_of_speech = None
            tokens.append(
                Token(
                    text=word,
                    lemma=lemma,
                    part_of_speech=part_of_speech,
                    range=TextRange(match.start(), len(word)),
                )
            )
        return tokens

    def sentences(self, text: str) -> list[TextRange]:
        """Split after terminal punctuation followed by whitespace."""
        stripped = text.lstrip()
        if not stripped:
            return []
        starts = [len(text) - len(stripped)]
        for match in _SENTENCE_BREAK_RE.finditer(text, starts[0]):
            if match.end() < len(text):
                starts.append(match.end())
        bounds = starts[1:] + [len(text)]
        return [TextRange.from_bounds(start, end) for start, end in zip(starts, bounds)]


@pytest.fixture
def stub_service() -> StubLinguisticService:
    """Return a fresh stub linguistic service."""
    return StubLinguisticService()


@pytest.fixture
def analyzer(stub_service: StubLinguisticService) -> StyleAnalyzer:
    """Return an analyzer over the packaged rules and the stub service."""
    return StyleAnalyzer(stub_service, Pipeline.from_jsonl())


@pytest.fixture
def make_document(stub_service: StubLinguisticService):
    """Return a factory that builds stub-tokenized documents."""

    def _make(text: str) -> StyleDocument:
        return StyleDocument.from_text(text, stub_service)

    return _make
