"""Word and sentence segmentation backed by an external NLP pipeline.

The analyzer and the typewriter focus never tokenize text themselves; they
ask a :class:`LinguisticService` for word tokens (with lemma and part of
speech) and sentence ranges. :class:`SpacyService` is the production
implementation.
"""


import logging
from dataclasses import dataclass
from typing import Protocol

import spacy
from spacy.language import Language
from spacy.tokens import Doc

from .ranges import TextRange

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "en_core_web_sm"


@dataclass(frozen=True)
class Token:
    """Word-level unit produced fresh for one analysis pass."""

    text: str
    lemma: str
    part_of_speech: str | None
    range: TextRange


class LinguisticService(Protocol):
    """Tokenization, lemmatization and sentence segmentation seam."""

    def tokens(self, text: str) -> list[Token]:
        """Return word tokens in document order, punctuation excluded."""

    def sentences(self, text: str) -> list[TextRange]:
        """Return contiguous sentence ranges covering the text."""


class SpacyService:
    """:class:`LinguisticService` implementation running a spaCy pipeline."""

    def __init__(self, nlp: Language) -> None:
        """Wrap an already constructed spaCy pipeline."""
        self.nlp = nlp
        self._last: tuple[str, Doc] | None = None

    @classmethod
    def load(cls, model: str = DEFAULT_MODEL) -> "SpacyService":
        """Load a trained pipeline, falling back to a blank English one.

        The blank pipeline has no tagger or lemmatizer, so lemmas degrade to
        lowercased text and parts of speech to ``None``.
        """
        try:
            nlp = spacy.load(model)
        except OSError:
            logger.warning(
                "spaCy model %r is not installed; using a blank English pipeline. "
                "Install it with: python -m spacy download %s",
                model,
                model,
            )
            return cls.blank()
        if not any(name in nlp.pipe_names for name in ("parser", "senter", "sentencizer")):
            nlp.add_pipe("sentencizer")
        logger.debug("Loaded spaCy model %r with pipes %s", model, nlp.pipe_names)
        return cls(nlp)

    @classmethod
    def blank(cls, lang: str = "en") -> "SpacyService":
        """Build a tokenizer-only pipeline with rule-based sentence splitting."""
        nlp = spacy.blank(lang)
        nlp.add_pipe("sentencizer")
        return cls(nlp)

    def _parse(self, text: str) -> Doc:
        last = self._last
        if last is not None and last[0] == text:
            return last[1]
        doc = self.nlp(text)
        self._last = (text, doc)
        return doc

    def tokens(self, text: str) -> list[Token]:
        """Return word tokens with lowercased lemmas and UPOS tags."""
        if not text:
            return []
        tokens: list[Token] = []
        for token in self._parse(text):
            if token.is_space or token.is_punct:
                continue
            lemma = token.lemma_ or token.text
            tokens.append(
                Token(
                    text=token.text,
                    lemma=lemma.lower(),
                    part_of_speech=token.pos_ or None,
                    range=TextRange(token.idx, len(token.text)),
                )
            )
        return tokens

    def sentences(self, text: str) -> list[TextRange]:
        """Return sentence ranges; each extends to the start of the next."""
        if not text:
            return []
        doc = self._parse(text)
        if not doc.has_annotation("SENT_START"):
            return [TextRange(0, len(text))]
        starts: list[int] = []
        for sentence in doc.sents:
            first = next((token for token in sentence if not token.is_space), None)
            if first is not None:
                starts.append(first.idx)
        if not starts:
            return []
        bounds = starts[1:] + [len(text)]
        return [TextRange.from_bounds(start, end) for start, end in zip(starts, bounds)]
