"""Text tokenization for the interpreter and its vectorizers."""

from __future__ import annotations

import re

from nltk.stem import PorterStemmer
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

_ASCII_WHITESPACE_RE = re.compile(r"[ \t\n\r\f\v]+")
_WORD_RE = re.compile(r"[0-9a-z]+")

_STEMMER = PorterStemmer()


def split_tokens(text: str) -> list[str]:
    """Split an utterance on runs of ASCII whitespace, dropping empty tokens."""

    return [token for token in _ASCII_WHITESPACE_RE.split(text or "") if token]


class TextAnalyzer:
    """Vectorizer analyzer: lowercase, split into word runs, optionally drop stopwords and stem.

    Instances are pickled into model artifacts together with the fitted vectorizer, so the
    configuration chosen at training time is the one applied at runtime.
    """

    def __init__(self, *, stop_words: bool = False, stem: bool = False) -> None:
        self.stop_words = stop_words
        self.stem = stem

    def __call__(self, doc: str) -> list[str]:
        words = _WORD_RE.findall((doc or "").lower())
        if self.stop_words:
            words = [w for w in words if w not in ENGLISH_STOP_WORDS]
        if self.stem:
            words = [_STEMMER.stem(w) for w in words]
        return words

    def __repr__(self) -> str:
        return f"TextAnalyzer(stop_words={self.stop_words}, stem={self.stem})"
