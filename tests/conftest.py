"""Pytest configuration.

The repository uses a flat `src/` layout without an installed package. This conftest ensures tests
can import from the `src.*` namespace when running `pytest` locally, and provides keyword-driven
classifier stubs so parser behavior can be tested without trained model artifacts.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.interpreter.models import Models  # noqa: E402


class KeywordClassifier:
    """`TextClassifier` stub: the first whitespace token found in `keywords` decides the label."""

    def __init__(self, keywords: dict[str, str], default: str) -> None:
        self.keywords = keywords
        self.default = default
        self.calls: list[str] = []

    def vectorize(self, text: str) -> str:
        self.calls.append(text)
        return text

    def classify(self, features: str) -> str:
        for token in features.lower().split():
            if token in self.keywords:
                return self.keywords[token]
        return self.default


class ExplodingClassifier:
    """`TextClassifier` stub whose scoring always fails."""

    def vectorize(self, text: str) -> str:
        return text

    def classify(self, features: str) -> str:
        raise RuntimeError("model state is corrupt")


INTENT_KEYWORDS = {
    "list": "list",
    "mark": "mark",
    "unmark": "unmark",
    "delete": "delete",
    "todo": "todo",
    "deadline": "deadline",
    "event": "event",
}

TOKEN_KEYWORDS = {
    "todo": "command",
    "deadline": "command",
    "event": "command",
    "add": "other",
    "for": "other",
    "from": "other",
    "to": "other",
    "by": "other",
}


@pytest.fixture
def intent_stub() -> KeywordClassifier:
    return KeywordClassifier(INTENT_KEYWORDS, default="unknown")


@pytest.fixture
def token_stub() -> KeywordClassifier:
    return KeywordClassifier(TOKEN_KEYWORDS, default="description")


@pytest.fixture
def models(intent_stub: KeywordClassifier, token_stub: KeywordClassifier) -> Models:
    return Models(intent=intent_stub, token=token_stub)


@pytest.fixture
def data_dir() -> Path:
    return REPO_ROOT / "data"


@pytest.fixture
def exploding_classifier() -> ExplodingClassifier:
    return ExplodingClassifier()


@pytest.fixture(autouse=True)
def root_logger() -> Iterator[logging.Logger]:
    """Undo handlers and warning capture installed by `configure_logging` during a test."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)
