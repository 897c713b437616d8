"""Train a model artifact from a labeled CSV dataset.

The trainer runs outside the interpreter process. It fits a vectorizer only on the given dataset,
fits a multinomial Naive Bayes classifier on the vectorized rows, and writes a versioned artifact
that `src.interpreter.models.load_models` reads at startup.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from dotenv import load_dotenv
from sklearn.feature_extraction.text import CountVectorizer, TfidfVectorizer
from sklearn.naive_bayes import MultinomialNB

from src.config.logging import configure_logging
from src.interpreter.models import ModelArtifact, ModelKind, save_artifact
from src.interpreter.text import TextAnalyzer
from src.training.dataset import DatasetError, LabeledText, label_counts, read_dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainerConfig:
    """Vectorizer and classifier settings for one model kind."""

    tfidf: bool
    stop_words: bool
    stem: bool
    max_features: int
    alpha: float = 1.0


DEFAULT_CONFIGS: dict[str, TrainerConfig] = {
    # Whole utterances: weight rare informative words up, fold word forms together.
    "intent": TrainerConfig(tfidf=True, stop_words=True, stem=True, max_features=5_000),
    # Single tokens: keep every word form as-is ("by", "from" and "to" matter here).
    "token": TrainerConfig(tfidf=False, stop_words=False, stem=False, max_features=1_000),
}


def build_vectorizer(config: TrainerConfig) -> CountVectorizer:
    """Create an unfitted vectorizer for the given config."""

    analyzer = TextAnalyzer(stop_words=config.stop_words, stem=config.stem)
    if config.tfidf:
        return TfidfVectorizer(
            analyzer=analyzer,
            max_features=config.max_features,
            use_idf=True,
            sublinear_tf=True,
        )
    return CountVectorizer(analyzer=analyzer, max_features=config.max_features)


def train_artifact(
        rows: Sequence[LabeledText],
        *,
        kind: ModelKind,
        version: str,
        config: TrainerConfig | None = None,
) -> ModelArtifact:
    """Fit a vectorizer and classifier on labeled rows.

    Raises:
        DatasetError: If the rows hold fewer than two distinct labels or no usable vocabulary.
    """

    config = config or DEFAULT_CONFIGS[kind]

    labels = sorted({row.label for row in rows})
    if len(labels) < 2:
        raise DatasetError(f"{kind} dataset needs at least two distinct labels, got {labels}")

    vectorizer = build_vectorizer(config)
    try:
        features = vectorizer.fit_transform([row.text for row in rows])
    except ValueError as exc:
        # scikit-learn raises ValueError when every document analyzes to no terms.
        raise DatasetError(f"{kind} dataset produced no vocabulary: {exc}") from exc

    classifier = MultinomialNB(alpha=config.alpha)
    classifier.fit(features, [row.label for row in rows])

    return ModelArtifact(
        kind=kind,
        version=version,
        labels=tuple(labels),
        vectorizer=vectorizer,
        classifier=classifier,
    )


def default_version() -> str:
    """Version string for a freshly trained artifact (UTC timestamp)."""

    return datetime.now(UTC).strftime("%Y%m%d%H%M%S")


def train(*, kind: ModelKind, data: str, out: str, version: str | None = None) -> ModelArtifact:
    """Read a dataset, train an artifact and write it to `out`."""

    rows = read_dataset(data, kind=kind)
    logger.info("dataset kind=%s rows=%d labels=%s", kind, len(rows), label_counts(rows))

    artifact = train_artifact(rows, kind=kind, version=version or default_version())
    save_artifact(artifact, out)

    logger.info(
        "artifact written kind=%s version=%s vocabulary=%d path=%s",
        kind,
        artifact.version,
        len(artifact.vectorizer.vocabulary_),
        out,
    )
    return artifact


def main() -> None:
    """CLI entry point for training one model artifact."""

    parser = argparse.ArgumentParser(description="Train an intent or token-label model artifact.")
    parser.add_argument(
        "--kind",
        choices=("intent", "token"),
        required=True,
        help="Which model to train.",
    )
    parser.add_argument("--data", required=True, help="Path to the labeled CSV dataset.")
    parser.add_argument("--out", required=True, help="Where to write the model artifact.")
    parser.add_argument(
        "--version",
        default=None,
        help="Artifact version string (default: current UTC timestamp).",
    )
    args = parser.parse_args()

    load_dotenv(".env")
    configure_logging()

    try:
        train(kind=args.kind, data=args.data, out=args.out, version=args.version)
    except DatasetError as exc:
        parser.exit(status=2, message=f"error: {exc}\n")


if __name__ == "__main__":
    main()
