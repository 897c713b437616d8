"""Model artifacts and the process-wide models handle.

A model artifact bundles a fitted vectorizer with a fitted classifier. Artifacts are produced by the
offline trainer (`src.training.train`), loaded once at startup and never mutated afterwards, which
makes the resulting `Models` handle safe to share between threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Literal, Protocol

import joblib

from src.interpreter.commands import IntentLabel, TokenLabel
from src.interpreter.errors import ClassificationError

logger = logging.getLogger(__name__)

ARTIFACT_FORMAT = 1

ModelKind = Literal["intent", "token"]

MODEL_LABELS: dict[str, tuple[str, ...]] = {
    "intent": tuple(label.value for label in IntentLabel),
    "token": tuple(label.value for label in TokenLabel),
}

_SMOKE_TEXT = "todo read book"


class TextClassifier(Protocol):
    """Capability every classification backend must provide."""

    def vectorize(self, text: str) -> Any:
        """Project raw text onto the model's feature space."""

    def classify(self, features: Any) -> str:
        """Return the most likely label for vectorized features."""


@dataclass(frozen=True)
class SklearnTextClassifier:
    """`TextClassifier` backed by a fitted scikit-learn vectorizer and classifier."""

    vectorizer: Any
    classifier: Any

    def vectorize(self, text: str) -> Any:
        return self.vectorizer.transform([text])

    def classify(self, features: Any) -> str:
        return str(self.classifier.predict(features)[0])


@dataclass(frozen=True)
class ModelArtifact:
    """A trained, versioned (vectorizer, classifier) bundle."""

    kind: ModelKind
    version: str
    labels: tuple[str, ...]
    vectorizer: Any
    classifier: Any
    format: int = ARTIFACT_FORMAT

    def to_classifier(self) -> SklearnTextClassifier:
        return SklearnTextClassifier(vectorizer=self.vectorizer, classifier=self.classifier)

    def to_payload(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "kind": self.kind,
            "version": self.version,
            "labels": list(self.labels),
            "vectorizer": self.vectorizer,
            "classifier": self.classifier,
        }


@dataclass(frozen=True)
class Models:
    """Loaded classifiers shared read-only by every parse call."""

    intent: TextClassifier
    token: TextClassifier


def predict_label(classifier: TextClassifier, text: str) -> str:
    """Vectorize and classify one text.

    Raises:
        ClassificationError: If the backend fails to vectorize or score the text.
    """

    try:
        return classifier.classify(classifier.vectorize(text))
    except Exception as exc:  # noqa: BLE001 - any backend failure means broken model state
        raise ClassificationError(f"classification failed: {exc}") from exc


def save_artifact(artifact: ModelArtifact, path: str | Path) -> None:
    """Persist an artifact with joblib, creating the parent directory if needed."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(artifact.to_payload(), target)


def load_artifact(stream: IO[bytes], *, kind: ModelKind) -> ModelArtifact:
    """Load and validate an artifact from a binary stream.

    Raises:
        ClassificationError: If the stream cannot be decoded or holds an unexpected payload.
    """

    try:
        payload = joblib.load(stream)
    except Exception as exc:  # noqa: BLE001 - joblib surfaces many unrelated exception types
        raise ClassificationError(f"cannot read {kind} model artifact: {exc}") from exc

    if not isinstance(payload, dict):
        raise ClassificationError(f"{kind} model artifact must be a mapping")
    if payload.get("format") != ARTIFACT_FORMAT:
        raise ClassificationError(
            f"unsupported {kind} model artifact format: {payload.get('format')!r}"
        )
    if payload.get("kind") != kind:
        raise ClassificationError(f"expected a {kind} model artifact, got {payload.get('kind')!r}")

    vectorizer = payload.get("vectorizer")
    classifier = payload.get("classifier")
    if not callable(getattr(vectorizer, "transform", None)):
        raise ClassificationError(f"{kind} model artifact has no usable vectorizer")
    if not callable(getattr(classifier, "predict", None)):
        raise ClassificationError(f"{kind} model artifact has no usable classifier")

    return ModelArtifact(
        kind=kind,
        version=str(payload.get("version") or "unknown"),
        labels=tuple(str(label) for label in payload.get("labels") or ()),
        vectorizer=vectorizer,
        classifier=classifier,
    )


def _load_artifact_file(path: str | Path, *, kind: ModelKind) -> ModelArtifact:
    try:
        with open(path, "rb") as stream:
            return load_artifact(stream, kind=kind)
    except OSError as exc:
        raise ClassificationError(f"cannot open {kind} model artifact {path}: {exc}") from exc


def load_models(intent_path: str | Path, token_path: str | Path) -> Models:
    """Load both artifacts and check that each one can classify.

    Raises:
        ClassificationError: If either artifact is missing, malformed, or cannot score text.
    """

    intent_artifact = _load_artifact_file(intent_path, kind="intent")
    token_artifact = _load_artifact_file(token_path, kind="token")

    models = Models(intent=intent_artifact.to_classifier(), token=token_artifact.to_classifier())

    # Surface broken model state now rather than on the first request.
    predict_label(models.intent, _SMOKE_TEXT)
    predict_label(models.token, _SMOKE_TEXT.split()[0])

    logger.info(
        "models loaded intent_version=%s token_version=%s",
        intent_artifact.version,
        token_artifact.version,
    )
    return models
