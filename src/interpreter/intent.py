"""Whole-utterance intent classification."""

from __future__ import annotations

from src.interpreter.commands import IntentLabel, intent_label_from_raw
from src.interpreter.models import TextClassifier, predict_label


def classify_intent(text: str, classifier: TextClassifier) -> IntentLabel:
    """Return the most likely intent for a non-empty utterance.

    There is no confidence threshold: an utterance sharing no vocabulary with the model still gets
    the model's best guess. Labels outside `IntentLabel` degrade to `IntentLabel.unknown`.
    """

    return intent_label_from_raw(predict_label(classifier, text))
