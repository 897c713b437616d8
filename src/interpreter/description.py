"""Token-level description extraction.

Every whitespace token is classified on its own, with no surrounding context, as `command`,
`description` or `other`. The first `command` token opens the description: only `description`
tokens after it are kept.
"""

from __future__ import annotations

from src.interpreter.commands import TokenLabel, token_label_from_raw
from src.interpreter.models import TextClassifier, predict_label
from src.interpreter.text import split_tokens


def extract_description(text: str, classifier: TextClassifier) -> str:
    """Return the task description found in an utterance, or `""` if no command word is present."""

    kept: list[str] = []
    command_found = False

    for token in split_tokens(text):
        label = token_label_from_raw(predict_label(classifier, token))

        if label == TokenLabel.command:
            command_found = True
            continue

        if command_found and label == TokenLabel.description:
            kept.append(token)

    return " ".join(kept).strip()
