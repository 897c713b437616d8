"""Labeled training dataset reader.

Both trainers and the tests read the same CSV layout: a header row with `text` and `label`
columns, one labeled example per row. Keeping the validation in one place prevents drift between the
intent and token datasets.
"""

from __future__ import annotations

import csv
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from src.interpreter.commands import INTENT_LABEL_ALIASES
from src.interpreter.models import MODEL_LABELS, ModelKind


class DatasetError(ValueError):
    """Raised when a training dataset is malformed."""


@dataclass(frozen=True)
class LabeledText:
    """One training example."""

    text: str
    label: str


def _canonical_label(raw: str, *, kind: ModelKind) -> str | None:
    value = raw.strip().lower()
    if kind == "intent" and value in INTENT_LABEL_ALIASES:
        return INTENT_LABEL_ALIASES[value].value
    if value in MODEL_LABELS[kind]:
        return value
    return None


def iter_labeled_rows(stream: IO[str], *, kind: ModelKind) -> Iterable[LabeledText]:
    """Yield validated examples from a CSV stream.

    Raises:
        DatasetError: On a missing header column, blank text or a label outside the kind's set.
    """

    reader = csv.DictReader(stream)
    fields = set(reader.fieldnames or ())
    if not {"text", "label"} <= fields:
        raise DatasetError("dataset must have 'text' and 'label' columns")

    for row in reader:
        line = reader.line_num
        text = (row.get("text") or "").strip()
        if not text:
            raise DatasetError(f"line {line}: text is empty")

        label = _canonical_label(row.get("label") or "", kind=kind)
        if label is None:
            raise DatasetError(
                f"line {line}: unknown {kind} label {row.get('label')!r}; "
                f"expected one of {', '.join(MODEL_LABELS[kind])}"
            )
        yield LabeledText(text=text, label=label)


def read_dataset(path: str | Path, *, kind: ModelKind) -> list[LabeledText]:
    """Read and validate a whole CSV dataset from disk."""

    with open(path, encoding="utf-8", newline="") as stream:
        rows = list(iter_labeled_rows(stream, kind=kind))

    if not rows:
        raise DatasetError(f"dataset {path} has no rows")
    return rows


def label_counts(rows: Sequence[LabeledText]) -> dict[str, int]:
    """Count examples per label, most common first."""

    return dict(Counter(row.label for row in rows).most_common())
