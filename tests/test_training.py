"""Tests for the dataset reader, the trainer and model artifact loading."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from src.interpreter.commands import DeadlineCommand, TodoCommand
from src.interpreter.errors import ClassificationError
from src.interpreter.models import (
    MODEL_LABELS,
    ModelArtifact,
    Models,
    load_artifact,
    load_models,
    predict_label,
    save_artifact,
)
from src.interpreter.parser import parse_command
from src.training.dataset import DatasetError, LabeledText, iter_labeled_rows, read_dataset
from src.training.train import DEFAULT_CONFIGS, train, train_artifact


def test_iter_rows_validates_and_canonicalizes_labels() -> None:
    stream = io.StringIO("text,label\nshow my tasks,query\nbuy milk, Todo \n")
    rows = list(iter_labeled_rows(stream, kind="intent"))
    assert rows == [
        LabeledText(text="show my tasks", label="list"),
        LabeledText(text="buy milk", label="todo"),
    ]


def test_iter_rows_rejects_unknown_label() -> None:
    stream = io.StringIO("text,label\nbuy,command\nmilk,noun\n")
    with pytest.raises(DatasetError, match="line 3"):
        list(iter_labeled_rows(stream, kind="token"))


def test_iter_rows_rejects_blank_text_and_missing_columns() -> None:
    with pytest.raises(DatasetError):
        list(iter_labeled_rows(io.StringIO("text,label\n ,todo\n"), kind="intent"))
    with pytest.raises(DatasetError):
        list(iter_labeled_rows(io.StringIO("sentence,intent\nlist,list\n"), kind="intent"))


def test_query_alias_is_intent_only() -> None:
    with pytest.raises(DatasetError):
        list(iter_labeled_rows(io.StringIO("text,label\nshow,query\n"), kind="token"))


def test_bundled_datasets_cover_every_label(data_dir: Path) -> None:
    for kind in ("intent", "token"):
        rows = read_dataset(data_dir / f"{kind}.csv", kind=kind)
        assert {row.label for row in rows} == set(MODEL_LABELS[kind])


def test_train_artifact_requires_two_labels() -> None:
    rows = [LabeledText(text="todo", label="command")]
    with pytest.raises(DatasetError):
        train_artifact(rows, kind="token", version="t")


def test_default_configs_differ_per_kind() -> None:
    assert DEFAULT_CONFIGS["intent"].tfidf and DEFAULT_CONFIGS["intent"].stem
    assert not DEFAULT_CONFIGS["token"].tfidf and not DEFAULT_CONFIGS["token"].stop_words


@pytest.fixture
def trained_paths(tmp_path: Path, data_dir: Path) -> tuple[Path, Path]:
    intent_path = tmp_path / "models" / "intent.joblib"
    token_path = tmp_path / "models" / "token.joblib"
    train(kind="intent", data=str(data_dir / "intent.csv"), out=str(intent_path), version="i1")
    train(kind="token", data=str(data_dir / "token.csv"), out=str(token_path), version="t1")
    return intent_path, token_path


def test_trained_artifacts_load_and_classify(trained_paths: tuple[Path, Path]) -> None:
    intent_path, token_path = trained_paths

    with open(intent_path, "rb") as stream:
        artifact = load_artifact(stream, kind="intent")
    assert artifact.version == "i1"
    assert set(artifact.labels) == set(MODEL_LABELS["intent"])

    models = load_models(intent_path, token_path)
    assert predict_label(models.intent, "remove task 3") in MODEL_LABELS["intent"]
    assert predict_label(models.intent, "zzz qqq") in MODEL_LABELS["intent"]
    assert predict_label(models.token, "todo") == "command"


def test_trained_models_drive_the_parser(trained_paths: tuple[Path, Path]) -> None:
    models: Models = load_models(*trained_paths)
    assert predict_label(models.intent, "todo buy milk") == "todo"

    assert parse_command("todo buy milk", models=models) == TodoCommand(description="buy milk")
    command = parse_command("deadline return book by 16/9/2025 1800", models=models)
    assert command == DeadlineCommand(description="return book", due="Sep 16 2025 18:00")


def test_load_artifact_rejects_wrong_kind(trained_paths: tuple[Path, Path]) -> None:
    intent_path, _ = trained_paths
    with open(intent_path, "rb") as stream:
        with pytest.raises(ClassificationError):
            load_artifact(stream, kind="token")


def test_load_artifact_rejects_garbage_and_bad_payloads(tmp_path: Path) -> None:
    with pytest.raises(ClassificationError):
        load_artifact(io.BytesIO(b"not a model"), kind="intent")

    path = tmp_path / "bad.joblib"
    save_artifact(
        ModelArtifact(
            kind="intent",
            version="x",
            labels=(),
            vectorizer=object(),
            classifier=object(),
        ),
        path,
    )
    with open(path, "rb") as stream:
        with pytest.raises(ClassificationError, match="vectorizer"):
            load_artifact(stream, kind="intent")


def test_load_models_fails_fast_on_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ClassificationError):
        load_models(tmp_path / "missing-intent.joblib", tmp_path / "missing-token.joblib")
