"""Command schema (Pydantic models).

This schema is the contract between the utterance parser and the task executor. Every parse produces
exactly one of these models; the `kind` field tags the variant.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, TypeAdapter


class IntentLabel(StrEnum):
    """Coarse utterance categories produced by the intent model."""

    list = "list"
    mark = "mark"
    unmark = "unmark"
    delete = "delete"
    todo = "todo"
    deadline = "deadline"
    event = "event"
    unknown = "unknown"


class TokenLabel(StrEnum):
    """Per-token labels produced by the description model."""

    description = "description"
    command = "command"
    other = "other"


# Artifacts trained on the older label set call the list intent "query".
INTENT_LABEL_ALIASES: dict[str, IntentLabel] = {"query": IntentLabel.list}


def intent_label_from_raw(raw: str) -> IntentLabel:
    """Map a raw classifier label onto `IntentLabel`; anything unrecognized is `unknown`."""

    value = (raw or "").strip().lower()
    if value in INTENT_LABEL_ALIASES:
        return INTENT_LABEL_ALIASES[value]
    try:
        return IntentLabel(value)
    except ValueError:
        return IntentLabel.unknown


def token_label_from_raw(raw: str) -> TokenLabel:
    """Map a raw classifier label onto `TokenLabel`; anything unrecognized is `other`."""

    try:
        return TokenLabel((raw or "").strip().lower())
    except ValueError:
        return TokenLabel.other


class _Command(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)


class ListCommand(_Command):
    """Show every task."""

    kind: Literal["list"] = "list"


class MarkCommand(_Command):
    """Mark the task at a 1-based position as done."""

    kind: Literal["mark"] = "mark"
    index: PositiveInt


class UnmarkCommand(_Command):
    """Mark the task at a 1-based position as not done."""

    kind: Literal["unmark"] = "unmark"
    index: PositiveInt


class DeleteCommand(_Command):
    """Delete the task at a 1-based position."""

    kind: Literal["delete"] = "delete"
    index: PositiveInt


class TodoCommand(_Command):
    """Add a task without a date."""

    kind: Literal["todo"] = "todo"
    description: str = ""

    def task_line(self, *, done: bool = False) -> str:
        return f"[T][{_status(done)}] {self.description}"


class DeadlineCommand(_Command):
    """Add a task due at a rendered timestamp."""

    kind: Literal["deadline"] = "deadline"
    description: str = ""
    due: str

    def task_line(self, *, done: bool = False) -> str:
        return f"[D][{_status(done)}] {self.description} (by: {self.due})"


class EventCommand(_Command):
    """Add a task spanning two rendered timestamps."""

    kind: Literal["event"] = "event"
    description: str = ""
    start: str
    end: str

    def task_line(self, *, done: bool = False) -> str:
        return f"[E][{_status(done)}] {self.description} (from: {self.start} to: {self.end})"


class UnknownCommand(_Command):
    """The utterance could not be interpreted."""

    kind: Literal["unknown"] = "unknown"


def _status(done: bool) -> str:
    return "X" if done else " "


Command = Annotated[
    ListCommand
    | MarkCommand
    | UnmarkCommand
    | DeleteCommand
    | TodoCommand
    | DeadlineCommand
    | EventCommand
    | UnknownCommand,
    Field(discriminator="kind"),
]

TaskCommand = TodoCommand | DeadlineCommand | EventCommand

_COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)


def command_from_obj(obj: Any) -> Command:
    """Validate and parse a Command from an arbitrary decoded JSON object."""

    return _COMMAND_ADAPTER.validate_python(obj)
