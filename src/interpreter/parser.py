"""Utterance parser orchestration.

One pass per utterance: reject empty input, classify the intent, then run only the extractors that
intent needs. Every call returns exactly one `Command` or raises exactly one `ParseError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.interpreter.commands import (
    Command,
    DeadlineCommand,
    DeleteCommand,
    EventCommand,
    IntentLabel,
    ListCommand,
    MarkCommand,
    TodoCommand,
    UnknownCommand,
    UnmarkCommand,
)
from src.interpreter.dates import (
    TimestampFormatError,
    extract_dates,
    remove_timestamp,
    validate_and_format_date_range,
)
from src.interpreter.description import extract_description
from src.interpreter.errors import EmptyInputError, InvalidDeadlineDateError, InvalidEventDateError
from src.interpreter.index import extract_index
from src.interpreter.intent import classify_intent
from src.interpreter.models import Models
from src.interpreter.text import split_tokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Parsed command plus the intent that selected it."""

    command: Command
    intent: IntentLabel


def parse_command_with_intent(text: str, *, models: Models) -> ParseResult:
    """Parse an utterance into a command.

    Strategy:
        1) Reject empty input before touching the models.
        2) Classify the whole utterance into an intent.
        3) Extract the index, dates and/or description that intent requires.

    Raises:
        ParseError: A subclass naming what is wrong with the utterance.
        ClassificationError: If a model cannot score its input.
    """

    if not text:
        raise EmptyInputError()

    intent = classify_intent(text, models.intent)

    command: Command
    if intent == IntentLabel.list:
        command = ListCommand()
    elif intent == IntentLabel.mark:
        command = MarkCommand(index=extract_index(text))
    elif intent == IntentLabel.unmark:
        command = UnmarkCommand(index=extract_index(text))
    elif intent == IntentLabel.delete:
        command = DeleteCommand(index=extract_index(text))
    elif intent == IntentLabel.todo:
        command = TodoCommand(description=extract_description(text, models.token))
    elif intent == IntentLabel.deadline:
        command = _parse_deadline(text, models=models)
    elif intent == IntentLabel.event:
        command = _parse_event(text, models=models)
    else:
        command = UnknownCommand()

    logger.debug("parsed intent=%s kind=%s", intent, command.kind)
    return ParseResult(command=command, intent=intent)


def parse_command(text: str, *, models: Models) -> Command:
    """Parse an utterance into a command (convenience wrapper)."""

    return parse_command_with_intent(text, models=models).command


def _parse_deadline(text: str, *, models: Models) -> DeadlineCommand:
    dates = extract_dates(split_tokens(text))
    if not dates:
        raise InvalidDeadlineDateError()

    # Only the first match is the due date; later matches stay in the text.
    due_date = dates[0]
    try:
        (due,) = validate_and_format_date_range(due_date)
    except TimestampFormatError as exc:
        raise InvalidDeadlineDateError() from exc

    remainder = remove_timestamp(text, due_date).strip()
    description = extract_description(remainder, models.token)
    return DeadlineCommand(description=description, due=due)


def _parse_event(text: str, *, models: Models) -> EventCommand:
    dates = extract_dates(split_tokens(text))
    if len(dates) != 2:
        raise InvalidEventDateError()

    try:
        start, end = validate_and_format_date_range(dates[0], dates[1])
    except TimestampFormatError as exc:
        raise InvalidEventDateError() from exc

    remainder = text
    for matched in dates:
        remainder = remove_timestamp(remainder, matched)

    description = extract_description(remainder.strip(), models.token)
    return EventCommand(description=description, start=start, end=end)
