"""Typed interpreter failures.

Every per-utterance failure derives from `ParseError` and carries a human-readable message that can
be shown to the user as-is. `ClassificationError` is different: it signals broken model state and is
treated as fatal at startup.
"""

from __future__ import annotations

COMMANDS_GUIDE = (
    "Try one of: list | mark <index> | unmark <index> | delete <index> | todo <description> | "
    "deadline <description> d/M/yyyy HHmm | "
    "event <description> d/M/yyyy HHmm d/M/yyyy HHmm"
)

DEADLINE_FORMAT = "A deadline needs one due date, e.g. 'deadline submit report 16/9/2025 1800'."
EVENT_FORMAT = (
    "An event needs exactly two dates, "
    "e.g. 'event project meeting 16/9/2025 1400 16/9/2025 1600'."
)


class ParseError(ValueError):
    """Base class for user-facing failures raised while parsing a single utterance."""


class EmptyInputError(ParseError):
    """Raised when the utterance is empty; no classification is attempted."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"Please enter a command. {COMMANDS_GUIDE}")


class InvalidDeadlineDateError(ParseError):
    """Raised when a deadline utterance has no usable due date."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"The deadline date is missing or invalid. {DEADLINE_FORMAT}")


class InvalidEventDateError(ParseError):
    """Raised when an event utterance does not hold exactly two usable dates."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"The event dates are missing or invalid. {EVENT_FORMAT}")


class InvalidDateRangeError(ParseError):
    """Raised when an event ends strictly before it starts."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "The event cannot end before it starts.")


class MissingIndexError(ParseError):
    """Raised when a mark/unmark/delete utterance contains no task number."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Please include the task number, e.g. 'mark 2'.")


class InvalidIndexError(ParseError):
    """Raised when the task number is zero or too large to be a list position."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "The task number must be a positive whole number.")


class ClassificationError(RuntimeError):
    """Raised when a model cannot be loaded or cannot score its input (fatal)."""
