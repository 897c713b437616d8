"""Task index extraction for mark/unmark/delete utterances."""

from __future__ import annotations

from src.interpreter.errors import InvalidIndexError, MissingIndexError

# Largest position the task list accepts (signed 32-bit).
MAX_INDEX = 2**31 - 1


def extract_index(text: str) -> int:
    """Return the first run of decimal digits in the text as a 1-based task position.

    Non-digits before the run are skipped, so the number may appear anywhere in the sentence.

    Raises:
        MissingIndexError: If the text contains no digits.
        InvalidIndexError: If the number is zero or larger than `MAX_INDEX`.
    """

    digits: list[str] = []
    for ch in text or "":
        if ch.isdecimal():
            digits.append(ch)
        elif digits:
            break

    if not digits:
        raise MissingIndexError()

    value = int("".join(digits))
    if value < 1 or value > MAX_INDEX:
        raise InvalidIndexError()
    return value
