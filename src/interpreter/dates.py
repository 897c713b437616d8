"""Strict timestamp extraction and rendering.

Timestamps are written as two tokens, `d/M/yyyy HHmm` (e.g. `16/9/2025 1800`), and rendered as
`MMM d yyyy HH:mm` (e.g. `Sep 16 2025 18:00`). Month names are fixed English abbreviations so the
rendered form does not depend on the process locale.

Field ranges are checked strictly (day 1-31, month 1-12, minute 0-59), but a day past the end of
its month is clamped to the month's last day (`31/4/2025` is Apr 30) and `2400` is midnight at the
start of the next day.
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Sequence
from datetime import datetime, timedelta

from src.interpreter.errors import InvalidDateRangeError

_MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_TIMESTAMP_RE = re.compile(
    r"(?P<day>\d+)/(?P<month>\d+)/(?P<year>\d{4}) (?P<hour>\d{2})(?P<minute>\d{2})",
    flags=re.ASCII,
)


class TimestampFormatError(ValueError):
    """Raised when a string is not a valid `d/M/yyyy HHmm` timestamp."""


def parse_timestamp(value: str) -> datetime:
    """Parse a strict `d/M/yyyy HHmm` timestamp.

    Day and month take any number of digits (`016/09/2025` is Sep 16). A day of 29-31 that does
    not exist in its month resolves to the month's last day; `2400` resolves to 00:00 on the
    following day.

    Raises:
        TimestampFormatError: If the text does not match the format or a field is out of range
            (day 1-31, month 1-12, hour 0-23 or 2400, minute 0-59, year 0001-9999).
    """

    match = _TIMESTAMP_RE.fullmatch(value or "")
    if not match:
        raise TimestampFormatError(f"not a d/M/yyyy HHmm timestamp: {value!r}")

    year = int(match.group("year"))
    month = int(match.group("month"))
    day = int(match.group("day"))
    hour = int(match.group("hour"))
    minute = int(match.group("minute"))

    if not (1 <= month <= 12 and 1 <= day <= 31 and 0 <= minute <= 59):
        raise TimestampFormatError(f"invalid date or time: {value!r}")
    if hour > 24 or (hour == 24 and minute != 0):
        raise TimestampFormatError(f"invalid date or time: {value!r}")

    try:
        day = min(day, calendar.monthrange(year, month)[1])
        if hour == 24:
            return datetime(year, month, day) + timedelta(days=1)
        return datetime(year, month, day, hour, minute)
    except (ValueError, OverflowError) as exc:
        raise TimestampFormatError(f"invalid date or time: {value!r}") from exc


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as `MMM d yyyy HH:mm`."""

    month = _MONTH_ABBREVIATIONS[value.month - 1]
    return f"{month} {value.day} {value.year:04d} {value.hour:02d}:{value.minute:02d}"


def extract_dates(tokens: Sequence[str]) -> list[str]:
    """Return every adjacent token pair that parses as a timestamp, in left-to-right order.

    Windows overlap: the pair starting at `i + 1` is tested even when the pair at `i` matched.
    """

    found: list[str] = []
    for first, second in zip(tokens, tokens[1:]):
        candidate = f"{first} {second}"
        try:
            parse_timestamp(candidate)
        except TimestampFormatError:
            continue
        found.append(candidate)
    return found


def validate_and_format_date_range(*timestamps: str) -> tuple[str, ...]:
    """Render one due timestamp, or a chronologically valid start/end pair.

    Raises:
        TimestampFormatError: If any timestamp fails to parse.
        InvalidDateRangeError: If two timestamps are given and the end is before the start.
        ValueError: If called with anything other than one or two timestamps.
    """

    if len(timestamps) == 1:
        return (format_timestamp(parse_timestamp(timestamps[0])),)

    if len(timestamps) == 2:
        start = parse_timestamp(timestamps[0])
        end = parse_timestamp(timestamps[1])
        if end < start:
            raise InvalidDateRangeError()
        return format_timestamp(start), format_timestamp(end)

    raise ValueError(f"expected one or two timestamps, got {len(timestamps)}")


def remove_timestamp(text: str, timestamp: str) -> str:
    """Remove the first occurrence of a matched timestamp from the raw utterance.

    The two tokens of the timestamp may be separated by any whitespace run in the raw text.
    """

    date_part, _, time_part = timestamp.partition(" ")
    pattern = re.escape(date_part) + r"[ \t\n\r\f\v]+" + re.escape(time_part)
    return re.sub(pattern, "", text, count=1)
