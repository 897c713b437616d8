"""Process logging for the interpreter and trainer.

stdout carries exactly one reply per utterance, so log records always go to stderr. Python warnings
(scikit-learn warns when an artifact was pickled by a different release) are routed through logging
instead of being printed raw.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_HANDLER_NAME = "task-interpreter"

# Chatty below WARNING while loading artifacts and stemmers.
_QUIET_LOGGERS: tuple[str, ...] = ("joblib", "nltk", "sklearn")


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name (argument, then `LOG_LEVEL`, then INFO) to its numeric value.

    Raises:
        ValueError: If the name is not a standard logging level.
    """

    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    value = logging.getLevelNamesMapping().get(name)
    if value is None:
        raise ValueError(f"unknown log level: {name!r}")
    return value


def configure_logging(level: str | None = None, *, stream: TextIO | None = None) -> logging.Handler:
    """Install the process log handler on the root logger and return it.

    Calling again replaces the handler from the previous call rather than stacking a second one.
    """

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.set_name(_HANDLER_NAME)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
            existing.close()
    root.addHandler(handler)
    root.setLevel(resolve_log_level(level))

    logging.captureWarnings(True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
