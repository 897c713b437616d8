"""Interpreter process entrypoint.

Reads utterances (from the command line, or one per stdin line) and writes one JSON-encoded command
per utterance to stdout. Utterances the parser rejects produce the parser's message instead.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from time import monotonic

from src.app import App, create_app
from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.interpreter.errors import ClassificationError, ParseError
from src.interpreter.parser import parse_command_with_intent

logger = logging.getLogger(__name__)


def handle_line(line: str, app: App) -> str:
    """Parse one utterance and return the reply text.

    `ParseError` never escapes: its message is the reply. `ClassificationError` propagates because
    it means the models are broken.
    """

    started = monotonic()
    try:
        result = parse_command_with_intent(line, models=app.models)
    except ParseError as exc:
        latency_ms = int((monotonic() - started) * 1000)
        logger.info("rejected reason=%s latency_ms=%d", type(exc).__name__, latency_ms)
        return str(exc)

    latency_ms = int((monotonic() - started) * 1000)
    logger.info(
        "handled intent=%s kind=%s latency_ms=%d",
        result.intent,
        result.command.kind,
        latency_ms,
    )
    return result.command.model_dump_json()


def _utterances(args: list[str]) -> Iterable[str]:
    if args:
        yield " ".join(args)
        return
    for line in sys.stdin:
        yield line.rstrip("\r\n")


def main(argv: list[str] | None = None) -> int:
    """Run the interpreter over the given utterances; return the process exit status."""

    parser = argparse.ArgumentParser(description="Interpret task-management utterances.")
    parser.add_argument(
        "utterance",
        nargs="*",
        help="Utterance to parse. Without arguments, every stdin line is parsed.",
    )
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        app = create_app(settings)
        for utterance in _utterances(args.utterance):
            print(handle_line(utterance, app), flush=True)
    except ClassificationError:
        logger.exception("model failure")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
