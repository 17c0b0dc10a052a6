#!/usr/bin/env python3
"""typetrainer - typing speed trainer, line mode driver."""

import argparse
import logging
import os
import sys
import textwrap
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from engine.errors import LexiconError
from engine.language_registry import LanguageRegistry
from engine.lexicon_builder import LexiconBuilder
from engine.models import Summary, TestResult
from engine.session import TypingSession
from utils.config import Config

log = logging.getLogger("typetrainer")


def setup_logging(verbose: bool = False) -> None:
    """Log to a rotating file in the XDG state directory and to stderr."""
    xdg_state_home = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    log_dir = Path(xdg_state_home) / "typetrainer"
    log_dir.mkdir(parents=True, exist_ok=True)

    # 5MB max, keep 5 backups
    file_handler = RotatingFileHandler(
        log_dir / "typetrainer.log", maxBytes=5 * 1024 * 1024, backupCount=5
    )
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[file_handler, stream_handler],
    )


class ReplayClock:
    """Clock set by hand, used to spread a typed line over its measured duration."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="typetrainer", description="Typing speed trainer."
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-t", "--time", type=int, metavar="SECONDS",
                      help="Test duration in seconds. Enforces time mode.")
    mode.add_argument("-c", "--count", type=int, metavar="COUNT",
                      help="Number of words to type. Enforces words mode.")
    mode.add_argument("-w", "--words", metavar="WORDS",
                      help="Custom words for the test. Enforces words mode.")
    parser.add_argument("-n", "--numbers", action="store_true",
                        help="Mix numbers into the test words")
    parser.add_argument("-s", "--symbols", action="store_true",
                        help="Mix symbols into the test words")
    parser.add_argument("-p", "--punctuation", action="store_true",
                        help="Mix punctuation into the test words")
    parser.add_argument("-l", "--language", metavar="LANG",
                        help="Language dictionary the test will use")
    parser.add_argument("--list-languages", action="store_true",
                        help="List available languages and exit")
    parser.add_argument("--graph", type=Path, metavar="PATH",
                        help="Save a WPM chart of the test to PATH")
    parser.add_argument("--json", action="store_true",
                        help="Print the test result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def replay_line(session: TypingSession, clock: ReplayClock, line: str, typing_sec: float) -> None:
    """Feed a typed line into the session with evenly spaced keystroke times.

    In time mode the clock is then moved to the end of the test duration.
    """
    step = typing_sec / max(1, len(line))
    start = clock.now
    for i, ch in enumerate(line):
        clock.now = start + (i + 1) * step
        if session.tick():
            break
        session.handle_input(ch)

    mode = session.tracker.mode
    tracker = session.tracker
    if mode.is_time_mode() and tracker.time_started is not None and not tracker.is_complete():
        clock.now = tracker.time_started + mode.value()
        session.tick()


def format_summary(summary: Summary) -> str:
    return "\n".join([
        f"wpm:         {summary.wpm:.1f}",
        f"raw:         {summary.raw_wpm:.1f}",
        f"accuracy:    {summary.accuracy * 100:.1f}%",
        f"consistency: {summary.consistency:.1f}%",
        f"errors:      {summary.total_errors}",
        f"words:       {summary.completed_words}/{summary.total_words}",
        f"time:        {summary.elapsed_time.total_seconds():.1f}s",
    ])


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    registry = LanguageRegistry()
    if args.list_languages:
        for language in registry.available_languages():
            print(language)
        return 0

    log.info("Starting typetrainer")

    try:
        config = Config.from_cli(args)
    except ValidationError as e:
        print(f"Error: invalid options: {e}", file=sys.stderr)
        return 2

    results: list[TestResult] = []
    clock = ReplayClock()
    try:
        session = TypingSession(
            config, LexiconBuilder(registry), clock=clock, on_result=results.append
        )
    except LexiconError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(textwrap.fill(session.lexicon.text, width=80))
    print()
    started = time.monotonic()
    try:
        line = input("> ")
    except EOFError:
        return 1
    typing_sec = time.monotonic() - started

    replay_line(session, clock, line, typing_sec)
    log.info(f"Replayed {len(line)} characters typed in {typing_sec:.1f}s")
    print()
    print(format_summary(session.summary()))

    if args.json:
        if results:
            print(results[-1].model_dump_json(indent=2))
        else:
            print("Warning: test not completed, result was not recorded", file=sys.stderr)
            print(session.result().model_dump_json(indent=2))
    if args.graph:
        from utils.wpm_chart import save_wpm_chart

        save_wpm_chart(session.tracker.snapshots, args.graph, title=str(session.tracker.mode))
        print(f"Chart saved to {args.graph}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
