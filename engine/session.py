"""Typing session controller tying configuration, lexicon and tracker together."""

import logging
import time
from typing import Callable, Optional

from engine.errors import LexiconError, TypingError
from engine.lexicon_builder import Lexicon, LexiconBuilder
from engine.models import Summary, TestResult
from engine.tracker import Tracker
from utils.config import Config

log = logging.getLogger("typetrainer.session")


class TypingSession:
    """Runs typing tests for the input loop.

    Rejected keystrokes (a leading space, backspace at the start, input
    after the test ended) are normal user behavior and are absorbed here
    as no-ops. When a test completes, its result is handed to ``on_result``.
    """

    def __init__(
        self,
        config: Config,
        builder: Optional[LexiconBuilder] = None,
        clock: Callable[[], float] = time.monotonic,
        on_result: Optional[Callable[[TestResult], None]] = None,
    ):
        """Initialize session and generate the first test.

        Args:
            config: Test configuration
            builder: Shared lexicon builder (one per application run)
            clock: Monotonic clock returning seconds
            on_result: Callback called with the result of each completed test
        """
        self.config = config
        self.on_result = on_result
        self.last_result: Optional[TestResult] = None
        self.lexicon = Lexicon(config, builder)
        self.tracker = Tracker(
            self.lexicon.text,
            config.current_mode(),
            clock=clock,
            on_complete=self._on_complete,
        )

    @property
    def builder(self) -> LexiconBuilder:
        return self.lexicon.builder

    def handle_input(self, c: str) -> bool:
        """Feed a typed character to the tracker.

        Returns:
            True if the keystroke was accepted
        """
        try:
            self.tracker.type_char(c)
        except TypingError as e:
            log.debug(f"Ignored input {c!r}: {type(e).__name__}")
            return False
        return True

    def handle_backspace(self) -> bool:
        try:
            self.tracker.backspace()
        except TypingError as e:
            log.debug(f"Ignored backspace: {type(e).__name__}")
            return False
        return True

    def toggle_pause(self) -> None:
        self.tracker.toggle_pause()

    def tick(self) -> bool:
        """Check time mode expiry; call once per loop iteration.

        Returns:
            True if the test is completed
        """
        return self.tracker.check_completion()

    def summary(self) -> Summary:
        return self.tracker.summary()

    def redo(self) -> None:
        """Run the same words again."""
        self.last_result = None
        self.tracker.reset(self.lexicon.text, self.config.current_mode())

    def restart(self) -> None:
        """Generate new words for the current configuration and start over."""
        self.last_result = None
        self.lexicon.regenerate(self.config)
        self.tracker.reset(self.lexicon.text, self.config.current_mode())

    def change_language(self, language: str) -> bool:
        """Switch to another language and start a new test.

        A language that cannot be loaded is rejected and the current one is kept.

        Returns:
            True if the language was switched
        """
        try:
            self.builder.ensure_language_loaded(language)
        except LexiconError as e:
            log.warning(
                f"Could not switch to {language} ({e}), "
                f"keeping {self.config.current_language()}"
            )
            return False

        self.config.change_language(language)
        self.restart()
        log.info(f"Switched language to {language}")
        return True

    def result(self) -> TestResult:
        """Build the record of the current test for the leaderboard."""
        summary = self.tracker.summary()
        mode = self.tracker.mode
        return TestResult(
            wpm=summary.wpm,
            raw_wpm=summary.raw_wpm,
            accuracy=summary.accuracy,
            consistency=summary.consistency,
            error_count=summary.total_errors,
            mode_kind=mode.kind.value,
            mode_value=mode.value(),
            language=self.config.current_language(),
            numbers=self.config.using_numbers(),
            symbols=self.config.using_symbols(),
            punctuation=self.config.using_punctuation(),
            custom_words=self.config.custom_words is not None,
        )

    def _on_complete(self, summary: Summary) -> None:
        self.last_result = self.result()
        if self.on_result:
            self.on_result(self.last_result)
