"""Typing session state machine with live metrics."""

import logging
import time
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Callable, Iterator, Optional

from engine.errors import (
    IllegalBackspace,
    IllegalSpaceCharacter,
    TypingTestNotInProgress,
)
from engine.mode import Mode
from engine.models import Summary
from engine.wpm_calculator import (
    calculate_accuracy,
    calculate_consistency,
    calculate_progress,
    calculate_wpm,
)

log = logging.getLogger("typetrainer.tracker")

SNAPSHOT_INTERVAL_SEC: float = 1.0


class TypingStatus(str, Enum):
    """Lifecycle of a typing test."""

    IDLE = "idle"
    TYPING = "typing"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass
class Token:
    """One character position of the target text."""

    target: str
    is_wrong: bool = False
    is_skipped: bool = False


@dataclass
class Word:
    """A space-delimited group of tokens.

    ``start`` is the index of the word's first token and ``end`` the index
    just past its last letter (the trailing space, if any).

    ``error_count`` counts every wrong keystroke made in the word, including
    repeated mistakes at the same position. It is kept after the word is
    completed or skipped.
    """

    target: str
    start: int
    end: int
    completed: bool = False
    error_count: int = 0
    start_time: Optional[float] = field(default=None)
    end_time: Optional[float] = field(default=None)


class Tracker:
    """Turns keystroke events into per-character outcomes and live metrics.

    A tracker is created per typing session. It is driven synchronously by
    ``type_char``/``backspace`` from the input loop and read by the renderer
    through ``tokens``, ``cursor_position``, ``status`` and ``summary()``.
    """

    def __init__(
        self,
        text: str,
        mode: Mode,
        clock: Callable[[], float] = time.monotonic,
        on_complete: Optional[Callable[[Summary], None]] = None,
    ):
        """Initialize tracker.

        Args:
            text: Target text to type against
            mode: Test mode (time or words)
            clock: Monotonic clock returning seconds
            on_complete: Callback called with the final summary when the test completes
        """
        self.clock = clock
        self.on_complete = on_complete
        self.reset(text, mode)

    def reset(self, text: str, mode: Optional[Mode] = None) -> None:
        """Start over with the given text, keeping the current mode unless one is given."""
        if mode is not None:
            self.mode = mode

        self.target_text = " ".join(text.split())
        self.tokens: list[Token] = [Token(target=ch) for ch in self.target_text]
        self.words, self._token_word = self._build_words(self.target_text)

        self.status = TypingStatus.IDLE
        self.cursor_position = 0
        self.current_word_idx = 0
        self.user_input: list[Optional[str]] = []

        self.total_keystrokes = 0
        self.correct_keystrokes = 0
        self.total_errors = 0
        self.backspace_count = 0
        self._completed_words = 0

        self.time_started: Optional[float] = None
        self.time_ended: Optional[float] = None
        self.time_paused = 0.0
        self._pause_started: Optional[float] = None

        self.snapshots: list[float] = []
        self._last_snapshot_sec = 0.0
        self._last_snapshot_correct = 0

        self.wpm = 0.0
        self.raw_wpm = 0.0
        self.accuracy = 0.0
        self.consistency = 100.0
        self._summary = self._build_summary()

        if self.words:
            log.debug(f"First word: {self.words[0]}")
        if self.tokens:
            log.debug(f"First token: {self.tokens[0]}")

    @staticmethod
    def _build_words(text: str) -> tuple[list[Word], list[int]]:
        """Group tokens into words.

        Returns:
            Tuple of (words, owning word index per token). A space belongs
            to the word it terminates.
        """
        words: list[Word] = []
        token_word: list[int] = []
        start = 0
        for i, ch in enumerate(text):
            token_word.append(len(words))
            if ch == " ":
                words.append(Word(target=text[start:i], start=start, end=i))
                start = i + 1
        if start < len(text):
            words.append(Word(target=text[start:], start=start, end=len(text)))
        return words, token_word

    @property
    def current_pos(self) -> int:
        return self.cursor_position

    @property
    def correct_chars(self) -> int:
        return self.correct_keystrokes

    def is_idle(self) -> bool:
        return self.status == TypingStatus.IDLE

    def is_typing(self) -> bool:
        return self.status == TypingStatus.TYPING

    def is_paused(self) -> bool:
        return self.status == TypingStatus.PAUSED

    def is_complete(self) -> bool:
        return self.status == TypingStatus.COMPLETED

    def current_target_char(self) -> Optional[str]:
        if self.cursor_position < len(self.tokens):
            return self.tokens[self.cursor_position].target
        return None

    def words_iter(self) -> Iterator[Word]:
        return iter(self.words)

    def start_typing(self) -> None:
        """Move from idle to typing and start the clock."""
        if self.status != TypingStatus.IDLE:
            return
        now = self.clock()
        self.status = TypingStatus.TYPING
        self.time_started = now
        if self.words:
            self.words[0].start_time = now
        self._refresh_summary()

    def pause(self) -> None:
        if self.status != TypingStatus.TYPING:
            return
        self.status = TypingStatus.PAUSED
        self._pause_started = self.clock()
        self._refresh_summary()

    def resume(self) -> None:
        if self.status != TypingStatus.PAUSED:
            return
        if self._pause_started is not None:
            self.time_paused += self.clock() - self._pause_started
            self._pause_started = None
        self.status = TypingStatus.TYPING
        self._refresh_summary()

    def toggle_pause(self) -> None:
        """Pause a running test or resume a paused one; no-op otherwise."""
        if self.status == TypingStatus.TYPING:
            self.pause()
        elif self.status == TypingStatus.PAUSED:
            self.resume()

    def type_char(self, c: str) -> None:
        """Process one typed character.

        Args:
            c: The typed character

        Raises:
            TypingTestNotInProgress: If the test is completed or paused, or its
                duration ran out (the test is completed first)
            IllegalSpaceCharacter: If a space is typed before any letter of the current word
        """
        if len(c) != 1:
            raise ValueError(f"Expected a single character, got {c!r}")
        self._complete_if_expired()
        if self.status in (TypingStatus.COMPLETED, TypingStatus.PAUSED):
            raise TypingTestNotInProgress()
        if self.cursor_position >= len(self.tokens):
            raise TypingTestNotInProgress()
        if c == " " and self._typed_in_current_word() == 0:
            raise IllegalSpaceCharacter()

        if self.status == TypingStatus.IDLE:
            self.start_typing()

        now = self.clock()
        word = self.words[self._token_word[self.cursor_position]]
        if word.start_time is None:
            word.start_time = now

        token = self.tokens[self.cursor_position]
        if c == " " and token.target != " ":
            self._skip_word(word)
        else:
            self.user_input.append(c)
            if c == token.target:
                token.is_wrong = False
                self.correct_keystrokes += 1
            else:
                token.is_wrong = True
                self.total_errors += 1
                word.error_count += 1
            self.cursor_position += 1

        self.total_keystrokes += 1
        self._sync_words(now)
        self._update_metrics()

        if self.cursor_position >= len(self.tokens):
            self._complete(now)
        else:
            self._refresh_summary()

    def backspace(self) -> None:
        """Erase the last keystroke.

        Each call undoes exactly one keystroke. A skip is a single keystroke,
        so one backspace after a skip restores the cursor to where the space
        was typed, popping the boundary space and every skipped position and
        clearing their skipped flags. Wrong flags are left alone until the
        position is typed again.

        Raises:
            TypingTestNotInProgress: If the test is completed or paused, or its
                duration ran out (the test is completed first)
            IllegalBackspace: If the cursor is at the start of the text
        """
        self._complete_if_expired()
        if self.status in (TypingStatus.COMPLETED, TypingStatus.PAUSED):
            raise TypingTestNotInProgress()
        if self.cursor_position == 0:
            raise IllegalBackspace()

        self._retreat()
        while self.user_input and self.user_input[-1] is None:
            self._retreat()

        self.backspace_count += 1
        self._update_metrics()
        self._refresh_summary()

    def check_completion(self) -> bool:
        """Driving-loop hook: refresh metrics and complete the test when it is due.

        Returns:
            True if the test is completed after the check
        """
        if self.status != TypingStatus.TYPING:
            return self.is_complete()

        now = self.clock()
        if self.should_complete():
            self._complete(now)
            return True

        self._update_metrics()
        self._refresh_summary()
        return False

    def _complete_if_expired(self) -> None:
        """Complete a time mode test whose duration ran out since the last check."""
        if (
            self.status == TypingStatus.TYPING
            and self.mode.is_time_mode()
            and self.should_complete()
        ):
            self._complete(self.clock())

    def should_complete(self) -> bool:
        if self.cursor_position >= len(self.tokens):
            return True
        if self.mode.is_time_mode() and self.time_started is not None:
            return self.elapsed_seconds() >= self.mode.value()
        return False

    def elapsed_seconds(self) -> float:
        """Typing time in seconds, excluding time spent paused."""
        if self.time_started is None:
            return 0.0
        end = self.time_ended if self.time_ended is not None else self.clock()
        paused = self.time_paused
        if self._pause_started is not None:
            paused += end - self._pause_started
        return max(0.0, end - self.time_started - paused)

    def elapsed_time(self) -> timedelta:
        return timedelta(seconds=self.elapsed_seconds())

    def progress(self) -> float:
        """Fraction of the test done: text typed in words mode, time used in time mode."""
        if self.mode.is_words_mode():
            return calculate_progress(self.cursor_position, len(self.tokens))
        if self.status == TypingStatus.COMPLETED:
            return 1.0
        return calculate_progress(self.elapsed_seconds(), self.mode.value())

    def summary(self) -> Summary:
        """Return the metrics snapshot taken at the last mutation."""
        return self._summary

    def _typed_in_current_word(self) -> int:
        if self.cursor_position >= len(self.tokens):
            return 0
        word = self.words[self._token_word[self.cursor_position]]
        return self.cursor_position - word.start

    def _skip_word(self, word: Word) -> None:
        """Jump past the rest of ``word`` onto the start of the next one."""
        boundary = word.end
        for i in range(self.cursor_position, boundary):
            self.tokens[i].is_skipped = True
            self.user_input.append(None)

        if boundary < len(self.tokens):
            self.user_input.append(" ")
            self.cursor_position = boundary + 1
        else:
            self.cursor_position = boundary
        log.debug(f"Skipped rest of word {word.target!r}")

    def _retreat(self) -> None:
        """Step the cursor back one position, reopening its word."""
        self.cursor_position -= 1
        entry = self.user_input.pop()
        if entry is None:
            self.tokens[self.cursor_position].is_skipped = False

        self.current_word_idx = self._token_word[self.cursor_position]
        word = self.words[self.current_word_idx]
        if word.completed:
            word.completed = False
            word.end_time = None
            self._completed_words -= 1

    def _sync_words(self, now: float) -> None:
        """Mark the word just finished as completed and advance the word index."""
        last = self.cursor_position - 1
        at_end = self.cursor_position >= len(self.tokens)
        if self.tokens[last].target == " " or at_end:
            word = self.words[self._token_word[last]]
            if not word.completed:
                word.completed = True
                word.end_time = now
                self._completed_words += 1

        if not at_end:
            self.current_word_idx = self._token_word[self.cursor_position]

    def _update_metrics(self) -> None:
        elapsed = self.elapsed_seconds()
        elapsed_ms = elapsed * 1000.0
        self.raw_wpm = calculate_wpm(self.total_keystrokes, elapsed_ms)
        self.wpm = calculate_wpm(self.correct_keystrokes, elapsed_ms)
        self.accuracy = calculate_accuracy(self.correct_keystrokes, self.total_keystrokes)
        self._record_snapshot(elapsed)
        self.consistency = calculate_consistency(self.snapshots)

    def _record_snapshot(self, elapsed: float) -> None:
        """Record the WPM of the interval since the last sample, at most once per second."""
        interval = elapsed - self._last_snapshot_sec
        if interval < SNAPSHOT_INTERVAL_SEC:
            return
        typed = self.correct_keystrokes - self._last_snapshot_correct
        self.snapshots.append(calculate_wpm(typed, interval * 1000.0))
        self._last_snapshot_sec = elapsed
        self._last_snapshot_correct = self.correct_keystrokes

    def _complete(self, now: float) -> None:
        if self._pause_started is not None:
            self.time_paused += now - self._pause_started
            self._pause_started = None

        end = now
        if self.mode.is_time_mode() and self.time_started is not None:
            deadline = self.time_started + self.time_paused + self.mode.value()
            end = min(end, deadline)

        self.time_ended = end
        self.status = TypingStatus.COMPLETED
        self._update_metrics()
        self._refresh_summary()

        log.info(
            f"Test completed ({self.mode}): {self.wpm:.1f} wpm, "
            f"{self.accuracy * 100:.1f}% accuracy, {self.total_errors} errors"
        )

        if self.on_complete:
            try:
                self.on_complete(self._summary)
            except Exception as e:
                log.error(f"Error in test complete callback: {e}")

    def _refresh_summary(self) -> None:
        self._summary = self._build_summary()

    def _build_summary(self) -> Summary:
        return Summary(
            wpm=self.wpm,
            raw_wpm=self.raw_wpm,
            wps=self.wpm / 60.0,
            accuracy=self.accuracy,
            consistency=self.consistency,
            total_chars=len(self.tokens),
            correct_chars=self.correct_keystrokes,
            total_keystrokes=self.total_keystrokes,
            total_errors=self.total_errors,
            backspace_count=self.backspace_count,
            elapsed_time=self.elapsed_time(),
            completed_words=self._completed_words,
            total_words=len(self.words),
            progress=self.progress(),
            is_completed=self.is_complete(),
        )
