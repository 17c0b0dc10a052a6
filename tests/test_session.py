"""Tests for TypingSession."""

import pytest

from engine.mode import Mode
from engine.models import TestResult
from engine.session import TypingSession
from utils.config import Config


@pytest.fixture
def config():
    """Create a five word config."""
    config = Config()
    config.change_mode(Mode.words(5))
    return config


@pytest.fixture
def results():
    return []


@pytest.fixture
def session(config, builder, clock, results):
    """Create a session over the temporary languages."""
    return TypingSession(config, builder, clock=clock, on_result=results.append)


def type_all(session, clock, step=0.25):
    for ch in session.lexicon.text:
        session.handle_input(ch)
        clock.advance(step)


class TestTypingSession:
    """Test the session controller."""

    def test_initial_test(self, session):
        assert len(session.lexicon.words) == 5
        assert session.tracker.target_text == session.lexicon.text
        assert session.tracker.mode == Mode.words(5)
        assert session.tracker.is_idle()

    def test_rejected_input_absorbed(self, session):
        assert not session.handle_input(" ")
        assert not session.handle_backspace()
        assert session.tracker.is_idle()

    def test_accepted_input(self, session):
        first = session.lexicon.text[0]
        assert session.handle_input(first)
        assert session.handle_backspace()
        assert session.tracker.cursor_position == 0

    def test_completion_produces_result(self, session, clock, results):
        type_all(session, clock)
        assert session.tracker.is_complete()
        assert len(results) == 1
        assert results[0] is session.last_result
        assert isinstance(results[0], TestResult)
        assert results[0].error_count == 0
        assert results[0].accuracy == 1.0
        assert results[0].mode_kind == "words"
        assert results[0].mode_value == 5
        assert results[0].language == "english"
        assert not results[0].custom_words

    def test_input_after_completion_ignored(self, session, clock):
        type_all(session, clock)
        assert not session.handle_input("a")
        assert not session.handle_backspace()

    def test_tick_completes_time_mode(self, builder, clock, results):
        session = TypingSession(
            Config(duration_seconds=3), builder, clock=clock, on_result=results.append
        )
        session.handle_input(session.lexicon.text[0])
        clock.advance(2)
        assert not session.tick()
        clock.advance(1)
        assert session.tick()
        assert session.summary().is_completed
        assert results[0].mode_kind == "time"
        assert results[0].mode_value == 3

    def test_toggle_pause(self, session):
        session.handle_input(session.lexicon.text[0])
        session.toggle_pause()
        assert session.tracker.is_paused()
        assert not session.handle_input(session.lexicon.text[1])
        session.toggle_pause()
        assert session.handle_input(session.lexicon.text[1])

    def test_redo_keeps_words(self, session, clock):
        text = session.lexicon.text
        type_all(session, clock)
        session.redo()
        assert session.tracker.is_idle()
        assert session.tracker.target_text == text
        assert session.last_result is None

    def test_restart_generates_new_test(self, session, config):
        session.handle_input(session.lexicon.text[0])
        config.change_mode(Mode.words(8))
        session.restart()
        assert session.tracker.is_idle()
        assert len(session.lexicon.words) == 8
        assert session.tracker.mode == Mode.words(8)
        assert session.tracker.target_text == session.lexicon.text

    def test_change_language(self, session, config):
        assert session.change_language("pirate")
        assert config.current_language() == "pirate"
        assert set(session.lexicon.words) <= {"arr", "ahoy", "matey", "plank"}

    @pytest.mark.parametrize("language", ["klingon", "broken", "empty"])
    def test_change_language_rejected(self, session, config, language):
        """Test that an unloadable language keeps the current test."""
        text = session.lexicon.text
        assert not session.change_language(language)
        assert config.current_language() == "english"
        assert session.lexicon.text == text

    def test_result_reflects_toggles(self, builder, clock):
        config = Config(custom_words="hello world", use_numbers=True)
        config.change_mode(Mode.words(2))
        session = TypingSession(config, builder, clock=clock)
        result = session.result()
        assert result.numbers
        assert not result.symbols
        assert result.custom_words
        assert session.lexicon.words == ["hello", "world"]

    def test_result_callback_error_does_not_propagate(self, builder, clock):
        def fail(result):
            raise RuntimeError("boom")

        session = TypingSession(Config(custom_words="hi"), builder, clock=clock, on_result=fail)
        session.handle_input("h")
        session.handle_input("i")
        assert session.tracker.is_complete()
        assert session.last_result is not None
