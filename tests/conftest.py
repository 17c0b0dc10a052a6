"""Shared test fixtures for typetrainer tests."""

import json
import random

import pytest

from engine.language_registry import LanguageRegistry
from engine.lexicon_builder import LexiconBuilder


class FakeClock:
    """Clock advanced manually by tests."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Create a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def rng():
    """Create a seeded random number generator."""
    return random.Random(1234)


@pytest.fixture
def languages_dir(tmp_path):
    """Create a temporary directory with a few language assets."""
    lang_dir = tmp_path / "languages"
    lang_dir.mkdir()
    (lang_dir / "english.json").write_text(
        json.dumps({
            "name": "english",
            "words": ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf", "hotel"],
        })
    )
    (lang_dir / "pirate.json").write_text(
        json.dumps({"name": "pirate", "words": ["arr", "ahoy", "matey", "plank"]})
    )
    (lang_dir / "broken.json").write_text("{not json")
    (lang_dir / "empty.json").write_text(json.dumps({"name": "empty", "words": []}))
    return lang_dir


@pytest.fixture
def registry(languages_dir):
    """Create a registry over the temporary languages."""
    return LanguageRegistry(languages_dir)


@pytest.fixture
def builder(registry, rng):
    """Create a seeded lexicon builder over the temporary languages."""
    return LexiconBuilder(registry, rng=rng)
