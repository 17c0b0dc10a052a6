"""Generation of the word sequence typed during a test."""

import logging
import random
from typing import Optional

from engine.errors import LexiconError
from engine.language_registry import DEFAULT_LANGUAGE, LanguageRegistry
from engine.mode import Mode
from utils.config import Config

log = logging.getLogger("typetrainer.lexicon")

# Words per second a typist would need to exhaust a time mode test (~360 WPM)
WPS_TARGET: int = 6

SYMBOLS: str = "@#$%&*()+-/=?<>^_`{|}~"
PUNCTUATION: str = ".,!?;:"
NUMBERS: str = "0123456789"

SYMBOL_PROBABILITY: float = 0.20
PUNCTUATION_PROBABILITY: float = 0.30
NUMBER_PROBABILITY: float = 0.15

DUPLICATE_LOOKAHEAD: int = 10

DEFAULT_LEXICON: tuple[str, ...] = (
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "I", "it", "for", "not", "on",
    "with", "he", "as", "you", "do", "at", "this", "but", "his", "by", "from", "they", "we",
    "say", "her", "she", "or", "an", "will", "my", "one", "all", "would", "there", "their",
    "what", "so", "up", "out", "if", "about", "who", "get", "which", "go", "me",
)


def target_word_count(mode: Mode) -> int:
    """Number of words to generate for a mode.

    Time mode over-generates so that even a very fast typist never runs
    out of text before the timer expires.
    """
    if mode.is_time_mode():
        return mode.value() * WPS_TARGET
    return mode.value()


class LexiconBuilder:
    """Builds test word lists, caching loaded languages and their shuffle order.

    One builder is created per application run and reused for every test.
    It is not safe to share between threads.
    """

    def __init__(
        self,
        registry: Optional[LanguageRegistry] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize builder and eagerly load the default language.

        Args:
            registry: Language registry (defaults to the bundled word lists)
            rng: Random number generator, seeded for reproducible tests
        """
        self.registry = registry or LanguageRegistry()
        self.rng = rng or random.Random()
        self.languages: dict[str, list[str]] = {}
        self.shuffled_pools: dict[str, list[int]] = {}

        try:
            self.load_language(DEFAULT_LANGUAGE)
        except LexiconError as e:
            log.warning(f"Default language unavailable ({e}), using built-in word list")
            self._add_default_words()

    def generate_test(self, config: Config) -> list[str]:
        """Generate the words for a test.

        Args:
            config: Current configuration

        Returns:
            Ordered list of words. Custom words are returned as given.

        Raises:
            InvalidLanguage: If the configured language does not exist
            LanguageAssetError: If the language's word list is malformed
        """
        if config.custom_words:
            return config.custom_words.split()

        language = config.current_language()
        self.ensure_language_loaded(language)

        words = self.languages[language]
        shuffled_idxs = self.shuffled_pools[language]
        word_count = target_word_count(config.current_mode())

        selected = [words[shuffled_idxs[i % len(shuffled_idxs)]] for i in range(word_count)]

        # break up the periodic runs left by wrapping around the pool
        self.rng.shuffle(selected)
        self.prevent_consecutive_duplicates(selected)

        lexicon = []
        for word in selected:
            extra = self._pick_extra(config)
            lexicon.append(word + extra if extra else word)

        log.debug(f"Generated {len(lexicon)} {language} words for {config.current_mode()}")
        return lexicon

    def _pick_extra(self, config: Config) -> Optional[str]:
        """Pick at most one symbol, punctuation mark or digit to append to a word."""
        if config.using_symbols() and self.rng.random() < SYMBOL_PROBABILITY:
            return self.rng.choice(SYMBOLS)
        if config.using_punctuation() and self.rng.random() < PUNCTUATION_PROBABILITY:
            return self.rng.choice(PUNCTUATION)
        if config.using_numbers() and self.rng.random() < NUMBER_PROBABILITY:
            return self.rng.choice(NUMBERS)
        return None

    @staticmethod
    def prevent_consecutive_duplicates(words: list[str]) -> None:
        """Swap apart back to back duplicates, looking a bounded distance ahead.

        A duplicate with no different word within the lookahead window is
        left in place.
        """
        for i in range(1, len(words)):
            if words[i] != words[i - 1]:
                continue
            end = min(i + 1 + DUPLICATE_LOOKAHEAD, len(words))
            for j in range(i + 1, end):
                if words[j] != words[i]:
                    words[i], words[j] = words[j], words[i]
                    break

    def ensure_language_loaded(self, language: str) -> None:
        if language not in self.languages:
            self.load_language(language)

    def load_language(self, language: str) -> None:
        """Load a language's words and shuffle a fresh index permutation for it.

        Raises:
            InvalidLanguage: If the language does not exist
            LanguageAssetError: If the word list is malformed
        """
        asset = self.registry.read_language(language)
        self._store(language, list(asset.words))

    def _add_default_words(self) -> None:
        self._store(DEFAULT_LANGUAGE, list(DEFAULT_LEXICON))

    def _store(self, language: str, words: list[str]) -> None:
        idxs = list(range(len(words)))
        self.rng.shuffle(idxs)
        self.languages[language] = words
        self.shuffled_pools[language] = idxs


class Lexicon:
    """The generated words for the current test and the builder that made them."""

    def __init__(self, config: Config, builder: Optional[LexiconBuilder] = None):
        self.builder = builder or LexiconBuilder()
        self.words: list[str] = self.builder.generate_test(config)

    @property
    def text(self) -> str:
        return " ".join(self.words)

    def regenerate(self, config: Config) -> None:
        self.words = self.builder.generate_test(config)
