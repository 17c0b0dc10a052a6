"""Test modes: fixed duration or fixed word count."""

from dataclasses import dataclass
from enum import Enum

MIN_CUSTOM_TIME: int = 1
MAX_CUSTOM_TIME: int = 300
MIN_CUSTOM_WORD_COUNT: int = 1
MAX_CUSTOM_WORD_COUNT: int = 5000

DEFAULT_TIME: int = 30
DEFAULT_WORD_COUNT: int = 50


class ModeKind(str, Enum):
    """Kind of typing test."""

    TIME = "time"
    WORDS = "words"


@dataclass(frozen=True)
class Mode:
    """Immutable test mode.

    A time mode carries its duration in seconds, a words mode carries the
    number of words to type.
    """

    kind: ModeKind
    amount: int

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError(f"{self.kind.value} mode needs a positive value, got {self.amount}")

    @classmethod
    def time(cls, seconds: int = DEFAULT_TIME) -> "Mode":
        return cls(ModeKind.TIME, seconds)

    @classmethod
    def words(cls, count: int = DEFAULT_WORD_COUNT) -> "Mode":
        return cls(ModeKind.WORDS, count)

    def value(self) -> int:
        """Return the duration in seconds (time mode) or word count (words mode)."""
        return self.amount

    def is_time_mode(self) -> bool:
        return self.kind == ModeKind.TIME

    def is_words_mode(self) -> bool:
        return self.kind == ModeKind.WORDS

    def __str__(self) -> str:
        return f"{self.kind.value} {self.amount}"
