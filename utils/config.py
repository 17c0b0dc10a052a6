"""Test configuration for typetrainer."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from engine.language_registry import DEFAULT_LANGUAGE
from engine.mode import (
    DEFAULT_TIME,
    DEFAULT_WORD_COUNT,
    MAX_CUSTOM_TIME,
    MAX_CUSTOM_WORD_COUNT,
    MIN_CUSTOM_TIME,
    MIN_CUSTOM_WORD_COUNT,
    Mode,
    ModeKind,
)


class Config(BaseModel):
    """Typing test settings with validation.

    The engine only reads a config; changes come from the command line or
    the session layer.
    """

    mode_kind: ModeKind = Field(
        default=ModeKind.TIME, description="Test mode (time or words)"
    )
    duration_seconds: int = Field(
        default=DEFAULT_TIME,
        ge=MIN_CUSTOM_TIME,
        le=MAX_CUSTOM_TIME,
        description="Test duration in time mode (seconds)",
    )
    word_count: int = Field(
        default=DEFAULT_WORD_COUNT,
        ge=MIN_CUSTOM_WORD_COUNT,
        le=MAX_CUSTOM_WORD_COUNT,
        description="Number of words in words mode",
    )
    language: str = Field(
        default=DEFAULT_LANGUAGE, min_length=1, description="Word list language"
    )
    use_numbers: bool = Field(default=False, description="Mix numbers into the words")
    use_symbols: bool = Field(default=False, description="Mix symbols into the words")
    use_punctuation: bool = Field(
        default=False, description="Mix punctuation into the words"
    )
    custom_words: Optional[str] = Field(
        default=None, description="User-supplied words that replace generation"
    )

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    @field_validator("custom_words")
    @classmethod
    def normalize_custom_words(cls, v):
        """Treat blank custom words as not set."""
        if v is None or not v.strip():
            return None
        return v

    @classmethod
    def from_cli(cls, args: Any) -> "Config":
        """Build a config from parsed command line arguments.

        Custom words force words mode with their own word count. An explicit
        duration forces time mode, a word count forces words mode.
        """
        settings: dict[str, Any] = {
            "use_numbers": getattr(args, "numbers", False),
            "use_symbols": getattr(args, "symbols", False),
            "use_punctuation": getattr(args, "punctuation", False),
        }
        if getattr(args, "language", None):
            settings["language"] = args.language

        custom = getattr(args, "words", None)
        if custom and custom.strip():
            settings["custom_words"] = custom
            settings["mode_kind"] = ModeKind.WORDS
            settings["word_count"] = min(len(custom.split()), MAX_CUSTOM_WORD_COUNT)
        elif getattr(args, "count", None) is not None:
            settings["mode_kind"] = ModeKind.WORDS
            settings["word_count"] = args.count
        elif getattr(args, "time", None) is not None:
            settings["mode_kind"] = ModeKind.TIME
            settings["duration_seconds"] = args.time

        return cls(**settings)

    def current_mode(self) -> Mode:
        if self.mode_kind == ModeKind.WORDS:
            return Mode.words(self.word_count)
        return Mode.time(self.duration_seconds)

    def current_language(self) -> str:
        return self.language

    def using_numbers(self) -> bool:
        return self.use_numbers

    def using_symbols(self) -> bool:
        return self.use_symbols

    def using_punctuation(self) -> bool:
        return self.use_punctuation

    def change_mode(self, mode: Mode) -> None:
        """Switch mode, validating the value against the mode's limits.

        Raises:
            ValueError: If the value is out of range
        """
        if mode.is_time_mode():
            self.duration_seconds = mode.value()
        else:
            self.word_count = mode.value()
        self.mode_kind = mode.kind

    def change_language(self, language: str) -> None:
        self.language = language

    def toggle_numbers(self) -> None:
        self.use_numbers = not self.use_numbers

    def toggle_symbols(self) -> None:
        self.use_symbols = not self.use_symbols

    def toggle_punctuation(self) -> None:
        self.use_punctuation = not self.use_punctuation

    def set_custom_words(self, words: str) -> None:
        self.custom_words = words

    def clear_custom_words(self) -> None:
        self.custom_words = None
