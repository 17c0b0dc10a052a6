"""Pydantic models for typetrainer data structures."""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Summary(BaseModel):
    """Snapshot of a typing session's metrics, cheap enough to read every frame."""

    wpm: float = Field(..., ge=0, description="Net words per minute (correct keystrokes only)")
    raw_wpm: float = Field(..., ge=0, description="Words per minute over all keystrokes")
    wps: float = Field(..., ge=0, description="Net words per second")
    accuracy: float = Field(..., ge=0, le=1, description="Correct keystrokes / total keystrokes")
    consistency: float = Field(..., ge=0, le=100, description="Speed stability score (0-100)")
    total_chars: int = Field(..., description="Number of characters in the target text")
    correct_chars: int = Field(..., description="Keystrokes that matched their target")
    total_keystrokes: int = Field(..., description="All character keystrokes typed")
    total_errors: int = Field(..., description="Keystrokes that did not match their target")
    backspace_count: int = Field(default=0, description="Number of backspaces used")
    elapsed_time: timedelta = Field(..., description="Typing time excluding pauses")
    completed_words: int = Field(..., description="Words typed through to their boundary")
    total_words: int = Field(..., description="Words in the target text")
    progress: float = Field(..., ge=0, le=1, description="Test progress (0-1)")
    is_completed: bool = Field(default=False, description="Whether the test has finished")

    model_config = ConfigDict(frozen=True, extra="ignore")

    def net_wpm(self) -> float:
        """WPM weighted by accuracy."""
        if self.accuracy > 0:
            return self.wpm * self.accuracy
        return 0.0

    def error_percentage(self) -> float:
        if self.total_chars > 0:
            return self.total_errors / self.total_chars * 100.0
        return 0.0

    def completion_percentage(self) -> float:
        return self.progress * 100.0


class TestResult(BaseModel):
    """Finalized test result handed to the leaderboard writer."""

    __test__ = False

    wpm: float = Field(..., description="Net words per minute")
    raw_wpm: float = Field(..., description="Raw words per minute")
    accuracy: float = Field(..., description="Accuracy (0-1)")
    consistency: float = Field(..., description="Consistency (0-100)")
    error_count: int = Field(..., description="Total wrong keystrokes")
    mode_kind: str = Field(..., description="'time' or 'words'")
    mode_value: int = Field(..., description="Duration in seconds or word count")
    language: str = Field(..., description="Language of the word list")
    numbers: bool = Field(default=False, description="Numbers were mixed in")
    symbols: bool = Field(default=False, description="Symbols were mixed in")
    punctuation: bool = Field(default=False, description="Punctuation was mixed in")
    custom_words: bool = Field(default=False, description="Test used user-supplied words")
    created_at: datetime = Field(default_factory=datetime.now, description="Completion time")

    model_config = ConfigDict(extra="ignore")


class LanguageAsset(BaseModel):
    """Bundled word list for one language."""

    name: str = Field(..., min_length=1, description="Language name")
    words: list[str] = Field(..., min_length=1, description="Word pool")

    model_config = ConfigDict(extra="ignore")

    @field_validator("words")
    @classmethod
    def strip_blank_words(cls, v):
        """Drop empty entries, rejecting lists with no usable words."""
        words = [w.strip() for w in v if w and w.strip()]
        if not words:
            raise ValueError("word list contains no usable words")
        return words
