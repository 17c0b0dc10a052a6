"""Exceptions raised by the typing engine."""


class TypetrainerError(Exception):
    """Base exception for typetrainer errors."""

    pass


class TypingError(TypetrainerError):
    """Base exception for rejected typing events.

    These represent normal user behavior (mashing backspace at the start of
    the test, pressing space before typing anything) and are expected to be
    ignored by the input layer.
    """

    pass


class IllegalSpaceCharacter(TypingError):
    """Raised when a space is typed at the start of the test or of a word."""

    pass


class IllegalBackspace(TypingError):
    """Raised when backspace is pressed with nothing left to erase."""

    pass


class TypingTestNotInProgress(TypingError):
    """Raised when input arrives for a completed or paused test."""

    pass


class LexiconError(TypetrainerError):
    """Base exception for word list loading errors."""

    def __init__(self, language: str, message: str):
        super().__init__(message)
        self.language = language


class InvalidLanguage(LexiconError):
    """Raised when the requested language has no bundled word list."""

    def __init__(self, language: str):
        super().__init__(language, f"Invalid language: {language}")


class LanguageAssetError(LexiconError):
    """Raised when a language word list cannot be read or deserialized."""

    pass
