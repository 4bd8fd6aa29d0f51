"""
Exception types raised by the DAT-RU scoring engine.

Asset and precondition failures are exceptions. Per-field validation results
are plain values (see validator.ValidationOutcome) and never raised.
"""

from typing import Optional


class EngineError(Exception):
    """Base class for all engine failures."""


class ConfigError(EngineError):
    """Configuration file missing, unreadable or inconsistent."""


class MalformedDictionary(EngineError):
    """Lemma list or form map is inconsistent."""

    def __init__(self, message: str, word: Optional[str] = None):
        super().__init__(message)
        self.word = word


class DimensionMismatch(EngineError):
    """Matrix header declares an unexpected vector dimension."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Unexpected dimension: {actual}, expected {expected}")
        self.expected = expected
        self.actual = actual


class SizeMismatch(EngineError):
    """Byte or row count disagrees with what the header or lexicon declares."""

    def __init__(self, expected: int, actual: int, what: str = "matrix bytes"):
        super().__init__(f"Size mismatch ({what}): expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
        self.what = what


class IndexOutOfRange(EngineError):
    def __init__(self, index: int, size: int):
        super().__init__(f"Row index {index} out of range for {size} rows")
        self.index = index
        self.size = size


class InsufficientWords(EngineError):
    def __init__(self, required: int, actual: int):
        super().__init__(f"Need {required} distinct words to score, got {actual}")
        self.required = required
        self.actual = actual


class UnknownLemma(EngineError):
    def __init__(self, lemma: str):
        super().__init__(f"Lemma has no embedding row: {lemma!r}")
        self.lemma = lemma
