"""Custom exception hierarchy for the shared crossword core."""


class CrosswordError(Exception):
    """Base exception for shared crossword failures."""


class PuzzleConfigError(CrosswordError):
    """Raised when puzzle clue metadata cannot produce a consistent grid."""


class PuzzleLoadError(CrosswordError):
    """Raised when a puzzle cannot be fetched or read from its source."""


class WireFormatError(CrosswordError):
    """Raised when a relay message or puzzle payload cannot be decoded."""
