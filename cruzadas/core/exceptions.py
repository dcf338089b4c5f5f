"""Custom exception hierarchy for crossword generation and solving."""


class CrosswordError(Exception):
    """Base exception for generator and session failures."""


class WordBankError(CrosswordError):
    """Raised when a custom word bank file cannot be parsed."""


class UnplaceableWord(CrosswordError):
    """Raised when a candidate word fits neither by intersection nor at random."""


class InvalidInput(CrosswordError):
    """Raised when player input does not normalize to a single letter."""


class LockedCellEdit(CrosswordError):
    """Raised when an edit targets a cell already confirmed correct."""


class OutOfBoundsMove(CrosswordError):
    """Raised when a coordinate is outside the grid or on a block cell."""


class ProgressStoreError(CrosswordError):
    """Raised when a saved progress document cannot be read."""
