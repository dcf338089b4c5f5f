"""Crossword puzzle generator and solving model.

This package exposes the public API surface via:

- ``cruzadas.engine.generator.PuzzleGenerator``: word bank to numbered puzzle.
- ``cruzadas.engine.session.SolvingSession``: player state for one puzzle.
- ``cruzadas.data.word_bank.WordBank``: built-in and file-backed word lists.
"""

from .core.constants import Difficulty, Direction, EventKind
from .core.models import Puzzle, SolveEvent
from .data.word_bank import WordBank
from .engine.generator import GeneratorConfig, PuzzleGenerator, generate
from .engine.session import Game, SessionConfig, SolvingSession

__all__ = [
    "Difficulty",
    "Direction",
    "EventKind",
    "Game",
    "GeneratorConfig",
    "Puzzle",
    "PuzzleGenerator",
    "SessionConfig",
    "SolveEvent",
    "SolvingSession",
    "WordBank",
    "generate",
]

__version__ = "0.1.0"
