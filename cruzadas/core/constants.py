"""Shared constants and enumerations for the crossword generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Difficulty(str, Enum):
    """Word bank tiers."""

    NORMAL = "normal"
    HARD = "hard"


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def orthogonal(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class EventKind(str, Enum):
    """Feedback emitted by the solving session."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    WORD_COMPLETED = "word_completed"


BLOCK = "."
PLACEHOLDER_CLUE = "—"

UP: Tuple[int, int] = (-1, 0)
DOWN: Tuple[int, int] = (1, 0)
LEFT: Tuple[int, int] = (0, -1)
RIGHT: Tuple[int, int] = (0, 1)
ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = (RIGHT, DOWN, LEFT, UP)

DEFAULT_GRID_SIZES: Dict[Difficulty, int] = {
    Difficulty.NORMAL: 13,
    Difficulty.HARD: 15,
}
DIFFICULTY_LABELS: Dict[Difficulty, str] = {
    Difficulty.NORMAL: "Normal",
    Difficulty.HARD: "Difícil",
}
TITLE_TEMPLATE = "Palavras Cruzadas ({label})"

MAX_RANDOM_ATTEMPTS = 200
CLEAR_DELAY_SECONDS = 0.8


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
