"""Grid representation and placement helpers."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..core.constants import BLOCK, Bounds, Direction
from ..core.models import Coord, PlacedWord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class CrosswordGrid:
    """Square letter matrix; every cell is ``BLOCK`` or one uppercase letter."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[str]] = [[BLOCK for _ in range(size)] for _ in range(size)]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "CrosswordGrid":
        grid = cls(len(rows))
        for r, row in enumerate(rows):
            if len(row) != grid.size:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {grid.size}")
            grid.cells[r] = list(row)
        return grid

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def letter(self, row: int, col: int) -> str:
        return self.cells[row][col]

    def is_block(self, row: int, col: int) -> bool:
        """Out-of-bounds positions count as blocks."""

        if not self.bounds.contains(row, col):
            return True
        return self.cells[row][col] == BLOCK

    def coords(self) -> Iterable[Coord]:
        for r in range(self.size):
            for c in range(self.size):
                yield r, c

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def can_place(self, word: str, row: int, col: int, direction: Direction) -> bool:
        """Check bounds and letter agreement for ``word`` starting at ``(row, col)``."""

        if not word:
            return False
        dr, dc = direction.step
        end_row = row + dr * (len(word) - 1)
        end_col = col + dc * (len(word) - 1)
        if not (self.bounds.contains(row, col) and self.bounds.contains(end_row, end_col)):
            return False
        for index, letter in enumerate(word):
            existing = self.cells[row + dr * index][col + dc * index]
            if existing != BLOCK and existing != letter:
                return False
        return True

    def place_word(self, word: str, clue: str, row: int, col: int, direction: Direction) -> PlacedWord:
        if not self.can_place(word, row, col, direction):
            raise ValueError(f"Cannot place {word} at {(row, col)} {direction.value}")
        placed = PlacedWord(word=word, clue=clue, start_row=row, start_col=col, direction=direction)
        for (r, c), letter in zip(placed.cells, word):
            self.cells[r][c] = letter
        LOGGER.debug("Placed %s at (%s,%s) %s", word, row, col, direction.value)
        return placed

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_rows(self) -> List[str]:
        return ["".join(row) for row in self.cells]

    def letter_count(self) -> int:
        return sum(1 for r, c in self.coords() if self.cells[r][c] != BLOCK)
