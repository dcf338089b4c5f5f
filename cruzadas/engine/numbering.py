"""Clue numbering derived from a finished grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import PLACEHOLDER_CLUE, Direction
from ..core.models import PlacedWord
from ..utils.logger import get_logger
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)


@dataclass
class NumberingResult:
    numbers: List[List[Optional[int]]]
    across: Dict[int, str] = field(default_factory=dict)
    down: Dict[int, str] = field(default_factory=dict)

    def clues(self) -> Dict[str, Dict[int, str]]:
        return {Direction.ACROSS.value: dict(self.across), Direction.DOWN.value: dict(self.down)}


def starts_word(grid: CrosswordGrid, row: int, col: int, direction: Direction) -> bool:
    """A start has a block or edge behind it and an open cell after it."""

    if grid.is_block(row, col):
        return False
    dr, dc = direction.step
    return grid.is_block(row - dr, col - dc) and not grid.is_block(row + dr, col + dc)


class Numberer:
    """Assigns sequential clue numbers in row-major order."""

    def number(self, grid: CrosswordGrid, placed: Sequence[PlacedWord]) -> NumberingResult:
        index: Dict[Tuple[int, int, Direction], PlacedWord] = {}
        for item in placed:
            index.setdefault((item.start_row, item.start_col, item.direction), item)

        result = NumberingResult(numbers=[[None] * grid.size for _ in range(grid.size)])
        next_number = 1
        for r, c in grid.coords():
            directions = [d for d in Direction if starts_word(grid, r, c, d)]
            if not directions:
                continue
            result.numbers[r][c] = next_number
            for direction in directions:
                target = result.across if direction is Direction.ACROSS else result.down
                match = index.get((r, c, direction))
                if match is None:
                    LOGGER.debug("No placed word starts at (%s,%s) %s", r, c, direction.value)
                    target[next_number] = PLACEHOLDER_CLUE
                else:
                    target[next_number] = match.clue
            next_number += 1

        LOGGER.debug(
            "Numbered %s starts (%s across, %s down)",
            next_number - 1,
            len(result.across),
            len(result.down),
        )
        return result
