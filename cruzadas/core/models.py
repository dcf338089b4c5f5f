"""Data models supporting the crossword generator and solving session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .constants import Difficulty, Direction, EventKind

Coord = Tuple[int, int]


@dataclass(frozen=True)
class WordItem:
    """A normalized word bank entry."""

    word: str
    clue: str


@dataclass(frozen=True)
class PlacedWord:
    """A word laid onto the grid."""

    word: str
    clue: str
    start_row: int
    start_col: int
    direction: Direction

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Coord]:
        dr, dc = self.direction.step
        return [(self.start_row + dr * i, self.start_col + dc * i) for i in range(self.length)]


@dataclass
class Cell:
    """Solving view of a grid cell."""

    row: int
    col: int
    is_block: bool
    solution: Optional[str] = None
    value: str = ""
    number: Optional[int] = None
    locked: bool = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def is_correct(self) -> bool:
        if self.is_block or not self.value:
            return False
        return self.value.upper() == (self.solution or "").upper()


@dataclass(frozen=True)
class Puzzle:
    """A generated puzzle. Replaced wholesale on restart, never edited."""

    identifier: str
    title: str
    difficulty: Difficulty
    rows: int
    cols: int
    grid: Tuple[str, ...]
    clues: Dict[str, Dict[int, str]]
    numbers: Tuple[Tuple[Optional[int], ...], ...] = ()
    placed: Tuple[PlacedWord, ...] = ()
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # Frozen copies: callers may pass lists they keep mutating.
        object.__setattr__(self, "grid", tuple(self.grid))
        object.__setattr__(self, "numbers", tuple(tuple(row) for row in self.numbers))
        object.__setattr__(self, "placed", tuple(self.placed))
        object.__setattr__(self, "clues", {key: dict(entries) for key, entries in self.clues.items()})

    @property
    def across(self) -> Dict[int, str]:
        return self.clues[Direction.ACROSS.value]

    @property
    def down(self) -> Dict[int, str]:
        return self.clues[Direction.DOWN.value]

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "id": self.identifier,
            "title": self.title,
            "difficulty": self.difficulty.value,
            "rows": self.rows,
            "cols": self.cols,
            "grid": list(self.grid),
            "numbers": [list(row) for row in self.numbers],
            "clues": {
                direction: {str(number): text for number, text in entries.items()}
                for direction, entries in self.clues.items()
            },
            "placed": [
                {
                    "word": item.word,
                    "clue": item.clue,
                    "start": [item.start_row, item.start_col],
                    "direction": item.direction.value,
                }
                for item in self.placed
            ],
            "seed": self.seed,
        }


@dataclass(frozen=True)
class SolveEvent:
    """Transient feedback for the presentation layer."""

    kind: EventKind
    row: int
    col: int
    direction: Optional[Direction] = None
    number: Optional[int] = None
