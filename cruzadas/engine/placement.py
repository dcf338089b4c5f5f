"""Greedy word placement: intersections first, random positions as fallback."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..core.constants import MAX_RANDOM_ATTEMPTS, Direction
from ..core.exceptions import UnplaceableWord
from ..core.models import PlacedWord, WordItem
from ..utils.logger import get_logger
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)


@dataclass
class PlacementConfig:
    max_random_attempts: int = MAX_RANDOM_ATTEMPTS


@dataclass
class PlacementResult:
    grid: CrosswordGrid
    placed: List[PlacedWord]
    skipped: List[WordItem] = field(default_factory=list)


class PlacementEngine:
    """Lays words onto an empty square grid one at a time.

    The engine is best effort: a word that neither crosses an existing word
    nor fits at one of ``max_random_attempts`` random positions is dropped.
    All randomness comes from ``rng`` so a seeded source reproduces a layout.
    """

    def __init__(
        self,
        config: Optional[PlacementConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or PlacementConfig()
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, words: Sequence[WordItem], grid_size: int) -> PlacementResult:
        grid = CrosswordGrid(grid_size)
        placed: List[PlacedWord] = []
        skipped: List[WordItem] = []

        candidates = list(words)
        self.rng.shuffle(candidates)

        for item in candidates:
            if len(item.word) > grid_size:
                LOGGER.debug("Skipping %s: longer than grid size %s", item.word, grid_size)
                skipped.append(item)
                continue
            try:
                placed.append(self._place_candidate(grid, placed, item))
            except UnplaceableWord as exc:
                LOGGER.debug("Dropping word: %s", exc)
                skipped.append(item)

        LOGGER.info(
            "Placed %s/%s words on a %sx%s grid",
            len(placed),
            len(candidates),
            grid_size,
            grid_size,
        )
        return PlacementResult(grid=grid, placed=placed, skipped=skipped)

    # ------------------------------------------------------------------
    # Placement phases
    # ------------------------------------------------------------------
    def _place_candidate(
        self, grid: CrosswordGrid, placed: Sequence[PlacedWord], item: WordItem
    ) -> PlacedWord:
        result = self._try_intersection(grid, placed, item)
        if result is None:
            result = self._try_random(grid, item)
        if result is None:
            raise UnplaceableWord(
                f"{item.word} has no crossing and no free spot after "
                f"{self.config.max_random_attempts} random attempts"
            )
        return result

    def _try_intersection(
        self, grid: CrosswordGrid, placed: Sequence[PlacedWord], item: WordItem
    ) -> Optional[PlacedWord]:
        word = item.word
        for existing in placed:
            direction = existing.direction.orthogonal
            for i, shared in enumerate(existing.word):
                for j, letter in enumerate(word):
                    if letter != shared:
                        continue
                    if existing.direction is Direction.ACROSS:
                        row, col = existing.start_row - j, existing.start_col + i
                    else:
                        row, col = existing.start_row + i, existing.start_col - j
                    if grid.can_place(word, row, col, direction):
                        return grid.place_word(word, item.clue, row, col, direction)
        return None

    def _try_random(self, grid: CrosswordGrid, item: WordItem) -> Optional[PlacedWord]:
        word = item.word
        span = grid.size - len(word) + 1
        for _ in range(self.config.max_random_attempts):
            direction = Direction.ACROSS if self.rng.random() < 0.5 else Direction.DOWN
            if direction is Direction.ACROSS:
                row = self.rng.randrange(grid.size)
                col = self.rng.randrange(span)
            else:
                row = self.rng.randrange(span)
                col = self.rng.randrange(grid.size)
            if grid.can_place(word, row, col, direction):
                return grid.place_word(word, item.clue, row, col, direction)
        return None
