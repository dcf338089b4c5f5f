"""Puzzle generation orchestration.

Pipeline: word bank -> placement engine -> numberer -> :class:`Puzzle`.
"""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.constants import (
    DEFAULT_GRID_SIZES,
    DIFFICULTY_LABELS,
    MAX_RANDOM_ATTEMPTS,
    TITLE_TEMPLATE,
    Difficulty,
)
from ..core.models import PlacedWord, Puzzle
from ..data.word_bank import WordBank
from ..utils.logger import get_logger
from .numbering import Numberer
from .placement import PlacementConfig, PlacementEngine


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    difficulty: Difficulty = Difficulty.NORMAL
    size: Optional[int] = None
    seed: Optional[int] = None
    max_random_attempts: int = MAX_RANDOM_ATTEMPTS
    word_bank: Optional[WordBank] = None

    def grid_size(self, difficulty: Difficulty) -> int:
        if self.size is not None:
            return self.size
        return DEFAULT_GRID_SIZES[difficulty]

    def to_placement_config(self) -> PlacementConfig:
        return PlacementConfig(max_random_attempts=self.max_random_attempts)


class PuzzleGenerator:
    """High-level orchestrator producing complete puzzles."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        word_bank: Optional[WordBank] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.word_bank = word_bank or self.config.word_bank or WordBank()
        self.rng = rng or random.Random(self.config.seed)
        self.engine = PlacementEngine(self.config.to_placement_config(), rng=self.rng)
        self.numberer = Numberer()

    def generate(self, difficulty: Difficulty | str | None = None) -> Puzzle:
        tier = Difficulty(difficulty) if difficulty is not None else self.config.difficulty
        size = self.config.grid_size(tier)
        words = self.word_bank.entries(tier)
        LOGGER.info("Generating %s puzzle from %s words on a %sx%s grid", tier.value, len(words), size, size)

        layout = self.engine.generate(words, size)
        numbering = self.numberer.number(layout.grid, layout.placed)
        if layout.skipped:
            LOGGER.info("Left out %s words: %s", len(layout.skipped), ", ".join(i.word for i in layout.skipped))

        rows = layout.grid.to_rows()
        return Puzzle(
            identifier=self._puzzle_id(tier, rows, layout.placed),
            title=TITLE_TEMPLATE.format(label=DIFFICULTY_LABELS[tier]),
            difficulty=tier,
            rows=size,
            cols=size,
            grid=rows,
            clues=numbering.clues(),
            numbers=numbering.numbers,
            placed=layout.placed,
            seed=self.config.seed,
        )

    @staticmethod
    def _puzzle_id(difficulty: Difficulty, rows: Sequence[str], placed: Sequence[PlacedWord]) -> str:
        """Digest of the layout and its clues: the same puzzle always gets the same id."""

        digest = hashlib.sha1()
        digest.update("\n".join(rows).encode())
        for item in placed:
            digest.update(f"|{item.start_row},{item.start_col},{item.direction.value},{item.clue}".encode())
        return f"{difficulty.value}-{len(rows)}x{len(rows)}-{digest.hexdigest()[:12]}"


def generate(difficulty: Difficulty | str = Difficulty.NORMAL, seed: Optional[int] = None) -> Puzzle:
    """Convenience wrapper: one fresh puzzle from the built-in word bank."""

    return PuzzleGenerator(GeneratorConfig(seed=seed)).generate(difficulty)
