"""Pretty-print helpers for puzzles and solving sessions."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable, List

from ..core.constants import BLOCK, Direction

if TYPE_CHECKING:
    from ..core.models import Puzzle
    from ..engine.session import SolvingSession


BLOCK_SYMBOL = "#"
EMPTY_SYMBOL = "_"
ACTIVE_SYMBOL = "*"


def _render(rows: int, cols: int, symbol: Callable[[int, int], str]) -> str:
    header_cells = [f"{c:>2}" for c in range(cols)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * cols - 1))
    for r in range(rows):
        row_render = " ".join(f"{symbol(r, c):>2}" for c in range(cols))
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_solution(puzzle: Puzzle) -> str:
    def symbol(r: int, c: int) -> str:
        letter = puzzle.grid[r][c]
        return BLOCK_SYMBOL if letter == BLOCK else letter

    return _render(puzzle.rows, puzzle.cols, symbol)


def format_numbers(puzzle: Puzzle) -> str:
    def symbol(r: int, c: int) -> str:
        if puzzle.grid[r][c] == BLOCK:
            return BLOCK_SYMBOL
        number = puzzle.numbers[r][c] if puzzle.numbers else None
        return str(number) if number is not None else EMPTY_SYMBOL

    return _render(puzzle.rows, puzzle.cols, symbol)


def format_session(session: SolvingSession) -> str:
    """Entered letters; the active cell shows as ``*`` or a lowercase letter."""

    def symbol(r: int, c: int) -> str:
        cell = session.cell(r, c)
        if cell.is_block:
            return BLOCK_SYMBOL
        if session.active == (r, c):
            return cell.value.lower() if cell.value else ACTIVE_SYMBOL
        return cell.value or EMPTY_SYMBOL

    return _render(session.bounds.rows, session.bounds.cols, symbol)


def format_clues(puzzle: Puzzle) -> str:
    lines: List[str] = []
    for direction, label in ((Direction.ACROSS, "Horizontais"), (Direction.DOWN, "Verticais")):
        entries = puzzle.clues[direction.value]
        lines.append(f"{label}:")
        for number in sorted(entries):
            lines.append(f"  {number:>2}. {entries[number]}")
    return "\n".join(lines)


def print_puzzle(puzzle: Puzzle, *, show_solution: bool = False, stream=None) -> None:
    """Print title, grid and clue lists in a human-friendly format."""

    stream = stream or sys.stdout
    print(puzzle.title, file=stream)
    print(format_solution(puzzle) if show_solution else format_numbers(puzzle), file=stream)
    print(file=stream)
    print(format_clues(puzzle), file=stream)
    print(file=stream)
    letters = sum(1 for row in puzzle.grid for ch in row if ch != BLOCK)
    total = puzzle.rows * puzzle.cols
    print(f"Words: {len(puzzle.placed)}  Letters: {letters}/{total}", file=stream)
    if puzzle.seed is not None:
        print(f"Seed: {puzzle.seed}", file=stream)


def print_session(session: SolvingSession, *, stream=None) -> None:
    stream = stream or sys.stdout
    print(format_session(session), file=stream)
    correct, total = session.progress()
    clue = session.clue_for(session.active, session.direction) if session.active else None
    status = f"{session.direction.value} {session.active} {correct}/{total}"
    if clue is not None:
        status += f"  {clue[0]}. {clue[1]}"
    print(status, file=stream)


__all__ = ["format_solution", "format_numbers", "format_session", "format_clues", "print_puzzle", "print_session"]
