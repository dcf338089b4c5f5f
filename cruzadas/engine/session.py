"""Interactive solving state for one generated puzzle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple

from ..core.constants import CLEAR_DELAY_SECONDS, ORTHOGONAL_STEPS, Bounds, Difficulty, Direction, EventKind
from ..core.exceptions import InvalidInput, LockedCellEdit, OutOfBoundsMove
from ..core.models import Cell, Coord, Puzzle, SolveEvent
from ..data.normalization import normalize_letter
from ..io.progress_store import ProgressStore, Values
from ..utils.logger import get_logger
from .generator import PuzzleGenerator
from .scheduler import ClearScheduler, Clock


LOGGER = get_logger(__name__)

Listener = Callable[[SolveEvent], None]


@dataclass
class SessionConfig:
    clear_delay: float = CLEAR_DELAY_SECONDS


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view handed to the presentation layer."""

    values: Tuple[Tuple[Optional[str], ...], ...]
    locked: FrozenSet[Coord]
    active: Optional[Coord]
    direction: Direction
    active_word: Tuple[Coord, ...]
    solved: bool


def build_cells(puzzle: Puzzle) -> List[List[Cell]]:
    cells: List[List[Cell]] = []
    for r in range(puzzle.rows):
        row: List[Cell] = []
        for c in range(puzzle.cols):
            letter = puzzle.grid[r][c]
            is_block = not letter.isalpha()
            row.append(
                Cell(
                    row=r,
                    col=c,
                    is_block=is_block,
                    solution=None if is_block else letter.upper(),
                    number=puzzle.numbers[r][c] if puzzle.numbers else None,
                )
            )
        cells.append(row)
    return cells


class SolvingSession:
    """Tracks entered letters, the active cell and the active word.

    Intents never raise for ordinary UI input: coordinates outside the grid
    or on block cells, unusable keystrokes and edits to locked cells are
    logged and ignored. Wrong letters are cleared after ``clear_delay``
    seconds unless another entry lands in the same cell first; pending
    clears run at the start of every intent and on :meth:`tick`.
    """

    def __init__(
        self,
        puzzle: Puzzle,
        store: Optional[ProgressStore] = None,
        config: Optional[SessionConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.puzzle = puzzle
        self.store = store
        self.config = config or SessionConfig()
        self.bounds = Bounds(rows=puzzle.rows, cols=puzzle.cols)
        self.cells = build_cells(puzzle)
        self.direction = Direction.ACROSS
        self.active: Optional[Coord] = None
        self.active_word: List[Coord] = []
        self.scheduler = ClearScheduler(self.config.clear_delay, clock)
        self._listeners: List[Listener] = []
        self._restore()
        first = next((cell.coord for cell in self.open_cells()), None)
        if first is not None:
            self.set_active_cell(first)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def open_cells(self) -> Iterable[Cell]:
        for row in self.cells:
            for cell in row:
                if not cell.is_block:
                    yield cell

    def is_open(self, coord: Coord) -> bool:
        row, col = coord
        return self.bounds.contains(row, col) and not self.cells[row][col].is_block

    def word_span(self, coord: Coord, direction: Direction) -> List[Coord]:
        """Contiguous open run through ``coord`` along ``direction``."""

        if not self.is_open(coord):
            return []
        dr, dc = direction.step
        r, c = coord
        while self.is_open((r - dr, c - dc)):
            r, c = r - dr, c - dc
        span: List[Coord] = []
        while self.is_open((r, c)):
            span.append((r, c))
            r, c = r + dr, c + dc
        return span

    def is_word_complete(self, coord: Coord, direction: Direction) -> bool:
        span = self.word_span(coord, direction)
        return bool(span) and all(self.cells[r][c].is_correct() for r, c in span)

    def clue_for(self, coord: Coord, direction: Direction) -> Optional[Tuple[int, str]]:
        span = self.word_span(coord, direction)
        if len(span) < 2:
            return None
        number = self.cells[span[0][0]][span[0][1]].number
        if number is None:
            return None
        text = self.puzzle.clues[direction.value].get(number)
        return (number, text) if text is not None else None

    def progress(self) -> Tuple[int, int]:
        open_cells = list(self.open_cells())
        return sum(1 for cell in open_cells if cell.is_correct()), len(open_cells)

    def is_solved(self) -> bool:
        correct, total = self.progress()
        return total > 0 and correct == total

    def values(self) -> Values:
        return [[None if cell.is_block else cell.value for cell in row] for row in self.cells]

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            values=tuple(tuple(row) for row in self.values()),
            locked=frozenset(cell.coord for cell in self.open_cells() if cell.locked),
            active=self.active,
            direction=self.direction,
            active_word=tuple(self.active_word),
            solved=self.is_solved(),
        )

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def set_active_cell(self, coord: Coord) -> bool:
        self._run_due()
        try:
            cell = self._open_cell(coord)
        except OutOfBoundsMove as exc:
            LOGGER.debug("Ignoring selection: %s", exc)
            return False
        self.active = cell.coord
        self.active_word = self.word_span(cell.coord, self.direction)
        return True

    def toggle_direction(self) -> Direction:
        self._run_due()
        self.direction = self.direction.orthogonal
        if self.active is not None:
            self.active_word = self.word_span(self.active, self.direction)
        return self.direction

    def enter_letter(self, coord: Coord, raw: Optional[str]) -> List[SolveEvent]:
        self._run_due()
        try:
            letter = normalize_letter(raw)
            if letter is None:
                raise InvalidInput(f"{raw!r} is not a letter")
            cell = self._open_cell(coord)
            if cell.locked:
                raise LockedCellEdit(f"cell {cell.coord} is already correct")
        except (InvalidInput, LockedCellEdit, OutOfBoundsMove) as exc:
            LOGGER.debug("Rejected entry at %s: %s", coord, exc)
            return []

        self.scheduler.cancel(cell.coord)
        cell.value = letter
        events: List[SolveEvent] = []
        if cell.is_correct():
            cell.locked = True
            events.append(SolveEvent(EventKind.CORRECT, cell.row, cell.col))
            events.extend(self._completed_words(cell.coord))
        else:
            events.append(SolveEvent(EventKind.INCORRECT, cell.row, cell.col))
            self.scheduler.schedule(cell.coord, letter)

        self._advance(cell.coord)
        self._save()
        self._emit(events)
        return events

    def clear_letter(self, coord: Coord) -> bool:
        """Backspace: clears ``coord`` or, if it is active and empty, the cell before it."""

        self._run_due()
        try:
            target = self._open_cell(coord)
        except OutOfBoundsMove as exc:
            LOGGER.debug("Ignoring clear: %s", exc)
            return False

        if self.active == target.coord and not target.value:
            dr, dc = self.direction.step
            previous = self._step_over_blocks(target.coord, (-dr, -dc))
            if previous is None:
                return False
            self.set_active_cell(previous)
            target = self.cells[previous[0]][previous[1]]

        if target.locked:
            LOGGER.debug("Ignoring clear: cell %s is locked", target.coord)
            return False
        self.scheduler.cancel(target.coord)
        if not target.value:
            return False
        target.value = ""
        self._save()
        return True

    def move_active(self, coord: Coord, delta: Tuple[int, int]) -> bool:
        self._run_due()
        if tuple(delta) not in ORTHOGONAL_STEPS:
            LOGGER.debug("Ignoring move with step %s", delta)
            return False
        if not self.bounds.contains(*coord):
            LOGGER.debug("Ignoring move from %s: outside the grid", coord)
            return False
        target = self._step_over_blocks(coord, delta)
        if target is None:
            return False
        return self.set_active_cell(target)

    def move(self, delta: Tuple[int, int]) -> bool:
        if self.active is None:
            return False
        return self.move_active(self.active, delta)

    def reveal_word(self, coords: Iterable[Coord]) -> int:
        self._run_due()
        revealed = 0
        for coord in coords:
            if not self.is_open(coord):
                continue
            cell = self.cells[coord[0]][coord[1]]
            self.scheduler.cancel(cell.coord)
            cell.value = cell.solution or ""
            revealed += 1
        if revealed:
            self._save()
        return revealed

    def reveal_active_word(self) -> int:
        return self.reveal_word(list(self.active_word))

    def reset_all(self) -> None:
        self.scheduler.cancel_all()
        for cell in self.open_cells():
            cell.value = ""
            cell.locked = False
        self._save()

    def tick(self, now: Optional[float] = None) -> int:
        """Run deferred clears that are due; returns how many cells were emptied."""

        return self._run_due(now)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _open_cell(self, coord: Coord) -> Cell:
        row, col = coord
        if not self.bounds.contains(row, col):
            raise OutOfBoundsMove(f"{coord} is outside the {self.bounds.rows}x{self.bounds.cols} grid")
        cell = self.cells[row][col]
        if cell.is_block:
            raise OutOfBoundsMove(f"{coord} is a block cell")
        return cell

    def _step_over_blocks(self, coord: Coord, delta: Tuple[int, int]) -> Optional[Coord]:
        dr, dc = delta
        r, c = coord[0] + dr, coord[1] + dc
        while self.bounds.contains(r, c):
            if not self.cells[r][c].is_block:
                return (r, c)
            r, c = r + dr, c + dc
        return None

    def _advance(self, coord: Coord) -> None:
        dr, dc = self.direction.step
        following = (coord[0] + dr, coord[1] + dc)
        if self.is_open(following):
            self.set_active_cell(following)

    def _completed_words(self, coord: Coord) -> List[SolveEvent]:
        events: List[SolveEvent] = []
        for direction in Direction:
            span = self.word_span(coord, direction)
            if len(span) < 2 or not all(self.cells[r][c].is_correct() for r, c in span):
                continue
            start = self.cells[span[0][0]][span[0][1]]
            events.append(
                SolveEvent(EventKind.WORD_COMPLETED, start.row, start.col, direction, start.number)
            )
            LOGGER.debug("Word completed at %s %s", start.coord, direction.value)
        return events

    def _run_due(self, now: Optional[float] = None) -> int:
        cleared = 0
        for task in self.scheduler.pop_due(now):
            cell = self.cells[task.coord[0]][task.coord[1]]
            if cell.locked or cell.value != task.value:
                continue
            cell.value = ""
            cleared += 1
        if cleared:
            self._save()
        return cleared

    def _emit(self, events: List[SolveEvent]) -> None:
        for event in events:
            for listener in self._listeners:
                listener(event)

    def _restore(self) -> None:
        if self.store is None:
            return
        saved = self.store.load(self.puzzle.identifier)
        if saved is None:
            return
        if len(saved) != self.bounds.rows or any(len(row) != self.bounds.cols for row in saved):
            LOGGER.warning("Ignoring saved progress for %s: shape mismatch", self.puzzle.identifier)
            return
        for cell in self.open_cells():
            raw = saved[cell.row][cell.col]
            cell.value = (normalize_letter(raw) or "") if isinstance(raw, str) else ""
            cell.locked = cell.is_correct()
        LOGGER.info("Restored saved progress for %s", self.puzzle.identifier)

    def _save(self) -> None:
        if self.store is not None:
            self.store.save(self.puzzle.identifier, self.values())


class Game:
    """Owns the current puzzle and its session; restart swaps both together."""

    def __init__(
        self,
        generator: PuzzleGenerator,
        store: Optional[ProgressStore] = None,
        config: Optional[SessionConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.generator = generator
        self.store = store
        self.config = config
        self.clock = clock
        self.difficulty: Difficulty = generator.config.difficulty
        self.session: Optional[SolvingSession] = None

    def start(self, difficulty: Difficulty | str | None = None) -> SolvingSession:
        if difficulty is not None:
            self.difficulty = Difficulty(difficulty)
        puzzle = self.generator.generate(self.difficulty)
        session = SolvingSession(puzzle, store=self.store, config=self.config, clock=self.clock)
        self.session = session
        LOGGER.info("Started puzzle %s", puzzle.identifier)
        return session

    def restart(self) -> SolvingSession:
        return self.start()
