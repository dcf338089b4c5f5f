import unittest
from typing import List, Sequence

from cruzadas.core.constants import DOWN, LEFT, RIGHT, UP, Difficulty, Direction, EventKind
from cruzadas.core.models import PlacedWord, Puzzle, SolveEvent
from cruzadas.engine.grid import CrosswordGrid
from cruzadas.engine.numbering import Numberer
from cruzadas.engine.session import SessionConfig, SolvingSession
from cruzadas.io.progress_store import MemoryProgressStore

ROWS = [
    "CASA.",
    "A....",
    "SOL..",
    "A....",
    ".....",
]
PLACED = [
    PlacedWord("CASA", "home", 0, 0, Direction.ACROSS),
    PlacedWord("CASA", "house", 0, 0, Direction.DOWN),
    PlacedWord("SOL", "sun", 2, 0, Direction.ACROSS),
]
GAPPED_ROWS = [
    "AB.CD",
    ".....",
    "E....",
    ".....",
    ".....",
]


def make_puzzle(rows: Sequence[str], placed: Sequence[PlacedWord] = (), identifier: str = "test-1") -> Puzzle:
    grid = CrosswordGrid.from_rows(rows)
    numbering = Numberer().number(grid, placed)
    return Puzzle(
        identifier=identifier,
        title="Test",
        difficulty=Difficulty.NORMAL,
        rows=grid.size,
        cols=grid.size,
        grid=grid.to_rows(),
        clues=numbering.clues(),
        numbers=numbering.numbers,
        placed=list(placed),
    )


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class SessionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.store = MemoryProgressStore()
        self.session = SolvingSession(make_puzzle(ROWS, PLACED), store=self.store, clock=self.clock)


class ActiveWordTests(SessionTestCase):
    def test_initial_state(self) -> None:
        self.assertEqual(self.session.active, (0, 0))
        self.assertEqual(self.session.direction, Direction.ACROSS)
        self.assertEqual(self.session.active_word, [(0, 0), (0, 1), (0, 2), (0, 3)])
        self.assertEqual(self.session.cell(0, 0).number, 1)
        self.assertEqual(self.session.cell(0, 0).solution, "C")
        self.assertTrue(self.session.cell(4, 4).is_block)

    def test_set_active_cell_walks_back_to_word_start(self) -> None:
        self.assertTrue(self.session.set_active_cell((2, 2)))
        self.assertEqual(self.session.active_word, [(2, 0), (2, 1), (2, 2)])

    def test_set_active_cell_rejects_blocks_and_bounds(self) -> None:
        self.assertFalse(self.session.set_active_cell((1, 1)))
        self.assertFalse(self.session.set_active_cell((9, 0)))
        self.assertFalse(self.session.set_active_cell((-1, 0)))
        self.assertEqual(self.session.active, (0, 0))

    def test_toggle_direction_recomputes_span(self) -> None:
        self.session.set_active_cell((2, 0))
        self.assertEqual(self.session.toggle_direction(), Direction.DOWN)
        self.assertEqual(self.session.active_word, [(0, 0), (1, 0), (2, 0), (3, 0)])
        self.assertEqual(self.session.toggle_direction(), Direction.ACROSS)
        self.assertEqual(self.session.active_word, [(2, 0), (2, 1), (2, 2)])

    def test_clue_for(self) -> None:
        self.assertEqual(self.session.clue_for((0, 2), Direction.ACROSS), (1, "home"))
        self.assertEqual(self.session.clue_for((3, 0), Direction.DOWN), (1, "house"))
        self.assertEqual(self.session.clue_for((2, 1), Direction.ACROSS), (2, "sun"))
        self.assertIsNone(self.session.clue_for((0, 2), Direction.DOWN))


class EntryTests(SessionTestCase):
    def test_correct_entry_locks_and_advances(self) -> None:
        events = self.session.enter_letter((0, 0), "c")
        self.assertEqual(events, [SolveEvent(EventKind.CORRECT, 0, 0)])
        self.assertTrue(self.session.cell(0, 0).locked)
        self.assertEqual(self.session.cell(0, 0).value, "C")
        self.assertEqual(self.session.active, (0, 1))

    def test_accented_input_is_normalized(self) -> None:
        self.session.enter_letter((0, 1), "á")
        self.assertEqual(self.session.cell(0, 1).value, "A")
        self.assertTrue(self.session.cell(0, 1).locked)

    def test_invalid_input_is_ignored(self) -> None:
        for raw in ("", "3", " ", None):
            self.assertEqual(self.session.enter_letter((0, 1), raw), [])
        self.assertEqual(self.session.cell(0, 1).value, "")
        self.assertEqual(self.session.active, (0, 0))
        self.assertEqual(self.store.save_count, 0)

    def test_entry_on_block_or_outside_is_ignored(self) -> None:
        self.assertEqual(self.session.enter_letter((1, 1), "A"), [])
        self.assertEqual(self.session.enter_letter((5, 0), "A"), [])
        self.assertEqual(self.store.save_count, 0)

    def test_completing_a_word_emits_word_completed(self) -> None:
        for col, letter in enumerate("CAS"):
            self.session.enter_letter((0, col), letter)
        events = self.session.enter_letter((0, 3), "A")
        self.assertEqual(
            events,
            [
                SolveEvent(EventKind.CORRECT, 0, 3),
                SolveEvent(EventKind.WORD_COMPLETED, 0, 0, Direction.ACROSS, 1),
            ],
        )
        self.assertTrue(all(self.session.cell(0, c).locked for c in range(4)))
        self.assertTrue(self.session.is_word_complete((0, 2), Direction.ACROSS))
        self.assertEqual(self.session.active, (0, 3))

    def test_listeners_receive_events(self) -> None:
        received: List[SolveEvent] = []
        self.session.subscribe(received.append)
        self.session.enter_letter((0, 0), "X")
        self.assertEqual([e.kind for e in received], [EventKind.INCORRECT])

    def test_wrong_entry_is_cleared_after_delay(self) -> None:
        events = self.session.enter_letter((0, 1), "X")
        self.assertEqual(events, [SolveEvent(EventKind.INCORRECT, 0, 1)])
        self.assertEqual(self.session.cell(0, 1).value, "X")
        self.assertFalse(self.session.cell(0, 1).locked)
        self.clock.now = 0.5
        self.assertEqual(self.session.tick(), 0)
        self.assertEqual(self.session.cell(0, 1).value, "X")
        self.clock.now = 1.0
        self.assertEqual(self.session.tick(), 1)
        self.assertEqual(self.session.cell(0, 1).value, "")

    def test_new_entry_cancels_pending_clear(self) -> None:
        self.session.enter_letter((0, 1), "X")
        self.clock.now = 0.5
        events = self.session.enter_letter((0, 1), "A")
        self.assertEqual(events[0].kind, EventKind.CORRECT)
        self.clock.now = 5.0
        self.assertEqual(self.session.tick(), 0)
        self.assertEqual(self.session.cell(0, 1).value, "A")
        self.assertTrue(self.session.cell(0, 1).locked)

    def test_second_wrong_entry_restarts_the_delay(self) -> None:
        self.session.enter_letter((0, 1), "X")
        self.clock.now = 0.5
        self.session.enter_letter((0, 1), "Y")
        self.clock.now = 0.9
        self.assertEqual(self.session.tick(), 0)
        self.assertEqual(self.session.cell(0, 1).value, "Y")
        self.clock.now = 1.4
        self.assertEqual(self.session.tick(), 1)
        self.assertEqual(self.session.cell(0, 1).value, "")

    def test_pending_clears_run_before_the_next_intent(self) -> None:
        self.session.enter_letter((1, 0), "X")
        self.clock.now = 2.0
        self.session.toggle_direction()
        self.assertEqual(self.session.cell(1, 0).value, "")

    def test_custom_clear_delay(self) -> None:
        session = SolvingSession(make_puzzle(ROWS, PLACED), config=SessionConfig(clear_delay=3.0), clock=self.clock)
        session.enter_letter((0, 1), "X")
        self.clock.now = 2.0
        self.assertEqual(session.tick(), 0)
        self.clock.now = 3.0
        self.assertEqual(session.tick(), 1)

    def test_no_advance_at_word_boundary(self) -> None:
        self.session.set_active_cell((0, 3))
        self.session.enter_letter((0, 3), "A")
        self.assertEqual(self.session.active, (0, 3))

    def test_advance_follows_active_direction(self) -> None:
        self.session.toggle_direction()
        self.session.enter_letter((0, 0), "C")
        self.assertEqual(self.session.active, (1, 0))
        self.assertEqual(self.session.active_word, [(0, 0), (1, 0), (2, 0), (3, 0)])


class ClearTests(SessionTestCase):
    def test_enter_then_clear_restores_empty(self) -> None:
        for _ in range(3):
            self.session.enter_letter((1, 0), "Z")
            self.assertEqual(self.session.cell(1, 0).value, "Z")
            self.assertTrue(self.session.clear_letter((1, 0)))
            self.assertEqual(self.session.cell(1, 0).value, "")
            self.assertFalse(self.session.clear_letter((1, 0)))
            self.assertEqual(self.session.cell(1, 0).value, "")
        self.assertEqual(len(self.session.scheduler), 0)

    def test_locked_cells_never_change(self) -> None:
        self.session.enter_letter((0, 0), "C")
        self.session.set_active_cell((0, 0))
        for _ in range(2):
            self.assertEqual(self.session.enter_letter((0, 0), "X"), [])
            self.assertFalse(self.session.clear_letter((0, 0)))
            self.session.reveal_word([(0, 0)])
        self.assertEqual(self.session.cell(0, 0).value, "C")
        self.assertTrue(self.session.cell(0, 0).locked)

    def test_backspace_on_empty_active_cell_walks_back(self) -> None:
        self.session.enter_letter((0, 1), "X")
        self.assertEqual(self.session.active, (0, 2))
        self.assertTrue(self.session.clear_letter((0, 2)))
        self.assertEqual(self.session.active, (0, 1))
        self.assertEqual(self.session.cell(0, 1).value, "")
        self.assertEqual(len(self.session.scheduler), 0)

    def test_backspace_at_grid_edge_is_noop(self) -> None:
        self.assertEqual(self.session.active, (0, 0))
        self.assertFalse(self.session.clear_letter((0, 0)))
        self.assertEqual(self.session.active, (0, 0))

    def test_clear_on_block_is_noop(self) -> None:
        self.assertFalse(self.session.clear_letter((4, 4)))
        self.assertFalse(self.session.clear_letter((7, 7)))


class MoveTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = SolvingSession(make_puzzle(GAPPED_ROWS))

    def test_move_skips_blocks(self) -> None:
        self.assertTrue(self.session.move_active((0, 1), RIGHT))
        self.assertEqual(self.session.active, (0, 3))
        self.assertTrue(self.session.move_active((0, 3), LEFT))
        self.assertEqual(self.session.active, (0, 1))
        self.assertTrue(self.session.move_active((0, 0), DOWN))
        self.assertEqual(self.session.active, (2, 0))

    def test_move_stays_put_at_edge(self) -> None:
        self.session.set_active_cell((0, 4))
        self.assertFalse(self.session.move_active((0, 4), RIGHT))
        self.assertFalse(self.session.move_active((0, 4), UP))
        self.assertFalse(self.session.move_active((0, 4), DOWN))
        self.assertEqual(self.session.active, (0, 4))
        self.session.set_active_cell((2, 0))
        self.assertFalse(self.session.move_active((2, 0), DOWN))
        self.assertEqual(self.session.active, (2, 0))

    def test_move_rejects_bad_steps(self) -> None:
        self.assertFalse(self.session.move_active((0, 0), (1, 1)))
        self.assertFalse(self.session.move_active((9, 9), RIGHT))

    def test_move_from_active_cell(self) -> None:
        self.assertEqual(self.session.active, (0, 0))
        self.assertTrue(self.session.move(RIGHT))
        self.assertEqual(self.session.active, (0, 1))


class RevealAndResetTests(SessionTestCase):
    def test_reveal_word_fills_without_locking(self) -> None:
        revealed = self.session.reveal_word(self.session.active_word)
        self.assertEqual(revealed, 4)
        self.assertEqual([self.session.cell(0, c).value for c in range(4)], list("CASA"))
        self.assertFalse(any(self.session.cell(0, c).locked for c in range(4)))
        self.assertTrue(self.session.is_word_complete((0, 0), Direction.ACROSS))
        self.assertFalse(self.session.is_word_complete((0, 0), Direction.DOWN))

    def test_reveal_cancels_pending_clear(self) -> None:
        self.session.enter_letter((0, 1), "X")
        self.session.reveal_active_word()
        self.clock.now = 5.0
        self.session.tick()
        self.assertEqual(self.session.cell(0, 1).value, "A")

    def test_reveal_skips_blocks(self) -> None:
        self.assertEqual(self.session.reveal_word([(1, 1), (9, 9)]), 0)

    def test_reset_all(self) -> None:
        self.session.enter_letter((0, 0), "C")
        self.session.enter_letter((0, 1), "X")
        self.session.reveal_word([(2, 0), (2, 1), (2, 2)])
        self.session.reset_all()
        for cell in self.session.open_cells():
            self.assertEqual(cell.value, "")
            self.assertFalse(cell.locked)
        self.assertEqual(len(self.session.scheduler), 0)
        self.assertEqual(self.session.progress(), (0, 9))

    def test_solving_everything(self) -> None:
        self.session.reveal_word([cell.coord for cell in self.session.open_cells()])
        self.assertTrue(self.session.is_solved())
        snapshot = self.session.snapshot()
        self.assertTrue(snapshot.solved)
        self.assertEqual(snapshot.values[0][:4], ("C", "A", "S", "A"))
        self.assertIsNone(snapshot.values[4][4])


class PersistenceTests(SessionTestCase):
    def test_saves_after_every_accepted_mutation(self) -> None:
        self.session.enter_letter((0, 0), "C")
        self.assertEqual(self.store.save_count, 1)
        self.session.enter_letter((0, 1), "X")
        self.assertEqual(self.store.save_count, 2)
        self.clock.now = 1.0
        self.session.tick()
        self.assertEqual(self.store.save_count, 3)
        saved = self.store.documents["test-1"]
        self.assertEqual(saved[0][:2], ["C", ""])
        self.assertIsNone(saved[0][4])

    def test_restores_saved_progress(self) -> None:
        self.session.enter_letter((0, 0), "C")
        self.session.enter_letter((2, 1), "Q")
        restored = SolvingSession(make_puzzle(ROWS, PLACED), store=self.store, clock=self.clock)
        self.assertEqual(restored.cell(0, 0).value, "C")
        self.assertTrue(restored.cell(0, 0).locked)
        self.assertEqual(restored.cell(2, 1).value, "Q")
        self.assertFalse(restored.cell(2, 1).locked)

    def test_ignores_mismatched_saved_shape(self) -> None:
        self.store.documents["test-1"] = [["C"]]
        with self.assertLogs("cruzadas.engine.session", level="WARNING"):
            restored = SolvingSession(make_puzzle(ROWS, PLACED), store=self.store)
        self.assertEqual(restored.cell(0, 0).value, "")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
