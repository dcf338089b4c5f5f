"""CLI entrypoint for the crossword generator and terminal player."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import IO, Optional

from cruzadas.core.constants import DOWN, LEFT, MAX_RANDOM_ATTEMPTS, RIGHT, UP, Difficulty
from cruzadas.core.exceptions import CrosswordError
from cruzadas.data.word_bank import WordBank
from cruzadas.engine.generator import GeneratorConfig, PuzzleGenerator
from cruzadas.engine.session import Game, SolvingSession
from cruzadas.io.progress_store import JsonProgressStore
from cruzadas.utils.logger import configure_logging
from cruzadas.utils.pretty import print_puzzle, print_session

PLAY_HELP = """Commands:
  <row> <col>     select a cell
  <letter>        enter a letter at the active cell
  -               backspace
  up | down | left | right   move the active cell
  /               toggle across/down
  ?               reveal the active word
  !               reset every entry
  new             generate a new puzzle
  help            show this text
  quit            quit"""

MOVES = {"up": UP, "left": LEFT, "down": DOWN, "right": RIGHT}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate crossword puzzles from a word bank and solve them in the terminal",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=Difficulty.NORMAL.value,
        help="Word bank tier (normal: 13x13, hard: 15x15)",
    )
    parser.add_argument("--size", type=int, help="Override the grid size")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one WORD:Clue entry per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--max-random-attempts",
        type=int,
        default=MAX_RANDOM_ATTEMPTS,
        help="Random positions tried per word when no crossing fits",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--pretty", action="store_true", help="Print the grid and clues instead of JSON")
    parser.add_argument("--play", action="store_true", help="Solve the puzzle interactively")
    parser.add_argument(
        "--progress-dir",
        type=Path,
        default=None,
        help="Directory for saved solving progress (play mode only)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def handle_command(game: Game, session: SolvingSession, line: str, stream: IO[str]) -> Optional[SolvingSession]:
    """Apply one play-mode command; returns the session to continue with or ``None`` to quit."""

    command = line.strip()
    if command in {"quit", "exit"}:
        return None
    if command == "new":
        return game.restart()
    if command == "/":
        session.toggle_direction()
    elif command == "?":
        session.reveal_active_word()
    elif command == "!":
        session.reset_all()
    elif command == "-":
        if session.active is not None:
            session.clear_letter(session.active)
    elif command in MOVES:
        session.move(MOVES[command])
    elif command == "help":
        print(PLAY_HELP, file=stream)
    else:
        parts = command.split()
        if len(parts) == 2 and all(p.lstrip("-").isdigit() for p in parts):
            if not session.set_active_cell((int(parts[0]), int(parts[1]))):
                print("Not an open cell", file=stream)
        elif session.active is not None:
            for event in session.enter_letter(session.active, command):
                print(f"{event.kind.value} {event.direction.value if event.direction else ''}".rstrip(), file=stream)
    return session


def play(game: Game, stream: IO[str] = sys.stdout, source: IO[str] = sys.stdin) -> None:
    session = game.session or game.start()
    print_puzzle(session.puzzle, stream=stream)
    print(PLAY_HELP, file=stream)
    while True:
        session.tick()
        print_session(session, stream=stream)
        if session.is_solved():
            print("Solved!", file=stream)
        line = source.readline()
        if not line:
            return
        next_session = handle_command(game, session, line, stream)
        if next_session is None:
            return
        if next_session is not session:
            print_puzzle(next_session.puzzle, stream=stream)
        session = next_session


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    if args.size is not None and args.size < 2:
        parser.error("--size must be at least 2")
    if args.max_random_attempts < 0:
        parser.error("--max-random-attempts cannot be negative")
    if args.progress_dir is not None and not args.play:
        parser.error("--progress-dir only applies with --play")

    try:
        word_bank = WordBank.from_file(args.words_file) if args.words_file else WordBank()
    except CrosswordError as exc:
        parser.error(str(exc))

    config = GeneratorConfig(
        difficulty=Difficulty(args.difficulty),
        size=args.size,
        seed=args.seed,
        max_random_attempts=args.max_random_attempts,
        word_bank=word_bank,
    )
    generator = PuzzleGenerator(config)

    if args.play:
        store = JsonProgressStore(args.progress_dir) if args.progress_dir else None
        try:
            play(Game(generator, store=store))
        except CrosswordError as exc:
            parser.error(str(exc))
        return

    puzzle = generator.generate()
    if args.pretty:
        print_puzzle(puzzle, show_solution=True)
        return

    output_text = json.dumps(puzzle.to_jsonable(), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
