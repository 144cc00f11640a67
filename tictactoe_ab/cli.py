import argparse
import logging
from typing import Callable, Optional, Sequence

from .ai import best_move
from .config import DEFAULT_DIFFICULTY, DIFFICULTIES, LOG_FORMAT, SEARCH_DEPTH
from .game import Board, GameError, InvalidMoveError, Player, Position, Square, Status


def parse_args(argv: Optional[Sequence[str]] = None):
    p = argparse.ArgumentParser(description="TicTacToe against an alpha-beta minimax opponent")
    p.add_argument("--piece", type=str.upper, choices=["X", "O"], default="X", help="your mark")
    p.add_argument("--turn", type=int, choices=[1, 2], default=1, help="play first (1) or second (2)")
    p.add_argument("--difficulty", choices=list(DIFFICULTIES), default=DEFAULT_DIFFICULTY,
                   help="how far ahead the computer looks")
    p.add_argument("--ai-depth", type=int, default=None, help="explicit search depth, overrides --difficulty")
    p.add_argument("--board", default=None, help='starting layout, e.g. "X B B | B O B | B B B"')
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = p.parse_args(argv)
    if args.ai_depth is not None and args.ai_depth < 1:
        p.error("--ai-depth must be at least 1")
    return args


def render_board(board: Board) -> str:
    rows = ["|".join(f" {g} " for g in row) for row in board.glyph_rows()]
    return f"\n{'-' * (board.size * 4)}\n".join(rows)


def parse_move(line: str) -> Position:
    parts = line.split()
    if len(parts) != Position.NUM_ARGUMENTS:
        raise ValueError(f"Expected {Position.NUM_ARGUMENTS} numbers (row col), got {len(parts)}.")
    try:
        row, col = (int(p) for p in parts)
    except ValueError:
        raise ValueError("Row and column must be whole numbers.") from None
    if row < 0 or col < 0:
        raise ValueError("Row and column cannot be negative.")
    return Position(row, col)


def read_human_move(board: Board, square: Square,
                    input_fn: Callable[[str], str] = input,
                    output_fn: Callable[[str], None] = print) -> Position:
    while True:
        try:
            pos = parse_move(input_fn(f"Play {square.value} at [row col]: "))
        except ValueError as e:
            output_fn(str(e))
            continue
        try:
            board.insert(pos, square)
        except InvalidMoveError as e:
            valid = ", ".join(str(p) for p in e.valid_moves)
            output_fn(f"Illegal move {e.position}. Valid moves: {valid}")
            continue
        return pos


def play_game(board: Board, human: Player, human_first: bool = True, depth: int = SEARCH_DEPTH,
              input_fn: Callable[[str], str] = input,
              output_fn: Callable[[str], None] = print) -> Status:
    computer = human.other()
    current = human if human_first else computer
    logging.info(f"Human plays {human.value}, computer plays {computer.value}, depth {depth}")

    while board.status is Status.ONGOING:
        if current is human:
            output_fn(f"\n{render_board(board)}\n")
            pos = read_human_move(board, human.square, input_fn, output_fn)
            logging.info(f"Human plays at {pos}")
        else:
            score = best_move(board, computer, depth)
            board.insert(score.move, computer.square)
            output_fn(f"AI plays at {score.move}")
        current = current.other()

    output_fn(f"Final Board: \n{render_board(board)}\n")
    output_fn(f"Final Status: {board.status}")
    return board.status


def run_cli(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)

    try:
        board = Board.from_string(args.board) if args.board else Board.new()
    except GameError as e:
        raise SystemExit(f"Cannot start from that board: {e}")
    depth = args.ai_depth if args.ai_depth is not None else DIFFICULTIES[args.difficulty]
    human = Player(args.piece)

    print("Enter moves as: row col (0-based)\n")
    play_game(board, human, human_first=(args.turn == 1), depth=depth)


if __name__ == "__main__":
    run_cli()
