from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Iterable, Iterator, List, NamedTuple, Optional, Set

from .config import BOARD_SIZE


class GameError(Exception):
    pass


class InvalidMoveError(GameError):
    def __init__(self, position: Position, valid_moves: List[Position]):
        self.position = position
        self.valid_moves = valid_moves
        super().__init__(f"Not a valid insert position: {position}")


class BoardShapeError(GameError):
    pass


class TwoWinnersError(GameError):
    pass


class Square(Enum):
    BLANK = "B"
    O = "O"
    X = "X"

    @property
    def glyph(self) -> str:
        return " " if self is Square.BLANK else self.value

    @classmethod
    def from_token(cls, token: str) -> Optional["Square"]:
        try:
            return cls(token)
        except ValueError:
            return None


class Status(Enum):
    X_WIN = "XWin"
    O_WIN = "OWin"
    DRAW = "Draw"
    ONGOING = "StillPlaying"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        # X wins are the maximum outcome, O wins the minimum
        if self is Status.X_WIN:
            return 1
        if self is Status.O_WIN:
            return -1
        return 0

    @property
    def is_over(self) -> bool:
        return self is not Status.ONGOING

    @staticmethod
    def combine(lhs: Status, rhs: Status) -> Status:
        wins = {lhs, rhs} & {Status.X_WIN, Status.O_WIN}
        if len(wins) == 2:
            raise TwoWinnersError("Two winners")
        if wins:
            return wins.pop()
        if lhs is Status.DRAW and rhs is Status.DRAW:
            return Status.DRAW
        return Status.ONGOING

    @staticmethod
    def reduce(statuses: Iterable[Status]) -> Status:
        return reduce(Status.combine, statuses)


class LineStatus(Enum):
    """Partial classification of a row, column or diagonal.

    OPEN means the line still holds a blank square, X/O that every square
    seen so far carries that mark, DRAWN that both marks are present.
    """
    OPEN = "open"
    X = "X"
    O = "O"
    DRAWN = "drawn"

    @classmethod
    def of(cls, square: Square) -> LineStatus:
        if square is Square.BLANK:
            return cls.OPEN
        return cls(square.value)

    @staticmethod
    def combine(lhs: LineStatus, rhs: LineStatus) -> LineStatus:
        if LineStatus.OPEN in (lhs, rhs):
            return LineStatus.OPEN
        if lhs is rhs:
            return lhs
        return LineStatus.DRAWN

    @classmethod
    def reduce(cls, squares: Iterable[Square]) -> LineStatus:
        parts = [cls.of(s) for s in squares]
        if not parts:
            raise ValueError("cannot classify an empty line")
        return reduce(cls.combine, parts)

    def upgrade(self) -> Status:
        return {
            LineStatus.OPEN: Status.ONGOING,
            LineStatus.X: Status.X_WIN,
            LineStatus.O: Status.O_WIN,
            LineStatus.DRAWN: Status.DRAW,
        }[self]


class Player(Enum):
    X = "X"
    O = "O"

    def other(self) -> Player:
        return Player.O if self is Player.X else Player.X

    @property
    def square(self) -> Square:
        return Square(self.value)

    @property
    def desired_status(self) -> Status:
        return Status.X_WIN if self is Player.X else Status.O_WIN

    @property
    def maximizing(self) -> bool:
        return self.desired_status.rank > 0


class Position(NamedTuple):
    row: int
    col: int

    NUM_ARGUMENTS = 2

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass
class Board:
    grid: List[List[Square]]
    empty: Optional[Set[Position]] = None
    status: Status = Status.ONGOING

    def __post_init__(self):
        if self.empty is None:
            self.empty = {Position(r, c) for r, row in enumerate(self.grid)
                          for c, square in enumerate(row) if square is Square.BLANK}

    @property
    def size(self) -> int:
        return len(self.grid)

    @classmethod
    def new(cls, size: int = BOARD_SIZE) -> "Board":
        grid = [[Square.BLANK] * size for _ in range(size)]
        return cls(grid)

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """Load a layout such as ``"X O B | B X B | O B B"``.

        Unknown tokens are logged and skipped; the status is computed once
        after loading.
        """
        rows = text.split("|")
        if rows and not rows[-1].strip():
            rows.pop()
        grid: List[List[Square]] = []
        for r, line in enumerate(rows):
            row: List[Square] = []
            for token in line.split():
                square = Square.from_token(token)
                if square is None:
                    logging.warning(f"Not a matching square type in row {r}: {token!r}")
                    continue
                row.append(square)
            grid.append(row)
        board = cls(grid)
        board.update_status()
        return board

    def to_string(self) -> str:
        return " | ".join(" ".join(s.value for s in row) for row in self.grid)

    def clone(self) -> "Board":
        return Board([row.copy() for row in self.grid], set(self.empty), self.status)

    def valid_moves(self) -> List[Position]:
        return sorted(self.empty)

    def glyph_rows(self) -> Iterator[List[str]]:
        for row in self.grid:
            yield [s.glyph for s in row]

    def update_status(self) -> None:
        if self.status is Status.ONGOING:
            self.status = self.check_status()

    def insert(self, position: Position, square: Square) -> None:
        if square is Square.BLANK:
            raise ValueError(f"Cannot clear {position}: only X or O can be inserted")
        if position not in self.empty:
            raise InvalidMoveError(position, self.valid_moves())
        self.empty.remove(position)
        self.grid[position.row][position.col] = square
        self.update_status()

    def check_status(self) -> Status:
        # check_diag rejects non-square grids before zip() can truncate them
        return Status.reduce([self.check_diag(), self.check_rows(), self.check_cols()])

    def check_rows(self) -> Status:
        return Status.reduce(LineStatus.reduce(row).upgrade() for row in self.grid)

    def check_cols(self) -> Status:
        return Status.reduce(LineStatus.reduce(col).upgrade() for col in zip(*self.grid))

    def check_diag(self) -> Status:
        n = len(self.grid)
        if not n or any(len(row) != n for row in self.grid):
            raise BoardShapeError(f"Not a square board: {[len(row) for row in self.grid]}")
        l_to_r = LineStatus.reduce(self.grid[i][i] for i in range(n))
        r_to_l = LineStatus.reduce(self.grid[n - 1 - i][i] for i in range(n))
        return Status.combine(l_to_r.upgrade(), r_to_l.upgrade())
