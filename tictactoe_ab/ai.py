from __future__ import annotations
import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import SEARCH_DEPTH
from .game import Board, GameError, Player, Position, Status

# Minimax with alpha-beta pruning over cloned boards. Returns a MoveScore.


@dataclass(frozen=True)
class MoveScore:
    move: Optional[Position]
    status: Status
    depth: float  # plies left unsearched when the outcome was reached

    @property
    def rank(self) -> Tuple[int, float]:
        """Sort key: X wins high, O wins low, draws and open games between.

        A win reached with more depth left is a faster win, so it ranks
        further from the middle in its winner's favour.
        """
        if self.status is Status.X_WIN:
            return 1, self.depth
        if self.status is Status.O_WIN:
            return -1, -self.depth
        return 0, 0

    def __str__(self) -> str:
        return f"{self.move}:{self.status}"


WORST_SCORE = MoveScore(None, Status.O_WIN, math.inf)
BEST_SCORE = MoveScore(None, Status.X_WIN, math.inf)


def minimax(board: Board, player: Player, depth: int,
            alpha: MoveScore, beta: MoveScore, stats: Optional[dict] = None) -> MoveScore:
    if stats is not None:
        stats["nodes"] = stats.get("nodes", 0) + 1
    if depth <= 0 or board.status.is_over:
        # move is filled in by the caller
        return MoveScore(None, board.status, depth)

    assert board.empty, "an open game always has a blank square"
    if player.maximizing:
        best = WORST_SCORE
        for pos in board.valid_moves():
            child = board.clone()
            child.insert(pos, player.square)
            score = replace(minimax(child, player.other(), depth - 1, alpha, beta, stats), move=pos)
            if score.rank > best.rank:
                best = score
            if score.rank > beta.rank:
                break
            if best.rank > alpha.rank:
                alpha = best
    else:
        best = BEST_SCORE
        for pos in board.valid_moves():
            child = board.clone()
            child.insert(pos, player.square)
            score = replace(minimax(child, player.other(), depth - 1, alpha, beta, stats), move=pos)
            if score.rank < best.rank:
                best = score
            if score.rank < alpha.rank:
                break
            if best.rank < beta.rank:
                beta = best
    return best


def best_move(board: Board, player: Player, depth: int = SEARCH_DEPTH) -> MoveScore:
    """Pick the move for `player` that is best under optimal replies.

    Ties between equally ranked moves go to the first one in row/column
    order.
    """
    if board.status.is_over:
        raise GameError(f"Game already decided: {board.status}")
    if depth < 1:
        raise ValueError(f"depth must be at least 1, got {depth}")
    stats = {"nodes": 0}
    result = minimax(board, player, depth, WORST_SCORE, BEST_SCORE, stats)
    logging.debug(f"{player.value} plays {result} after {stats['nodes']} nodes (depth {depth})")
    return result
