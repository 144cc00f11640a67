from .ai import BEST_SCORE, WORST_SCORE, MoveScore, best_move, minimax
from .game import (Board, BoardShapeError, GameError, InvalidMoveError, LineStatus,
                   Player, Position, Square, Status, TwoWinnersError)
