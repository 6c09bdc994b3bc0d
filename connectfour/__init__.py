"""
connectfour - Connect Four rules engine with a computer opponent

This package provides the board and rules of Connect Four, a heuristic
position evaluator, a minimax search with alpha-beta pruning and an
"easy"/"hard" move selector, plus a game session manager, a Gymnasium
environment and a terminal interface built on top of them.
"""

# Version number
__version__ = '0.2.0'

from connectfour.exceptions import ConnectFourError, InvalidMove, NoValidMoves
from connectfour.utils import ROWS, COLS, GameResult, Player
from connectfour.game.board import Board, WinningLine
from connectfour.game.rules import apply_move, initial_board, is_draw, select_move, winner
from connectfour.ai.selector import Difficulty, MoveSelector

__all__ = [
    'ROWS', 'COLS', 'Board', 'WinningLine', 'Player', 'GameResult', 'Difficulty',
    'MoveSelector', 'ConnectFourError', 'InvalidMove', 'NoValidMoves',
    'initial_board', 'apply_move', 'winner', 'is_draw', 'select_move',
]
