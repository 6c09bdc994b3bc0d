"""
evaluation.py - Static position evaluation for Connect Four

The heuristic is used at the leaves of the minimax search:
1. A small bonus for every own token in the center column
2. Every four-cell window on the board scored on its own and summed
3. Opponent three-in-a-row threats weighted more heavily than our own,
   so that blocking wins over building when both are available
"""

import numpy as np

from connectfour.game.board import Board
from connectfour.utils import CENTER_COL, CONNECT_N, WIN_SCORE, WINDOW_INDEX, Player

SCORE_WIN = WIN_SCORE
SCORE_THREE = 100
SCORE_TWO = 10
SCORE_CENTER = 3
BLOCK_WEIGHT = 1.5


def score_window(own: int, opponent: int) -> float:
    """
    Score one window from the counts of own and opponent tokens in it.

    Args:
        own: Perspective player's tokens in the window
        opponent: Opponent's tokens in the window

    Returns:
        The window's contribution to the evaluation
    """
    empty = CONNECT_N - own - opponent

    if own == 4:
        return SCORE_WIN
    if opponent == 4:
        return -SCORE_WIN

    # Mixed windows fall through to 0
    if own == 3 and empty == 1:
        return SCORE_THREE
    if opponent == 3 and empty == 1:
        return -SCORE_THREE * BLOCK_WEIGHT

    if own == 2 and empty == 2:
        return SCORE_TWO
    if opponent == 2 and empty == 2:
        return -SCORE_TWO

    return 0.0


# Lookup of score_window by (own, opponent) count, filled once at import
_WINDOW_SCORES = np.zeros((CONNECT_N + 1, CONNECT_N + 1), dtype=np.float64)
for _own in range(CONNECT_N + 1):
    for _opp in range(CONNECT_N + 1 - _own):
        _WINDOW_SCORES[_own, _opp] = score_window(_own, _opp)


def evaluate(board: Board, perspective: Player) -> float:
    """
    Heuristic evaluation of a board position.

    Args:
        board: The board to evaluate
        perspective: The player the score favours

    Returns:
        Positive scores are good for ``perspective``, negative ones bad
    """
    grid = board.grid
    own_value = perspective.value
    opp_value = perspective.other().value

    score = float(np.count_nonzero(grid[:, CENTER_COL] == own_value) * SCORE_CENTER)

    windows = grid.ravel()[WINDOW_INDEX]
    own_counts = np.count_nonzero(windows == own_value, axis=1)
    opp_counts = np.count_nonzero(windows == opp_value, axis=1)
    score += float(_WINDOW_SCORES[own_counts, opp_counts].sum())

    return score
