"""
connectfour/ai/__init__.py - Computer opponent for Connect Four

Static evaluation, minimax search with alpha-beta pruning and the
difficulty-based move selector.
"""

from connectfour.ai.evaluation import evaluate, score_window
from connectfour.ai.minimax import MinimaxSearch, center_ordered, minimax
from connectfour.ai.selector import (Difficulty, MoveSelector, find_blocking_move,
                                     find_winning_move, select_move)

__all__ = ['evaluate', 'score_window', 'MinimaxSearch', 'minimax', 'center_ordered',
           'Difficulty', 'MoveSelector', 'find_winning_move', 'find_blocking_move',
           'select_move']
