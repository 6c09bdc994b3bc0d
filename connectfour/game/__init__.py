"""
connectfour.game - Board, rules and game state management for Connect Four
"""

from connectfour.game.board import (Board, check_draw, check_win, drop,
                                    next_player, valid_columns)
from connectfour.game.rules import ConnectFourEnv, ConnectFourGame, GameMode

__all__ = ['Board', 'ConnectFourGame', 'ConnectFourEnv', 'GameMode',
           'valid_columns', 'drop', 'check_win', 'check_draw', 'next_player']
