"""
utils.py - Constants, enumerations and shared helpers for Connect Four

This module provides the board dimensions, player and outcome enumerations,
the precomputed table of four-cell windows used by both win detection and
position evaluation, and ASCII rendering.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
CENTER_COL = COLS // 2

# Score of a completed line; the search multiplies it by remaining depth + 1
WIN_SCORE = 100000

# Plies searched by the hard opponent, counting its own move
DEFAULT_HARD_DEPTH = 6

Cell = Tuple[int, int]


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the opponent of this player."""
        if self == Player.ONE:
            return Player.TWO
        if self == Player.TWO:
            return Player.ONE
        raise ValueError("EMPTY has no opponent")

    @property
    def symbol(self) -> str:
        return PLAYER_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Player':
        for player, player_symbol in PLAYER_SYMBOLS.items():
            if symbol == player_symbol:
                return player
        if symbol in (" ", "_"):
            return cls.EMPTY
        raise ValueError(f"Unknown cell symbol: {symbol!r}")

    def __str__(self):
        return self.symbol


PLAYER_SYMBOLS = {
    Player.EMPTY: ".",
    Player.ONE: "X",
    Player.TWO: "O",
}


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        if player == Player.ONE:
            return GameResult.PLAYER_ONE_WIN
        if player == Player.TWO:
            return GameResult.PLAYER_TWO_WIN
        raise ValueError("EMPTY cannot win")


class Direction(Enum):
    """Line directions, in the order win detection tries them."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right
    DIAGONAL_UP = auto()    # Diagonal from bottom-left to top-right


# Direction vectors (row, col); row 0 is the top of the board
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (-1, 1),
}


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def _build_windows() -> List[Tuple[Cell, ...]]:
    windows = []
    for row in range(ROWS):
        for col in range(COLS):
            for dr, dc in DIRECTION_VECTORS.values():
                end_row = row + (CONNECT_N - 1) * dr
                end_col = col + (CONNECT_N - 1) * dc
                if not is_valid_position(end_row, end_col):
                    continue
                windows.append(tuple((row + i * dr, col + i * dc) for i in range(CONNECT_N)))
    return windows


# Every run of CONNECT_N cells, ordered by start cell (row-major) then direction
WINDOWS: List[Tuple[Cell, ...]] = _build_windows()

# The same windows as flat indices into grid.ravel(), shape (len(WINDOWS), CONNECT_N)
WINDOW_INDEX = np.array(
    [[row * COLS + col for row, col in window] for window in WINDOWS],
    dtype=np.intp,
)


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The board grid

    Returns:
        ASCII representation of the board
    """
    border = "|" + "-" * (COLS * 2 - 1) + "|"
    lines = [border]
    for row in range(ROWS):
        cells = [Player(int(grid[row, col])).symbol for col in range(COLS)]
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)
    lines.append("|" + " ".join(str(col) for col in range(COLS)) + "|")
    return "\n".join(lines)
