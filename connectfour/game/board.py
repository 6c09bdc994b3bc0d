"""
board.py - Board representation and core rules for Connect Four

This module implements the immutable Board value and the rule functions the
rest of the engine is built on: legal-move enumeration, dropping a token,
win and draw detection. Every drop returns a new Board, so a search can
hold on to any position without it changing underneath.
"""

from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from connectfour.debug import debug
from connectfour.exceptions import InvalidMove
from connectfour.utils import (ROWS, COLS, Cell, Player, GameResult,
                               WINDOWS, WINDOW_INDEX, render_board_ascii)

WinningLine = Tuple[Cell, ...]


class Board:
    """
    An immutable Connect Four position.

    The grid is a read-only ``numpy`` array of shape (ROWS, COLS) holding
    ``Player`` values; row 0 is the top of the board. Boards compare and
    hash by their contents.
    """

    __slots__ = ("_grid",)

    def __init__(self, grid: Optional[Union[np.ndarray, Sequence[Sequence[int]]]] = None):
        """
        Create a board, empty unless a grid is given.

        Args:
            grid: Optional ROWS x COLS values (0 empty, 1 player one, 2 player two)
        """
        if grid is None:
            grid = np.zeros((ROWS, COLS), dtype=np.int8)
        else:
            grid = np.array(grid, dtype=np.int8)
            if grid.shape != (ROWS, COLS):
                raise ValueError(f"Board grid must have shape {(ROWS, COLS)}, got {grid.shape}")
            if not np.isin(grid, [p.value for p in Player]).all():
                raise ValueError("Board grid contains values other than 0, 1 and 2")
        grid.flags.writeable = False
        self._grid = grid

    @classmethod
    def _wrap(cls, grid: np.ndarray) -> 'Board':
        # Takes ownership of an already validated grid
        board = cls.__new__(cls)
        grid.flags.writeable = False
        board._grid = grid
        return board

    @classmethod
    def from_rows(cls, rows: Union[str, Iterable[str]]) -> 'Board':
        """
        Build a board from text, top row first.

        Each row uses ``.`` for empty, ``X`` for player one and ``O`` for
        player two; spaces and ``|`` separators are ignored.

        Args:
            rows: A multi-line string or one string per row

        Returns:
            The parsed board
        """
        if isinstance(rows, str):
            rows = [line for line in rows.strip().splitlines() if line.strip()]

        grid = []
        for line in rows:
            cells = line.replace("|", "").replace(" ", "")
            if len(cells) != COLS:
                raise ValueError(f"Row {line!r} must have {COLS} cells")
            grid.append([Player.from_symbol(symbol).value for symbol in cells])

        if len(grid) != ROWS:
            raise ValueError(f"Board needs {ROWS} rows, got {len(grid)}")
        return cls(grid)

    @classmethod
    def from_moves(cls, columns: Iterable[int], first: Player = Player.ONE) -> 'Board':
        """Replay alternating drops starting with ``first``."""
        board = cls()
        player = first
        for column in columns:
            board, _ = board.drop(column, player)
            player = player.other()
        return board

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the cell values."""
        return self._grid

    def cell(self, row: int, col: int) -> Player:
        return Player(int(self._grid[row, col]))

    def is_column_full(self, column: int) -> bool:
        return self._grid[0, column] != Player.EMPTY.value

    def lowest_empty_row(self, column: int) -> Optional[int]:
        """
        Row a token dropped in ``column`` would land on.

        Returns:
            The lowest empty row index, or None if the column is full
        """
        empty_rows = np.flatnonzero(self._grid[:, column] == Player.EMPTY.value)
        if empty_rows.size == 0:
            return None
        return int(empty_rows[-1])

    def valid_columns(self) -> List[int]:
        """Columns whose top cell is empty, in ascending order."""
        return np.flatnonzero(self._grid[0] == Player.EMPTY.value).tolist()

    def drop(self, column: int, player: Player) -> Tuple['Board', int]:
        """
        Drop a token for ``player`` into ``column``.

        Args:
            column: The column to place a piece (0-indexed)
            player: The player dropping the token

        Returns:
            The resulting board and the row the token landed on

        Raises:
            InvalidMove: If the column is out of range or full
        """
        if player == Player.EMPTY:
            raise ValueError("EMPTY cannot drop a token")

        if not 0 <= column < COLS:
            debug.debug(f"Invalid move: column {column} out of bounds", "board")
            raise InvalidMove(column, "column out of range")

        row = self.lowest_empty_row(column)
        if row is None:
            debug.debug(f"Invalid move: column {column} is full", "board")
            raise InvalidMove(column, "column is full")

        grid = self._grid.copy()
        grid[row, column] = player.value
        return Board._wrap(grid), row

    def check_win(self, player: Player) -> Optional[WinningLine]:
        """
        Find a line of four for ``player``.

        Windows are scanned by start cell in row-major order and then by
        direction (horizontal, vertical, diagonal down, diagonal up), so the
        same line is reported every time several exist.

        Returns:
            The four (row, col) cells of the first line found, or None
        """
        if player == Player.EMPTY:
            raise ValueError("EMPTY cannot win")

        hits = np.all(self._grid.ravel()[WINDOW_INDEX] == player.value, axis=1)
        if not hits.any():
            return None
        return WINDOWS[int(np.argmax(hits))]

    def is_full(self) -> bool:
        return bool(np.all(self._grid[0] != Player.EMPTY.value))

    def check_draw(self) -> bool:
        """A full board on which neither player has four in a row."""
        if not self.is_full():
            return False
        return self.check_win(Player.ONE) is None and self.check_win(Player.TWO) is None

    def outcome(self) -> GameResult:
        """Derive the game result from the current contents."""
        if self.check_win(Player.ONE) is not None:
            return GameResult.PLAYER_ONE_WIN
        if self.check_win(Player.TWO) is not None:
            return GameResult.PLAYER_TWO_WIN
        if self.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def count(self, player: Player) -> int:
        """Number of cells holding ``player`` (EMPTY counts empty cells)."""
        return int(np.count_nonzero(self._grid == player.value))

    def is_consistent(self, first: Player = Player.ONE) -> bool:
        """
        Whether this position can arise in a real game.

        Checks gravity (no token above an empty cell) and that ``first``
        has either the same number of tokens as the opponent or one more.
        """
        occupied = self._grid != Player.EMPTY.value
        # An occupied cell must sit on the floor or on another token
        if np.any(occupied[:-1] & ~occupied[1:]):
            return False
        balance = self.count(first) - self.count(first.other())
        return balance in (0, 1)

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self._grid)

    def to_rows(self) -> List[str]:
        """Inverse of ``from_rows``."""
        return ["".join(self.cell(row, col).symbol for col in range(COLS))
                for row in range(ROWS)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())

    def __repr__(self) -> str:
        return f"Board.from_rows({self.to_rows()!r})"

    def __str__(self) -> str:
        return self.render()


def valid_columns(board: Board) -> List[int]:
    """Columns that can still take a token, ascending."""
    return board.valid_columns()


def drop(board: Board, column: int, player: Player) -> Tuple[Board, int]:
    """Drop a token without touching ``board``; raises InvalidMove."""
    return board.drop(column, player)


def check_win(board: Board, player: Player) -> Optional[WinningLine]:
    return board.check_win(player)


def check_draw(board: Board) -> bool:
    return board.check_draw()


def next_player(player: Player) -> Player:
    return player.other()
