"""
selector.py - Difficulty-based move selection for the computer opponent

Both difficulties first look for a move that wins on the spot, then for a
move that stops the opponent from winning on the spot. After that:

- easy: play the center column if it is open, otherwise a random column
- hard: search every candidate with minimax and keep the best one
"""

import math
from enum import Enum
from typing import List, Optional, Union

import numpy as np

from connectfour.ai.minimax import MinimaxSearch, center_ordered
from connectfour.debug import debug
from connectfour.exceptions import NoValidMoves
from connectfour.game.board import Board
from connectfour.utils import CENTER_COL, DEFAULT_HARD_DEPTH, Player


class Difficulty(str, Enum):
    EASY = "easy"
    HARD = "hard"

    @classmethod
    def coerce(cls, value: Union[str, 'Difficulty']) -> 'Difficulty':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty: {value!r}") from None


def find_winning_move(board: Board, player: Player) -> Optional[int]:
    """Lowest open column that wins immediately for ``player``."""
    for column in board.valid_columns():
        child, _ = board.drop(column, player)
        if child.check_win(player) is not None:
            return column
    return None


def find_blocking_move(board: Board, player: Player) -> Optional[int]:
    """Lowest open column where the opponent of ``player`` would win immediately."""
    return find_winning_move(board, player.other())


class MoveSelector:
    """
    Chooses columns for the computer opponent.

    The hard strategy is deterministic for a given board and player; only the
    easy fallback draws from the random generator.
    """

    def __init__(self, hard_depth: int = DEFAULT_HARD_DEPTH,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Args:
            hard_depth: Plies the hard strategy looks ahead, including its own move
            seed: Seed for the easy strategy's random fallback
            rng: Generator to use instead of creating one from ``seed``
        """
        if hard_depth < 1:
            raise ValueError("hard_depth must be at least 1")
        self.hard_depth = hard_depth
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.search = MinimaxSearch()
        self.nodes_evaluated = 0

    def select_move(self, board: Board, player: Player,
                    difficulty: Union[str, Difficulty] = Difficulty.HARD) -> int:
        """
        Pick a column for ``player`` to play.

        Args:
            board: The current position (left untouched)
            player: The player to move
            difficulty: "easy" or "hard"

        Returns:
            An open column index

        Raises:
            NoValidMoves: If the board has no open column
        """
        difficulty = Difficulty.coerce(difficulty)
        self.nodes_evaluated = 0
        if not board.valid_columns():
            raise NoValidMoves()

        column = self._tactical_move(board, player)
        if column is not None:
            return column

        if difficulty == Difficulty.EASY:
            return self._easy_move(board)
        return self._hard_move(board, player)

    def _tactical_move(self, board: Board, player: Player) -> Optional[int]:
        column = find_winning_move(board, player)
        if column is not None:
            debug.debug(f"{player.name} takes the win in column {column}", "selector")
            return column

        column = find_blocking_move(board, player)
        if column is not None:
            debug.debug(f"{player.name} blocks column {column}", "selector")
        return column

    def _easy_move(self, board: Board) -> int:
        columns = board.valid_columns()
        if CENTER_COL in columns:
            return CENTER_COL
        column = int(self.rng.choice(columns))
        debug.debug(f"Easy random pick: column {column} of {columns}", "selector")
        return column

    def _hard_move(self, board: Board, player: Player) -> int:
        candidates = center_ordered(board.valid_columns())
        best_score = -math.inf
        best_column = candidates[0]

        debug.start_timer("hard_move")
        for column in candidates:
            child, _ = board.drop(column, player)
            # Each candidate is its own search root with a fresh window
            score = self.search.search(child, self.hard_depth - 1, -math.inf, math.inf,
                                       False, player)
            self.nodes_evaluated += self.search.nodes_evaluated
            debug.trace(f"Candidate column {column}: {score}", "selector")

            if score > best_score:
                best_score = score
                best_column = column
        debug.end_timer("hard_move", "selector")

        debug.debug(f"Hard move for {player.name}: column {best_column} "
                    f"(score {best_score}, {self.nodes_evaluated} nodes)", "selector")
        return best_column

    def scores(self, board: Board, player: Player) -> List[float]:
        """Search score of every open column for ``player``, in column order."""
        return [self.search.search(board.drop(column, player)[0], self.hard_depth - 1,
                                   -math.inf, math.inf, False, player)
                for column in board.valid_columns()]


_default_selector = MoveSelector()


def select_move(board: Board, player: Player,
                difficulty: Union[str, Difficulty] = Difficulty.HARD) -> int:
    """Pick a column using the shared default selector."""
    return _default_selector.select_move(board, player, difficulty)
