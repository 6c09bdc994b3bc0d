"""
minimax.py - Minimax search with alpha-beta pruning for Connect Four

The search explores the game tree to a fixed depth from the point of view of
one perspective player. Terminal positions score a win constant scaled by the
remaining depth, so faster wins and slower losses are preferred; positions at
the depth limit are scored by the static evaluator.

Every node owns its own Board: children are produced by ``Board.drop``,
which never modifies its parent.
"""

import math
from typing import List, Sequence

from connectfour.ai.evaluation import evaluate
from connectfour.debug import debug
from connectfour.exceptions import InvalidMove
from connectfour.game.board import Board
from connectfour.utils import CENTER_COL, WIN_SCORE, Player


def center_ordered(columns: Sequence[int]) -> List[int]:
    """Sort columns by distance from the center, ties by column index."""
    return sorted(columns, key=lambda c: (abs(c - CENTER_COL), c))


class MinimaxSearch:
    """
    Depth-limited minimax with optional alpha-beta pruning.

    Pruning never changes the value returned, only how many nodes are
    visited; ``prune=False`` runs the plain exhaustive minimax.
    """

    def __init__(self, prune: bool = True, center_first: bool = False):
        """
        Args:
            prune: Cut off siblings once beta <= alpha
            center_first: Visit children center-out instead of left to right
        """
        self.prune = prune
        self.center_first = center_first
        self.nodes_evaluated = 0  # For performance tracking
        self.cutoffs = 0

    def search(self, board: Board, depth: int, alpha: float = -math.inf,
               beta: float = math.inf, maximizing: bool = True,
               perspective: Player = Player.ONE) -> float:
        """
        Score ``board`` for ``perspective``.

        Args:
            board: Position to search from (left untouched)
            depth: Remaining plies to look ahead
            alpha: Best score the maximizer can already guarantee
            beta: Best score the minimizer can already guarantee
            maximizing: True if ``perspective`` moves at the root
            perspective: The player the score is computed for

        Returns:
            The minimax value of the position
        """
        if depth < 0:
            raise ValueError("Search depth must be non-negative")

        self.nodes_evaluated = 0
        self.cutoffs = 0
        score = self._minimax(board, depth, alpha, beta, maximizing, perspective)
        debug.trace(f"Searched depth {depth}: score={score} nodes={self.nodes_evaluated} "
                    f"cutoffs={self.cutoffs}", "search")
        return score

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float,
                 is_maximizing: bool, perspective: Player) -> float:
        self.nodes_evaluated += 1
        opponent = perspective.other()

        # Terminal conditions
        if board.check_win(perspective) is not None:
            return float(WIN_SCORE * (depth + 1))  # Prefer faster wins
        if board.check_win(opponent) is not None:
            return float(-WIN_SCORE * (depth + 1))  # Prefer slower losses

        columns = board.valid_columns()
        if not columns:
            return 0.0  # Draw

        # Depth limit reached - use heuristic evaluation
        if depth == 0:
            return evaluate(board, perspective)

        if self.center_first:
            columns = center_ordered(columns)

        if is_maximizing:
            max_score = -math.inf

            for column in columns:
                try:
                    child, _ = board.drop(column, perspective)
                except InvalidMove:
                    continue

                score = self._minimax(child, depth - 1, alpha, beta, False, perspective)
                max_score = max(max_score, score)
                alpha = max(alpha, score)

                # Beta cutoff
                if self.prune and beta <= alpha:
                    self.cutoffs += 1
                    break

            return max_score

        else:  # Minimizing
            min_score = math.inf

            for column in columns:
                try:
                    child, _ = board.drop(column, opponent)
                except InvalidMove:
                    continue

                score = self._minimax(child, depth - 1, alpha, beta, True, perspective)
                min_score = min(min_score, score)
                beta = min(beta, score)

                # Alpha cutoff
                if self.prune and beta <= alpha:
                    self.cutoffs += 1
                    break

            return min_score


def minimax(board: Board, depth: int, alpha: float, beta: float,
            maximizing: bool, perspective: Player) -> float:
    """Run a single pruned search; see ``MinimaxSearch.search``."""
    return MinimaxSearch().search(board, depth, alpha, beta, maximizing, perspective)
