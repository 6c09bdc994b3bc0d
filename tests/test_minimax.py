import math

import pytest

from connectfour.ai.evaluation import evaluate
from connectfour.ai.minimax import MinimaxSearch, center_ordered, minimax
from connectfour.game.board import Board
from connectfour.utils import WIN_SCORE, Player

POSITIONS = [
    [],
    [3, 3, 4, 2],
    [3, 4, 3, 4, 2, 2, 5],
    [0, 1, 1, 2, 2, 3, 2],
]


@pytest.mark.parametrize("moves", POSITIONS)
@pytest.mark.parametrize("depth", [1, 2, 3, 4])
@pytest.mark.parametrize("maximizing", [True, False])
def test_pruning_matches_exhaustive_minimax(moves, depth, maximizing) -> None:
    board = Board.from_moves(moves)
    pruned = MinimaxSearch(prune=True)
    exhaustive = MinimaxSearch(prune=False)

    value = pruned.search(board, depth, -math.inf, math.inf, maximizing, Player.ONE)
    expected = exhaustive.search(board, depth, -math.inf, math.inf, maximizing, Player.ONE)

    assert value == expected
    assert pruned.nodes_evaluated <= exhaustive.nodes_evaluated
    assert exhaustive.cutoffs == 0


def test_center_first_ordering_keeps_value() -> None:
    board = Board.from_moves([3, 4, 3, 4, 2])
    plain = MinimaxSearch().search(board, 3, maximizing=False, perspective=Player.ONE)
    ordered = MinimaxSearch(center_first=True).search(board, 3, maximizing=False,
                                                      perspective=Player.ONE)
    assert plain == ordered


def test_center_ordered() -> None:
    assert center_ordered(range(7)) == [3, 2, 4, 1, 5, 0, 6]
    assert center_ordered([0, 1, 5, 6]) == [1, 5, 0, 6]


def test_terminal_win_is_scaled_by_remaining_depth() -> None:
    board = Board.from_rows([
        ".......",
        ".......",
        ".......",
        ".......",
        "OOO....",
        "XXXX...",
    ])

    assert minimax(board, 3, -math.inf, math.inf, True, Player.ONE) == WIN_SCORE * 4
    assert minimax(board, 0, -math.inf, math.inf, False, Player.TWO) == -WIN_SCORE


def test_draw_scores_zero(draw_board) -> None:
    assert minimax(draw_board, 4, -math.inf, math.inf, True, Player.ONE) == 0


def test_depth_zero_uses_evaluation() -> None:
    board = Board.from_moves([3, 2, 4])
    assert minimax(board, 0, -math.inf, math.inf, True, Player.TWO) == evaluate(board, Player.TWO)


def test_immediate_win_preferred_over_later_win() -> None:
    # X: (5,0) (5,1) (5,2), O: (4,0) (4,1); X to move wins in column 3
    board = Board.from_moves([0, 0, 1, 1, 2])

    # Winning at once leaves two plies unused: WIN_SCORE * (2 + 1)
    assert minimax(board, 3, -math.inf, math.inf, True, Player.ONE) == WIN_SCORE * 3
    # From O's point of view, with X to move, that is the worst outcome
    assert minimax(board, 3, -math.inf, math.inf, False, Player.TWO) == -WIN_SCORE * 3


def test_search_does_not_modify_board() -> None:
    board = Board.from_moves([3, 3, 2, 4])
    before = board.to_rows()

    MinimaxSearch().search(board, 3, perspective=Player.TWO)

    assert board.to_rows() == before


def test_node_counters_reset_per_search() -> None:
    search = MinimaxSearch()
    board = Board.from_moves([3])

    search.search(board, 2, maximizing=False, perspective=Player.ONE)
    first = search.nodes_evaluated
    search.search(board, 2, maximizing=False, perspective=Player.ONE)

    assert first > 0
    assert search.nodes_evaluated == first


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValueError):
        MinimaxSearch().search(Board(), -1)
