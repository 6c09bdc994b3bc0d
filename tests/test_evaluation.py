import pytest

from connectfour.ai.evaluation import evaluate, score_window
from connectfour.game.board import Board
from connectfour.utils import Player


@pytest.mark.parametrize("own, opponent, expected", [
    (4, 0, 100000),
    (0, 4, -100000),
    (3, 0, 100),
    (0, 3, -150),
    (2, 0, 10),
    (0, 2, -10),
    (1, 0, 0),
    (0, 0, 0),
    (2, 1, 0),
    (1, 3, 0),
    (2, 2, 0),
])
def test_score_window(own, opponent, expected) -> None:
    assert score_window(own, opponent) == expected


def test_empty_board_scores_zero() -> None:
    assert evaluate(Board(), Player.ONE) == 0
    assert evaluate(Board(), Player.TWO) == 0


def test_center_token_bonus() -> None:
    board = Board.from_moves([3])

    assert evaluate(board, Player.ONE) == 3
    assert evaluate(board, Player.TWO) == 0


def test_opponent_threat_outweighs_own_threat() -> None:
    board = Board.from_rows([
        ".......",
        ".......",
        ".......",
        ".......",
        ".......",
        "XXX....",
    ])

    # One open three (100) and one open two (10)
    assert evaluate(board, Player.ONE) == 110
    # The same windows seen from the other side: -150 and -10
    assert evaluate(board, Player.TWO) == -160


def test_mixed_windows_cancel() -> None:
    board = Board.from_rows([
        ".......",
        ".......",
        ".......",
        ".......",
        ".......",
        "XXOXX..",
    ])
    # Only the window over columns 3-6 is unblocked; plus the center token
    assert evaluate(board, Player.ONE) == 13
    assert evaluate(board, Player.TWO) == -10


def test_evaluate_leaves_board_untouched() -> None:
    board = Board.from_moves([3, 3, 4, 2, 5])
    before = board.to_rows()

    evaluate(board, Player.ONE)

    assert board.to_rows() == before
