import pytest

from connectfour.ai.selector import MoveSelector
from connectfour.game.board import Board

# Full board with no four-in-a-row for either side
DRAW_ROWS = [
    "XOXOXOX",
    "XOXOXOX",
    "OXOXOXO",
    "OXOXOXO",
    "XOXOXOX",
    "XOXOXOX",
]


@pytest.fixture
def draw_board() -> Board:
    return Board.from_rows(DRAW_ROWS)


@pytest.fixture
def selector() -> MoveSelector:
    # Shallow search keeps hard-mode tests quick
    return MoveSelector(hard_depth=4, seed=1234)
