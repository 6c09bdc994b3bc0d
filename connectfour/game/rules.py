"""
rules.py - Game entry points, session management and Gymnasium environment

This module provides:
1. The functional entry points used by front ends (initial board, applying
   moves, win/draw queries and opponent move selection)
2. ConnectFourGame, a game session with turn tracking, undo and a scoreboard
3. ConnectFourEnv, a gymnasium environment playing against the built-in opponent
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connectfour.ai.selector import Difficulty, MoveSelector
from connectfour.ai.selector import select_move  # noqa: F401  re-exported entry point
from connectfour.debug import debug
from connectfour.exceptions import InvalidMove, NoValidMoves
from connectfour.game.board import Board, WinningLine
from connectfour.utils import ROWS, COLS, Cell, DEFAULT_HARD_DEPTH, GameResult, Player


def initial_board() -> Board:
    """Empty standard 6x7 board."""
    return Board()


def apply_move(board: Board, column: int, player: Player) -> Tuple[Board, int]:
    """Drop a token; returns the new board and the row used, raises InvalidMove."""
    return board.drop(column, player)


def winner(board: Board, player: Player) -> Optional[WinningLine]:
    """Winning line of ``player`` on ``board``, or None."""
    return board.check_win(player)


def is_draw(board: Board) -> bool:
    return board.check_draw()


class GameMode(str, Enum):
    PVP = "pvp"  # two people at one keyboard
    PVE = "pve"  # one person against the computer


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Player ONE always moves first. Finished games are tallied in ``scores``,
    which survives ``reset`` so a series of games can be played.
    """

    def __init__(self, mode: Union[str, GameMode] = GameMode.PVP,
                 difficulty: Union[str, Difficulty] = Difficulty.HARD,
                 ai_player: Player = Player.TWO,
                 selector: Optional[MoveSelector] = None):
        """
        Initialize a new Connect Four game.

        Args:
            mode: "pvp" or "pve"
            difficulty: Strength of the computer player in "pve" mode
            ai_player: Which side the computer plays in "pve" mode
            selector: Move selector to use for computer moves
        """
        debug.debug("Initializing ConnectFourGame", "game")
        if ai_player == Player.EMPTY:
            raise ValueError("ai_player must be ONE or TWO")

        self.mode = GameMode(mode)
        self.difficulty = Difficulty.coerce(difficulty)
        self.ai_player = ai_player
        self.selector = selector or MoveSelector()
        self.scores = {Player.ONE: 0, Player.TWO: 0, "draws": 0}
        self.reset()

    def reset(self) -> None:
        """Start a new game, keeping the scoreboard."""
        debug.debug("Resetting game", "game")
        self.board = Board()
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.winning_line: Optional[WinningLine] = None
        self.last_move: Optional[Cell] = None
        self.history: List[Tuple[Board, Optional[Cell]]] = []

    def reset_scores(self) -> None:
        self.scores = {Player.ONE: 0, Player.TWO: 0, "draws": 0}

    def make_move(self, column: int) -> bool:
        """
        Make a move for the current player.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            True if the move was successful, False otherwise
        """
        if self.is_game_over():
            debug.debug(f"Ignoring move in column {column}: game is over", "game")
            return False

        try:
            board, row = apply_move(self.board, column, self.current_player)
        except InvalidMove as exc:
            debug.info(str(exc), "game")
            return False

        self.history.append((self.board, self.last_move))
        self.board = board
        self.last_move = (row, column)
        debug.debug(f"{self.current_player.name} played ({row}, {column})", "game")

        line = winner(board, self.current_player)
        if line is not None:
            self.game_result = GameResult.win_for(self.current_player)
            self.winning_line = line
            self.scores[self.current_player] += 1
            debug.info(f"Player {self.current_player.name} wins with {list(line)}", "game")
        elif is_draw(board):
            self.game_result = GameResult.DRAW
            self.scores["draws"] += 1
            debug.info("Game ends in a draw", "game")
        else:
            self.current_player = self.current_player.other()

        return True

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if there is nothing to undo
        """
        if not self.history:
            debug.debug("No moves to undo", "game")
            return False

        # The mover keeps the turn once the game is over
        if self.game_result == GameResult.DRAW:
            self.scores["draws"] -= 1
            mover = self.current_player
        elif self.game_result.is_game_over():
            self.scores[self.current_player] -= 1
            mover = self.current_player
        else:
            mover = self.current_player.other()

        self.board, self.last_move = self.history.pop()
        self.current_player = mover
        self.game_result = GameResult.IN_PROGRESS
        self.winning_line = None
        debug.debug(f"Undid move, {mover.name} to play", "game")
        return True

    def is_ai_turn(self) -> bool:
        return (self.mode == GameMode.PVE and not self.is_game_over()
                and self.current_player == self.ai_player)

    def play_ai_move(self) -> int:
        """
        Let the computer choose and play a move for the current player.

        Returns:
            The column played

        Raises:
            NoValidMoves: If the game is already over
        """
        if self.is_game_over():
            raise NoValidMoves("The game is over")

        column = self.selector.select_move(self.board, self.current_player, self.difficulty)
        self.make_move(column)
        return column

    def is_game_over(self) -> bool:
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        return self.game_result.winner

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.valid_columns()

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent controls ``agent_player``; the other side is played by the
    built-in opponent at ``opponent_difficulty``, which answers inside
    ``step`` (and opens the game in ``reset`` when the agent plays second).
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, opponent_difficulty: Union[str, Difficulty] = Difficulty.EASY,
                 agent_player: Player = Player.ONE,
                 hard_depth: int = DEFAULT_HARD_DEPTH,
                 render_mode: Optional[str] = None):
        """
        Args:
            opponent_difficulty: "easy" or "hard"
            agent_player: Side controlled by the agent
            hard_depth: Look-ahead of the hard opponent
            render_mode: None, "ascii" or "human"
        """
        debug.debug("Initializing ConnectFourEnv", "env")
        if agent_player == Player.EMPTY:
            raise ValueError("agent_player must be ONE or TWO")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.opponent_difficulty = Difficulty.coerce(opponent_difficulty)
        self.agent_player = agent_player
        self.hard_depth = hard_depth
        self.render_mode = render_mode
        self.game: Optional[ConnectFourGame] = None
        self.opponent_move: Optional[int] = None

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster solutions

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict[str, Any]] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")

        selector = MoveSelector(hard_depth=self.hard_depth, rng=self.np_random)
        self.game = ConnectFourGame(mode=GameMode.PVE,
                                    difficulty=self.opponent_difficulty,
                                    ai_player=self.agent_player.other(),
                                    selector=selector)
        self.opponent_move = None
        if self.game.is_ai_turn():
            self.opponent_move = self.game.play_ai_move()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's column, then the opponent's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.game is None:
            raise RuntimeError("Call reset() before step()")
        if self.game.is_game_over():
            raise RuntimeError("Episode has ended; call reset() before step()")

        column = int(action)
        self.opponent_move = None

        if not self.game.make_move(column):
            debug.warning(f"Invalid action: {column}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        if not self.game.is_game_over():
            self.opponent_move = self.game.play_ai_move()

        terminated = self.game.is_game_over()
        if self.game.game_result == GameResult.DRAW:
            reward = self.reward_draw
        elif terminated:
            reward = self.reward_win if self.game.get_winner() == self.agent_player else self.reward_lose
        if terminated:
            debug.info(f"Game over: {self.game.game_result.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode is None or self.game is None:
            return None
        if self.render_mode == "ascii":
            return self.game.render()
        print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return np.array(self.game.board.grid, dtype=np.int8)

    def _get_info(self) -> Dict:
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.current_player.value,
            'game_result': self.game.game_result.name,
            'moves_made': len(self.game.history),
            'winning_line': self.game.winning_line,
            'last_move': self.game.last_move,
            'opponent_move': self.opponent_move,
        }
