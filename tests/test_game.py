import numpy as np
import pytest

from connectfour import NoValidMoves
from connectfour.ai.selector import MoveSelector
from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourEnv, ConnectFourGame, GameMode
from connectfour.utils import GameResult, Player


def play(game, columns):
    for column in columns:
        assert game.make_move(column)


def test_moves_alternate_and_track_last_move() -> None:
    game = ConnectFourGame()

    assert game.get_current_player() == Player.ONE
    assert game.make_move(3)
    assert game.last_move == (5, 3)
    assert game.get_current_player() == Player.TWO
    assert game.make_move(3)
    assert game.last_move == (4, 3)
    assert game.get_current_player() == Player.ONE


def test_invalid_moves_are_rejected() -> None:
    game = ConnectFourGame()
    play(game, [0] * 6)

    assert not game.make_move(0)
    assert not game.make_move(7)
    assert not game.make_move(-1)
    assert game.get_current_player() == Player.ONE
    assert len(game.history) == 6


def test_win_ends_game_and_updates_scores() -> None:
    game = ConnectFourGame()
    play(game, [0, 6, 1, 6, 2, 6, 3])

    assert game.is_game_over()
    assert game.game_result == GameResult.PLAYER_ONE_WIN
    assert game.get_winner() == Player.ONE
    assert game.winning_line == ((5, 0), (5, 1), (5, 2), (5, 3))
    assert game.scores[Player.ONE] == 1
    assert game.get_valid_moves() == []
    assert not game.make_move(4)


def test_undo_after_win_restores_state_and_score() -> None:
    game = ConnectFourGame()
    play(game, [0, 6, 1, 6, 2, 6, 3])

    assert game.undo_move()

    assert not game.is_game_over()
    assert game.get_current_player() == Player.ONE
    assert game.winning_line is None
    assert game.last_move == (3, 6)
    assert game.scores[Player.ONE] == 0
    assert game.board == Board.from_moves([0, 6, 1, 6, 2, 6])


def test_undo_without_history() -> None:
    assert not ConnectFourGame().undo_move()


def test_reset_keeps_scoreboard() -> None:
    game = ConnectFourGame()
    play(game, [0, 6, 1, 6, 2, 6, 3])
    game.reset()
    play(game, [0, 1, 6, 1, 6, 1, 5, 1])

    assert game.get_winner() == Player.TWO
    assert game.scores == {Player.ONE: 1, Player.TWO: 1, "draws": 0}

    game.reset_scores()
    assert game.scores == {Player.ONE: 0, Player.TWO: 0, "draws": 0}


def test_pve_ai_turns() -> None:
    game = ConnectFourGame(mode="pve", difficulty="easy", ai_player=Player.TWO,
                           selector=MoveSelector(seed=0))

    assert game.mode == GameMode.PVE
    assert not game.is_ai_turn()
    game.make_move(0)
    assert game.is_ai_turn()
    assert game.play_ai_move() == 3
    assert game.last_move == (5, 3)
    assert not game.is_ai_turn()


def test_ai_move_after_game_over_raises() -> None:
    game = ConnectFourGame()
    play(game, [0, 6, 1, 6, 2, 6, 3])

    with pytest.raises(NoValidMoves):
        game.play_ai_move()


def test_env_reset_and_step() -> None:
    env = ConnectFourEnv(opponent_difficulty="easy")
    observation, info = env.reset(seed=0)

    assert observation.shape == (6, 7)
    assert observation.dtype == np.int8
    assert not observation.any()
    assert info['valid_moves'] == list(range(7))

    observation, reward, terminated, truncated, info = env.step(0)

    assert reward == pytest.approx(env.reward_step)
    assert not terminated and not truncated
    assert observation[5, 0] == Player.ONE.value
    assert observation[5, 3] == Player.TWO.value
    assert info['opponent_move'] == 3
    assert info['moves_made'] == 2
    assert env.observation_space.contains(observation)


def test_env_invalid_action_truncates() -> None:
    env = ConnectFourEnv()
    env.reset(seed=0)

    _, reward, terminated, truncated, info = env.step(7)

    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info['invalid_move']


def test_env_reports_loss_to_opponent() -> None:
    env = ConnectFourEnv(opponent_difficulty="easy")
    env.reset(seed=0)

    for _ in range(4):
        _, reward, terminated, _, _ = env.step(6)
        assert not terminated

    _, reward, terminated, truncated, info = env.step(6)

    assert terminated and not truncated
    assert reward == env.reward_lose
    assert info['game_result'] == GameResult.PLAYER_TWO_WIN.name
    assert info['winning_line'] == ((2, 3), (3, 3), (4, 3), (5, 3))


def test_env_opponent_opens_when_agent_plays_second() -> None:
    env = ConnectFourEnv(opponent_difficulty="easy", agent_player=Player.TWO,
                         render_mode="ascii")
    observation, info = env.reset(seed=0)

    assert info['opponent_move'] == 3
    assert observation[5, 3] == Player.ONE.value
    assert info['current_player'] == Player.TWO.value
    assert "X" in env.render()


def test_env_step_after_episode_end_raises() -> None:
    env = ConnectFourEnv(opponent_difficulty="easy")
    env.reset(seed=0)
    for _ in range(5):
        _, _, terminated, _, _ = env.step(6)
    assert terminated

    with pytest.raises(RuntimeError, match="reset"):
        env.step(0)

    env.reset(seed=0)
    _, _, terminated, truncated, _ = env.step(0)
    assert not terminated and not truncated
