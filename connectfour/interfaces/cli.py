"""
cli.py - Command-line interface for Connect Four

This module provides a terminal game (two players, or one player against the
computer), position analysis and a search benchmark.
"""

import argparse
import sys
import time
from typing import List, Optional

from connectfour.ai.evaluation import evaluate
from connectfour.ai.selector import Difficulty, MoveSelector
from connectfour.debug import debug, DebugLevel
from connectfour.exceptions import InvalidMove
from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame, GameMode
from connectfour.utils import COLS, DEFAULT_HARD_DEPTH, Player

# Special commands returned by get_human_move
QUIT, UNDO, RESTART = -1, -2, -3


def positive_int(text: str) -> int:
    """argparse type for counts and depths that must be at least 1."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect Four against a minimax opponent')
    parser.add_argument('--debug', action='store_true', help='Enable debug output')
    parser.add_argument('--debug_level', default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging verbosity (ignored with --debug)')
    parser.add_argument('--log_file', default=None, help='Also write log messages to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--mode', choices=[m.value for m in GameMode], default='pve',
                             help='Two players (pvp) or against the computer (pve)')
    play_parser.add_argument('--difficulty', choices=[d.value for d in Difficulty],
                             default='hard', help='Computer strength')
    play_parser.add_argument('--ai_first', action='store_true',
                             help='Let the computer make the first move')
    play_parser.add_argument('--depth', type=positive_int, default=DEFAULT_HARD_DEPTH,
                             help='Look-ahead of the hard computer player')
    play_parser.add_argument('--seed', type=int, default=None,
                             help='Random seed for the easy computer player')

    analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
    source = analyze_parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--moves', type=str,
                        help='Comma-separated columns played from an empty board, e.g. 3,3,4')
    source.add_argument('--rows', type=str,
                        help='Six rows top to bottom separated by "/", using . X O')
    analyze_parser.add_argument('--player', choices=['X', 'O'], default=None,
                                help='Side to move (default: inferred from token counts)')
    analyze_parser.add_argument('--depth', type=positive_int, default=DEFAULT_HARD_DEPTH,
                                help='Look-ahead used for column scores')

    benchmark_parser = subparsers.add_parser('benchmark', help='Time hard-mode move selection')
    benchmark_parser.add_argument('--moves', type=positive_int, default=10,
                                  help='Number of computer moves to time')
    benchmark_parser.add_argument('--depth', type=positive_int, default=DEFAULT_HARD_DEPTH,
                                  help='Look-ahead of the hard computer player')

    return parser


def parse_column_list(text: str) -> List[int]:
    """Parse "3,3,4" into [3, 3, 4]."""
    return [int(part) for part in text.split(',') if part.strip()]


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None
        self.game: Optional[ConnectFourGame] = None

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = build_parser().parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.configure(level=DebugLevel[self.args.debug_level.upper()])
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play Connect Four interactively until the user quits."""
        ai_player = Player.ONE if self.args.ai_first else Player.TWO
        selector = MoveSelector(hard_depth=self.args.depth, seed=self.args.seed)
        self.game = ConnectFourGame(mode=self.args.mode, difficulty=self.args.difficulty,
                                    ai_player=ai_player, selector=selector)

        print("Starting a new Connect Four game!")
        print(f"Enter column number (0-{COLS - 1}) to make a move.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")

        while True:
            print(self.game.render())
            while not self.game.is_game_over():
                if self.game.is_ai_turn():
                    print("AI is thinking...")
                    column = self.game.play_ai_move()
                    print(f"AI plays column {column}")
                    print(self.game.render())
                    continue

                move = self.get_human_move()
                if move is None:
                    continue
                if move == QUIT:
                    print("Quitting game.")
                    self.print_scores()
                    return
                if move == UNDO:
                    self.undo()
                    continue
                if move == RESTART:
                    self.game.reset()
                    print("Game restarted.")
                    print(self.game.render())
                    continue

                if self.game.make_move(move):
                    print(self.game.render())
                else:
                    print(f"Column {move} is full.")

            self.announce_result()
            self.print_scores()
            if not self.ask_play_again():
                return
            self.game.reset()

    def undo(self) -> None:
        # Against the computer, take back its reply as well as our own move
        if not self.game.undo_move():
            print("No moves to undo.")
            return
        if self.game.is_ai_turn():
            self.game.undo_move()
        print("Move undone.")
        print(self.game.render())

    def get_human_move(self) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, or special command code, or None if invalid input
        """
        player = self.game.get_current_player()
        try:
            user_input = input(f"{player} to move (columns 0-{COLS - 1}, q/u/r): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        if user_input == 'u':
            return UNDO
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None

        if not 0 <= move < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None
        return move

    def ask_play_again(self) -> bool:
        try:
            return input("Play again? [y/N]: ").strip().lower() == 'y'
        except EOFError:
            return False

    def announce_result(self) -> None:
        print("Game over!")
        winner = self.game.get_winner()
        if winner is None:
            print("It's a draw!")
        elif self.game.mode == GameMode.PVE:
            print("AI wins! Better luck next time." if winner == self.game.ai_player
                  else "You win! Congratulations!")
        else:
            print(f"Player {winner} wins!")
        if self.game.winning_line:
            print(f"Winning line: {list(self.game.winning_line)}")

    def print_scores(self) -> None:
        scores = self.game.scores
        print(f"Score - X: {scores[Player.ONE]}  O: {scores[Player.TWO]}  "
              f"Draws: {scores['draws']}")

    def load_position(self) -> Board:
        if self.args.moves is not None:
            return Board.from_moves(parse_column_list(self.args.moves))
        return Board.from_rows(self.args.rows.split('/'))

    def analyze_position(self) -> int:
        """Print the outcome, evaluation and suggested moves for a position."""
        try:
            board = self.load_position()
        except (ValueError, InvalidMove) as exc:
            print(f"Error parsing position: {exc}")
            return 1

        print("Loaded position:")
        print(board.render())

        if self.args.player:
            player = Player.from_symbol(self.args.player)
        else:
            player = Player.ONE if board.count(Player.ONE) == board.count(Player.TWO) else Player.TWO

        if not board.is_consistent():
            print("Warning: this position cannot arise from legal play")

        result = board.outcome()
        print(f"Outcome: {result.name}")
        for p in (Player.ONE, Player.TWO):
            line = board.check_win(p)
            if line:
                print(f"Winning line for {p}: {list(line)}")
        if result.is_game_over():
            return 0

        columns = board.valid_columns()
        print(f"Valid moves: {columns}")
        print(f"Side to move: {player}")
        print(f"Static evaluation for {player}: {evaluate(board, player):.1f}")

        selector = MoveSelector(hard_depth=self.args.depth, seed=0)
        for column, score in zip(columns, selector.scores(board, player)):
            print(f"  column {column}: {score:.1f}")
        for difficulty in Difficulty:
            column = selector.select_move(board, player, difficulty)
            print(f"{difficulty.value.capitalize()} move: column {column}")
        return 0

    def benchmark(self) -> None:
        """Time the hard opponent playing against itself."""
        print(f"Timing {self.args.moves} hard moves at depth {self.args.depth}...")
        game = ConnectFourGame(selector=MoveSelector(hard_depth=self.args.depth))

        total_time = 0.0
        total_nodes = 0
        moves = 0
        while moves < self.args.moves:
            if game.is_game_over():
                game.reset()
            start = time.perf_counter()
            column = game.play_ai_move()
            elapsed = time.perf_counter() - start
            nodes = game.selector.nodes_evaluated

            total_time += elapsed
            total_nodes += nodes
            moves += 1
            print(f"  move {moves}: column {column}, {nodes} nodes, {elapsed * 1000:.1f} ms")

        print(f"Total: {total_time:.3f} seconds, {total_nodes} nodes, "
              f"{total_time / moves * 1000:.1f} ms per move")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
