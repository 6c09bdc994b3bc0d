"""
exceptions.py - Errors raised by the Connect Four engine
"""

from typing import Optional


class ConnectFourError(Exception):
    """Base class for engine errors."""


class InvalidMove(ConnectFourError):
    """A token cannot be dropped into the requested column."""

    def __init__(self, column: int, reason: str):
        self.column = column
        self.reason = reason
        super().__init__(f"Invalid move in column {column}: {reason}")


class NoValidMoves(ConnectFourError):
    """A move was requested on a board with no open column."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "No valid moves available")
