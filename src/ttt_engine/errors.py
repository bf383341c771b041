"""Exceptions raised by the game engine."""
from __future__ import annotations


class InvalidMoveError(ValueError):
    """Row or column outside the board. Raised before the board is touched."""

    def __init__(self, row: int, col: int, size: int):
        super().__init__(f"Both row and col should be in [1, {size}] interval, got ({row}, {col}).")
        self.row = row
        self.col = col
        self.size = size


class NoMoveAvailableError(RuntimeError):
    """The computer was asked to move but its strategy produced nothing."""
