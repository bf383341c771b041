"""
Game basics: markers, states, moves and the text forms used by the CLI.
Teaching notes:
- Cells hold 0=empty, 1=X, 2=O. X always starts.
- A "ply" is a half-move (one player's turn).
- Moves are 1-based (row, col) pairs, the way a human types them.
"""
from __future__ import annotations

import re
from enum import Enum, IntEnum
from typing import NamedTuple

MIN_SIZE = 3
MAX_SIZE = 10

_SYMBOLS = {0: '.', 1: 'X', 2: 'O'}


class Marker(IntEnum):
    EMPTY = 0
    X = 1
    O = 2

    def opposite(self) -> "Marker":
        if self is Marker.X:
            return Marker.O
        if self is Marker.O:
            return Marker.X
        return self

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self.value]

    @classmethod
    def from_symbol(cls, ch: str) -> "Marker":
        for m in cls:
            if m.symbol == ch.upper():
                return m
        raise ValueError(f"Unknown marker symbol: {ch!r}")

    def __str__(self) -> str:
        return self.symbol


class State(Enum):
    IN_PROGRESS = "in_progress"
    DRAW = "draw"
    WIN_X = "win_x"
    WIN_O = "win_o"

    @property
    def is_terminal(self) -> bool:
        return self is not State.IN_PROGRESS

    @classmethod
    def win_for(cls, player: Marker) -> "State":
        if player is Marker.X:
            return cls.WIN_X
        if player is Marker.O:
            return cls.WIN_O
        raise ValueError("Empty marker cannot win")


class Mode(Enum):
    HVH = "hvh"  # human versus human
    HVC = "hvc"  # human versus computer


class Level(Enum):
    EASY = "easy"
    HARD = "hard"


class Move(NamedTuple):
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


def clamp_size(size: int) -> int:
    return max(MIN_SIZE, min(size, MAX_SIZE))


_MOVE_RE = re.compile(r"^\s*(-?\d+)\s*[,\s]\s*(-?\d+)\s*$")


def parse_move(text: str) -> Move:
    """Parse "row col" or "row,col" into a Move (bounds are not checked here)."""
    m = _MOVE_RE.match(text)
    if m is None:
        raise ValueError(f"Invalid move: {text!r}")
    return Move(int(m.group(1)), int(m.group(2)))


def parse_moves(text: str) -> list[Move]:
    """Parse a space separated list of "row,col" pairs, e.g. "1,1 2,2 1,2"."""
    return [parse_move(tok) for tok in text.split() if tok.strip()]
