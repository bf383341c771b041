"""
Computer move strategies.

Two variants, picked by difficulty level:
- easy: uniform random choice among the available moves.
- hard: full-depth minimax (see solver.py).
"""
from __future__ import annotations

import logging
import random
from typing import Optional, Protocol

from .board import Board
from .game_basics import Level, Marker, Move
from .solver import best_move

# Above this many empty cells a minimax search takes more than a few seconds.
SLOW_SEARCH_EMPTY_CELLS = 10


class MoveStrategy(Protocol):
    def generate_move(self, board: Board, player: Marker) -> Optional[Move]:
        ...


class RandomMoveStrategy:
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random()

    def generate_move(self, board: Board, player: Marker) -> Optional[Move]:
        moves = board.available_moves()
        if not moves:
            return None
        return self._rng.choice(moves)

    def __repr__(self) -> str:
        return "RandomMoveStrategy()"


class MinimaxMoveStrategy:
    def generate_move(self, board: Board, player: Marker) -> Optional[Move]:
        if board.is_filled():
            return None
        if board.empty_count > SLOW_SEARCH_EMPTY_CELLS:
            logging.warning("Minimax over %d empty cells; this search may take very long",
                            board.empty_count)
        return best_move(board, player)

    def __repr__(self) -> str:
        return "MinimaxMoveStrategy()"


def strategy_for_level(level: Level, rng: Optional[random.Random] = None) -> MoveStrategy:
    if level is Level.EASY:
        return RandomMoveStrategy(rng)
    if level is Level.HARD:
        return MinimaxMoveStrategy()
    raise ValueError(f"Unknown level: {level}")
