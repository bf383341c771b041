"""ttt_engine package.

N x N tic-tac-toe: board model, minimax opponent, game engine, a console
session and self-play export.

Convenience imports are exposed for common workflows.
"""

from .board import Board
from .engine import GameEngine
from .errors import InvalidMoveError, NoMoveAvailableError
from .game_basics import Level, Marker, Mode, Move, State
from .strategies import MinimaxMoveStrategy, RandomMoveStrategy, strategy_for_level

__all__ = [
    "Board",
    "GameEngine",
    "InvalidMoveError",
    "NoMoveAvailableError",
    "Level",
    "Marker",
    "Mode",
    "Move",
    "State",
    "MinimaxMoveStrategy",
    "RandomMoveStrategy",
    "strategy_for_level",
]
