"""
Game engine: owns the board, alternates turns and drives the computer player.
"""
from __future__ import annotations

import logging
import random
from typing import Optional

from .board import Board
from .errors import NoMoveAvailableError
from .game_basics import Level, Marker, Mode, Move, State
from .strategies import MoveStrategy, strategy_for_level


class GameEngine:
    """One game session: a single board reused across rounds.

    The level is only consulted for computer moves, so in HvH mode it is
    carried along but never used.
    """

    def __init__(
        self,
        size: int = 3,
        mode: Mode = Mode.HVC,
        level: Level = Level.HARD,
        seed: Optional[int] = None,
    ):
        self._board = Board(size)
        self._mode = mode
        self._level = level
        self._strategy: MoveStrategy = strategy_for_level(level, random.Random(seed))
        self._current_player = Marker.X

    def make_player_move(self, move: Move) -> bool:
        """Play move for the current player; flip the turn only if it was made.

        InvalidMoveError from the board propagates unchanged.
        """
        done = self._board.try_make_move(move, self._current_player)
        if done:
            logging.debug("%s played %s -> %s", self._current_player.symbol, move, self._board.state.name)
            self._current_player = self._current_player.opposite()
        return done

    def make_computer_move(self) -> bool:
        move = self._strategy.generate_move(self._board, self._current_player)
        if move is None:
            raise NoMoveAvailableError(
                f"Can't calculate computer's move for {self._current_player.symbol} "
                f"(state={self._board.state.name})"
            )
        return self.make_player_move(move)

    def is_in_progress(self) -> bool:
        return self._board.state is State.IN_PROGRESS

    def reset(self) -> None:
        self._current_player = Marker.X
        self._board.reset()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def state(self) -> State:
        return self._board.state

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def level(self) -> Level:
        return self._level

    @property
    def current_player(self) -> Marker:
        return self._current_player

    @property
    def board_size(self) -> int:
        return self._board.size

    def get_state(self) -> State:
        return self.state

    def get_mode(self) -> Mode:
        return self._mode

    def get_current_player(self) -> Marker:
        return self._current_player

    def get_board_size(self) -> int:
        return self._board.size

    def render(self) -> str:
        return self._board.render()

    def __str__(self) -> str:
        return self.render()
