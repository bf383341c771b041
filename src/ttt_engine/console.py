"""
Interactive console session on top of GameEngine.

Reading and re-prompting live here; the engine only ever sees well-formed,
in-bounds moves. Input and output are injectable so sessions can be scripted.
"""
from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Optional

from .engine import GameEngine
from .game_basics import Level, Mode, Move, State, parse_move
from .stats import SessionStats

RESULT_MESSAGES = {
    State.IN_PROGRESS: "Game still in progress!",
    State.DRAW: "Draw!",
    State.WIN_X: "Winner - X!",
    State.WIN_O: "Winner - O!",
}


class Settings(NamedTuple):
    size: int
    mode: Mode
    level: Optional[Level]


def print_banner(output_fn: Callable[[str], None] = print) -> None:
    line = "+" + "-" * 30 + "+"
    output_fn(line)
    output_fn(f"|{'Welcome to Tic-Tac-Toe Game!':>30}|")
    output_fn(line)


def _choose(input_fn: Callable[[], str], options: dict):
    while True:
        answer = input_fn().strip().lower()
        if answer in options:
            return options[answer]


def _read_size(input_fn: Callable[[], str], output_fn: Callable[[str], None]) -> int:
    while True:
        output_fn("Enter the board size (positive integer > 2): ")
        try:
            size = int(input_fn().strip())
        except ValueError:
            output_fn("Board size should be an integer! Try again:")
            continue
        if size > 2:
            return size
        output_fn("Board size should be a positive integer greater than 2! Try again:")


def prompt_settings(
    input_fn: Callable[[], str] = input,
    output_fn: Callable[[str], None] = print,
    size: Optional[int] = None,
    mode: Optional[Mode] = None,
    level: Optional[Level] = None,
) -> Settings:
    """Ask for the mode, board size and (in HvC) level, skipping any value already given.

    Answers are re-read until valid. Raises EOFError if input runs out.
    """
    if mode is None:
        output_fn("Choose the game mode:\n1. HvH\n2. HvC")
        mode = _choose(input_fn, {"1": Mode.HVH, "2": Mode.HVC})
    if size is None:
        size = _read_size(input_fn, output_fn)
    if mode is Mode.HVC and level is None:
        output_fn("Choose the game level:\n1. Easy\n2. Hard")
        level = _choose(input_fn, {"1": Level.EASY, "2": Level.HARD})
    return Settings(size, mode, level)


class ConsoleSession:
    def __init__(
        self,
        engine: GameEngine,
        input_fn: Callable[[], str] = input,
        output_fn: Callable[[str], None] = print,
        banner: bool = True,
    ):
        self.engine = engine
        self.banner = banner
        self.stats = SessionStats()
        self._input = input_fn
        self._output = output_fn

    def run(self) -> SessionStats:
        """Play rounds until the user declines a replay or input runs out."""
        if self.banner:
            print_banner(self._output)
        try:
            while True:
                self._play_round()
                self.stats.record(self.engine.state)
                self._print_result()
                if not self._ask_replay():
                    break
                self.engine.reset()
                self._output("New game has just started!")
        except EOFError:
            logging.info("Input closed; ending session")
        self._output(self.stats.render())
        return self.stats

    def _play_round(self) -> None:
        engine = self.engine
        while engine.is_in_progress():
            self._output(engine.render())
            self._player_move()
            if engine.mode is Mode.HVC and engine.is_in_progress():
                self._output(engine.render())
                self._output("Computer move:")
                engine.make_computer_move()

    def _player_move(self) -> None:
        move = self._input_move()
        while not self.engine.make_player_move(move):
            self._output(f"Cell [{move.row}, {move.col}] isn't empty.")
            move = self._input_move()

    def _input_move(self) -> Move:
        size = self.engine.board_size
        self._output(f"Enter player {self.engine.current_player.symbol} move:")
        while True:
            move = self._read_move()
            if move is None:
                self._output("Invalid position! Try again:")
            elif 1 <= move.row <= size and 1 <= move.col <= size:
                return move
            else:
                self._output(f"Row and column should be in the [1..{size}] bounds!")

    def _read_move(self) -> Optional[Move]:
        try:
            return parse_move(self._input())
        except ValueError:
            return None

    def _print_result(self) -> None:
        self._output(self.engine.render())
        self._output(RESULT_MESSAGES[self.engine.state])

    def _ask_replay(self) -> bool:
        while True:
            self._output("Do you want to play one more game? (Y/N):")
            answer = self._input().strip().lower()
            if answer == "y":
                return True
            if answer == "n":
                return False
            self._output("Incorrect input! Please, try again:")
