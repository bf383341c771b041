"""
N x N board with incremental terminal-state detection.
Teaching notes:
- Cells are stored row-major in a flat list, like the 9-cell boards used for 3x3.
- Only the lines through the cell just played can have been completed, so each
  move checks one row, one column and at most two diagonals: O(size), not O(size^2).
- Moves can be undone, which lets the search walk the tree on a single board.
"""
from __future__ import annotations

import math
from typing import List

from .errors import InvalidMoveError
from .game_basics import Marker, Move, State, clamp_size


class Board:
    def __init__(self, size: int = 3):
        self._size = clamp_size(size)
        self._cells: List[Marker] = [Marker.EMPTY] * (self._size * self._size)
        self._empty_count = self._size * self._size
        self._state = State.IN_PROGRESS

    @property
    def size(self) -> int:
        return self._size

    @property
    def empty_count(self) -> int:
        return self._empty_count

    @property
    def state(self) -> State:
        return self._state

    def get_state(self) -> State:
        return self._state

    def cell(self, move: Move) -> Marker:
        self._check_bounds(move)
        return self._cells[self._index(move)]

    def try_make_move(self, move: Move, player: Marker) -> bool:
        """Mark the cell for player.

        Raises InvalidMoveError for coordinates outside [1, size]. Returns False,
        leaving the board untouched, when the cell is already taken.
        """
        self._check_bounds(move)
        player = Marker(player)
        if player is Marker.EMPTY:
            raise ValueError("Cannot play the empty marker")
        idx = self._index(move)
        if self._cells[idx] is not Marker.EMPTY:
            return False
        self._cells[idx] = player
        self._empty_count -= 1
        self._update_state(move, player)
        return True

    def undo_move(self, move: Move) -> None:
        # Callers undo their own moves in reverse order; not re-validated.
        self._cells[self._index(move)] = Marker.EMPTY
        self._empty_count += 1
        self._state = State.IN_PROGRESS

    def reset(self) -> None:
        for i in range(len(self._cells)):
            self._cells[i] = Marker.EMPTY
        self._empty_count = self._size * self._size
        self._state = State.IN_PROGRESS

    def is_filled(self) -> bool:
        return self._empty_count == 0

    def available_moves(self) -> List[Move]:
        n = self._size
        return [Move(i // n + 1, i % n + 1) for i, v in enumerate(self._cells) if v is Marker.EMPTY]

    def next_player(self) -> Marker:
        x = self._cells.count(Marker.X)
        o = self._cells.count(Marker.O)
        return Marker.X if x == o else Marker.O

    def serialize(self) -> str:
        return ''.join(m.symbol for m in self._cells)

    def render(self) -> str:
        n = self._size
        sep = "+-" * n + "+"
        lines = []
        for r in range(n):
            lines.append(sep)
            lines.append("|" + "|".join(m.symbol for m in self._cells[r * n:(r + 1) * n]) + "|")
        lines.append(sep)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(size={self._size}, state={self._state.name}, cells={self.serialize()!r})"

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """Build a board from a row-major string of '.', 'X' and 'O'.

        Row separators ('/') and whitespace are ignored, e.g. "X.O/.X./..O".
        The position must be reachable: X moves first, at most one side
        has a completed line and the winner made the last move.
        """
        raw = ''.join(ch for ch in text if ch not in "/ \t\r\n")
        n = math.isqrt(len(raw))
        if n * n != len(raw) or clamp_size(n) != n:
            raise ValueError(f"Board string must hold k*k cells with k in [3, 10], got {len(raw)}")
        cells = [Marker.from_symbol(ch) for ch in raw]
        x, o = cells.count(Marker.X), cells.count(Marker.O)
        if not (x == o or x == o + 1):
            raise ValueError(f"Unreachable piece counts: X={x} O={o}")
        board = cls(n)
        board._cells = cells
        board._empty_count = cells.count(Marker.EMPTY)
        board._state = board._scan_state()
        if board._state is State.WIN_X and x != o + 1:
            raise ValueError(f"X won but the counts say O moved last: X={x} O={o}")
        if board._state is State.WIN_O and x != o:
            raise ValueError(f"O won but the counts say X moved last: X={x} O={o}")
        return board

    def _scan_state(self) -> State:
        winners = set()
        for line in self._lines():
            first = self._cells[line[0]]
            if first is not Marker.EMPTY and all(self._cells[i] is first for i in line):
                winners.add(first)
        if len(winners) > 1:
            raise ValueError("Both players have a completed line")
        if winners:
            return State.win_for(winners.pop())
        if self._empty_count == 0:
            return State.DRAW
        return State.IN_PROGRESS

    def _lines(self) -> List[List[int]]:
        n = self._size
        rows = [[r * n + c for c in range(n)] for r in range(n)]
        cols = [[r * n + c for r in range(n)] for c in range(n)]
        diags = [[i * n + i for i in range(n)], [i * n + (n - 1 - i) for i in range(n)]]
        return rows + cols + diags

    def _index(self, move: Move) -> int:
        row, col = move
        return (row - 1) * self._size + (col - 1)

    def _check_bounds(self, move: Move) -> None:
        row, col = move
        if not (1 <= row <= self._size and 1 <= col <= self._size):
            raise InvalidMoveError(row, col, self._size)

    def _update_state(self, move: Move, player: Marker) -> None:
        n = self._size
        r, c = move[0] - 1, move[1] - 1
        cells = self._cells
        won = (
            all(cells[r * n + k] is player for k in range(n))
            or all(cells[k * n + c] is player for k in range(n))
            or (r == c and all(cells[k * n + k] is player for k in range(n)))
            or (r + c == n - 1 and all(cells[k * n + (n - 1 - k)] is player for k in range(n)))
        )
        if won:
            self._state = State.win_for(player)
        elif self._empty_count == 0:
            self._state = State.DRAW
