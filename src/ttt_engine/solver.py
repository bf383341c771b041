"""
Plain minimax search over a shared, mutated-in-place board.
Scoring (from O's point of view):
- Draw scores 0.
- A win for O scores N - depth, a win for X scores -(N - depth), N = 100.
- depth counts plies from the root, so quicker wins and slower losses score better.
O maximizes and X minimizes; each node follows the marker to move there.
Tie-break policy:
- Moves are tried in row-major order; the first move reaching the best score is kept.
No pruning: the cost is exponential in the number of empty cells.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board
from .game_basics import Marker, Move, State

N = 100


@dataclass(frozen=True)
class SearchResult:
    score: int
    move: Optional[Move]
    nodes: int


def terminal_score(state: State, depth: int) -> Optional[int]:
    if state is State.DRAW:
        return 0
    if state is State.WIN_X:
        return -(N - depth)
    if state is State.WIN_O:
        return N - depth
    return None


def minimax(board: Board, player: Marker, depth: int = 0) -> SearchResult:
    """Search the full game tree below the current position with player to move.

    The board is used as scratch space; every move applied during the walk is
    undone before returning, so the board is left exactly as it was given.
    """
    counter = [0]
    score, move = _search(board, Marker(player), depth, counter)
    return SearchResult(score=score, move=move, nodes=counter[0])


def _search(board: Board, player: Marker, depth: int, counter: List[int]) -> Tuple[int, Optional[Move]]:
    counter[0] += 1
    score = terminal_score(board.state, depth)
    if score is not None:
        return score, None

    maximizing = player is Marker.O
    opponent = player.opposite()
    best_score = 0
    best_move: Optional[Move] = None
    for mv in board.available_moves():
        board.try_make_move(mv, player)
        try:
            s, _ = _search(board, opponent, depth + 1, counter)
        finally:
            board.undo_move(mv)
        if best_move is None or (s > best_score if maximizing else s < best_score):
            best_score = s
            best_move = mv
    return best_score, best_move


def best_move(board: Board, player: Marker) -> Optional[Move]:
    """Minimax move for player, or None if the board is filled or already decided."""
    if board.is_filled():
        return None
    res = minimax(board, player)
    logging.debug("minimax player=%s empty=%d nodes=%d score=%d move=%s",
                  Marker(player).symbol, board.empty_count, res.nodes, res.score, res.move)
    return res.move
