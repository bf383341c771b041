#!/usr/bin/env python3
from __future__ import annotations

import argparse
import math
import statistics as stats
import time
from dataclasses import dataclass
from typing import List, Tuple

from ttt_engine.board import Board
from ttt_engine.game_basics import Marker, Move
from ttt_engine.solver import minimax


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 5


def _positions() -> List[Tuple[str, Board, Marker]]:
    empty = Board(3)
    corner = Board(3)
    corner.try_make_move(Move(1, 1), Marker.X)
    late_4x4 = Board.from_string("OXO./OOXO/XOXO/XXX.")
    return [
        ("3x3 empty, X to move", empty, Marker.X),
        ("3x3 after corner, O to move", corner, Marker.O),
        ("4x4 two empty, X to move", late_4x4, Marker.X),
    ]


def main() -> int:
    ap = argparse.ArgumentParser(description="Time the minimax search on fixed positions")
    ap.add_argument("--repeats", type=int, default=Config.repeats)
    cfg = Config(repeats=ap.parse_args().repeats)
    for label, board, player in _positions():
        times: List[float] = []
        nodes = 0
        for _ in range(cfg.repeats):
            t0 = time.perf_counter()
            res = minimax(board, player)
            times.append(time.perf_counter() - t0)
            nodes = res.nodes
        m, h = ci95(times)
        print(f"- {label}: nodes={nodes} mean={m:.4f}s ± {h:.4f}s (95% CI, N={cfg.repeats})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
