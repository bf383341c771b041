"""
Per-session results: how many rounds ended in a draw or a win for each side.
"""
from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable

import numpy as np

from .game_basics import State

TERMINAL_STATES = (State.DRAW, State.WIN_X, State.WIN_O)

_LABELS = {State.DRAW: "DRAW", State.WIN_X: "WIN_X", State.WIN_O: "WIN_O"}


class SessionStats:
    def __init__(self, results: Iterable[State] = ()):
        self._counts: Counter = Counter({s: 0 for s in TERMINAL_STATES})
        for s in results:
            self.record(s)

    def record(self, state: State) -> None:
        if state not in TERMINAL_STATES:
            raise ValueError(f"Only finished rounds can be recorded, got {state.name}")
        self._counts[state] += 1

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def count(self, state: State) -> int:
        return self._counts[state]

    def as_dict(self) -> Dict[str, int]:
        return {_LABELS[s]: self._counts[s] for s in TERMINAL_STATES}

    def rates(self) -> Dict[str, float]:
        counts = np.array([self._counts[s] for s in TERMINAL_STATES], dtype=float)
        total = counts.sum()
        rates = counts / total if total > 0 else np.zeros_like(counts)
        return {_LABELS[s]: float(r) for s, r in zip(TERMINAL_STATES, rates)}

    def render(self) -> str:
        sep = "+" + "-" * 21 + "+"
        lines = [sep, f"|{'Games Statistics:':<21}|", sep]
        for s in TERMINAL_STATES:
            lines.append(f"|{_LABELS[s] + ': ':<10}|{self._counts[s]:>10}|")
            lines.append(sep)
        return "\n".join(lines)
