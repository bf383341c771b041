"""Environment-first defaults for game sessions and data locations.

Command-line flags override these; the environment overrides the built-in
defaults. Paths still resolve when installed as a package or executed from
arbitrary CWDs.
"""

from __future__ import annotations

import os
from pathlib import Path

from .game_basics import Level, clamp_size

DEFAULT_BOARD_SIZE = 3
DEFAULT_LEVEL = Level.HARD


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTT_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TTT_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def data_raw() -> Path:
    p = os.getenv("TTT_DATA_RAW")
    return Path(p) if p else repo_root() / "data_raw"


def board_size() -> int:
    raw = os.getenv("TTT_BOARD_SIZE")
    if not raw:
        return DEFAULT_BOARD_SIZE
    try:
        return clamp_size(int(raw))
    except ValueError:
        raise ValueError(f"TTT_BOARD_SIZE must be an integer, got {raw!r}") from None


def level() -> Level:
    raw = os.getenv("TTT_LEVEL")
    if not raw:
        return DEFAULT_LEVEL
    try:
        return Level(raw.strip().lower())
    except ValueError:
        raise ValueError(f"TTT_LEVEL must be one of easy/hard, got {raw!r}") from None


def seed() -> int | None:
    raw = os.getenv("TTT_SEED")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"TTT_SEED must be an integer, got {raw!r}") from None
