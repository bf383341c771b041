"""
Computer-vs-computer games and export of the game records.

Each game is played through GameEngine with one strategy per side. Records
are written as CSV (and optionally Parquet) next to a manifest describing the
run, so results can be compared across levels and board sizes.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .engine import GameEngine
from .game_basics import Level, Marker, Mode, Move, State, clamp_size
from .stats import SessionStats
from .strategies import MoveStrategy, strategy_for_level

SELFPLAY_VERSION = "1.0.0"


@dataclass
class SelfPlayArgs:
    out: Path
    games: int = 10
    size: int = 3
    x_level: Level = Level.EASY
    o_level: Level = Level.HARD
    seed: Optional[int] = None
    format: str = "csv"  # one of: "csv", "parquet", "both"


@dataclass
class GameRecord:
    index: int
    size: int
    x_level: Level
    o_level: Level
    result: State
    moves: List[Move] = field(default_factory=list)

    @property
    def plies(self) -> int:
        return len(self.moves)

    def as_row(self) -> Dict[str, Any]:
        return {
            "game": self.index,
            "size": self.size,
            "x_level": self.x_level.value,
            "o_level": self.o_level.value,
            "result": self.result.name,
            "plies": self.plies,
            "moves": " ".join(f"{m.row},{m.col}" for m in self.moves),
        }


def play_game(
    engine: GameEngine,
    x_level: Level,
    o_level: Level,
    rng: Optional[random.Random] = None,
    index: int = 0,
) -> GameRecord:
    """Play one game to the end on engine, starting from a fresh board."""
    strategies: Dict[Marker, MoveStrategy] = {
        Marker.X: strategy_for_level(x_level, rng),
        Marker.O: strategy_for_level(o_level, rng),
    }
    engine.reset()
    moves: List[Move] = []
    while engine.is_in_progress():
        player = engine.current_player
        move = strategies[player].generate_move(engine.board, player)
        if move is None or not engine.make_player_move(move):
            raise RuntimeError(f"{player.symbol} produced no playable move on\n{engine.render()}")
        moves.append(move)
    return GameRecord(
        index=index,
        size=engine.board_size,
        x_level=x_level,
        o_level=o_level,
        result=engine.state,
        moves=moves,
    )


def play_games(args: SelfPlayArgs) -> List[GameRecord]:
    engine = GameEngine(args.size, Mode.HVC)
    if engine.board_size > 3 and Level.HARD in (args.x_level, args.o_level):
        logging.warning("Hard level on a %dx%d board searches the full game tree; expect very long runs",
                        engine.board_size, engine.board_size)
    records: List[GameRecord] = []
    for i in range(args.games):
        rng = random.Random(None if args.seed is None else args.seed + i)
        rec = play_game(engine, args.x_level, args.o_level, rng, index=i)
        logging.debug("game %d: %s after %d plies", i, rec.result.name, rec.plies)
        records.append(rec)
    return records


def summarize(records: List[GameRecord]) -> Dict[str, Any]:
    stats = SessionStats(r.result for r in records)
    plies = np.array([r.plies for r in records], dtype=float)
    return {
        "games": len(records),
        "results": stats.as_dict(),
        "rates": stats.rates(),
        "mean_plies": float(plies.mean()) if plies.size else None,
        "max_plies": int(plies.max()) if plies.size else None,
    }


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def run_selfplay(args: SelfPlayArgs) -> Path:
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    have_parquet = (importlib.util.find_spec('pandas') is not None
                    and importlib.util.find_spec('pyarrow') is not None)
    msg = ("Parquet dependencies not available (install pandas and pyarrow). "
           "Use pip install .[parquet] to enable parquet support.")
    if fmt == "parquet" and not have_parquet:
        # Strict: only parquet was requested; fail before writing anything
        raise RuntimeError(msg)

    size = clamp_size(args.size)
    logging.info("Playing %d games on %dx%d (X=%s, O=%s)…",
                 args.games, size, size, args.x_level.value, args.o_level.value)
    records = play_games(args)
    rows = [r.as_row() for r in records]
    args.out.mkdir(parents=True, exist_ok=True)

    games_csv = args.out / "selfplay_games.csv"
    games_parquet = args.out / "selfplay_games.parquet"
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        fieldnames = ["game", "size", "x_level", "o_level", "result", "plies", "moves"]
        with games_csv.open('w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=fieldnames)
            w.writeheader()
            for r in rows:
                w.writerow(r)
        wrote_csv = True
        logging.info("Wrote CSV: %s (%d rows)", games_csv, len(rows))

    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            pd.DataFrame(rows).to_parquet(games_parquet)
            wrote_parquet = True
            logging.info("Wrote Parquet file: %s", games_parquet)
        else:
            logging.warning("%s Proceeding with CSV only; manifest will record parquet_written=false.", msg)

    files: Dict[str, Optional[str]] = {
        "games_csv": str(games_csv) if wrote_csv else None,
        "games_parquet": str(games_parquet) if wrote_parquet else None,
    }
    manifest = {
        "selfplay_version": SELFPLAY_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "games": args.games,
            "size": size,
            "x_level": args.x_level.value,
            "o_level": args.o_level.value,
            "seed": args.seed,
            "format": fmt,
        },
        "summary": summarize(records),
        "files": files,
        "checksums": {k: _sha256_file(Path(p)) for k, p in files.items() if p is not None},
        "parquet_written": wrote_parquet,
    }
    (args.out / "manifest.json").write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json")
    return args.out
