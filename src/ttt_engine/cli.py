from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from . import config
from .board import Board
from .console import ConsoleSession, print_banner, prompt_settings
from .engine import GameEngine
from .errors import InvalidMoveError
from .game_basics import Level, Mode, parse_moves
from .selfplay import SelfPlayArgs, run_selfplay
from .solver import minimax


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="N x N tic-tac-toe with a minimax opponent")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for the random mover (default: TTT_SEED)")

    levels = [lv.value for lv in Level]

    p_play = sub.add_parser("play", help="Play an interactive session on the console")
    p_play.add_argument("--size", type=int, default=None, help="Board size in [3, 10] (default: TTT_BOARD_SIZE or 3)")
    p_play.add_argument("--mode", choices=[m.value for m in Mode], default=None,
                        help="hvh: two humans, hvc: human (X) versus computer (O). "
                             "Without it, mode and any other setting not given as a flag are asked for on the console")
    p_play.add_argument("--level", choices=levels, default=None,
                        help="Computer level (default: TTT_LEVEL or hard)")

    p_render = sub.add_parser("render", help="Play moves alternately from X and print the board")
    p_render.add_argument("--size", type=int, default=None, help="Board size in [3, 10]")
    p_render.add_argument("--moves", default="", help='Space separated row,col pairs, e.g. "1,1 2,2 1,2"')

    p_best = sub.add_parser("best-move", help="Minimax move for the side to move")
    p_best.add_argument("--board", required=True, help="Board string of . X O, rows may be split by /, e.g. X.O/.X./...")

    p_self = sub.add_parser("selfplay", help="Play computer-vs-computer games and export the records")
    p_self.add_argument("--games", type=int, default=10, help="Number of games (default: 10)")
    p_self.add_argument("--size", type=int, default=None, help="Board size in [3, 10]")
    p_self.add_argument("--x-level", choices=levels, default=Level.EASY.value, help="Level playing X")
    p_self.add_argument("--o-level", choices=levels, default=Level.HARD.value, help="Level playing O")
    p_self.add_argument("--out", type=Path, default=None, help="Output directory (default: TTT_DATA_RAW or data_raw)")
    p_self.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )

    return p


def _cmd_play(ns: argparse.Namespace, seed: Optional[int]) -> int:
    if ns.mode is None:
        print_banner()
        try:
            size, mode, level = prompt_settings(
                size=ns.size, level=Level(ns.level) if ns.level else None)
        except EOFError:
            logging.info("Input closed before the game settings were chosen")
            return 0
        engine = GameEngine(size, mode, level or config.DEFAULT_LEVEL, seed=seed)
        ConsoleSession(engine, banner=False).run()
        return 0
    try:
        size = ns.size if ns.size is not None else config.board_size()
        level = Level(ns.level) if ns.level else config.level()
    except ValueError as e:
        logging.error("%s", e)
        return 2
    engine = GameEngine(size, Mode(ns.mode), level, seed=seed)
    ConsoleSession(engine).run()
    return 0


def _cmd_render(ns: argparse.Namespace) -> int:
    try:
        size = ns.size if ns.size is not None else config.board_size()
        moves = parse_moves(ns.moves)
    except ValueError as e:
        logging.error("%s", e)
        return 2
    engine = GameEngine(size, Mode.HVH)
    for mv in moves:
        if not engine.is_in_progress():
            logging.error("Game already finished (%s) before move %s", engine.state.name, mv)
            return 2
        try:
            made = engine.make_player_move(mv)
        except InvalidMoveError as e:
            logging.error("%s", e)
            return 2
        if not made:
            logging.error("Cell %s isn't empty", mv)
            return 2
    print(engine.render())
    print(f"state={engine.state.name} to_move={engine.current_player.symbol}")
    return 0


def _cmd_best_move(ns: argparse.Namespace) -> int:
    try:
        board = Board.from_string(ns.board)
    except ValueError as e:
        logging.error("Invalid board: %s", e)
        return 2
    if board.state.is_terminal:
        logging.error("Board is already finished: %s", board.state.name)
        return 2
    player = board.next_player()
    res = minimax(board, player)
    logging.info("to_move=%s move=%s score=%d nodes=%d", player.symbol, res.move, res.score, res.nodes)
    return 0


def _cmd_selfplay(ns: argparse.Namespace, seed: Optional[int]) -> int:
    if ns.games < 1:
        logging.error("--games must be positive: %s", ns.games)
        return 2
    try:
        size = ns.size if ns.size is not None else config.board_size()
    except ValueError as e:
        logging.error("%s", e)
        return 2
    out = run_selfplay(SelfPlayArgs(
        out=ns.out if ns.out is not None else config.data_raw(),
        games=ns.games,
        size=size,
        x_level=Level(ns.x_level),
        o_level=Level(ns.o_level),
        seed=seed,
        format=ns.format,
    ))
    logging.info("Exported self-play games to: %s", out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-engine"))
        except Exception:
            print("unknown")
        return 0

    try:
        seed = ns.seed if ns.seed is not None else config.seed()
    except ValueError as e:
        logging.error("%s", e)
        return 2

    if ns.cmd == "play":
        return _cmd_play(ns, seed)
    if ns.cmd == "render":
        return _cmd_render(ns)
    if ns.cmd == "best-move":
        return _cmd_best_move(ns)
    if ns.cmd == "selfplay":
        return _cmd_selfplay(ns, seed)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
