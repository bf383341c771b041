import json
import subprocess
import sys
from pathlib import Path

import pytest

from ttt_engine.cli import main


def _run_cli(args: list[str], cwd: Path, input: str = "") -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "ttt_engine.cli"]
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True, input=input)


def test_render_prints_board_and_state(capsys):
    assert main(["render", "--size", "3", "--moves", "1,1 2,2 1,2 3,3 1,3"]) == 0
    out = capsys.readouterr().out
    assert "|X|X|X|" in out
    assert "state=WIN_X" in out


def test_render_uses_env_size(capsys, monkeypatch):
    monkeypatch.setenv("TTT_BOARD_SIZE", "4")
    assert main(["render"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "+-+-+-+-+"
    assert "to_move=X" in out


@pytest.mark.parametrize("moves", ["1,1 1,1", "0,1", "1;1", "1,1 2,1 1,2 2,2 1,3 3,3"])
def test_render_rejects_bad_sequences(moves):
    assert main(["render", "--size", "3", "--moves", moves]) == 2


def test_best_move_logs_result(caplog):
    with caplog.at_level("INFO"):
        assert main(["best-move", "--board", "X.O/X.O/.X."]) == 0
    assert "to_move=O move=(3, 3)" in caplog.text
    assert "score=99" in caplog.text


@pytest.mark.parametrize("bad", ["abc", "X.O/.X.", "XXX/OOO/X..", "XXX/OO./..."])
def test_best_move_rejects_invalid_or_finished(bad):
    assert main(["best-move", "--board", bad]) == 2


def test_selfplay_command(tmp_path: Path):
    out = tmp_path / "sp"
    rc = main(["--seed", "3", "selfplay", "--games", "4", "--x-level", "easy", "--o-level", "easy",
               "--out", str(out)])
    assert rc == 0
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["args"]["seed"] == 3
    assert manifest["summary"]["games"] == 4


def test_selfplay_defaults_to_env_data_dir(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TTT_DATA_RAW", str(tmp_path / "raw"))
    assert main(["selfplay", "--games", "1", "--x-level", "easy", "--o-level", "easy"]) == 0
    assert (tmp_path / "raw" / "selfplay_games.csv").exists()


def test_selfplay_rejects_non_positive_games(tmp_path: Path):
    assert main(["selfplay", "--games", "0", "--out", str(tmp_path)]) == 2


def test_bad_env_seed_is_reported(monkeypatch):
    monkeypatch.setenv("TTT_SEED", "abc")
    assert main(["render"]) == 2


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: ttt" in capsys.readouterr().out


def test_cli_play_session_via_stdin(tmp_path: Path):
    script = "\n".join(["1 1", "2 1", "1 2", "2 2", "1 3", "n"]) + "\n"
    r = _run_cli(["play", "--size", "3", "--mode", "hvh"], cwd=tmp_path, input=script)
    assert r.returncode == 0
    assert "Winner - X!" in r.stdout
    assert "Games Statistics:" in r.stdout


def test_cli_play_ends_cleanly_on_eof(tmp_path: Path):
    r = _run_cli(["play", "--mode", "hvc", "--level", "easy"], cwd=tmp_path, input="2 2\n")
    assert r.returncode == 0
    assert "Games Statistics:" in r.stdout


def test_cli_play_asks_for_settings_without_mode(tmp_path: Path):
    script = "\n".join(["1", "x", "3", "1 1", "2 1", "1 2", "2 2", "1 3", "n"]) + "\n"
    r = _run_cli(["play"], cwd=tmp_path, input=script)
    assert r.returncode == 0
    assert r.stdout.index("Welcome to Tic-Tac-Toe Game!") < r.stdout.index("Choose the game mode:")
    assert r.stdout.count("Welcome to Tic-Tac-Toe Game!") == 1
    assert "Board size should be an integer! Try again:" in r.stdout
    assert "Choose the game level:" not in r.stdout
    assert "Winner - X!" in r.stdout


def test_cli_play_setup_ends_cleanly_on_eof(tmp_path: Path):
    r = _run_cli(["play", "--size", "3"], cwd=tmp_path, input="2\n")
    assert r.returncode == 0
    assert "Choose the game level:" in r.stdout
    assert "Games Statistics:" not in r.stdout


def test_cli_module_best_move(tmp_path: Path):
    r = _run_cli(["best-move", "--board", "X../XO./..."], cwd=tmp_path)
    assert r.returncode == 0
    assert "move=(3, 1)" in r.stdout + r.stderr
