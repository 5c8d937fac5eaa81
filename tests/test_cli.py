from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from ttt_engine.board import parse_board
from ttt_engine.cli import main
from ttt_engine.symmetry import canonical_form

SRC = str(Path(__file__).resolve().parents[1] / "src")


def _run_cli(args: list[str], cwd: Path, stdin: str | None = None, env: dict | None = None) -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "ttt_engine.cli"]
    full_env = dict(os.environ)
    full_env["PYTHONPATH"] = SRC + os.pathsep + full_env.get("PYTHONPATH", "")
    full_env.update(env or {})
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True, input=stdin, env=full_env)


def test_cli_evaluate(tmp_path: Path):
    r = _run_cli(["evaluate", "--board", "111220000"], cwd=tmp_path)
    assert r.returncode == 0
    assert "outcome=win mark=X line=0,1,2" in r.stdout + r.stderr
    r = _run_cli(["evaluate", "--board", "112221121"], cwd=tmp_path)
    assert "outcome=draw" in r.stdout + r.stderr
    r = _run_cli(["evaluate", "--board", "100000000"], cwd=tmp_path)
    assert "outcome=ongoing canonical_form=000000001" in r.stdout + r.stderr


def test_cli_move_blocks(tmp_path: Path):
    r = _run_cli(["move", "--board", "110020000"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "to_move=O move=2 score=0" in s


def test_cli_move_on_finished_board(tmp_path: Path):
    r = _run_cli(["move", "--board", "111220000"], cwd=tmp_path)
    assert r.returncode == 0
    assert "move=none" in r.stdout + r.stderr


def test_cli_move_stdin_streams_csv(tmp_path: Path):
    r = _run_cli(["move", "--stdin"], cwd=tmp_path, stdin="110020000\nbad\n\n111222111\n111220000\n")
    assert r.returncode == 0
    lines = r.stdout.strip().splitlines()
    assert lines[0] == "board,to_move,move,score"
    assert lines[1] == "110020000,O,2,0"
    assert lines[2] == "111220000,O,,"
    assert len(lines) == 3


def test_cli_evaluate_stdin_streams_csv(tmp_path: Path):
    r = _run_cli(["evaluate", "--stdin"], cwd=tmp_path, stdin="111220000\n000000000\n100000000\n")
    assert r.returncode == 0
    lines = r.stdout.strip().splitlines()
    canon = canonical_form(parse_board("111220000"))
    assert lines == [
        "board,outcome,mark,line,canonical_form",
        f"111220000,win,X,0 1 2,{canon}",
        "000000000,ongoing,,,000000000",
        "100000000,ongoing,,,000000001",
    ]


def test_cli_tactics(tmp_path: Path):
    r = _run_cli(["tactics", "--board", "120020001"], cwd=tmp_path)
    assert r.returncode == 0
    assert "to_move=X wins=[] blocks=[7] forks=[6]" in r.stdout + r.stderr


def test_cli_selfplay_draws(tmp_path: Path):
    r = _run_cli(["selfplay"], cwd=tmp_path)
    assert r.returncode == 0
    assert "outcome=draw" in r.stdout + r.stderr


@pytest.mark.parametrize("bad", ["abc", "012345678", "0123456789", "12345678x"])
def test_cli_error_invalid_boards(tmp_path: Path, bad: str):
    for cmd in ("evaluate", "move", "tactics", "selfplay"):
        r = _run_cli([cmd, "--board", bad], cwd=tmp_path)
        assert r.returncode == 2


def test_cli_error_unreachable_state(tmp_path: Path):
    r = _run_cli(["move", "--board", "111222111"], cwd=tmp_path)
    assert r.returncode == 2
    assert "not a valid reachable state" in r.stderr


def test_cli_play_human_never_wins(tmp_path: Path):
    moves = "".join(f"{i}\n" for i in range(9))
    r = _run_cli(["play", "--delay", "0"], cwd=tmp_path, stdin=moves)
    assert r.returncode == 0
    assert "You are X" in r.stdout
    assert "You won!" not in r.stdout
    assert "You lost!" in r.stdout or "It's a draw!" in r.stdout


def test_cli_play_engine_first_from_env(tmp_path: Path):
    r = _run_cli(["play"], cwd=tmp_path, stdin="q\n", env={"TTT_ENGINE_MARK": "X", "TTT_THINK_DELAY": "0"})
    assert r.returncode == 0
    assert "You are O" in r.stdout
    assert "Engine plays 0" in r.stdout


def test_cli_play_bad_env(tmp_path: Path):
    r = _run_cli(["play"], cwd=tmp_path, stdin="q\n", env={"TTT_THINK_DELAY": "later"})
    assert r.returncode == 2


@pytest.mark.parametrize("value", ["nan", "inf"])
def test_cli_play_non_finite_delay_exits_cleanly(tmp_path: Path, value: str):
    r = _run_cli(["play"], cwd=tmp_path, stdin="0\n", env={"TTT_THINK_DELAY": value})
    assert r.returncode == 2
    assert "Traceback" not in r.stderr
    r = _run_cli(["play", "--delay", value], cwd=tmp_path, stdin="0\n")
    assert r.returncode == 2
    assert "Traceback" not in r.stderr


def test_cli_help_smoke(tmp_path: Path):
    for args in (
        ["--help"],
        ["evaluate", "--help"],
        ["move", "--help"],
        ["tactics", "--help"],
        ["selfplay", "--help"],
        ["play", "--help"],
    ):
        r = _run_cli(args, cwd=tmp_path)
        assert r.returncode == 0
        assert r.stdout or r.stderr


def test_main_in_process(caplog):
    import logging

    with caplog.at_level(logging.INFO):
        assert main(["move", "--board", "110220000"]) == 0
    assert "to_move=X move=2" in caplog.text
    assert main([]) == 0
