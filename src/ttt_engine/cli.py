from __future__ import annotations

import argparse
import csv
import logging
import sys
import time
from typing import Optional, TextIO

from .board import Board, Mark, current_player, is_valid_state, parse_board, render_board
from .config import check_delay, load_settings
from .game import GameSession, self_play
from .outcome import NoResult, Win, describe, evaluate
from .search import choose_move, score_moves
from .symmetry import canonical_form
from .tactics import blocking_moves, fork_moves, immediate_winning_moves

BOARD_HELP = "Board string, e.g., 100020200 (0=empty,1=X,2=O)"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-engine", description="Unbeatable tic-tac-toe engine")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_eval = sub.add_parser("evaluate", help="Classify a board: win, draw or ongoing")
    p_eval.add_argument("--board", help=BOARD_HELP + " (omit with --stdin)")
    p_eval.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_move = sub.add_parser("move", help="Best move for the side to move")
    p_move.add_argument("--board", help=BOARD_HELP + " (omit with --stdin)")
    p_move.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_tac = sub.add_parser("tactics", help="List immediate wins, blocks and forks for side-to-move")
    p_tac.add_argument("--board", required=True, help=BOARD_HELP)

    p_self = sub.add_parser("selfplay", help="Let the engine play both sides to the end")
    p_self.add_argument("--board", default="000000000", help=BOARD_HELP + " (default: empty)")

    p_play = sub.add_parser("play", help="Play against the engine on the terminal")
    p_play.add_argument(
        "--engine-first",
        action="store_true",
        default=None,
        help="Engine plays X and moves first (default: TTT_ENGINE_MARK or O)",
    )
    p_play.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait before the engine moves (default: TTT_THINK_DELAY or 0.5)",
    )

    return p


def _read_board(raw: Optional[str]) -> Optional[Board]:
    try:
        b = parse_board(raw or "")
    except ValueError as e:
        logging.error("%s", e)
        return None
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def _iter_boards(stream: TextIO):
    for line in stream:
        raw = line.strip()
        if not raw:
            continue
        try:
            b = parse_board(raw)
        except ValueError:
            continue
        if not is_valid_state(b):
            continue
        yield raw, b


def _cmd_evaluate(ns: argparse.Namespace) -> int:
    if ns.stdin:
        w = csv.writer(sys.stdout)
        w.writerow(["board", "outcome", "mark", "line", "canonical_form"])
        for raw, b in _iter_boards(sys.stdin):
            outcome = evaluate(b)
            canon = canonical_form(b)
            if isinstance(outcome, Win):
                w.writerow([raw, "win", outcome.mark.name, ' '.join(map(str, outcome.line)), canon])
            elif isinstance(outcome, NoResult):
                w.writerow([raw, "ongoing", "", "", canon])
            else:
                w.writerow([raw, "draw", "", "", canon])
        return 0
    b = _read_board(ns.board)
    if b is None:
        return 2
    logging.info("%s canonical_form=%s", describe(evaluate(b)), canonical_form(b))
    return 0


def _cmd_move(ns: argparse.Namespace) -> int:
    if ns.stdin:
        w = csv.writer(sys.stdout)
        w.writerow(["board", "to_move", "move", "score"])
        for raw, b in _iter_boards(sys.stdin):
            p = current_player(b)
            mv = choose_move(b, p)
            score = "" if mv is None else score_moves(b, p)[mv]
            w.writerow([raw, p.name, "" if mv is None else mv, score])
        return 0
    b = _read_board(ns.board)
    if b is None:
        return 2
    p = current_player(b)
    mv = choose_move(b, p)
    if mv is None:
        logging.info("to_move=%s move=none %s", p.name, describe(evaluate(b)))
        return 0
    scores = score_moves(b, p)
    logging.info("to_move=%s move=%d score=%d scores=%s", p.name, mv, scores[mv], scores)
    return 0


def _cmd_tactics(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board)
    if b is None:
        return 2
    p = current_player(b)
    logging.info(
        "to_move=%s wins=%s blocks=%s forks=%s",
        p.name,
        immediate_winning_moves(b, p),
        blocking_moves(b, p),
        fork_moves(b, p),
    )
    return 0


def _cmd_selfplay(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board)
    if b is None:
        return 2
    moves, outcome = self_play(b)
    logging.info("moves=%s %s", moves, describe(outcome))
    return 0


def _cmd_play(ns: argparse.Namespace) -> int:
    try:
        settings = load_settings()
        delay = settings.think_delay if ns.delay is None else check_delay(ns.delay)
    except ValueError as e:
        logging.error("%s", e)
        return 2
    engine_mark = Mark.X if ns.engine_first else settings.engine_mark

    game = GameSession(engine_mark=engine_mark)
    print(f"You are {game.human_mark.name}. Enter a cell index 0-8, or q to quit.")
    while not game.is_over:
        if game.engine_to_move:
            if delay:
                time.sleep(delay)
            mv = game.engine_move()
            print(f"Engine plays {mv}")
            continue
        print(render_board(game.board))
        line = sys.stdin.readline()
        if not line or line.strip().lower() == "q":
            logging.info("Game abandoned")
            return 0
        try:
            game.play(int(line.strip()))
        except ValueError as e:
            print(f"Illegal move: {e}")
    print(render_board(game.board))
    result = game.result_for(game.human_mark)
    print({"win": "You won!", "loss": "You lost!", "draw": "It's a draw!"}[result])
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

    handlers = {
        "evaluate": _cmd_evaluate,
        "move": _cmd_move,
        "tactics": _cmd_tactics,
        "selfplay": _cmd_selfplay,
        "play": _cmd_play,
    }
    if ns.cmd in handlers:
        return handlers[ns.cmd](ns)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
