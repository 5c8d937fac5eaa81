"""
Exact game search: minimax with alpha-beta pruning.

Scoring is from O's perspective (O is the maximizing side):
- a completed line scores -100 + depth when O is to move (X just won),
  100 - depth when X is to move (O just won), so faster wins and slower
  losses are preferred;
- a full board with no line scores 0.

Tie-break policy:
- Candidates are tried in ascending index order.
- The running best is replaced only on strict improvement, so the lowest
  index wins among equally scored moves.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional

from .board import Board, Mark
from .outcome import Draw, Win, evaluate, is_terminal

WIN_SCORE = 100


class SearchResult(NamedTuple):
    score: int
    move: Optional[int] = None


@dataclass
class SearchStats:
    nodes: int = 0
    cutoffs: int = 0


def search(
    board: Board,
    depth: int = 0,
    maximizing: bool = True,
    alpha: float = -math.inf,
    beta: float = math.inf,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    if stats is not None:
        stats.nodes += 1
    outcome = evaluate(board)
    if isinstance(outcome, Win):
        return SearchResult(-WIN_SCORE + depth if maximizing else WIN_SCORE - depth)
    if isinstance(outcome, Draw):
        return SearchResult(0)

    mark = Mark.O if maximizing else Mark.X
    best_score = -math.inf if maximizing else math.inf
    best_move: Optional[int] = None
    for mv in board.empty_cells():
        child = search(board.place(mv, mark), depth + 1, not maximizing, alpha, beta, stats)
        if maximizing:
            if child.score > best_score:
                best_score = child.score
                best_move = mv
            alpha = max(alpha, best_score)
        else:
            if child.score < best_score:
                best_score = child.score
                best_move = mv
            beta = min(beta, best_score)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break
    return SearchResult(int(best_score), best_move)


def choose_move(board: Board, to_move: Mark = Mark.O) -> Optional[int]:
    """Best move for `to_move`, or None when the board is already decided."""
    stats = SearchStats()
    res = search(board, 0, to_move is Mark.O, -math.inf, math.inf, stats)
    logging.debug(
        "search board=%s to_move=%s move=%s score=%s nodes=%d cutoffs=%d",
        board, to_move.name, res.move, res.score, stats.nodes, stats.cutoffs,
    )
    return res.move


def score_moves(board: Board, to_move: Mark) -> Dict[int, int]:
    """Exact minimax score of every legal move, from O's perspective."""
    if is_terminal(evaluate(board)):
        return {}
    maximizing = to_move is Mark.O
    return {
        mv: search(board.place(mv, to_move), 1, not maximizing).score
        for mv in board.empty_cells()
    }
