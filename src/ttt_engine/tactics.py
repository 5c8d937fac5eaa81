"""
Tactics and simple motifs: immediate wins, blocks, forks.
Teaching notes:
- These are one-ply lookups; the search engine finds the same moves by exhaustive play.
"""
from typing import List

from .board import Board, Mark
from .outcome import Win, evaluate


def immediate_winning_moves(board: Board, player: Mark) -> List[int]:
    wins: List[int] = []
    for i in board.empty_cells():
        outcome = evaluate(board.place(i, player))
        if isinstance(outcome, Win) and outcome.mark is player:
            wins.append(i)
    return wins


def blocking_moves(board: Board, player: Mark) -> List[int]:
    return immediate_winning_moves(board, player.opponent)


def fork_moves(board: Board, player: Mark) -> List[int]:
    forks: List[int] = []
    for i in board.empty_cells():
        if len(immediate_winning_moves(board.place(i, player), player)) >= 2:
            forks.append(i)
    return forks
