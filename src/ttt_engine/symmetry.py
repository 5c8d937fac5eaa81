"""
Board symmetries (the dihedral group of the square).
Teaching notes:
- Each transform is a permutation of the 9 cell indices; boards and moves map with it.
- A winning line maps onto another winning line, so outcomes commute with every transform.
"""
from typing import Dict, Tuple

from .board import Board, serialize_board

# SOURCES[kind][i] is the index of the source cell that lands on cell i.
SOURCES: Dict[str, Tuple[int, ...]] = {
    'id': (0, 1, 2, 3, 4, 5, 6, 7, 8),
    'rot90': (6, 3, 0, 7, 4, 1, 8, 5, 2),
    'rot180': (8, 7, 6, 5, 4, 3, 2, 1, 0),
    'rot270': (2, 5, 8, 1, 4, 7, 0, 3, 6),
    'hflip': (2, 1, 0, 5, 4, 3, 8, 7, 6),
    'vflip': (6, 7, 8, 3, 4, 5, 0, 1, 2),
    'd1': (0, 3, 6, 1, 4, 7, 2, 5, 8),
    'd2': (8, 5, 2, 7, 4, 1, 6, 3, 0),
}

SYMMETRIES = tuple(SOURCES)

# TARGETS[kind][i] is where cell i ends up.
TARGETS: Dict[str, Tuple[int, ...]] = {
    kind: tuple(src.index(i) for i in range(9)) for kind, src in SOURCES.items()
}


def _check(kind: str) -> None:
    if kind not in SOURCES:
        raise ValueError(f"Unknown transformation: {kind}")


def transform_board(board: Board, kind: str) -> Board:
    _check(kind)
    return Board(tuple(board[j] for j in SOURCES[kind]))


def transform_index(index: int, kind: str) -> int:
    _check(kind)
    return TARGETS[kind][index]


def canonical_form(board: Board) -> str:
    return min(serialize_board(transform_board(board, k)) for k in SYMMETRIES)
