"""
Board basics: marks, the 9-cell board, winning lines, serialization, validity.
Teaching notes:
- A board is an immutable tuple of 9 cells: None=empty, Mark.X, Mark.O. X always starts.
- Placing a mark returns a new board, so hypothetical continuations never leak
  back into the caller's board.
- Serialized form is 9 digits: 0=empty, 1=X, 2=O.
"""
from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


class Mark(enum.IntEnum):
    X = 1
    O = 2

    @property
    def opponent(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


Cell = Optional[Mark]
Line = Tuple[int, int, int]

LINES: Tuple[Line, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


@dataclass(frozen=True)
class Board:
    cells: Tuple[Cell, ...] = (None,) * 9

    def __post_init__(self) -> None:
        cells = tuple(self.cells)
        if len(cells) != 9:
            raise ValueError(f"Board needs exactly 9 cells, got {len(cells)}")
        for c in cells:
            if c is not None and not isinstance(c, Mark):
                raise ValueError(f"Invalid cell value: {c!r}")
        object.__setattr__(self, "cells", cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __str__(self) -> str:
        return serialize_board(self)

    def empty_cells(self) -> List[int]:
        return [i for i, c in enumerate(self.cells) if c is None]

    def is_full(self) -> bool:
        return None not in self.cells

    def count(self, mark: Mark) -> int:
        return sum(1 for c in self.cells if c is mark)

    def place(self, index: int, mark: Mark) -> "Board":
        if not 0 <= index < 9:
            raise ValueError(f"Cell index out of range: {index}")
        if self.cells[index] is not None:
            raise ValueError(f"Cell {index} is already occupied")
        lst = list(self.cells)
        lst[index] = mark
        return Board(tuple(lst))


EMPTY_BOARD = Board()


def serialize_board(board: Board) -> str:
    return ''.join('0' if c is None else str(int(c)) for c in board)


def parse_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    return Board(tuple(None if c == '0' else Mark(int(c)) for c in raw))


def current_player(board: Board) -> Mark:
    return Mark.X if board.count(Mark.X) == board.count(Mark.O) else Mark.O


def is_valid_state(board: Board) -> bool:
    x_count, o_count = board.count(Mark.X), board.count(Mark.O)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def owns_line(p: Mark) -> bool:
        return any(all(board[i] is p for i in line) for line in LINES)

    x_wins, o_wins = owns_line(Mark.X), owns_line(Mark.O)
    if x_wins and o_wins:
        return False
    if x_wins and x_count != o_count + 1:
        return False
    if o_wins and x_count != o_count:
        return False
    return True


def reachable_boards() -> List[Board]:
    """Enumerate all boards reachable from the empty board, breadth-first."""
    from .outcome import evaluate, is_terminal

    out: List[Board] = []
    q = deque([EMPTY_BOARD])
    seen = {EMPTY_BOARD}
    while q:
        b = q.popleft()
        out.append(b)
        if is_terminal(evaluate(b)):
            continue
        p = current_player(b)
        for mv in b.empty_cells():
            child = b.place(mv, p)
            if child not in seen:
                seen.add(child)
                q.append(child)
    return out


def render_board(board: Board) -> str:
    rows = []
    for r in range(3):
        cells = []
        for i in range(r * 3, r * 3 + 3):
            c = board[i]
            cells.append(str(i) if c is None else c.name)
        rows.append(' | '.join(cells))
    return '\n---------\n'.join(rows)
