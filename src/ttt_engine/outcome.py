"""
Outcome evaluation: is a board won, drawn, or still in play?
Teaching notes:
- Lines are scanned in the fixed table order; the first complete line wins.
- Boards with two complete lines are unreachable under alternating play and
  get no special treatment.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .board import LINES, Board, Line, Mark


@dataclass(frozen=True)
class NoResult:
    pass


@dataclass(frozen=True)
class Win:
    mark: Mark
    line: Line


@dataclass(frozen=True)
class Draw:
    pass


Outcome = Union[NoResult, Win, Draw]

NO_RESULT = NoResult()
DRAW = Draw()


def evaluate(board: Board) -> Outcome:
    for line in LINES:
        a, b, c = line
        v = board[a]
        if v is not None and v == board[b] and v == board[c]:
            return Win(v, line)
    if board.is_full():
        return DRAW
    return NO_RESULT


def is_terminal(outcome: Outcome) -> bool:
    return not isinstance(outcome, NoResult)


def describe(outcome: Outcome) -> str:
    if isinstance(outcome, Win):
        return f"outcome=win mark={outcome.mark.name} line={','.join(map(str, outcome.line))}"
    if isinstance(outcome, Draw):
        return "outcome=draw"
    if isinstance(outcome, NoResult):
        return "outcome=ongoing"
    raise TypeError(f"Unknown outcome: {outcome!r}")
