"""
Headless game session: a live board, a human side and an engine side.

The session applies moves, calls `evaluate` after each one to detect the
end of the game, and asks the search engine for a move on the engine's turn.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .board import EMPTY_BOARD, Board, Mark, current_player
from .outcome import NO_RESULT, Draw, Outcome, Win, evaluate, is_terminal
from .search import choose_move


class IllegalMoveError(ValueError):
    pass


class GameSession:
    def __init__(self, engine_mark: Mark = Mark.O) -> None:
        self.engine_mark = engine_mark
        self.reset()

    def reset(self) -> None:
        self.board: Board = EMPTY_BOARD
        self.to_move: Mark = Mark.X
        self.outcome: Outcome = NO_RESULT
        self.history: List[int] = []

    @property
    def human_mark(self) -> Mark:
        return self.engine_mark.opponent

    @property
    def is_over(self) -> bool:
        return is_terminal(self.outcome)

    @property
    def engine_to_move(self) -> bool:
        return not self.is_over and self.to_move is self.engine_mark

    def _apply(self, index: int) -> None:
        try:
            self.board = self.board.place(index, self.to_move)
        except ValueError as e:
            raise IllegalMoveError(str(e)) from None
        self.history.append(index)
        self.outcome = evaluate(self.board)
        logging.debug("%s -> %d board=%s", self.to_move.name, index, self.board)
        self.to_move = self.to_move.opponent

    def play(self, index: int) -> Outcome:
        if self.is_over:
            raise IllegalMoveError("Game is over")
        if self.to_move is self.engine_mark:
            raise IllegalMoveError("It is the engine's turn")
        self._apply(index)
        return self.outcome

    def engine_move(self) -> int:
        if self.is_over:
            raise IllegalMoveError("Game is over")
        if self.to_move is not self.engine_mark:
            raise IllegalMoveError("It is not the engine's turn")
        move = choose_move(self.board, self.engine_mark)
        if move is None:
            # unreachable: a non-terminal board always has an empty cell
            raise IllegalMoveError("No move available")
        self._apply(move)
        return move

    def result_for(self, mark: Mark) -> Optional[str]:
        if isinstance(self.outcome, Win):
            return "win" if self.outcome.mark is mark else "loss"
        if isinstance(self.outcome, Draw):
            return "draw"
        return None


def self_play(board: Optional[Board] = None) -> Tuple[List[int], Outcome]:
    """Let the engine play both sides from `board` until the game ends."""
    b = EMPTY_BOARD if board is None else board
    moves: List[int] = []
    outcome = evaluate(b)
    while not is_terminal(outcome):
        p = current_player(b)
        mv = choose_move(b, p)
        if mv is None:
            break
        b = b.place(mv, p)
        moves.append(mv)
        outcome = evaluate(b)
    return moves, outcome
