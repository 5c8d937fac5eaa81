"""ttt_engine package.

Outcome evaluation, minimax search with alpha-beta pruning, and a headless
game session for an unbeatable tic-tac-toe opponent.

Convenience imports are exposed for common workflows.
"""

from .board import EMPTY_BOARD, LINES, Board, Mark, parse_board
from .game import GameSession, IllegalMoveError, self_play
from .outcome import Draw, NoResult, Outcome, Win, evaluate
from .search import SearchResult, choose_move, search
from .symmetry import SYMMETRIES, canonical_form, transform_board, transform_index

__all__ = [
    "Board",
    "Mark",
    "LINES",
    "EMPTY_BOARD",
    "parse_board",
    "evaluate",
    "Outcome",
    "NoResult",
    "Win",
    "Draw",
    "search",
    "choose_move",
    "SearchResult",
    "GameSession",
    "IllegalMoveError",
    "self_play",
    "SYMMETRIES",
    "canonical_form",
    "transform_board",
    "transform_index",
]
