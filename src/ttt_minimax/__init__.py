"""ttt_minimax package.

Tic-tac-toe game engine, exhaustive minimax opponent, self-play helpers and
a small terminal CLI.

Convenience imports are exposed for common workflows.
"""

from .board import WIN_LINES, Player, check_win, empty_cells, is_full
from .game_state import (
    GameOutcome,
    GameSession,
    GameStatus,
    InvalidMove,
    MoveError,
    OutcomeKind,
    apply_move,
    start_game,
)
from .search import choose_move, evaluate

__all__ = [
    "Player",
    "WIN_LINES",
    "check_win",
    "is_full",
    "empty_cells",
    "GameSession",
    "GameOutcome",
    "GameStatus",
    "OutcomeKind",
    "MoveError",
    "InvalidMove",
    "start_game",
    "apply_move",
    "choose_move",
    "evaluate",
]
