"""
Exhaustive minimax search, from the AI's perspective.
Scoring:
- Human (X) has a line: -10. AI (O) has a line: +10. Full board: 0.
- Terminal scores are flat; a win in one ply is worth the same as a win in five.
- The AI maximizes, the human minimizes. Among equal scores the lowest cell
  index wins.
Every node works on its own tuple, so the caller's board is never touched and
sibling branches never see each other's placements.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Optional, Tuple

from .board import EMPTY, Board, Cell, Player, check_win, empty_cells, validate_board

logger = logging.getLogger(__name__)

WIN_SCORE = 10
LOSS_SCORE = -10
TIE_SCORE = 0


def apply_move_t(board_t: Tuple[Cell, ...], idx: int, player: Player) -> Tuple[Cell, ...]:
    lst = list(board_t)
    lst[idx] = player
    return tuple(lst)


def terminal_score(board_t: Tuple[Cell, ...]) -> Optional[int]:
    if check_win(board_t, Player.HUMAN) is not None:
        return LOSS_SCORE
    if check_win(board_t, Player.AI) is not None:
        return WIN_SCORE
    if EMPTY not in board_t:
        return TIE_SCORE
    return None


@lru_cache(maxsize=None)
def _minimax(board_t: Tuple[Cell, ...], player: Player) -> Tuple[Optional[int], int]:
    """Return (best cell, score); the cell is None on terminal boards."""
    score = terminal_score(board_t)
    if score is not None:
        return None, score

    best_idx: Optional[int] = None
    best_score: Optional[int] = None
    for idx in empty_cells(board_t):
        _, child = _minimax(apply_move_t(board_t, idx, player), player.opponent())
        if best_score is None:
            best_idx, best_score = idx, child
        elif player is Player.AI and child > best_score:
            best_idx, best_score = idx, child
        elif player is Player.HUMAN and child < best_score:
            best_idx, best_score = idx, child
    return best_idx, best_score


def _as_tuple(board: Board) -> Tuple[Cell, ...]:
    validate_board(board)
    return tuple(board)


def evaluate(board: Board, player_to_move: Player) -> int:
    """Minimax score of ``board`` with ``player_to_move`` to play."""
    return _minimax(_as_tuple(board), player_to_move)[1]


def score_moves(board: Board, player_to_move: Player) -> Dict[int, int]:
    """Score of every legal move for ``player_to_move``, keyed by cell."""
    board_t = _as_tuple(board)
    return {
        idx: _minimax(apply_move_t(board_t, idx, player_to_move), player_to_move.opponent())[1]
        for idx in empty_cells(board_t)
    }


def choose_move(board: Board, player_to_move: Player) -> int:
    """Optimal cell for ``player_to_move``.

    Raises ValueError when the board is malformed or already terminal.
    """
    board_t = _as_tuple(board)
    if terminal_score(board_t) is not None:
        raise ValueError("No move to choose: board is already terminal")
    idx, score = _minimax(board_t, player_to_move)
    logger.debug(
        "choose_move player=%s move=%s score=%s cache=%s",
        player_to_move.mark, idx, score, _minimax.cache_info(),
    )
    return idx


def search_cache_info():
    return _minimax.cache_info()


def clear_search_cache() -> None:
    _minimax.cache_clear()
