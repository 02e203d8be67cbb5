"""
Board basics: players, cells, win lines, rules and text serialization.
Notes:
- A board is a sequence of 9 cells in row-major order; a cell is either
  EMPTY (None) or the Player who marked it.
- X (the human) always moves first, so on a legal board the X count is equal
  to the O count or one more.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple


class Player(Enum):
    """The two sides. The human plays X and moves first, the AI plays O."""
    HUMAN = "X"
    AI = "O"

    def opponent(self) -> "Player":
        return Player.AI if self is Player.HUMAN else Player.HUMAN

    @property
    def mark(self) -> str:
        return self.value


Cell = Optional[Player]
Board = Sequence[Cell]

EMPTY: Cell = None
BOARD_SIZE = 9

# Rows, columns, diagonals. Order matters: check_win reports the first match.
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

_TO_CHAR = {EMPTY: "0", Player.HUMAN: "1", Player.AI: "2"}
_FROM_CHAR = {c: cell for cell, c in _TO_CHAR.items()}


def new_board() -> List[Cell]:
    return [EMPTY] * BOARD_SIZE


def validate_board(board: Board) -> None:
    """Raise ValueError unless ``board`` has 9 cells of Player or EMPTY."""
    if len(board) != BOARD_SIZE:
        raise ValueError(f"Board must have {BOARD_SIZE} cells, got {len(board)}")
    for i, cell in enumerate(board):
        if cell is not EMPTY and not isinstance(cell, Player):
            raise ValueError(f"Invalid cell value at {i}: {cell!r}")


def check_win(board: Board, player: Player) -> Optional[int]:
    """Return the index in WIN_LINES of the first line fully marked by ``player``."""
    for index, (a, b, c) in enumerate(WIN_LINES):
        if board[a] is player and board[b] is player and board[c] is player:
            return index
    return None


def win_line(index: int) -> Tuple[int, int, int]:
    return WIN_LINES[index]


def is_full(board: Board) -> bool:
    return all(cell is not EMPTY for cell in board)


def empty_cells(board: Board) -> List[int]:
    return [i for i, cell in enumerate(board) if cell is EMPTY]


def get_piece_counts(board: Board) -> Tuple[int, int]:
    x = sum(1 for cell in board if cell is Player.HUMAN)
    o = sum(1 for cell in board if cell is Player.AI)
    return x, o


def current_player(board: Board) -> Player:
    x, o = get_piece_counts(board)
    return Player.HUMAN if x == o else Player.AI


def is_valid_state(board: Board) -> bool:
    """True if ``board`` can be reached from the empty board by legal play."""
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    x_wins = check_win(board, Player.HUMAN) is not None
    o_wins = check_win(board, Player.AI) is not None
    if x_wins and o_wins:
        return False
    if x_wins and x_count != o_count + 1:
        return False
    if o_wins and x_count != o_count:
        return False
    return True


def is_terminal(board: Board) -> bool:
    return (
        check_win(board, Player.HUMAN) is not None
        or check_win(board, Player.AI) is not None
        or is_full(board)
    )


def serialize_board(board: Board) -> str:
    return ''.join(_TO_CHAR[cell] for cell in board)


def parse_board(board_str: str) -> List[Cell]:
    """Parse a 9-character string of 0 (empty), 1 (X) and 2 (O)."""
    raw = board_str.strip()
    if len(raw) != BOARD_SIZE or any(c not in _FROM_CHAR for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    return [_FROM_CHAR[c] for c in raw]


def render_board(board: Board, highlight: Sequence[int] = ()) -> str:
    """Text grid for the terminal; highlighted cells are shown in brackets."""
    rows = []
    for r in range(3):
        cells = []
        for i in range(r * 3, r * 3 + 3):
            cell = board[i]
            text = cell.mark if cell is not EMPTY else str(i)
            cells.append(f"[{text}]" if i in highlight else f" {text} ")
        rows.append("|".join(cells))
    return "\n---+---+---\n".join(rows)
