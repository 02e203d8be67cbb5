"""
Game session and turn sequencing.

A GameSession owns the authoritative board and the ``active`` flag. Outcomes
are never stored: they are recomputed from the board on demand. The search
only ever sees ``session.snapshot()``, an immutable copy.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .board import (
    EMPTY,
    BOARD_SIZE,
    Cell,
    Player,
    check_win,
    current_player,
    is_full,
    new_board,
    serialize_board,
)

logger = logging.getLogger(__name__)


class MoveError(Exception):
    """Base class for rejected moves."""


class InvalidMove(MoveError, ValueError):
    """The target cell is occupied or out of range, it is not the player's
    turn, or the game is not in progress."""


class OutcomeKind(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    TIE = "tie"


@dataclass(frozen=True)
class GameOutcome:
    kind: OutcomeKind
    player: Optional[Player] = None
    line: Optional[int] = None

    @classmethod
    def in_progress(cls) -> "GameOutcome":
        return cls(OutcomeKind.IN_PROGRESS)

    @classmethod
    def win(cls, player: Player, line: int) -> "GameOutcome":
        return cls(OutcomeKind.WIN, player, line)

    @classmethod
    def tie(cls) -> "GameOutcome":
        return cls(OutcomeKind.TIE)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.IN_PROGRESS


class GameStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"
    TIED = "tied"


def outcome_after_move(board, player: Player) -> GameOutcome:
    """Outcome once ``player`` has just moved: only the mover can have won."""
    line = check_win(board, player)
    if line is not None:
        return GameOutcome.win(player, line)
    if is_full(board):
        return GameOutcome.tie()
    return GameOutcome.in_progress()


@dataclass
class GameSession:
    board: List[Cell] = field(default_factory=new_board)
    active: bool = False

    def start(self) -> "GameSession":
        self.board = new_board()
        self.active = True
        return self

    reset = start

    @property
    def current_player(self) -> Player:
        return current_player(self.board)

    @property
    def outcome(self) -> GameOutcome:
        for player in (Player.HUMAN, Player.AI):
            line = check_win(self.board, player)
            if line is not None:
                return GameOutcome.win(player, line)
        if is_full(self.board):
            return GameOutcome.tie()
        return GameOutcome.in_progress()

    @property
    def status(self) -> GameStatus:
        outcome = self.outcome
        if outcome.kind is OutcomeKind.WIN:
            return GameStatus.WON
        if outcome.kind is OutcomeKind.TIE:
            return GameStatus.TIED
        return GameStatus.IN_PROGRESS if self.active else GameStatus.NOT_STARTED

    def snapshot(self) -> Tuple[Cell, ...]:
        return tuple(self.board)

    def __str__(self) -> str:
        return serialize_board(self.board)


def start_game() -> GameSession:
    return GameSession().start()


def apply_move(session: GameSession, cell_index: int, player: Player) -> GameOutcome:
    """Place ``player``'s mark and return the resulting outcome.

    Raises InvalidMove, leaving the session untouched, if the game is not
    active, the index is not a cell, the cell is taken or ``player`` is
    moving out of turn.
    """
    if not session.active:
        raise InvalidMove("Game is not in progress")
    if not isinstance(cell_index, int) or not 0 <= cell_index < BOARD_SIZE:
        raise InvalidMove(f"Invalid cell {cell_index!r}. Must be 0-8.")
    if session.board[cell_index] is not EMPTY:
        raise InvalidMove(f"Cell {cell_index} is already occupied")
    if player is not session.current_player:
        raise InvalidMove(f"It is not {player.mark}'s turn")

    session.board[cell_index] = player
    outcome = outcome_after_move(session.board, player)
    if outcome.is_terminal:
        session.active = False
    logger.debug("%s -> %d board=%s outcome=%s", player.mark, cell_index, session, outcome.kind.value)
    return outcome


def status_message(session: GameSession) -> str:
    """Display text for the current state of ``session``."""
    outcome = session.outcome
    if outcome.kind is OutcomeKind.WIN:
        return "You Win!" if outcome.player is Player.HUMAN else "You Lose!"
    if outcome.kind is OutcomeKind.TIE:
        return "It's a Tie!"
    if not session.active:
        return "Press start to play"
    nxt = session.current_player
    return f"Your turn ({nxt.mark})" if nxt is Player.HUMAN else f"AI's turn ({nxt.mark})"
