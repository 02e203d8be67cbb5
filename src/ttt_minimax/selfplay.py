"""
Whole-game simulation through the engine's public API.

The human side is played either by a uniform random policy or by the same
minimax search (minimizing); the AI side always uses ``choose_move``.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from .board import Player, empty_cells, serialize_board
from .game_state import GameOutcome, OutcomeKind, apply_move, start_game
from .search import choose_move

logger = logging.getLogger(__name__)

HUMAN_POLICIES = ("random", "optimal")


@dataclass
class GameRecord:
    moves: List[Tuple[Player, int]] = field(default_factory=list)
    outcome: GameOutcome = field(default_factory=GameOutcome.in_progress)
    final_board: str = ""

    @property
    def winner(self) -> Optional[Player]:
        return self.outcome.player if self.outcome.kind is OutcomeKind.WIN else None


def _human_move(board, policy: str, rng: np.random.Generator) -> int:
    if policy == "optimal":
        return choose_move(board, Player.HUMAN)
    return int(rng.choice(empty_cells(board)))


def play_game(
    human_policy: str = "random",
    rng: Optional[np.random.Generator] = None,
    opening: Optional[int] = None,
) -> GameRecord:
    """Play one game; ``opening`` fixes the human's first cell."""
    if human_policy not in HUMAN_POLICIES:
        raise ValueError(f"Unknown human policy: {human_policy!r}")
    if rng is None:
        rng = np.random.default_rng()
    session = start_game()
    record = GameRecord()
    player = Player.HUMAN
    while session.active:
        board = session.snapshot()
        if player is Player.HUMAN and opening is not None and not record.moves:
            idx = opening
        elif player is Player.HUMAN:
            idx = _human_move(board, human_policy, rng)
        else:
            idx = choose_move(board, Player.AI)
        record.outcome = apply_move(session, idx, player)
        record.moves.append((player, idx))
        player = player.opponent()
    record.final_board = serialize_board(session.board)
    return record


def simulate_games(n: int, human_policy: str = "random", seed: int = 42) -> List[GameRecord]:
    if n < 0:
        raise ValueError(f"Number of games must be >= 0, got {n}")
    rng = np.random.default_rng(seed)
    records = [play_game(human_policy, rng) for _ in range(n)]
    logger.debug("simulated %d games policy=%s seed=%d", n, human_policy, seed)
    return records


def summarize(records: List[GameRecord]) -> Dict[str, float]:
    human_wins = sum(1 for r in records if r.winner is Player.HUMAN)
    ai_wins = sum(1 for r in records if r.winner is Player.AI)
    ties = sum(1 for r in records if r.outcome.kind is OutcomeKind.TIE)
    lengths = [len(r.moves) for r in records]
    return {
        "games": len(records),
        "human_wins": human_wins,
        "ai_wins": ai_wins,
        "ties": ties,
        "mean_length": float(np.mean(lengths)) if lengths else 0.0,
    }


def write_records_csv(records: List[GameRecord], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["game", "moves", "outcome", "winner", "win_line", "final_board"])
        for i, r in enumerate(records):
            w.writerow([
                i,
                ' '.join(f"{p.mark}{idx}" for p, idx in r.moves),
                r.outcome.kind.value,
                r.winner.mark if r.winner else "",
                "" if r.outcome.line is None else r.outcome.line,
                r.final_board,
            ])
    return path
