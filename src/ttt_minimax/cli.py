from __future__ import annotations

import argparse
import csv
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional, TextIO

from . import config
from .board import (
    Player,
    current_player,
    is_terminal,
    is_valid_state,
    parse_board,
    render_board,
    win_line,
)
from .game_state import OutcomeKind, apply_move, start_game, status_message
from .search import choose_move, score_moves
from .selfplay import HUMAN_POLICIES, simulate_games, summarize, write_records_csv

_PLAYER_CHOICES = {"x": Player.HUMAN, "o": Player.AI}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe against a minimax AI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_play = sub.add_parser("play", help="Play an interactive game as X")
    p_play.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds the AI 'thinks' before replying (default: TTT_THINK_DELAY or 0.5)",
    )

    p_move = sub.add_parser("move", help="Choose the minimax move for a board (9 digits, 0=empty,1=X,2=O)")
    p_move.add_argument("--board", help="Board string, e.g., 110220000 (omit with --stdin)")
    p_move.add_argument(
        "--player",
        choices=sorted(_PLAYER_CHOICES),
        default=None,
        help="Side to move (default: derived from piece counts)",
    )
    p_move.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_sim = sub.add_parser("simulate", help="Play many games of the AI against a scripted human")
    p_sim.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")
    p_sim.add_argument(
        "--opponent",
        choices=HUMAN_POLICIES,
        default="random",
        help="Policy for the human side (default: random)",
    )
    p_sim.add_argument("--seed", type=int, default=None, help="RNG seed (default: TTT_SEED or 42)")
    p_sim.add_argument("--out", type=Path, default=None, help="Optional CSV file with one row per game")

    return p


def play_interactive(
    delay: float,
    stdin: TextIO,
    out: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Run games on a text stream until the player quits or input ends."""
    while True:
        session = start_game()
        out(render_board(session.board))
        out(status_message(session))
        while session.active:
            out("Cell (0-8, q to quit): ")
            line = stdin.readline()
            if not line or line.strip().lower() == "q":
                return 0
            try:
                outcome = apply_move(session, int(line.strip()), Player.HUMAN)
            except ValueError:
                # rejected input leaves the board as it was
                continue
            if outcome.is_terminal:
                break
            out(render_board(session.board))
            out("AI is thinking...")
            sleep(delay)
            outcome = apply_move(session, choose_move(session.snapshot(), Player.AI), Player.AI)
            if not outcome.is_terminal:
                out(render_board(session.board))
                out(status_message(session))

        highlight = win_line(outcome.line) if outcome.kind is OutcomeKind.WIN else ()
        out(render_board(session.board, highlight=highlight))
        out(status_message(session))
        out("Play again? [y/N]: ")
        again = stdin.readline()
        if again.strip().lower() not in ("y", "yes"):
            return 0


def _resolve_board(raw: str, player_flag: Optional[str]):
    """Parse and check a board for the move command; returns (board, player)."""
    board = parse_board(raw)
    if player_flag is None:
        if not is_valid_state(board):
            raise ValueError("Board is not a valid reachable state.")
        player = current_player(board)
    else:
        player = _PLAYER_CHOICES[player_flag]
    if is_terminal(board):
        raise ValueError("Board is already won or full.")
    return board, player


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    try:
        level = logging.DEBUG if getattr(ns, "verbose", False) else config.log_level()
    except ValueError as e:
        # logging is not configured yet
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("ttt-minimax"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    if ns.cmd == "play":
        try:
            delay = ns.delay if ns.delay is not None else config.think_delay()
        except ValueError as e:
            logging.error("%s", e)
            return 2
        if delay < 0:
            logging.error("Delay must be >= 0: %s", delay)
            return 2
        return play_interactive(delay, sys.stdin)

    if ns.cmd == "move":
        if ns.stdin:
            w = csv.writer(sys.stdout)
            w.writerow(["board", "player", "move", "score"])
            for line in sys.stdin:
                raw = line.strip()
                if not raw:
                    continue
                try:
                    board, player = _resolve_board(raw, ns.player)
                except ValueError:
                    continue
                scores = score_moves(board, player)
                mv = choose_move(board, player)
                w.writerow([raw, player.mark, mv, scores[mv]])
            return 0
        try:
            board, player = _resolve_board(ns.board or "", ns.player)
        except ValueError as e:
            logging.error("%s", e)
            return 2
        scores = score_moves(board, player)
        mv = choose_move(board, player)
        logging.info("player=%s move=%d score=%d scores=%s", player.mark, mv, scores[mv], scores)
        return 0

    if ns.cmd == "simulate":
        if ns.games < 0:
            logging.error("Number of games must be >= 0: %s", ns.games)
            return 2
        try:
            seed = ns.seed if ns.seed is not None else config.default_seed()
        except ValueError as e:
            logging.error("%s", e)
            return 2
        records = simulate_games(ns.games, human_policy=ns.opponent, seed=seed)
        s = summarize(records)
        logging.info(
            "games=%d human_wins=%d ai_wins=%d ties=%d mean_length=%.2f",
            s["games"], s["human_wins"], s["ai_wins"], s["ties"], s["mean_length"],
        )
        if ns.out is not None:
            logging.info("Wrote games to: %s", write_records_csv(records, ns.out))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
