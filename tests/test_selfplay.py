import csv
from pathlib import Path

import numpy as np
import pytest

from ttt_minimax.board import Player
from ttt_minimax.game_state import OutcomeKind
from ttt_minimax.selfplay import play_game, simulate_games, summarize, write_records_csv


def test_optimal_vs_optimal_always_ties():
    records = simulate_games(3, human_policy="optimal", seed=0)
    for r in records:
        assert r.outcome.kind is OutcomeKind.TIE
        assert len(r.moves) == 9
        assert "0" not in r.final_board


@pytest.mark.parametrize("opening", range(9))
def test_optimal_play_ties_from_every_opening(opening: int):
    r = play_game("optimal", np.random.default_rng(0), opening=opening)
    assert r.moves[0] == (Player.HUMAN, opening)
    assert r.outcome.kind is OutcomeKind.TIE
    assert r.winner is None


def test_ai_never_loses_to_random_play():
    records = simulate_games(30, human_policy="random", seed=7)
    s = summarize(records)
    assert s["games"] == 30
    assert s["human_wins"] == 0
    assert s["ai_wins"] + s["ties"] == 30


def test_moves_alternate_starting_with_human():
    r = play_game("random", np.random.default_rng(1))
    for i, (player, _) in enumerate(r.moves):
        assert player is (Player.HUMAN if i % 2 == 0 else Player.AI)


def test_simulation_is_reproducible():
    a = simulate_games(5, seed=123)
    b = simulate_games(5, seed=123)
    assert [r.moves for r in a] == [r.moves for r in b]


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        play_game("greedy")
    with pytest.raises(ValueError):
        simulate_games(-1)


def test_summarize_empty():
    assert summarize([])["mean_length"] == 0.0


def test_write_records_csv(tmp_path: Path):
    records = simulate_games(4, seed=3)
    out = write_records_csv(records, tmp_path / "sub" / "games.csv")
    rows = list(csv.DictReader(out.read_text().splitlines()))
    assert len(rows) == 4
    assert rows[0]["moves"].startswith("X")
    assert {row["outcome"] for row in rows} <= {"win", "tie"}
