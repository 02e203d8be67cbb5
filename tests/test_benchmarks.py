import pytest

pytest.importorskip("pytest_benchmark")

from ttt_minimax.board import Player, new_board
from ttt_minimax.search import choose_move, clear_search_cache
from ttt_minimax.selfplay import simulate_games


def test_benchmark_cold_search_from_empty_board(benchmark):
    def _search():
        clear_search_cache()
        return choose_move(new_board(), Player.HUMAN)

    move = benchmark(_search)
    assert move == 0


def test_benchmark_selfplay(benchmark):
    records = benchmark(lambda: simulate_games(10, human_policy="random", seed=0))
    assert len(records) == 10
