#!/usr/bin/env python3
from __future__ import annotations

import math
import statistics as stats
import time
from dataclasses import dataclass
from typing import List, Tuple

from ttt_minimax.board import Player, new_board
from ttt_minimax.search import choose_move, clear_search_cache, search_cache_info
from ttt_minimax.selfplay import simulate_games, summarize


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 10
    games: int = 200


def main() -> int:
    cfg = Config()
    search_times: List[float] = []
    selfplay_times: List[float] = []
    for s in range(cfg.repeats):
        clear_search_cache()
        t0 = time.perf_counter()
        choose_move(new_board(), Player.HUMAN)
        t1 = time.perf_counter()
        search_times.append(t1 - t0)
        t2 = time.perf_counter()
        records = simulate_games(cfg.games, human_policy="random", seed=s)
        t3 = time.perf_counter()
        selfplay_times.append(t3 - t2)
    m_search, h_search = ci95(search_times)
    m_play, h_play = ci95(selfplay_times)
    print(f"cold_search_mean_s={m_search:.4f} +/- {h_search:.4f}")
    print(f"selfplay_{cfg.games}_mean_s={m_play:.4f} +/- {h_play:.4f}")
    print(f"cache={search_cache_info()}")
    print(f"last_summary={summarize(records)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
