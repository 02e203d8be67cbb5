"""Runtime settings, read from the environment with defaults.

Environment variables:
- TTT_THINK_DELAY: seconds the CLI waits before the AI replies (default 0.5)
- TTT_LOG_LEVEL: logging level name (default INFO)
- TTT_SEED: default seed for self-play simulations (default 42)
"""

from __future__ import annotations

import logging
import os

DEFAULT_THINK_DELAY = 0.5
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SEED = 42


def think_delay() -> float:
    raw = os.getenv("TTT_THINK_DELAY")
    if raw is None or not raw.strip():
        return DEFAULT_THINK_DELAY
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"TTT_THINK_DELAY must be a number of seconds, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"TTT_THINK_DELAY must be >= 0, got {value}")
    return value


def log_level() -> int:
    name = (os.getenv("TTT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown TTT_LOG_LEVEL: {name!r}")
    return level


def default_seed() -> int:
    raw = os.getenv("TTT_SEED")
    if raw is None or not raw.strip():
        return DEFAULT_SEED
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"TTT_SEED must be an integer, got {raw!r}") from None
