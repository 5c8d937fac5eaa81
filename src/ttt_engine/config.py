"""Runtime settings for the interactive game.

Environment-first: TTT_THINK_DELAY and TTT_ENGINE_MARK are read when
settings are loaded; explicit CLI flags override them.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from .board import Mark

DEFAULT_THINK_DELAY = 0.5


@dataclass(frozen=True)
class Settings:
    think_delay: float = DEFAULT_THINK_DELAY
    engine_mark: Mark = Mark.O


def check_delay(value: float) -> float:
    if not math.isfinite(value) or value < 0.0:
        raise ValueError(f"Delay must be a finite number >= 0, got {value}")
    return value


def _parse_delay(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"TTT_THINK_DELAY must be a number, got {raw!r}") from None
    return check_delay(value)


def _parse_mark(raw: str) -> Mark:
    name = raw.strip().upper()
    if name not in ("X", "O"):
        raise ValueError(f"TTT_ENGINE_MARK must be X or O, got {raw!r}")
    return Mark[name]


def load_settings() -> Settings:
    delay = os.getenv("TTT_THINK_DELAY")
    mark = os.getenv("TTT_ENGINE_MARK")
    return Settings(
        think_delay=_parse_delay(delay) if delay else DEFAULT_THINK_DELAY,
        engine_mark=_parse_mark(mark) if mark else Mark.O,
    )
