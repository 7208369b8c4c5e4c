# sched_core/config.py
from __future__ import annotations
from typing import Iterable, Sequence, Tuple

import numpy as np

Config = Tuple[int, ...]


def zeros(d: int) -> Config:
    return (0,) * int(d)


def as_config(x: Iterable) -> Config:
    """Convert a list / numpy vector / scalar-per-dimension iterable to a hashable Config."""
    return tuple(int(v) for v in np.asarray(list(x), dtype=int).reshape(-1))


def is_within(x: Config, bounds: Sequence[int]) -> bool:
    if len(x) != len(bounds):
        return False
    return all(0 <= int(v) <= int(b) for v, b in zip(x, bounds))


def pos(v: float) -> float:
    return v if v > 0 else 0
