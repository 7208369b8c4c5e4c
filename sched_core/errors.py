# sched_core/errors.py
from __future__ import annotations


class CostFunctionNotTotalError(ValueError):
    """Hitting cost returned None for a (t, config) pair the search needed."""

    def __init__(self, t: int, config):
        super().__init__(f"hitting cost is undefined at t={t}, config={tuple(config)}")
        self.t = t
        self.config = tuple(config)


class SubpathNotFoundError(RuntimeError):
    """No path exists between two layer-boundary vertices."""


class PathNotCachedError(RuntimeError):
    """A predecessor (or the terminal vertex) has no cached path."""
