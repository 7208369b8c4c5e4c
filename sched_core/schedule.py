# sched_core/schedule.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from sched_core.config import Config, as_config, is_within


@dataclass(frozen=True)
class Schedule:
    """
    Sequence of configs x_1, ..., x_t_end. Append-only: extend() returns a new schedule.
    The cost is never stored here; see Problem.objective_function().
    """
    xs: Tuple[Config, ...] = ()

    @staticmethod
    def empty() -> "Schedule":
        return Schedule(())

    @staticmethod
    def from_list(xs: Sequence) -> "Schedule":
        return Schedule(tuple(as_config(x) for x in xs))

    def extend(self, x: Config) -> "Schedule":
        return Schedule(self.xs + (tuple(x),))

    def reversed(self) -> "Schedule":
        return Schedule(tuple(reversed(self.xs)))

    def action(self, t: int) -> Config:
        # 1-based, matching the time slots of the problem
        if not (1 <= t <= len(self.xs)):
            raise ValueError(f"Schedule: t={t} out of range [1, {len(self.xs)}].")
        return self.xs[t - 1]

    @property
    def t_end(self) -> int:
        return len(self.xs)

    def __len__(self) -> int:
        return len(self.xs)

    def __getitem__(self, i):
        return self.xs[i]

    def __iter__(self):
        return iter(self.xs)

    def verify(self, t_end: int, bounds: Sequence[int]) -> None:
        if len(self.xs) != int(t_end):
            raise ValueError(f"Schedule: expected {t_end} configs, got {len(self.xs)}.")
        for t, x in enumerate(self.xs, start=1):
            if not is_within(x, bounds):
                raise ValueError(f"Schedule: config {x} at t={t} violates bounds {list(bounds)}.")

    def to_list(self) -> List[List[int]]:
        return [list(x) for x in self.xs]

    def to_array(self) -> np.ndarray:
        """(t_end, d) int array; an empty schedule has shape (0, 0)."""
        if not self.xs:
            return np.zeros((0, 0), dtype=int)
        return np.asarray(self.xs, dtype=int)
