# examples/hitting_costs.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Sequence
import numpy as np

from sched_core.config import Config
from sched_core.problem import Problem


@dataclass(frozen=True)
class ConstantCost:
    value: float = 1.0

    def __call__(self, t: int, x: Config) -> Optional[float]:
        return float(self.value)


@dataclass(frozen=True)
class PenalizeZeroCost:
    """Any config with a zero dimension costs `penalty`; everything else is free."""
    penalty: float = 100.0

    def __call__(self, t: int, x: Config) -> Optional[float]:
        return float(self.penalty) if any(int(v) == 0 for v in x) else 0.0


@dataclass(frozen=True)
class TableCost:
    """
    Lookup table H[t-1, x_1, ..., x_d], e.g. drawn at random with a fixed seed.
    Configs outside the table are undefined (None).
    """
    table: np.ndarray = field(compare=False)

    def __call__(self, t: int, x: Config) -> Optional[float]:
        idx = (int(t) - 1,) + tuple(int(v) for v in x)
        if len(idx) != self.table.ndim:
            return None
        for i, n in zip(idx, self.table.shape):
            if not (0 <= i < n):
                return None
        return float(self.table[idx])


@dataclass(frozen=True)
class QuadraticDemandCost:
    """
    Convex cost around a per-step demand: sum_k w_k (x_k - demand_t[k])^2 + idle * sum_k x_k.
    demand has shape (T, d).
    """
    demand: np.ndarray = field(compare=False)
    weight: float = 1.0
    idle: float = 0.1

    def __call__(self, t: int, x: Config) -> Optional[float]:
        dem = np.asarray(self.demand[int(t) - 1], dtype=float)
        xv = np.asarray(x, dtype=float)
        return float(self.weight * np.sum((xv - dem) ** 2) + self.idle * np.sum(xv))


def constant(value: float = 1.0) -> ConstantCost:
    return ConstantCost(value)


def penalize_zero(penalty: float = 100.0) -> PenalizeZeroCost:
    return PenalizeZeroCost(penalty)


def random_costs(seed: int, t_end: int, bounds: Sequence[int], scale: float = 1.0) -> TableCost:
    rng = np.random.default_rng(seed)
    shape = (int(t_end),) + tuple(int(b) + 1 for b in bounds)
    return TableCost(rng.random(size=shape) * float(scale))


def quadratic_demand(seed: int, t_end: int, bounds: Sequence[int],
                     weight: float = 1.0, idle: float = 0.1) -> QuadraticDemandCost:
    rng = np.random.default_rng(seed)
    hi = np.asarray(bounds, dtype=float)
    demand = rng.random(size=(int(t_end), len(bounds))) * hi
    return QuadraticDemandCost(demand, weight=weight, idle=idle)


def make_problem(kind: str, t_end: int, bounds: Sequence[int], switching_cost: Sequence[float],
                 seed: int = 0) -> Problem:
    kind = str(kind).lower()
    if kind == "constant":
        h = constant()
    elif kind in ("penalize_zero", "penalize-zero"):
        h = penalize_zero()
    elif kind == "random":
        h = random_costs(seed, t_end, bounds)
    elif kind in ("quadratic", "demand"):
        h = quadratic_demand(seed, t_end, bounds)
    else:
        raise ValueError(f"Unknown hitting cost kind: {kind}")
    return Problem(d=len(bounds), t_end=int(t_end), bounds=tuple(bounds),
                   switching_cost=tuple(switching_cost), hitting_cost=h)
