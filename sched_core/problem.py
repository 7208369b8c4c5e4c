# sched_core/problem.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Tuple
import numpy as np

from sched_core.config import Config, as_config, pos, zeros
from sched_core.errors import CostFunctionNotTotalError
from sched_core.schedule import Schedule


class HittingCost(Protocol):
    def __call__(self, t: int, x: Config) -> Optional[float]: ...


@dataclass(frozen=True)
class _MirroredHittingCost:
    inner: HittingCost
    t_end: int

    def __call__(self, t: int, x: Config) -> Optional[float]:
        return self.inner(self.t_end + 1 - t, x)


@dataclass(frozen=True)
class Problem:
    """
    Integral provisioning problem over time slots t = 1..t_end:

        minimize  sum_t  H(t, x_t) + sum_k S[k] * max(0, x_t[k] - x_{t-1}[k])
        s.t.      x_t[k] in {0, ..., bounds[k]},   x_0 = 0

    hitting_cost(t, x) may return None where it is undefined; evaluating it there is
    a contract violation (CostFunctionNotTotalError).
    """
    d: int
    t_end: int
    bounds: Tuple[int, ...]
    switching_cost: Tuple[float, ...]
    hitting_cost: HittingCost = field(compare=False)

    def __post_init__(self):
        object.__setattr__(self, "bounds", tuple(int(b) for b in self.bounds))
        object.__setattr__(self, "switching_cost", tuple(float(s) for s in self.switching_cost))

    def verify(self) -> None:
        if int(self.d) < 1:
            raise ValueError(f"Problem: d must be >= 1, got {self.d}.")
        if int(self.t_end) < 1:
            raise ValueError(f"Problem: t_end must be >= 1, got {self.t_end}.")
        if len(self.bounds) != self.d:
            raise ValueError(f"Problem: expected {self.d} bounds, got {len(self.bounds)}.")
        if len(self.switching_cost) != self.d:
            raise ValueError(f"Problem: expected {self.d} switching costs, got {len(self.switching_cost)}.")
        if any(b < 0 for b in self.bounds):
            raise ValueError(f"Problem: bounds must be non-negative, got {list(self.bounds)}.")
        if any(s < 0 for s in self.switching_cost):
            raise ValueError(f"Problem: switching costs must be non-negative, got {list(self.switching_cost)}.")

    def hit_cost(self, t: int, x: Config) -> float:
        c = self.hitting_cost(t, x)
        if c is None:
            raise CostFunctionNotTotalError(t, x)
        return float(c)

    def switch_cost(self, prev_x: Config, x: Config, inverted: bool = False) -> float:
        cost = 0.0
        for k in range(self.d):
            delta = (prev_x[k] - x[k]) if inverted else (x[k] - prev_x[k])
            cost += self.switching_cost[k] * pos(delta)
        return float(cost)

    def cost_breakdown(self, xs: Schedule, default: Optional[Config] = None,
                       inverted: bool = False) -> Dict[str, np.ndarray]:
        """
        Per-step hitting and switching costs of xs.

        inverted=True charges decreases instead of increases and adds the final
        power-down to zero after t_end to the last step.
        """
        prev_x = zeros(self.d) if default is None else as_config(default)
        hitting = np.zeros(len(xs), dtype=float)
        switching = np.zeros(len(xs), dtype=float)
        for i, x in enumerate(xs):
            hitting[i] = self.hit_cost(i + 1, x)
            switching[i] = self.switch_cost(prev_x, x, inverted=inverted)
            prev_x = x
        if inverted and len(xs) > 0:
            switching[-1] += self.switch_cost(prev_x, zeros(self.d), inverted=True)
        return {"hitting": hitting, "switching": switching}

    def objective_function(self, xs: Schedule, default: Optional[Config] = None,
                           inverted: bool = False) -> float:
        parts = self.cost_breakdown(xs, default=default, inverted=inverted)
        return float(np.sum(parts["hitting"]) + np.sum(parts["switching"]))

    def mirrored(self) -> "Problem":
        """Same problem with time reversed: H'(t, x) = H(t_end + 1 - t, x)."""
        return Problem(
            d=self.d,
            t_end=self.t_end,
            bounds=self.bounds,
            switching_cost=self.switching_cost,
            hitting_cost=_MirroredHittingCost(self.hitting_cost, int(self.t_end)),
        )

    def describe(self) -> Dict[str, object]:
        return {
            "d": int(self.d),
            "t_end": int(self.t_end),
            "bounds": list(self.bounds),
            "switching_cost": list(self.switching_cost),
        }
