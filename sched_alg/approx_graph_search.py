# sched_alg/approx_graph_search.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sched_core.problem import Problem
from sched_core.results import Path
from sched_core.value_space import DEFAULT_GAMMA, ValueSpace

from sched_alg.graph_search import GraphSearchParams, SearchStats, graph_search


@dataclass
class ApproxOptions:
    # gamma > 1; consecutive candidate values differ by at most this factor
    gamma: Optional[float] = None

    def resolved_gamma(self) -> float:
        return float(DEFAULT_GAMMA if self.gamma is None else self.gamma)


def optimal_graph_search(
    p: Problem,
    params: Optional[GraphSearchParams] = None,
    stats: Optional[SearchStats] = None,
) -> Path:
    """Exact search: every integer 0..bound is a candidate value."""
    return graph_search(p, ValueSpace.exact(p.bounds), params=params, stats=stats)


def approx_graph_search(
    p: Problem,
    options: Optional[ApproxOptions] = None,
    params: Optional[GraphSearchParams] = None,
    stats: Optional[SearchStats] = None,
) -> Path:
    """Search over the geometrically spaced candidate values of each dimension."""
    if options is None:
        options = ApproxOptions()
    values = ValueSpace.approximate(p.bounds, options.resolved_gamma())
    return graph_search(p, values, params=params, stats=stats)
