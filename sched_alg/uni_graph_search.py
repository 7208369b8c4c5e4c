# sched_alg/uni_graph_search.py
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from sched_core.problem import Problem
from sched_core.results import Path
from sched_core.schedule import Schedule
from sched_core.value_space import build_exact_values


def uni_graph_search(p: Problem, values: Optional[Sequence[int]] = None) -> Path:
    """
    Shortest path through the layered graph of a single-dimensional problem.

    Layer t holds one vertex per candidate value; the edge i -> j into layer t costs
        S * max(0, v_j - v_i) + H(t, v_j).
    Dynamic programming over layers, O(T * n^2).
    """
    if int(p.d) != 1:
        raise ValueError(f"uni_graph_search: requires d == 1, got d={p.d}.")

    if values is None:
        values = build_exact_values(p.bounds[0])
    v = np.asarray(sorted(set(int(x) for x in values)), dtype=int)
    n = int(v.shape[0])
    T = int(p.t_end)
    beta = float(p.switching_cost[0])

    # switch[i, j]: cost of moving from v_i to v_j
    switch = beta * np.maximum(0, v[None, :] - v[:, None]).astype(float)
    back = np.zeros((T, n), dtype=int)

    hit = np.array([p.hit_cost(1, (int(x),)) for x in v], dtype=float)
    cost = beta * v.astype(float) + hit

    for t in range(2, T + 1):
        hit = np.array([p.hit_cost(t, (int(x),)) for x in v], dtype=float)
        total = cost[:, None] + switch
        back[t - 1] = np.argmin(total, axis=0)
        cost = total[back[t - 1], np.arange(n)] + hit

    j = int(np.argmin(cost))
    best = float(cost[j])
    idx = [j]
    for t in range(T - 1, 0, -1):
        j = int(back[t, j])
        idx.append(j)
    idx.reverse()

    xs = Schedule(tuple((int(v[i]),) for i in idx))
    return Path(xs, best)
