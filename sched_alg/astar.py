# sched_alg/astar.py
from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple
import heapq
import math

V = Hashable


def astar(
    start: V,
    successors: Callable[[V], Iterable[Tuple[V, float]]],
    heuristic: Callable[[V], float],
    is_goal: Callable[[V], bool],
    stats: Optional[Dict[str, int]] = None,
) -> Optional[Tuple[List[V], float]]:
    """
    Best-first search with an admissible heuristic.

    Returns (vertices from start to goal, path cost), or None if no goal is reachable.
    Vertices with an infinite heuristic value are never pushed.
    """
    h0 = float(heuristic(start))
    if math.isinf(h0):
        return None

    # node: (f, counter, g, vertex)
    # counter breaks ties in insertion order so vertices themselves are never compared
    heap: List[Tuple[float, int, float, V]] = []
    counter = 0
    heapq.heappush(heap, (h0, counter, 0.0, start))

    best_g: Dict[V, float] = {start: 0.0}
    parent: Dict[V, Optional[V]] = {start: None}
    closed = set()

    while heap:
        _f, _, g, v = heapq.heappop(heap)
        if v in closed:
            continue
        if g > best_g.get(v, math.inf):
            continue
        closed.add(v)
        if stats is not None:
            stats["expanded"] = stats.get("expanded", 0) + 1

        if is_goal(v):
            path = [v]
            while parent[path[-1]] is not None:
                path.append(parent[path[-1]])
            path.reverse()
            return path, float(g)

        for w, c in successors(v):
            if w in closed:
                continue
            g2 = g + float(c)
            if g2 >= best_g.get(w, math.inf):
                continue
            h = float(heuristic(w))
            if math.isinf(h):
                continue
            best_g[w] = g2
            parent[w] = v
            counter += 1
            heapq.heappush(heap, (g2 + h, counter, g2, w))

    return None
