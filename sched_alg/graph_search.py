# sched_alg/graph_search.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
import math
import time

from sched_core.config import Config, zeros
from sched_core.errors import PathNotCachedError, SubpathNotFoundError
from sched_core.problem import Problem
from sched_core.results import Path
from sched_core.schedule import Schedule
from sched_core.value_space import ValueSpace

from sched_alg.astar import astar


class Phase(Enum):
    POWERING_UP = "up"
    POWERING_DOWN = "down"


@dataclass(frozen=True)
class Vertice:
    """
    Vertex of the time-expanded graph: value `config` at time layer `t`, either while
    powering up (switching cost is paid) or powering down (free, after the hitting cost).
    """
    t: int
    config: Config
    phase: Phase

    def successors(self, p: Problem, values: ValueSpace) -> List[Tuple["Vertice", float]]:
        out: List[Tuple[Vertice, float]] = []
        if self.phase is Phase.POWERING_UP:
            # edge paying the hitting cost
            out.append((Vertice(self.t, self.config, Phase.POWERING_DOWN), p.hit_cost(self.t, self.config)))
            # edges for powering up, one dimension at a time
            for k in range(p.d):
                v = values.next_up(k, self.config[k])
                if v is None:
                    continue
                x = list(self.config)
                x[k] = v
                out.append((Vertice(self.t, tuple(x), Phase.POWERING_UP),
                            p.switching_cost[k] * (v - self.config[k])))
        else:
            # edges for powering down are free
            for k in range(p.d):
                v = values.next_down(k, self.config[k])
                if v is None:
                    continue
                x = list(self.config)
                x[k] = v
                out.append((Vertice(self.t, tuple(x), Phase.POWERING_DOWN), 0.0))
            if self.t < p.t_end:
                out.append((Vertice(self.t + 1, self.config, Phase.POWERING_UP), 0.0))
            elif self.t == p.t_end:
                out.append((terminal_vertice(p), 0.0))
        return out

    def heuristic(self, to: "Vertice", p: Problem) -> float:
        """
        Under-approximation of the cost to reach `to`:
          * the only admissible vertex of layer `to.t` is `to` itself;
          * a powering-down vertex cannot raise any dimension again;
          * every dimension must be raised to `to.config`, paying at least its switching cost.
        Hitting costs are non-negative and left out.
        """
        if to.phase is not Phase.POWERING_UP and not is_terminal(to, p):
            raise ValueError("heuristic: goal must be a powering-up vertex or the terminal vertex.")

        if self.t == to.t and self != to:
            return math.inf

        if self.phase is Phase.POWERING_DOWN:
            for k in range(p.d):
                if self.config[k] < to.config[k]:
                    return math.inf

        cost = 0.0
        for k in range(p.d):
            diff = to.config[k] - self.config[k]
            if diff > 0:
                cost += p.switching_cost[k] * diff
        return cost


def initial_vertice(p: Problem) -> Vertice:
    return Vertice(1, zeros(p.d), Phase.POWERING_UP)


def terminal_vertice(p: Problem) -> Vertice:
    return Vertice(int(p.t_end) + 1, zeros(p.d), Phase.POWERING_DOWN)


def is_terminal(v: Vertice, p: Problem) -> bool:
    return v.t == int(p.t_end) + 1 and v.phase is Phase.POWERING_DOWN and not any(v.config)


PathCache = Dict[Vertice, Path]


@dataclass
class GraphSearchParams:
    # print a progress line every this many subpath searches (0 = silent)
    progress_every: int = 0


@dataclass
class SearchStats:
    subpaths: int = 0
    expanded: int = 0
    cache_updates: int = 0
    runtime_sec: float = 0.0
    num_configs: int = 0
    values: List[List[int]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {
            "subpaths": int(self.subpaths),
            "expanded": int(self.expanded),
            "cache_updates": int(self.cache_updates),
            "runtime_sec": float(self.runtime_sec),
            "num_configs": int(self.num_configs),
            "values": [list(vs) for vs in self.values],
        }


def find_shortest_subpath(
    p: Problem,
    values: ValueSpace,
    paths: PathCache,
    from_: Vertice,
    to: Vertice,
    stats: Optional[SearchStats] = None,
) -> None:
    """
    Shortest path from `from_` to `to` inside one time layer. The config of the first
    powering-down vertex on it is the config chosen for time slot `from_.t`.
    Updates `paths[to]` if the extended prefix is cheaper than what is cached.
    """
    counters: Dict[str, int] = {}
    found = astar(
        from_,
        lambda v: v.successors(p, values),
        lambda v: v.heuristic(to, p),
        lambda v: v == to,
        stats=counters,
    )
    if stats is not None:
        stats.subpaths += 1
        stats.expanded += counters.get("expanded", 0)
    if found is None:
        raise SubpathNotFoundError(f"no subpath from {from_} to {to}")
    vs, c = found

    x = next(v for v in vs if v.phase is Phase.POWERING_DOWN).config
    if update_paths(paths, from_, to, x, c) and stats is not None:
        stats.cache_updates += 1


def update_paths(paths: PathCache, from_: Vertice, to: Vertice, x: Config, c: float) -> bool:
    """Keep the cheapest prefix per vertex; ties keep the entry found first."""
    prev = paths.get(from_)
    if prev is None:
        raise PathNotCachedError(f"no cached path for {from_}")
    cost = prev.cost + float(c)
    cur = paths.get(to)
    if cur is not None and cur.cost <= cost:
        return False
    paths[to] = Path(prev.xs.extend(x), cost)
    return True


def _layer_sources(p: Problem, t: int, configs: List[Config]) -> List[Config]:
    # layer 1 is only entered from the all-zero config
    if t == 1:
        return [zeros(p.d)]
    return configs


def graph_search(
    p: Problem,
    values: ValueSpace,
    params: Optional[GraphSearchParams] = None,
    stats: Optional[SearchStats] = None,
) -> Path:
    """
    Layer-by-layer sweep over the time-expanded graph restricted to the configs of `values`.
    Returns the path cached at the terminal vertex: the full schedule and its total cost.
    """
    if params is None:
        params = GraphSearchParams()
    if stats is None:
        stats = SearchStats()
    if values.d != p.d:
        raise ValueError(f"graph_search: value space has {values.d} dimensions, problem has {p.d}.")

    t0 = time.perf_counter()
    configs = list(values.configs())
    stats.num_configs = len(configs)
    stats.values = [list(vs) for vs in values.values]

    paths: PathCache = {initial_vertice(p): Path(Schedule.empty(), 0.0)}

    def progress():
        if params.progress_every and stats.subpaths % int(params.progress_every) == 0:
            print(f"[graph_search] subpaths={stats.subpaths}  expanded={stats.expanded}  "
                  f"cached={len(paths)}")

    for t in range(1, int(p.t_end)):
        sources = _layer_sources(p, t, configs)
        for x in configs:
            to = Vertice(t + 1, x, Phase.POWERING_UP)
            for y in sources:
                from_ = Vertice(t, y, Phase.POWERING_UP)
                find_shortest_subpath(p, values, paths, from_, to, stats)
                progress()

    final = terminal_vertice(p)
    for y in _layer_sources(p, int(p.t_end), configs):
        from_ = Vertice(int(p.t_end), y, Phase.POWERING_UP)
        find_shortest_subpath(p, values, paths, from_, final, stats)
        progress()

    stats.runtime_sec = float(time.perf_counter() - t0)

    path = paths.get(final)
    if path is None:
        raise PathNotCachedError(f"no cached path for terminal vertex {final}")
    return path
