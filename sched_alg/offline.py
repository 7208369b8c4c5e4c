# sched_alg/offline.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
import time

from sched_core.problem import Problem
from sched_core.results import OfflineResult, Path

from sched_alg.approx_graph_search import ApproxOptions, approx_graph_search, optimal_graph_search
from sched_alg.graph_search import GraphSearchParams, SearchStats
from sched_alg.uni_graph_search import uni_graph_search

ALGORITHMS = ("optimal", "approx", "uni")


@dataclass
class OfflineOptions:
    # Solve with switching cost charged on powering down: runs on the time-mirrored
    # problem and reverses the schedule back.
    inverted: bool = False
    verbose: bool = False
    progress_every: int = 0


def _run(alg: str, p: Problem, options: Optional[ApproxOptions], params: GraphSearchParams,
         stats: SearchStats) -> Path:
    if alg == "optimal":
        return optimal_graph_search(p, params=params, stats=stats)
    if alg == "approx":
        return approx_graph_search(p, options=options, params=params, stats=stats)
    if alg == "uni":
        return uni_graph_search(p)
    raise ValueError(f"Unknown algorithm: {alg} (expected one of {ALGORITHMS})")


def solve(
    p: Problem,
    alg: str = "optimal",
    options: Optional[ApproxOptions] = None,
    offline_options: Optional[OfflineOptions] = None,
) -> OfflineResult:
    """
    Verify the problem, run an offline algorithm on it and recompute the cost of the
    returned schedule with the problem's own objective.
    """
    if offline_options is None:
        offline_options = OfflineOptions()
    p.verify()
    if offline_options.verbose:
        print(f"[solve] alg={alg}  problem={p.describe()}  inverted={offline_options.inverted}")

    params = GraphSearchParams(progress_every=int(offline_options.progress_every))
    stats = SearchStats()

    t0 = time.perf_counter()
    if offline_options.inverted:
        path = _run(alg, p.mirrored(), options, params, stats)
        xs = path.xs.reversed()
    else:
        path = _run(alg, p, options, params, stats)
        xs = path.xs
    runtime = float(time.perf_counter() - t0)

    xs.verify(p.t_end, p.bounds)
    objective = p.objective_function(xs, inverted=offline_options.inverted)

    meta: Dict[str, Any] = {
        "alg": alg,
        "inverted": bool(offline_options.inverted),
        "problem": p.describe(),
    }
    if alg == "approx":
        meta["gamma"] = (options or ApproxOptions()).resolved_gamma()
    if alg != "uni":
        meta["search"] = stats.as_dict()

    if offline_options.verbose:
        print(f"[solve] done in {runtime:.3f}s  cost={path.cost:.6g}  objective={objective:.6g}")

    return OfflineResult(xs=xs, cost=float(path.cost), objective=float(objective),
                         runtime_sec=runtime, meta=meta)
