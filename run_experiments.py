#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Experiment runner for the approximation trade-off of the integral graph search.

For every hitting-cost kind and every T it:
  1) solves the instance exactly (all integers up to the bound are candidates);
  2) solves it with the geometric candidate values for each gamma in --gamma_list;
  3) records cost, recomputed objective, ratio to the exact cost, number of candidate
     configs, subpath searches and runtime;
  4) appends one CSV row per run.

The exact run can be skipped with --skip_exact for bounds where it is too slow.
"""

from __future__ import annotations

import os
import argparse
from typing import Any, Dict, List, Optional

import pandas as pd

from sched_alg.approx_graph_search import ApproxOptions
from sched_alg.offline import OfflineOptions, solve
from examples.hitting_costs import make_problem


def run_one(kind: str, T: int, bounds: List[int], switching: List[float], gamma: Optional[float],
            seed: int, exact_cost: Optional[float]) -> Dict[str, Any]:
    p = make_problem(kind, t_end=T, bounds=bounds, switching_cost=switching, seed=seed)
    if gamma is None:
        res = solve(p, alg="optimal")
    else:
        res = solve(p, alg="approx", options=ApproxOptions(gamma=gamma))
    search = res.meta.get("search", {})
    row = {
        "cost_kind": kind,
        "T": int(T),
        "bounds": "x".join(str(b) for b in bounds),
        "seed": int(seed),
        "gamma": "exact" if gamma is None else float(gamma),
        "cost": float(res.cost),
        "objective": float(res.objective),
        "ratio_to_exact": (float(res.cost) / exact_cost) if exact_cost else None,
        "num_configs": int(search.get("num_configs", 0)),
        "subpaths": int(search.get("subpaths", 0)),
        "expanded": int(search.get("expanded", 0)),
        "runtime_sec": float(res.runtime_sec),
    }
    return row


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--out_csv", type=str, default="experiment_results.csv")
    ap.add_argument("--T_list", type=str, default="6,12",
                    help="comma-separated T values, e.g. 6,12,24")
    ap.add_argument("--kinds", type=str, default="random,quadratic",
                    help="comma-separated hitting-cost kinds")
    ap.add_argument("--bounds", type=str, default="16,8")
    ap.add_argument("--switching_cost", type=str, default="")
    ap.add_argument("--gamma_list", type=str, default="2.0,1.5,1.2,1.1")
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--skip_exact", action="store_true")
    args = ap.parse_args()

    T_list = [int(x.strip()) for x in args.T_list.split(",") if x.strip()]
    kinds = [x.strip() for x in args.kinds.split(",") if x.strip()]
    bounds = [int(x.strip()) for x in args.bounds.split(",") if x.strip()]
    gammas = [float(x.strip()) for x in args.gamma_list.split(",") if x.strip()]
    if args.switching_cost:
        switching = [float(x.strip()) for x in args.switching_cost.split(",") if x.strip()]
    else:
        switching = [1.0] * len(bounds)

    out_csv = args.out_csv
    # If file exists and is non-empty, we will append without header.
    need_header = (not os.path.exists(out_csv)) or (os.path.getsize(out_csv) == 0)

    num_written = 0
    for kind in kinds:
        for T in T_list:
            runs: List[Optional[float]] = list(gammas)
            if not args.skip_exact:
                runs = [None] + runs
            exact_cost = None
            for gamma in runs:
                print(f"[run] kind={kind}  T={T}  gamma={'exact' if gamma is None else gamma}")
                row = run_one(kind, T, bounds, switching, gamma, args.seed, exact_cost)
                if gamma is None:
                    exact_cost = row["cost"]
                    row["ratio_to_exact"] = 1.0

                pd.DataFrame([row]).to_csv(out_csv, mode="a", header=need_header, index=False)
                need_header = False
                num_written += 1
                print(f"[saved] appended 1 row -> {out_csv}  (total={num_written})")

    print(f"[done] wrote {num_written} rows -> {out_csv}")


if __name__ == "__main__":
    main()
