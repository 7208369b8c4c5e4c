# main.py
from __future__ import annotations

import argparse
import json
import os
from typing import List

import numpy as np

from sched_alg.approx_graph_search import ApproxOptions
from sched_alg.offline import ALGORITHMS, OfflineOptions, solve
from examples.hitting_costs import make_problem


def _parse_list(s: str, cast) -> List:
    return [cast(x) for x in str(s).split(",") if x.strip() != ""]


def _pretty_print_schedule(p, res, max_lines: int = 50) -> None:
    parts = p.cost_breakdown(res.xs)
    print("Format: t | config x_t | hitting | switching")
    for t, x in enumerate(res.xs, start=1):
        if t > max_lines:
            print(f"... (truncated after {max_lines} steps)")
            break
        print(f"{t:4d} | {list(x)} | {parts['hitting'][t - 1]:.6g} | {parts['switching'][t - 1]:.6g}")


def main():
    ap = argparse.ArgumentParser(description="Integral graph search for provisioning schedules.")
    ap.add_argument("--alg", type=str, default="approx", choices=list(ALGORITHMS))
    ap.add_argument("--T", type=int, default=24)
    ap.add_argument("--bounds", type=str, default="8,4", help="comma-separated per-dimension bounds")
    ap.add_argument("--switching_cost", type=str, default="",
                    help="comma-separated per-dimension switching costs (default: 1.0 each)")
    ap.add_argument("--cost", type=str, default="quadratic",
                    help="constant | penalize_zero | random | quadratic")
    ap.add_argument("--gamma", type=float, default=None, help="approximation factor (> 1) for --alg approx")
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--inverted", action="store_true")
    ap.add_argument("--progress_every", type=int, default=0)
    ap.add_argument("--out_json", type=str, default="")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    bounds = _parse_list(args.bounds, int)
    if args.switching_cost:
        switching = _parse_list(args.switching_cost, float)
    else:
        switching = [1.0] * len(bounds)

    p = make_problem(args.cost, t_end=args.T, bounds=bounds, switching_cost=switching, seed=args.seed)
    res = solve(
        p,
        alg=args.alg,
        options=ApproxOptions(gamma=args.gamma),
        offline_options=OfflineOptions(
            inverted=bool(args.inverted),
            verbose=bool(args.verbose),
            progress_every=int(args.progress_every),
        ),
    )

    print(f"=== {args.alg} (T={p.t_end}, bounds={list(p.bounds)}) ===")
    print("cost      :", res.cost)
    print("objective :", res.objective)
    print("runtime   :", f"{res.runtime_sec:.3f}s")
    if "search" in res.meta:
        s = res.meta["search"]
        print("configs   :", s["num_configs"], " subpaths:", s["subpaths"], " expanded:", s["expanded"])
    _pretty_print_schedule(p, res)

    if args.out_json:
        out_dir = os.path.dirname(args.out_json)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        with open(args.out_json, "w", encoding="utf-8") as f:
            json.dump({
                "problem": p.describe(),
                "alg": args.alg,
                "xs": res.xs.to_list(),
                "cost": float(res.cost),
                "objective": float(res.objective),
                "runtime_sec": float(res.runtime_sec),
                "meta": res.meta,
            }, f, indent=2, default=lambda o: o.tolist() if isinstance(o, np.ndarray) else str(o))
        print(f"[dump] saved schedule to {args.out_json}")


if __name__ == "__main__":
    main()
