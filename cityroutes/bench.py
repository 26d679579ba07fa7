"""Micro-benchmark utilities for the route engine.

Run this module as a script to time the indexed-heap engine against the
:mod:`heapq` reference on random connected city graphs.

Example:
```bash
python -m cityroutes.bench --trials 5 --sizes 1000,5000 2000,10000 --out-csv out.csv
```
"""

from __future__ import annotations

import argparse
import csv
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import numpy as np

from .engine import EngineMetrics, ShortestPathEngine
from .exceptions import ConfigError
from .graph import EdgeRecord, Graph
from .reference import dijkstra_reference


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    metrics: EngineMetrics
    reference_ms: float
    max_abs_err: float


def random_graph(n: int, m: int, seed: int = 0, max_weight: int = 500) -> Graph:
    """Generate a connected graph of ``n`` named cities and ``m`` edges.

    A random spanning tree is laid down first so every city is reachable;
    the remaining ``m - (n - 1)`` edges join random pairs.
    """
    if n <= 0:
        raise ConfigError("n must be positive.")
    rnd = random.Random(seed)
    names = [f"city{i}" for i in range(n)]
    edges: List[EdgeRecord] = []
    for v in range(1, n):
        u = rnd.randrange(v)
        edges.append(EdgeRecord(names[u], names[v], rnd.randint(1, max_weight)))
    for _ in range(max(0, m - (n - 1))):
        u = rnd.randrange(n)
        v = rnd.randrange(n)
        edges.append(EdgeRecord(names[u], names[v], rnd.randint(1, max_weight)))
    g = Graph()
    # keep ids aligned with the numeric suffix
    for name in names:
        g.add_or_get_node(name)
    for a, b, w in edges:
        g.add_record(a, b, w)
    return g


def run_once(n: int, m: int, seed: int = 0, tie_break: str = "right") -> BenchResult:
    """Run the engine once and compare against the reference.

    Args:
        n: Number of cities.
        m: Number of edges.
        seed: Seed for the random graph generator.
        tie_break: Heap tie-break passed to the engine.

    Returns:
        Timing information and maximum absolute distance error.
    """
    G = random_graph(n, m, seed)
    s = 0

    engine = ShortestPathEngine(G, tie_break=tie_break)
    t0 = time.perf_counter()
    tree = engine.run(s)
    t1 = time.perf_counter()

    t2 = time.perf_counter()
    ref = dijkstra_reference(G, s)
    t3 = time.perf_counter()

    ours = tree.as_array()
    theirs = np.array([np.inf if d is None else float(d) for d in ref], dtype=np.float64)
    if not np.array_equal(np.isinf(ours), np.isinf(theirs)):
        max_err = float("inf")
    else:
        finite = np.isfinite(ours)
        diff = np.abs(ours[finite] - theirs[finite])
        max_err = float(diff.max()) if diff.size else 0.0

    return BenchResult(
        metrics=engine.metrics(wall_ms=(t1 - t0) * 1000.0),
        reference_ms=(t3 - t2) * 1000.0,
        max_abs_err=max_err,
    )


def _p95(values: List[float]) -> float:
    if len(values) > 1:
        return statistics.quantiles(values, n=100, method="inclusive")[94]
    return values[0]


def main(argv: List[str] | None = None) -> None:
    """Run benchmarking trials and optionally record results.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--trials", type=int, default=1, help="Number of trials per configuration")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["10,20", "20,40"],
        help="Size pairs as n,m (e.g. 1000,5000). Defaults to a small demo.",
    )
    parser.add_argument("--seed-base", type=int, default=0, help="Base seed for random graphs")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-trial CSV data")
    args = parser.parse_args(argv)

    sizes: List[Tuple[int, int]] = []
    for spec in args.sizes:
        try:
            n_str, m_str = spec.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:
            parser.error(f"invalid size specification '{spec}'")

    rows: List[List[object]] = []
    aggregates: dict[Tuple[int, int], Tuple[List[float], List[float], List[int], List[float]]] = {}

    for n, m in sizes:
        e_times: List[float] = []
        r_times: List[float] = []
        relaxed: List[int] = []
        errors: List[float] = []
        for trial in range(args.trials):
            res = run_once(n=n, m=m, seed=args.seed_base + trial)
            mtx = res.metrics
            rows.append(
                [
                    mtx.n,
                    mtx.m,
                    trial,
                    f"{mtx.wall_ms:.6f}",
                    f"{res.reference_ms:.6f}",
                    mtx.counters["edges_relaxed"],
                    mtx.counters["decrease_keys"],
                    res.max_abs_err,
                ]
            )
            e_times.append(mtx.wall_ms)
            r_times.append(res.reference_ms)
            relaxed.append(mtx.counters["edges_relaxed"])
            errors.append(res.max_abs_err)
        aggregates[(n, m)] = (e_times, r_times, relaxed, errors)

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(
                [
                    "n",
                    "m",
                    "trial",
                    "engine_ms",
                    "reference_ms",
                    "edges_relaxed",
                    "decrease_keys",
                    "max_abs_err",
                ]
            )
            writer.writerows(rows)

    print(
        f"{'n':>7} {'m':>8} {'edges':>10}"
        f" {'eng_med':>10} {'eng_p95':>10} {'ref_med':>10} {'ref_p95':>10} {'max_err':>8}"
    )
    for (n, m), (e_times, r_times, relaxed, errors) in aggregates.items():
        print(
            f"{n:7d} {m:8d} {int(statistics.median(relaxed)):10d}"
            f" {statistics.median(e_times):10.2f} {_p95(e_times):10.2f}"
            f" {statistics.median(r_times):10.2f} {_p95(r_times):10.2f}"
            f" {max(errors):8.2g}"
        )


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
