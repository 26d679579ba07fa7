"""Command-line interface for answering route queries."""

from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from .bench import random_graph
from .exceptions import CityRoutesError, ConfigError, InputError
from .export import export_tree_graphml, export_tree_json
from .graph import Graph
from .heap import TIE_BREAKS
from .io import FORMATS, read_graph, read_query_records, write_report
from .logger import StdLogger
from .planner import PlannerConfig, QueryResult, RoutePlanner
from .report import format_adjacency, format_report, format_tree_table, outcomes_to_json

EXAMPLE_EDGES = "York\tLeeds\t40\r\nLeeds\tManchester\t70\r\nYork\tManchester\t120\r\nManchester\tLiverpool\t55\r\n"

EXIT_OK = 0
EXIT_INPUT = 64
EXIT_INTERNAL = 70


def _load_graph(path: str, fmt: Optional[str]) -> Graph:
    p = Path(path)
    if not p.exists():
        raise InputError(f"edges file not found: {path}")
    if not p.is_file():
        raise InputError(f"edges path is not a file: {path}")
    return read_graph(path, fmt)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``cityroutes`` command-line tool."""
    examples = (
        "Examples:\n"
        "  cityroutes --edges ukcities.txt --queries citypairs.txt --out output.txt\n"
        "  cityroutes --edges ukcities.txt --route York Liverpool\n"
        "  cityroutes --edges ukcities.txt --table York\n"
        "  cityroutes --random --n 50 --m 120 --route city0 city7\n"
    )
    p = argparse.ArgumentParser(
        prog="cityroutes",
        description="Shortest routes between named cities",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured JSON log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edge records file")
    src.add_argument("--random", action="store_true", help="Use a random connected graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges file to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=list(FORMATS),
        default=None,
        help="Edge file format (auto-detected from extension)",
    )

    p.add_argument("--n", type=int, default=10, help="Cities (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")

    q = p.add_mutually_exclusive_group()
    q.add_argument("--queries", type=str, default=None, help="Path to query records file")
    q.add_argument(
        "--route",
        nargs=2,
        metavar=("SOURCE", "DEST"),
        default=None,
        help="Answer a single query",
    )
    p.add_argument(
        "--query-format",
        choices=list(FORMATS),
        default=None,
        help="Query file format (auto-detected from extension)",
    )
    p.add_argument("--out", type=str, default=None, help="Write the report to this file")
    p.add_argument("--json", action="store_true", help="Report outcomes as JSON")
    p.add_argument("--tie-break", choices=list(TIE_BREAKS), default="right")
    p.add_argument("--no-cache", action="store_true", help="Recompute the tree for every query")

    p.add_argument("--table", metavar="SOURCE", default=None, help="Print the distance table from SOURCE")
    p.add_argument("--adjacency", action="store_true", help="Print every adjacency list")
    p.add_argument("--export-json", type=str, default=None, help="Write the tree of --table SOURCE as JSON")
    p.add_argument(
        "--export-graphml",
        type=str,
        default=None,
        help="Write the tree of --table SOURCE as GraphML",
    )
    p.add_argument("--plot", type=str, default=None, help="Save a picture of the first route")

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_EDGES)
        return EXIT_OK

    stream = sys.stdout if args.log_json else sys.stderr
    logger = StdLogger(level=args.log_level, json_fmt=args.log_json, stream=stream).bind(
        input=args.edges or f"random:{args.seed}"
    )

    try:
        if (args.export_json or args.export_graphml) and args.table is None:
            raise ConfigError("--export-json/--export-graphml need --table SOURCE")

        cfg = PlannerConfig(tie_break=args.tie_break, reuse_trees=not args.no_cache)
        if args.random:
            G = random_graph(args.n, args.m, args.seed)
        else:
            G = _load_graph(args.edges, args.format)
        logger.info("graph_loaded", nodes=G.n, edges=G.m)
        planner = RoutePlanner(G, cfg, logger)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={G.n} m={G.m} tie_break={cfg.tie_break} reuse_trees={cfg.reuse_trees}\n"
            )

        if args.adjacency:
            sys.stdout.write(format_adjacency(G))

        if args.table is not None:
            tree = planner.tree(G.lookup(args.table))
            sys.stdout.write(format_tree_table(G, tree))
            if args.export_json:
                Path(args.export_json).write_text(export_tree_json(G, tree), encoding="utf-8")
            if args.export_graphml:
                Path(args.export_graphml).write_text(export_tree_graphml(G, tree), encoding="utf-8")

        if args.queries is not None:
            if not Path(args.queries).is_file():
                raise InputError(f"queries file not found: {args.queries}")
            queries = read_query_records(args.queries, args.query_format)
        elif args.route is not None:
            queries = [tuple(args.route)]
        else:
            queries = []

        if queries:
            outcomes = planner.answer(queries)
            if args.out:
                write_report(outcomes, args.out, json_fmt=args.json)
            elif args.json:
                print(outcomes_to_json(outcomes))
            else:
                sys.stdout.write(format_report(outcomes))

            if args.plot:
                from .visualize import plot_route

                first = next((o for o in outcomes if isinstance(o, QueryResult)), None)
                plot_route(G, first.route if first else (), out=args.plot)

        logger.info("run", nodes=G.n, edges=G.m, requested=len(queries), **planner.engine.summary())
        return EXIT_OK

    except (InputError, ConfigError) as exc:
        logger.error("run_failed", error=type(exc).__name__)
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_INPUT
    except CityRoutesError as exc:
        logger.error("run_failed", error=type(exc).__name__)
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL
    except Exception as exc:
        logger.error("run_failed", error=type(exc).__name__)
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
