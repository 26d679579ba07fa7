"""Human-readable and JSON rendering of query outcomes."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from .engine import ShortestPathTree
from .graph import Graph
from .planner import Outcome, QueryFailure, QueryResult

ARROW = " ---> "
UNIT = "km"


def format_result(res: QueryResult) -> str:
    """Render one successful query.

    Examples:
        ```python
        >>> print(format_result(QueryResult("A", "D", 4, ("A", "B", "C", "D"))), end="")
        A to D is 4km
        <BLANKLINE>
        Route:
        A ---> B ---> C ---> D
        <BLANKLINE>
        <BLANKLINE>
        <BLANKLINE>
        ```
    """
    return (
        f"{res.source} to {res.dest} is {res.distance}{UNIT}\n\n"
        f"Route:\n{ARROW.join(res.route)}\n\n\n\n"
    )


def format_failure(fail: QueryFailure) -> str:
    return f"{fail.source} to {fail.dest}: {fail.reason}\n\n"


def format_report(outcomes: Sequence[Outcome]) -> str:
    """Concatenate the rendering of every outcome, in order."""
    parts: List[str] = []
    for out in outcomes:
        if isinstance(out, QueryResult):
            parts.append(format_result(out))
        else:
            parts.append(format_failure(out))
    return "".join(parts)


def outcome_to_dict(out: Outcome) -> Dict[str, Any]:
    if isinstance(out, QueryResult):
        return {
            "source": out.source,
            "dest": out.dest,
            "distance": out.distance,
            "route": list(out.route),
        }
    return {
        "source": out.source,
        "dest": out.dest,
        "error": type(out.error).__name__,
        "reason": out.reason,
    }


def outcomes_to_json(outcomes: Sequence[Outcome]) -> str:
    return json.dumps([outcome_to_dict(o) for o in outcomes])


def format_tree_table(graph: Graph, tree: ShortestPathTree) -> str:
    """Tabulate every node's distance from the tree's source and its predecessor.

    Unreached nodes show ``inf`` and the source shows dashes for its
    predecessor.
    """
    lines = [
        f"{'Vertex':<10}{'CityName':<20}{'Distance':<20}{'Previous':<20}",
        f"{'From Source':>41}",
        "",
    ]
    for v in range(graph.n):
        dist = tree.distances[v]
        pred = tree.predecessors[v]
        dist_s = "inf" if dist is None else str(dist)
        if v == tree.source:
            prev_s = "----------"
        elif pred is None:
            prev_s = ""
        else:
            prev_s = graph.name_of(pred)
        lines.append(f"{v:<10}{graph.name_of(v):<20}{dist_s:<20}{prev_s:<20}".rstrip())
    return "\n".join(lines) + "\n"


def format_adjacency(graph: Graph) -> str:
    """One line per node: ``name -> w neighbour -> w neighbour ->``."""
    lines: List[str] = []
    for v in range(graph.n):
        hops = "".join(f" {e.weight} {graph.name_of(e.target)} ->" for e in graph.adjacency(v))
        lines.append(f"{graph.name_of(v)} ->{hops}")
    return "\n".join(lines) + "\n"
