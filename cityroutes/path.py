"""Utilities for reconstructing routes from predecessor arrays."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .exceptions import AlgorithmError, InputError, Unreachable
from .graph import Graph, NodeId


def reconstruct_path(
    distances: Sequence[Optional[int]],
    predecessors: Sequence[Optional[NodeId]],
    source: NodeId,
    dest: NodeId,
    names: Optional[Sequence[str]] = None,
) -> Tuple[int, List[NodeId]]:
    """Return ``(total_distance, route)`` from ``source`` to ``dest``.

    The route is built by walking predecessor links backwards from ``dest``
    until a node without predecessor is reached, then reversed so it reads
    source first.

    Args:
        distances: Final distance of each node, ``None`` if unreached.
        predecessors: Predecessor of each node, ``None`` for the source and
            for unreached nodes.
        source: Source node id the arrays were computed for.
        dest: Destination node id.
        names: Optional node names, only used to label errors.

    Returns:
        The destination's distance and the node ids on the route, both
        endpoints included.

    Raises:
        Unreachable: If ``dest`` has no finite distance.
        AlgorithmError: If the predecessor chain does not end at ``source``.
    """
    n = len(distances)
    if not (0 <= source < n and 0 <= dest < n):
        raise InputError("source/dest out of range.")

    total = distances[dest]
    if total is None:
        raise Unreachable(_label(source, names), _label(dest, names))

    chain: List[NodeId] = [dest]
    cur = predecessors[dest]
    while cur is not None:
        chain.append(cur)
        if len(chain) > n:
            raise AlgorithmError("predecessor chain contains a cycle")
        cur = predecessors[cur]
    if chain[-1] != source:
        raise AlgorithmError(
            f"predecessor chain from {_label(dest, names)} ends at "
            f"{_label(chain[-1], names)}, not at the source"
        )
    chain.reverse()
    return total, chain


def route_weight(graph: Graph, route: Iterable[NodeId]) -> int:
    """Sum the weights along ``route``, taking the lightest parallel edge.

    Raises:
        InputError: If two consecutive nodes are not adjacent.
    """
    total = 0
    prev: Optional[NodeId] = None
    for node in route:
        if prev is not None:
            weights = [e.weight for e in graph.adjacency(prev) if e.target == node]
            if not weights:
                raise InputError(
                    f"{graph.name_of(prev)!r} and {graph.name_of(node)!r} are not adjacent"
                )
            total += min(weights)
        prev = node
    return total


def _label(node: NodeId, names: Optional[Sequence[str]]) -> str:
    if names is not None and 0 <= node < len(names):
        return names[node]
    return f"#{node}"
