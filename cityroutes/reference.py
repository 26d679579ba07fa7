"""Reference Dijkstra built on :mod:`heapq`, used to cross-check the engine."""

from __future__ import annotations

import heapq
from typing import List, Optional, Set, Tuple

from .exceptions import InputError
from .graph import Graph, NodeId


def dijkstra_reference(G: Graph, source: NodeId) -> List[Optional[int]]:
    """Run lazy-deletion Dijkstra and return the distance of every node.

    Args:
        G: Input graph with positive edge weights.
        source: Source node id.

    Returns:
        Distances indexed by node id, ``None`` for unreached nodes.
    """
    if not (0 <= source < G.n):
        raise InputError("source must be a valid node id.")
    dist: List[Optional[int]] = [None] * G.n
    dist[source] = 0
    pq: List[Tuple[int, NodeId]] = [(0, source)]
    seen: Set[NodeId] = set()
    while pq:
        d, u = heapq.heappop(pq)
        if u in seen or d != dist[u]:
            continue
        seen.add(u)
        for e in G.adj[u]:
            nd = d + e.weight
            cur = dist[e.target]
            if cur is None or nd < cur:
                dist[e.target] = nd
                heapq.heappush(pq, (nd, e.target))
    return dist
