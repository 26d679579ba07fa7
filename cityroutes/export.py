"""Export graphs and shortest-path trees through :mod:`networkx`."""

from __future__ import annotations

import json
from typing import List

import networkx as nx

from .engine import ShortestPathTree
from .graph import Graph


def to_networkx(G: Graph) -> nx.Graph:
    """Return an undirected ``networkx`` view of ``G``.

    Nodes are keyed by name. Parallel edges collapse to the lightest one.
    """
    out = nx.Graph()
    out.add_nodes_from(G.names())
    for a, b, w in G.edges():
        if out.has_edge(a, b) and out[a][b]["weight"] <= w:
            continue
        out.add_edge(a, b, weight=w)
    return out


def tree_to_networkx(G: Graph, tree: ShortestPathTree) -> nx.DiGraph:
    """Return the predecessor tree as a directed graph rooted at the source.

    Only reached nodes are included. Each node carries its ``distance``;
    each edge ``pred -> node`` carries the weight that was relaxed.
    """
    out = nx.DiGraph(source=G.name_of(tree.source))
    for v, d in enumerate(tree.distances):
        if d is not None:
            out.add_node(G.name_of(v), distance=d)
    for v, p in enumerate(tree.predecessors):
        if p is None:
            continue
        dp, dv = tree.distances[p], tree.distances[v]
        # both are reached whenever a predecessor is recorded
        out.add_edge(G.name_of(p), G.name_of(v), weight=dv - dp)  # type: ignore[operator]
    return out


def export_tree_json(G: Graph, tree: ShortestPathTree) -> str:
    """Return the tree in node-link JSON form."""
    data = nx.node_link_data(tree_to_networkx(G, tree), edges="links")
    return json.dumps(data)


def export_tree_graphml(G: Graph, tree: ShortestPathTree) -> str:
    """Return the tree as a GraphML document."""
    lines: List[str] = list(nx.generate_graphml(tree_to_networkx(G, tree)))
    return "\n".join(lines)
