"""
Route visualization for city graphs.

Features:
- Draws the undirected, weighted city graph with NetworkX + Matplotlib
- Highlights the source, the destination and the edges of a route
- Saves to a file instead of opening a window when asked

Example usage:

```
cityroutes --edges ukcities.txt --queries citypairs.txt --plot route.png
```
"""

from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import networkx as nx

from .export import to_networkx
from .graph import Graph

LAYOUTS = ("spring", "kamada_kawai", "shell")


def _layout(G: nx.Graph, layout: str):
    if layout == "spring":
        return nx.spring_layout(G, seed=42)
    if layout == "kamada_kawai":
        return nx.kamada_kawai_layout(G)
    if layout == "shell":
        return nx.shell_layout(G)
    raise ValueError(f"Unknown layout: {layout}")


def plot_route(
    graph: Graph,
    route: Sequence[str] = (),
    *,
    layout: str = "spring",
    show_weights: bool = False,
    node_size: int = 300,
    out: Optional[str] = None,
    title: Optional[str] = None,
):
    """
    Render the graph, highlighting ``route`` if one is given.

    Returns the Matplotlib figure. When ``out`` is set the figure is saved
    there and closed; otherwise it is shown.
    """
    G = to_networkx(graph)
    pos = _layout(G, layout)

    fig = plt.figure(figsize=(12, 10))

    on_route = set(route)
    endpoints = {route[0], route[-1]} if route else set()
    node_colors = [
        "tab:red" if node in endpoints else "tab:orange" if node in on_route else "tab:blue"
        for node in G.nodes
    ]

    nx.draw_networkx_nodes(G, pos, node_color=node_colors, node_size=node_size, alpha=0.9)
    nx.draw_networkx_edges(G, pos, width=1.0, alpha=0.4)

    route_edges = list(zip(route, route[1:]))
    if route_edges:
        nx.draw_networkx_edges(
            G,
            pos,
            edgelist=route_edges,
            width=3.0,
            edge_color="tab:red",
        )

    nx.draw_networkx_labels(G, pos, font_size=8, font_color="black")

    if show_weights:
        edge_labels = nx.get_edge_attributes(G, "weight")
        nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=7)

    if title is None:
        title = f"{route[0]} to {route[-1]}" if route else "City graph"
    plt.title(title, fontsize=14)
    plt.axis("off")
    plt.tight_layout()
    if out:
        fig.savefig(out)
        plt.close(fig)
    else:  # pragma: no cover - interactive
        plt.show()
    return fig
