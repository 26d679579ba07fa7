"""Undirected weighted graph of named nodes used by the route engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, NamedTuple, Tuple

from .exceptions import InvalidEdgeWeight, UnknownNode

NodeId = int
Weight = int


class EdgeRecord(NamedTuple):
    """Graph construction input: two endpoint names and a positive weight."""

    a: str
    b: str
    weight: Weight


@dataclass(frozen=True)
class Edge:
    """Directed adjacency entry ``source -> target`` carrying ``weight``."""

    source: NodeId
    target: NodeId
    weight: Weight


@dataclass
class Graph:
    """Undirected graph whose nodes are deduplicated by name.

    Node identifiers are dense integers handed out in order of first
    sighting; once assigned they never change. Every undirected edge is
    stored as a pair of mirrored :class:`Edge` entries, one in each
    endpoint's adjacency list, in insertion order.

    Examples:
        ```python
        >>> g = Graph()
        >>> g.add_record("York", "Leeds", 40)
        >>> g.lookup("Leeds")
        1
        >>> [e.target for e in g.adjacency(1)]
        [0]
        ```
    """

    _names: List[str] = field(default_factory=list, init=False, repr=False)
    _ids: Dict[str, NodeId] = field(default_factory=dict, init=False, repr=False)
    adj: List[List[Edge]] = field(default_factory=list, init=False, repr=False)

    @property
    def n(self) -> int:
        """Number of nodes."""
        return len(self._names)

    @property
    def m(self) -> int:
        """Number of undirected edges."""
        return sum(len(lst) for lst in self.adj) // 2

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def add_or_get_node(self, name: str) -> NodeId:
        """Return the id for ``name``, allocating the next id if it is new.

        Matching is exact and case-sensitive.
        """
        node = self._ids.get(name)
        if node is None:
            node = len(self._names)
            self._names.append(name)
            self._ids[name] = node
            self.adj.append([])
        return node

    def add_edge(self, a: NodeId, b: NodeId, weight: Weight) -> None:
        """Add an undirected edge between ``a`` and ``b``.

        Args:
            a: First endpoint id.
            b: Second endpoint id.
            weight: Strictly positive integer weight.

        Raises:
            InvalidEdgeWeight: If ``weight`` is not an integer or is ``<= 0``.
            IndexError: If either id has not been allocated.
        """
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise InvalidEdgeWeight(
                f"non-integer weight {weight!r} between {self._label(a)} and {self._label(b)}"
            )
        if weight <= 0:
            raise InvalidEdgeWeight(
                f"non-positive weight {weight} between {self._label(a)} and {self._label(b)}"
            )
        if not (0 <= a < self.n and 0 <= b < self.n):
            raise IndexError("edge endpoints must be allocated node ids.")
        self.adj[a].append(Edge(a, b, weight))
        self.adj[b].append(Edge(b, a, weight))

    def add_record(self, a: str, b: str, weight: Weight) -> None:
        """Add an edge by endpoint names, creating nodes on first sighting."""
        ia = self.add_or_get_node(a)
        ib = self.add_or_get_node(b)
        self.add_edge(ia, ib, weight)

    def lookup(self, name: str) -> NodeId:
        """Return the id of an existing node.

        Raises:
            UnknownNode: If no node is called ``name``.
        """
        try:
            return self._ids[name]
        except KeyError:
            raise UnknownNode(name) from None

    def name_of(self, node: NodeId) -> str:
        return self._names[node]

    def names(self) -> List[str]:
        """Node names indexed by id."""
        return list(self._names)

    def adjacency(self, node: NodeId) -> Tuple[Edge, ...]:
        """Return the outgoing edges of ``node`` in insertion order."""
        return tuple(self.adj[node])

    def out_degree(self, node: NodeId) -> int:
        return len(self.adj[node])

    def edges(self) -> Iterator[EdgeRecord]:
        """Yield each undirected edge once, as a named record."""
        for lst in self.adj:
            loops = 0
            for e in lst:
                if e.source < e.target:
                    yield EdgeRecord(self._names[e.source], self._names[e.target], e.weight)
                elif e.source == e.target:
                    # self-loops are stored twice in the same list
                    if loops % 2 == 0:
                        yield EdgeRecord(self._names[e.source], self._names[e.source], e.weight)
                    loops += 1

    def _label(self, node: NodeId) -> str:
        if 0 <= node < self.n:
            return repr(self._names[node])
        return f"#{node}"

    @classmethod
    def from_records(cls, records: Iterable[Tuple[str, str, Weight]]) -> "Graph":
        """Create a graph by streaming ``(name_a, name_b, weight)`` records.

        Raises:
            InvalidEdgeWeight: On the first record with a bad weight; the
                partially built graph is discarded.
        """
        g = cls()
        for a, b, w in records:
            g.add_record(a, b, w)
        return g
