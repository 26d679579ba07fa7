"""Dijkstra shortest-path engine over :class:`~cityroutes.graph.Graph`."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import AlgorithmError, InputError
from .graph import Graph, NodeId
from .heap import INFINITY, IndexedMinHeap
from .logger import Logger, NoopLogger
from .path import reconstruct_path


class QueryState(Enum):
    """Lifecycle of one shortest-path query."""

    INIT = "init"
    RELAXING = "relaxing"
    DONE = "done"


@dataclass
class QueryContext:
    """Mutable per-query scratch state, indexed by node id.

    ``distance[v] is None`` means ``v`` has not been reached. The heap keeps
    its own ``id -> slot`` map and lives only as long as the query.
    """

    source: NodeId
    distance: List[Optional[int]]
    predecessor: List[Optional[NodeId]]
    visited: List[bool]
    heap: IndexedMinHeap
    state: QueryState = QueryState.INIT

    @classmethod
    def start(cls, graph: Graph, source: NodeId, tie_break: str = "right") -> "QueryContext":
        """Build the Init state: source at 0, everything else unreached and queued."""
        n = graph.n
        if not (0 <= source < n):
            raise InputError("source must be a valid node id.")
        ctx = cls(
            source=source,
            distance=[None] * n,
            predecessor=[None] * n,
            visited=[False] * n,
            heap=IndexedMinHeap(tie_break=tie_break),
        )
        ctx.distance[source] = 0
        for v in range(n):
            ctx.heap.insert(v, 0 if v == source else INFINITY)
        return ctx


@dataclass(frozen=True)
class ShortestPathTree:
    """Distances and predecessors for one source, frozen after the run."""

    source: NodeId
    distances: Tuple[Optional[int], ...]
    predecessors: Tuple[Optional[NodeId], ...]
    names: Tuple[str, ...] = field(repr=False)

    @classmethod
    def from_context(cls, ctx: QueryContext, graph: Graph) -> "ShortestPathTree":
        if ctx.state is not QueryState.DONE:
            raise AlgorithmError(f"query is still in state {ctx.state.value}")
        return cls(
            source=ctx.source,
            distances=tuple(ctx.distance),
            predecessors=tuple(ctx.predecessor),
            names=tuple(graph.names()),
        )

    def is_reachable(self, node: NodeId) -> bool:
        return self.distances[node] is not None

    def distance_to(self, node: NodeId) -> Optional[int]:
        return self.distances[node]

    def path_to(self, dest: NodeId) -> Tuple[int, List[NodeId]]:
        """Return ``(distance, node ids)`` from the source to ``dest``.

        Raises:
            Unreachable: If ``dest`` was never reached.
        """
        return reconstruct_path(self.distances, self.predecessors, self.source, dest, self.names)

    def route_to(self, dest: NodeId) -> Tuple[int, List[str]]:
        """Like :meth:`path_to` but with node names."""
        total, ids = self.path_to(dest)
        return total, [self.names[i] for i in ids]

    def as_array(self) -> npt.NDArray[np.float64]:
        """Distances as ``float64`` with ``inf`` for unreached nodes."""
        return np.array(
            [np.inf if d is None else float(d) for d in self.distances],
            dtype=np.float64,
        )


@dataclass(frozen=True)
class EngineMetrics:
    """Performance metrics collected from engine runs."""

    n: int
    m: int
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


class ShortestPathEngine:
    """Single-source Dijkstra with an indexed heap and decrease-key.

    One call to :meth:`run` is one query: a fresh :class:`QueryContext` is
    created, drained and frozen into a :class:`ShortestPathTree`, so runs
    never see each other's state. The graph must not be mutated while a
    run is in progress.

    Args:
        graph: Graph to search; weights must be positive.
        tie_break: Heap tie-break, see :class:`~cityroutes.heap.IndexedMinHeap`.
        logger: Optional structured logger.
        validate: Check heap invariants after every heap operation. Slow;
            meant for tests and debugging.
    """

    def __init__(
        self,
        graph: Graph,
        tie_break: str = "right",
        logger: Logger | None = None,
        validate: bool = False,
    ) -> None:
        self.graph = graph
        self.tie_break = tie_break
        self.logger = logger or NoopLogger()
        self.validate = validate
        self.counters: Dict[str, int] = {
            "queries": 0,
            "extractions": 0,
            "edges_relaxed": 0,
            "decrease_keys": 0,
        }

    def _relax_all(self, ctx: QueryContext) -> None:
        adj = self.graph.adj
        dist = ctx.distance
        pred = ctx.predecessor
        visited = ctx.visited
        heap = ctx.heap
        counters = self.counters

        ctx.state = QueryState.RELAXING
        while not heap.is_empty():
            u, _ = heap.extract_min()
            counters["extractions"] += 1
            if self.validate:
                heap.check_invariants()
            du = dist[u]
            if du is None:
                # everything left in the heap is unreached as well
                visited[u] = True
                continue
            for e in adj[u]:
                v = e.target
                if visited[v]:
                    continue
                counters["edges_relaxed"] += 1
                alt = du + e.weight
                dv = dist[v]
                if dv is None or alt < dv:
                    dist[v] = alt
                    pred[v] = u
                    heap.decrease_key(v, alt)
                    counters["decrease_keys"] += 1
                    if self.validate:
                        heap.check_invariants()
            visited[u] = True
        ctx.state = QueryState.DONE

    def run(self, source: NodeId) -> ShortestPathTree:
        """Compute shortest distances from ``source`` to every node.

        Args:
            source: Source node id.

        Returns:
            The frozen result of the query.

        Raises:
            InputError: If ``source`` is not a node id of the graph.
        """
        ctx = QueryContext.start(self.graph, source, self.tie_break)
        if self.validate:
            ctx.heap.check_invariants()
        before = dict(self.counters)
        self._relax_all(ctx)
        self.counters["queries"] += 1
        self.logger.debug(
            "dijkstra",
            source=self.graph.name_of(source),
            extractions=self.counters["extractions"] - before["extractions"],
            edges_relaxed=self.counters["edges_relaxed"] - before["edges_relaxed"],
            decrease_keys=self.counters["decrease_keys"] - before["decrease_keys"],
        )
        return ShortestPathTree.from_context(ctx, self.graph)

    def run_from(self, name: str) -> ShortestPathTree:
        """Run a query from the node called ``name``.

        Raises:
            UnknownNode: If ``name`` is not in the graph.
        """
        return self.run(self.graph.lookup(name))

    def summary(self) -> Dict[str, int]:
        """Return a copy of the cumulative counters."""
        return dict(self.counters)

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> EngineMetrics:
        return EngineMetrics(
            n=self.graph.n,
            m=self.graph.m,
            counters=self.summary(),
            wall_ms=wall_ms,
            peak_mib=peak_mib,
        )


def shortest_route(graph: Graph, source: str, dest: str) -> Tuple[int, List[str]]:
    """Convenience wrapper: one query from ``source`` to ``dest`` by name.

    Raises:
        UnknownNode: If either name is not in the graph.
        Unreachable: If ``dest`` cannot be reached.
    """
    src = graph.lookup(source)
    dst = graph.lookup(dest)
    return ShortestPathEngine(graph).run(src).route_to(dst)
