"""Answer named route queries against a graph built from edge records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Tuple, Union

from .engine import ShortestPathEngine, ShortestPathTree
from .exceptions import ConfigError, RouteError, UnknownNode, Unreachable
from .graph import Graph, NodeId
from .heap import TIE_BREAKS
from .logger import Logger, NoopLogger


class QueryRecord(NamedTuple):
    """Path request: source and destination node names."""

    source: str
    dest: str


@dataclass(frozen=True)
class QueryResult:
    """Successful answer to a :class:`QueryRecord`."""

    source: str
    dest: str
    distance: int
    route: Tuple[str, ...]


@dataclass(frozen=True)
class QueryFailure:
    """Per-query failure; other queries in the batch are unaffected."""

    source: str
    dest: str
    error: Union[UnknownNode, RouteError]

    @property
    def reason(self) -> str:
        return str(self.error)


Outcome = Union[QueryResult, QueryFailure]


@dataclass(frozen=True)
class PlannerConfig:
    """Configuration knobs for :class:`RoutePlanner`.

    Attributes:
        tie_break: Heap child preferred when sift-down meets equal keys,
            ``"right"`` or ``"left"``. Decides which of several equally
            short routes is reported.
        reuse_trees: Keep the shortest-path tree of each source that has
            been queried and answer later queries from it.
    """

    tie_break: str = "right"
    reuse_trees: bool = True

    def __post_init__(self) -> None:
        if self.tie_break not in TIE_BREAKS:
            raise ConfigError(
                f"tie_break must be one of {', '.join(TIE_BREAKS)}; got {self.tie_break!r}"
            )


@dataclass
class RoutePlanner:
    """Route queries by name over a read-only :class:`Graph`."""

    graph: Graph
    config: PlannerConfig = field(default_factory=PlannerConfig)
    logger: Logger = field(default_factory=NoopLogger)

    def __post_init__(self) -> None:
        self.engine = ShortestPathEngine(
            self.graph, tie_break=self.config.tie_break, logger=self.logger
        )
        self._trees: Dict[NodeId, ShortestPathTree] = {}

    @classmethod
    def from_records(
        cls,
        records: Iterable[Tuple[str, str, int]],
        config: PlannerConfig | None = None,
        logger: Logger | None = None,
    ) -> "RoutePlanner":
        """Build the graph from edge records and wrap it in a planner.

        Raises:
            InvalidEdgeWeight: If any record has a non-positive weight.
        """
        graph = Graph.from_records(records)
        log = logger or NoopLogger()
        log.info("graph_loaded", nodes=graph.n, edges=graph.m)
        return cls(graph, config or PlannerConfig(), log)

    def tree(self, source: NodeId) -> ShortestPathTree:
        """Return the shortest-path tree for ``source``, computing it if needed."""
        cached = self._trees.get(source)
        if cached is not None:
            return cached
        tree = self.engine.run(source)
        if self.config.reuse_trees:
            self._trees[source] = tree
        return tree

    def route(self, source: str, dest: str) -> QueryResult:
        """Answer one query.

        Raises:
            UnknownNode: If either name is not in the graph.
            Unreachable: If ``dest`` cannot be reached from ``source``.
        """
        src = self.graph.lookup(source)
        dst = self.graph.lookup(dest)
        distance, route = self.tree(src).route_to(dst)
        return QueryResult(source, dest, distance, tuple(route))

    def answer(self, queries: Iterable[Tuple[str, str]]) -> List[Outcome]:
        """Answer a batch of queries, one outcome per query in order.

        Unknown names and unreachable destinations become
        :class:`QueryFailure` entries; anything else propagates.
        """
        outcomes: List[Outcome] = []
        for source, dest in queries:
            try:
                res = self.route(source, dest)
            except (UnknownNode, Unreachable) as exc:
                self.logger.warning("query_failed", source=source, dest=dest, reason=str(exc))
                outcomes.append(QueryFailure(source, dest, exc))
                continue
            self.logger.info(
                "query", source=source, dest=dest, distance=res.distance, hops=len(res.route) - 1
            )
            outcomes.append(res)
        return outcomes

    def clear(self) -> None:
        """Drop all cached trees."""
        self._trees.clear()
