"""Public package exports for :mod:`cityroutes`."""

from __future__ import annotations

from .engine import (
    EngineMetrics,
    QueryContext,
    QueryState,
    ShortestPathEngine,
    ShortestPathTree,
    shortest_route,
)
from .exceptions import (
    AlgorithmError,
    CityRoutesError,
    ConfigError,
    EmptyHeap,
    InputError,
    InvalidDecrease,
    InvalidEdgeWeight,
    RecordFormatError,
    RouteError,
    UnknownNode,
    Unreachable,
)
from .graph import Edge, EdgeRecord, Graph
from .heap import IndexedMinHeap
from .io import read_edge_records, read_graph, read_query_records, write_graph, write_report
from .logger import Logger, NoopLogger, StdLogger
from .path import reconstruct_path, route_weight
from .planner import PlannerConfig, QueryFailure, QueryRecord, QueryResult, RoutePlanner
from .reference import dijkstra_reference

__version__ = "0.1.0"

__all__ = [
    "Graph",
    "Edge",
    "EdgeRecord",
    "IndexedMinHeap",
    "ShortestPathEngine",
    "ShortestPathTree",
    "QueryContext",
    "QueryState",
    "EngineMetrics",
    "shortest_route",
    "reconstruct_path",
    "route_weight",
    "dijkstra_reference",
    "RoutePlanner",
    "PlannerConfig",
    "QueryRecord",
    "QueryResult",
    "QueryFailure",
    "read_edge_records",
    "read_query_records",
    "read_graph",
    "write_graph",
    "write_report",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "CityRoutesError",
    "InputError",
    "RecordFormatError",
    "InvalidEdgeWeight",
    "UnknownNode",
    "ConfigError",
    "RouteError",
    "Unreachable",
    "AlgorithmError",
    "EmptyHeap",
    "InvalidDecrease",
]
