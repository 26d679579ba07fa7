"""
Tests for RoutePlanner: per-query failures, caching and configuration.
"""

import io

import pytest

from cityroutes.exceptions import ConfigError, InvalidEdgeWeight, UnknownNode, Unreachable
from cityroutes.logger import StdLogger
from cityroutes.planner import PlannerConfig, QueryFailure, QueryRecord, QueryResult, RoutePlanner

RECORDS = [
    ("A", "B", 1),
    ("B", "C", 2),
    ("A", "C", 4),
    ("C", "D", 1),
    ("E", "F", 6),
]


def test_route_returns_typed_result():
    planner = RoutePlanner.from_records(RECORDS)
    res = planner.route("A", "D")
    assert res == QueryResult("A", "D", 4, ("A", "B", "C", "D"))


def test_route_to_self():
    planner = RoutePlanner.from_records(RECORDS)
    assert planner.route("C", "C") == QueryResult("C", "C", 0, ("C",))


def test_route_errors_propagate():
    planner = RoutePlanner.from_records(RECORDS)
    with pytest.raises(UnknownNode):
        planner.route("A", "Nowhere")
    with pytest.raises(UnknownNode):
        planner.route("Nowhere", "A")
    with pytest.raises(Unreachable):
        planner.route("A", "E")


def test_answer_reports_failures_per_query():
    planner = RoutePlanner.from_records(RECORDS)
    outcomes = planner.answer(
        [
            QueryRecord("A", "D"),
            QueryRecord("A", "Nowhere"),
            QueryRecord("F", "A"),
            QueryRecord("F", "E"),
        ]
    )

    assert [type(o) for o in outcomes] == [QueryResult, QueryFailure, QueryFailure, QueryResult]
    assert isinstance(outcomes[1].error, UnknownNode)
    assert "Nowhere" in outcomes[1].reason
    assert isinstance(outcomes[2].error, Unreachable)
    assert outcomes[3].distance == 6


def test_invalid_weight_aborts_construction():
    with pytest.raises(InvalidEdgeWeight):
        RoutePlanner.from_records(RECORDS + [("D", "G", -1)])


def test_trees_are_reused_per_source():
    planner = RoutePlanner.from_records(RECORDS)
    planner.answer([("A", "D"), ("A", "C"), ("B", "D")])
    assert planner.engine.summary()["queries"] == 2
    assert planner.tree(0) is planner.tree(0)

    planner.clear()
    planner.route("A", "B")
    assert planner.engine.summary()["queries"] == 3


def test_cache_can_be_disabled():
    planner = RoutePlanner.from_records(RECORDS, PlannerConfig(reuse_trees=False))
    planner.answer([("A", "D"), ("A", "C")])
    assert planner.engine.summary()["queries"] == 2
    assert planner.tree(0) is not planner.tree(0)


def test_config_validation():
    with pytest.raises(ConfigError):
        PlannerConfig(tie_break="middle")


def test_failures_are_logged():
    buf = io.StringIO()
    logger = StdLogger(level="info", stream=buf)
    planner = RoutePlanner.from_records(RECORDS, logger=logger)
    planner.answer([("A", "D"), ("A", "E")])

    lines = buf.getvalue().splitlines()
    assert lines[0] == "info graph_loaded nodes=6 edges=5"
    assert lines[1].startswith("info query source=A dest=D distance=4 hops=3")
    assert lines[2].startswith("warning query_failed source=A dest=E")
