"""
Unit tests for the name-keyed undirected Graph.
"""

import pytest

from cityroutes.exceptions import InvalidEdgeWeight, UnknownNode
from cityroutes.graph import Edge, EdgeRecord, Graph


def test_node_ids_are_dense_and_stable():
    g = Graph()
    assert g.add_or_get_node("York") == 0
    assert g.add_or_get_node("Leeds") == 1
    assert g.add_or_get_node("York") == 0
    assert g.add_or_get_node("Hull") == 2

    assert g.n == 3
    assert g.names() == ["York", "Leeds", "Hull"]
    assert g.name_of(1) == "Leeds"


def test_names_are_case_sensitive():
    g = Graph()
    a = g.add_or_get_node("York")
    b = g.add_or_get_node("york")
    assert a != b
    assert "York" in g
    assert "YORK" not in g


def test_add_edge_stores_mirrored_entries():
    g = Graph()
    a = g.add_or_get_node("A")
    b = g.add_or_get_node("B")
    g.add_edge(a, b, 7)

    assert g.adjacency(a) == (Edge(a, b, 7),)
    assert g.adjacency(b) == (Edge(b, a, 7),)
    assert g.m == 1


def test_adjacency_keeps_insertion_order(abcd_graph):
    a = abcd_graph.lookup("A")
    targets = [abcd_graph.name_of(e.target) for e in abcd_graph.adjacency(a)]
    assert targets == ["B", "C"]
    # restartable: a second call yields the same sequence
    assert abcd_graph.adjacency(a) == abcd_graph.adjacency(a)


@pytest.mark.parametrize("weight", [0, -4, 2.5, True, "3"])
def test_bad_weights_are_rejected(weight):
    g = Graph()
    a = g.add_or_get_node("A")
    b = g.add_or_get_node("B")
    with pytest.raises(InvalidEdgeWeight):
        g.add_edge(a, b, weight)
    assert g.adjacency(a) == ()
    assert g.adjacency(b) == ()


def test_from_records_halts_on_non_positive_weight():
    records = [("A", "B", 3), ("B", "C", 0), ("C", "D", 2)]
    with pytest.raises(InvalidEdgeWeight) as excinfo:
        Graph.from_records(records)
    assert "'B'" in str(excinfo.value)
    assert "'C'" in str(excinfo.value)


def test_lookup_never_creates_nodes(abcd_graph):
    assert abcd_graph.lookup("C") == 2
    with pytest.raises(UnknownNode) as excinfo:
        abcd_graph.lookup("Z")
    assert excinfo.value.name == "Z"
    assert abcd_graph.n == 4


def test_edges_yields_each_undirected_edge_once():
    g = Graph.from_records([("A", "B", 1), ("B", "C", 2), ("A", "B", 5), ("C", "C", 3)])

    assert sorted(g.edges()) == [
        EdgeRecord("A", "B", 1),
        EdgeRecord("A", "B", 5),
        EdgeRecord("B", "C", 2),
        EdgeRecord("C", "C", 3),
    ]
    assert g.m == 4
    assert g.out_degree(g.lookup("B")) == 3
