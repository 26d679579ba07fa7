import json

from cityroutes.engine import ShortestPathEngine
from cityroutes.exceptions import UnknownNode, Unreachable
from cityroutes.planner import QueryFailure, QueryResult
from cityroutes.report import (
    format_adjacency,
    format_report,
    format_result,
    format_tree_table,
    outcomes_to_json,
)


def test_result_layout():
    res = QueryResult("A", "D", 4, ("A", "B", "C", "D"))
    assert format_result(res) == "A to D is 4km\n\nRoute:\nA ---> B ---> C ---> D\n\n\n\n"


def test_report_mixes_results_and_failures():
    outcomes = [
        QueryResult("A", "B", 1, ("A", "B")),
        QueryFailure("A", "E", Unreachable("A", "E")),
    ]
    text = format_report(outcomes)
    assert text.startswith("A to B is 1km\n")
    assert text.endswith("A to E: 'E' is not reachable from 'A'\n\n")


def test_json_outcomes():
    outcomes = [
        QueryResult("A", "B", 1, ("A", "B")),
        QueryFailure("A", "Z", UnknownNode("Z")),
    ]
    data = json.loads(outcomes_to_json(outcomes))
    assert data[0] == {"source": "A", "dest": "B", "distance": 1, "route": ["A", "B"]}
    assert data[1]["error"] == "UnknownNode"
    assert data[1]["reason"] == "unknown node 'Z'"


def test_tree_table(split_graph):
    tree = ShortestPathEngine(split_graph).run(split_graph.lookup("B"))
    lines = format_tree_table(split_graph, tree).splitlines()

    assert lines[0].split() == ["Vertex", "CityName", "Distance", "Previous"]
    rows = {line.split()[1]: line.split()[2:] for line in lines[3:]}
    assert rows["B"] == ["0", "----------"]
    assert rows["A"] == ["3", "B"]
    assert rows["C"] == ["4", "B"]
    assert rows["E"] == ["inf"]


def test_adjacency_listing(abcd_graph):
    lines = format_adjacency(abcd_graph).splitlines()
    assert lines[0] == "A -> 1 B -> 4 C ->"
    assert lines[3] == "D -> 1 C ->"
