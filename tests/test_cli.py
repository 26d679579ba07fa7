import json

import pytest

from cityroutes.cli import EXIT_INPUT, EXIT_INTERNAL, EXIT_OK, main

EDGES = "A\tB\t1\r\nB\tC\t2\r\nA\tC\t4\r\nC\tD\t1\r\n"


@pytest.fixture
def edges_file(tmp_path):
    path = tmp_path / "cities.txt"
    path.write_bytes(EDGES.encode())
    return path


def test_queries_to_report_file(tmp_path, edges_file):
    queries = tmp_path / "pairs.txt"
    queries.write_bytes(b"A\tD\r\nD\tA\r\n")
    out = tmp_path / "output.txt"

    rc = main(["--edges", str(edges_file), "--queries", str(queries), "--out", str(out)])

    assert rc == EXIT_OK
    assert out.read_text() == (
        "A to D is 4km\n\nRoute:\nA ---> B ---> C ---> D\n\n\n\n"
        "D to A is 4km\n\nRoute:\nD ---> C ---> B ---> A\n\n\n\n"
    )


def test_unknown_city_is_reported_not_fatal(edges_file, capsys):
    rc = main(["--edges", str(edges_file), "--route", "A", "Z"])

    assert rc == EXIT_OK
    captured = capsys.readouterr()
    assert "A to Z: unknown node 'Z'" in captured.out
    assert "query_failed" in captured.err


def test_bad_weight_exits_with_input_error(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"A\tB\t0\r\n")

    rc = main(["--edges", str(path), "--route", "A", "B"])

    assert rc == EXIT_INPUT
    err = capsys.readouterr().err
    assert "error: " in err
    assert "run_failed" in err


def test_missing_files(tmp_path, edges_file, capsys):
    assert main(["--edges", str(tmp_path / "nope.txt"), "--route", "A", "B"]) == EXIT_INPUT
    assert "edges file not found" in capsys.readouterr().err

    rc = main(["--edges", str(edges_file), "--queries", str(tmp_path / "nope.txt")])
    assert rc == EXIT_INPUT
    assert "queries file not found" in capsys.readouterr().err


def test_example_prints_edges(capsys):
    assert main(["--example"]) == EXIT_OK
    assert capsys.readouterr().out.startswith("York\tLeeds\t40")


def test_route_as_json(edges_file, capsys):
    rc = main(["--edges", str(edges_file), "--route", "A", "D", "--json"])

    assert rc == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data == [{"source": "A", "dest": "D", "distance": 4, "route": ["A", "B", "C", "D"]}]


def test_table_and_export(tmp_path, edges_file, capsys):
    exported = tmp_path / "tree.json"

    rc = main(["--edges", str(edges_file), "--table", "A", "--export-json", str(exported)])

    assert rc == EXIT_OK
    out = capsys.readouterr().out
    assert "From Source" in out
    assert "----------" in out
    data = json.loads(exported.read_text())
    assert len(data["nodes"]) == 4


def test_export_needs_table(tmp_path, edges_file, capsys):
    rc = main(["--edges", str(edges_file), "--export-graphml", str(tmp_path / "t.graphml")])

    assert rc == EXIT_INPUT
    assert "--table" in capsys.readouterr().err


def test_unknown_table_source(edges_file, capsys):
    assert main(["--edges", str(edges_file), "--table", "Q"]) == EXIT_INPUT
    assert "unknown node 'Q'" in capsys.readouterr().err


def test_random_graph_route(capsys):
    rc = main(["--random", "--n", "12", "--m", "30", "--seed", "3", "--route", "city0", "city1"])

    assert rc == EXIT_OK
    assert capsys.readouterr().out.startswith("city0 to city1 is ")


def test_run_summary_logged_as_json(edges_file, capsys):
    rc = main(["--edges", str(edges_file), "--route", "A", "D", "--log-json", "--log-level", "info"])

    assert rc == EXIT_OK
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
    run = [e for e in events if e.get("event") == "run"]
    assert run and run[0]["requested"] == 1
    assert run[0]["queries"] == 1


def test_invalid_utf8_edges_file(tmp_path, capsys):
    path = tmp_path / "cities.txt"
    path.write_bytes(b"York\tLeeds\t40\r\nLe\xffds\tHull\t96\r\n")

    rc = main(["--edges", str(path), "--route", "York", "York"])

    assert rc == EXIT_INPUT
    assert "error: line 2: invalid UTF-8" in capsys.readouterr().err


def test_directory_as_edges_file(tmp_path, capsys):
    rc = main(["--edges", str(tmp_path), "--route", "A", "B"])

    assert rc == EXIT_INPUT
    assert "not a file" in capsys.readouterr().err


def test_random_graph_needs_cities(capsys):
    rc = main(["--random", "--n", "0", "--route", "city0", "city1"])

    assert rc == EXIT_INPUT
    assert "n must be positive" in capsys.readouterr().err


def test_unexpected_error_exits_internal(monkeypatch, edges_file, capsys):
    def broken(path, fmt):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("cityroutes.cli.read_graph", broken)

    rc = main(["--edges", str(edges_file), "--route", "A", "B"])

    assert rc == EXIT_INTERNAL
    err = capsys.readouterr().err
    assert "internal error:" in err
    assert "run_failed" in err
