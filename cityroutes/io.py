"""Edge and query record input/output helpers.

The legacy format is tab separated with CRLF line endings::

    York<TAB>Leeds<TAB>40\\r\\n

for edges, and ``source<TAB>dest`` for queries. Every line of a file must be
a valid record; the first line that is not aborts the read with a
:class:`~cityroutes.exceptions.RecordFormatError` naming the line.
"""

from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .exceptions import RecordFormatError
from .graph import EdgeRecord, Graph
from .planner import Outcome, QueryRecord
from .report import format_report, outcomes_to_json

MAX_FIELD_LENGTH = 249
_WEIGHT_RE = re.compile(r"[+-]?[0-9]+")

PathLike = str | Path


def _decode_lines(path: Path) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, text)`` with terminators kept, decoding one line at a time."""
    data = path.read_bytes()
    for lineno, raw in enumerate(data.splitlines(keepends=True), start=1):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RecordFormatError(f"invalid UTF-8: {exc.reason}", line=lineno) from None
        yield lineno, text


def _iter_lines(path: Path) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, text)`` with the line terminator removed."""
    for lineno, text in _decode_lines(path):
        yield lineno, text.rstrip("\r\n")


def _check_name(name: str, lineno: int) -> str:
    if not name:
        raise RecordFormatError("empty name field", line=lineno)
    if len(name) > MAX_FIELD_LENGTH:
        raise RecordFormatError(
            f"name field longer than {MAX_FIELD_LENGTH} characters", line=lineno
        )
    return name


def _parse_weight(text: str, lineno: int) -> int:
    if not _WEIGHT_RE.fullmatch(text):
        raise RecordFormatError(f"weight {text!r} is not an integer", line=lineno)
    return int(text)


def _split_tabs(row: str, expected: int, lineno: int) -> List[str]:
    parts = row.split("\t")
    if len(parts) != expected:
        raise RecordFormatError(
            f"expected {expected} tab-delimited fields, found {len(parts)}", line=lineno
        )
    return parts


# ---- edges ---------------------------------------------------------------


def _read_edges_tsv(path: Path) -> List[EdgeRecord]:
    edges: List[EdgeRecord] = []
    for lineno, row in _iter_lines(path):
        a, b, w = _split_tabs(row, 3, lineno)
        edges.append(EdgeRecord(_check_name(a, lineno), _check_name(b, lineno), _parse_weight(w, lineno)))
    return edges


def _read_edges_csv(path: Path) -> List[EdgeRecord]:
    """Read ``nameA,nameB,weight`` rows; blank lines and ``#`` comments are skipped."""
    edges: List[EdgeRecord] = []
    reader = csv.reader(text for _, text in _decode_lines(path))
    for parts in reader:
        lineno = reader.line_num
        if not parts or (len(parts) == 1 and not parts[0].strip()):
            continue
        if parts[0].lstrip().startswith("#"):
            continue
        if len(parts) != 3:
            raise RecordFormatError(
                f"expected 3 comma-delimited fields, found {len(parts)}", line=lineno
            )
        a, b, w = (p.strip() for p in parts)
        edges.append(
            EdgeRecord(_check_name(a, lineno), _check_name(b, lineno), _parse_weight(w, lineno))
        )
    return edges


def _read_edges_jsonl(path: Path) -> List[EdgeRecord]:
    """Read one ``{"a": .., "b": .., "weight": ..}`` object per line."""
    edges: List[EdgeRecord] = []
    for lineno, row in _iter_lines(path):
        if not row.strip():
            continue
        obj = _load_json_object(row, lineno)
        try:
            a, b, w = obj["a"], obj["b"], obj["weight"]
        except KeyError as exc:
            raise RecordFormatError(f"missing key {exc.args[0]!r}", line=lineno) from None
        if isinstance(w, bool) or not isinstance(w, int):
            raise RecordFormatError(f"weight {w!r} is not an integer", line=lineno)
        edges.append(EdgeRecord(_check_name(str(a), lineno), _check_name(str(b), lineno), w))
    return edges


def _write_edges_tsv(path: Path, records: Iterable[EdgeRecord]) -> None:
    with path.open("w", encoding="utf-8", newline="") as fh:
        for a, b, w in records:
            fh.write(f"{a}\t{b}\t{w}\r\n")


def _write_edges_csv(path: Path, records: Iterable[EdgeRecord]) -> None:
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh, lineterminator="\n")
        for rec in records:
            writer.writerow(rec)


def _write_edges_jsonl(path: Path, records: Iterable[EdgeRecord]) -> None:
    with path.open("w", encoding="utf-8") as fh:
        for a, b, w in records:
            fh.write(json.dumps({"a": a, "b": b, "weight": w}) + "\n")


# ---- queries -------------------------------------------------------------


def _read_queries_tsv(path: Path) -> List[QueryRecord]:
    queries: List[QueryRecord] = []
    for lineno, row in _iter_lines(path):
        s, d = _split_tabs(row, 2, lineno)
        queries.append(QueryRecord(_check_name(s, lineno), _check_name(d, lineno)))
    return queries


def _read_queries_csv(path: Path) -> List[QueryRecord]:
    queries: List[QueryRecord] = []
    reader = csv.reader(text for _, text in _decode_lines(path))
    for parts in reader:
        lineno = reader.line_num
        if not parts or (len(parts) == 1 and not parts[0].strip()):
            continue
        if parts[0].lstrip().startswith("#"):
            continue
        if len(parts) != 2:
            raise RecordFormatError(
                f"expected 2 comma-delimited fields, found {len(parts)}", line=lineno
            )
        s, d = (p.strip() for p in parts)
        queries.append(QueryRecord(_check_name(s, lineno), _check_name(d, lineno)))
    return queries


def _read_queries_jsonl(path: Path) -> List[QueryRecord]:
    queries: List[QueryRecord] = []
    for lineno, row in _iter_lines(path):
        if not row.strip():
            continue
        obj = _load_json_object(row, lineno)
        try:
            s, d = obj["source"], obj["dest"]
        except KeyError as exc:
            raise RecordFormatError(f"missing key {exc.args[0]!r}", line=lineno) from None
        queries.append(QueryRecord(_check_name(str(s), lineno), _check_name(str(d), lineno)))
    return queries


def _load_json_object(row: str, lineno: int) -> dict:
    try:
        obj = json.loads(row)
    except json.JSONDecodeError as exc:
        raise RecordFormatError(f"invalid JSON: {exc.msg}", line=lineno) from None
    if not isinstance(obj, dict):
        raise RecordFormatError("expected a JSON object", line=lineno)
    return obj


_EDGE_READERS: Dict[str, Callable[[Path], List[EdgeRecord]]] = {
    "tsv": _read_edges_tsv,
    "csv": _read_edges_csv,
    "jsonl": _read_edges_jsonl,
}

_EDGE_WRITERS: Dict[str, Callable[[Path, Iterable[EdgeRecord]], None]] = {
    "tsv": _write_edges_tsv,
    "csv": _write_edges_csv,
    "jsonl": _write_edges_jsonl,
}

_QUERY_READERS: Dict[str, Callable[[Path], List[QueryRecord]]] = {
    "tsv": _read_queries_tsv,
    "csv": _read_queries_csv,
    "jsonl": _read_queries_jsonl,
}

FORMATS: Sequence[str] = tuple(_EDGE_READERS)


def _detect_format(path: Path) -> Optional[str]:
    """Guess the record format from the file extension.

    ``.txt`` maps to the legacy tab-separated format.
    """
    ext = path.suffix.lower()
    if ext in {".tsv", ".txt", ".tab"}:
        return "tsv"
    if ext == ".csv":
        return "csv"
    if ext in {".jsonl", ".ndjson"}:
        return "jsonl"
    return None


def _resolve(path: PathLike, fmt: Optional[str], table: Dict[str, Callable]) -> Tuple[Path, Callable]:
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in table:
        raise RecordFormatError(f"unknown record format for {p.name!r}")
    return p, table[fmt]


def read_edge_records(path: PathLike, fmt: Optional[str] = None) -> List[EdgeRecord]:
    """Read edge records from ``path``.

    Args:
        path: File to read.
        fmt: ``"tsv"``, ``"csv"`` or ``"jsonl"``; detected from the extension
            when omitted.

    Raises:
        RecordFormatError: If the format is unknown or a line is malformed.
    """
    p, reader = _resolve(path, fmt, _EDGE_READERS)
    return reader(p)


def read_query_records(path: PathLike, fmt: Optional[str] = None) -> List[QueryRecord]:
    """Read query records from ``path``; see :func:`read_edge_records`."""
    p, reader = _resolve(path, fmt, _QUERY_READERS)
    return reader(p)


def read_graph(path: PathLike, fmt: Optional[str] = None) -> Graph:
    """Read edge records and build a :class:`Graph` from them.

    Raises:
        RecordFormatError: If the file cannot be parsed.
        InvalidEdgeWeight: If any edge weight is not positive.
    """
    return Graph.from_records(read_edge_records(path, fmt))


def write_graph(G: Graph, path: PathLike, fmt: Optional[str] = None) -> None:
    """Write every undirected edge of ``G`` once, in the given format."""
    p, writer = _resolve(path, fmt, _EDGE_WRITERS)
    writer(p, G.edges())


def write_report(outcomes: Sequence[Outcome], path: PathLike, json_fmt: bool = False) -> None:
    """Persist query outcomes as the text report or as JSON."""
    p = Path(path)
    if json_fmt:
        p.write_text(outcomes_to_json(outcomes) + "\n", encoding="utf-8")
    else:
        p.write_text(format_report(outcomes), encoding="utf-8")
