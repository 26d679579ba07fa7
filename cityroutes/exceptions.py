"""Exception hierarchy shared across :mod:`cityroutes`."""

from __future__ import annotations


class CityRoutesError(Exception):
    """Base class for all package-specific errors."""


class InputError(CityRoutesError, ValueError):
    """Raised for invalid user input such as malformed records."""


class RecordFormatError(InputError):
    """Raised when an edge or query file cannot be parsed.

    Attributes:
        line: 1-based line number of the offending record, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class InvalidEdgeWeight(InputError):
    """Raised when an edge record carries a non-positive or non-integer weight.

    Fatal for graph construction: the whole load is aborted.
    """


class UnknownNode(InputError):
    """Raised when a query names a node that is not in the graph."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown node {name!r}")


class ConfigError(CityRoutesError, ValueError):
    """Raised for invalid configuration options."""


class RouteError(CityRoutesError):
    """Base class for per-query routing failures."""


class Unreachable(RouteError):
    """Raised when the destination has no finite distance from the source."""

    def __init__(self, source: str, dest: str) -> None:
        self.source = source
        self.dest = dest
        super().__init__(f"{dest!r} is not reachable from {source!r}")


class AlgorithmError(CityRoutesError, RuntimeError):
    """Raised when engine or heap invariants are violated at runtime."""


class EmptyHeap(AlgorithmError):
    """Raised when extracting from an empty heap."""


class InvalidDecrease(AlgorithmError):
    """Raised on a decrease-key with a non-smaller key or an absent id."""


__all__ = [
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
