import pytest

from cityroutes.graph import Graph


@pytest.fixture
def abcd_graph() -> Graph:
    # A-B (1), B-C (2), A-C (4), C-D (1): best A->D goes through B
    return Graph.from_records(
        [
            ("A", "B", 1),
            ("B", "C", 2),
            ("A", "C", 4),
            ("C", "D", 1),
        ]
    )


@pytest.fixture
def split_graph() -> Graph:
    """Two components: {A, B, C} and {E, F}."""
    return Graph.from_records(
        [
            ("A", "B", 3),
            ("B", "C", 4),
            ("E", "F", 2),
        ]
    )
