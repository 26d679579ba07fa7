import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from cityroutes.visualize import plot_route  # noqa: E402


def test_plot_route_saves_figure(tmp_path, abcd_graph):
    out = tmp_path / "route.png"
    plot_route(abcd_graph, ["A", "B", "C", "D"], out=str(out), show_weights=True)
    assert out.exists()
    assert out.stat().st_size > 0


def test_unknown_layout(abcd_graph, tmp_path):
    with pytest.raises(ValueError):
        plot_route(abcd_graph, layout="circle", out=str(tmp_path / "x.png"))
