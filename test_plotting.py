# test_plotting.py

import sys
import os

import pytest
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.patches as patches

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from graphical import Constraint, ConstraintOp, solve_graphical
from plotting import (
    constraint_segment,
    view_window,
    _label_position,
    plot_graphical_method_2d,
    plot_graphical_method_plotly,
)
from utils import create_example_box

LE, GE = ConstraintOp.LE, ConstraintOp.GE


@pytest.fixture
def box_result():
    constraints, objective, maximize = create_example_box()
    return solve_graphical(constraints, objective, maximize)


@pytest.fixture
def empty_result():
    return solve_graphical([Constraint(1, 0, LE, 2), Constraint(1, 0, GE, 5)], (1, 1))


@pytest.fixture
def origin_only_result():
    return solve_graphical([], (3, 2))


def test_constraint_segment():
    window = (0.0, 10.0, 0.0, 10.0)
    assert constraint_segment(Constraint(1, 0, LE, 6), window) == ((6.0, 0.0), (6.0, 10.0))
    assert constraint_segment(Constraint(1, 1, LE, 10), window) == ((0.0, 10.0), (10.0, 0.0))
    assert constraint_segment(Constraint(0, 0, LE, 1), window) is None


def test_label_position_inside_and_outside():
    window = (0.0, 10.0, 0.0, 10.0)
    x, y = _label_position(((0.0, 4.0), (10.0, 4.0)), window)
    assert 0.0 <= x <= 10.0 and y == pytest.approx(4.0)
    assert _label_position(((0.0, 20.0), (10.0, 20.0)), window) is None


def test_view_window(box_result):
    assert view_window(box_result) == (0.0, 10.0, 0.0, 10.0)

    constraints = [Constraint(1, 0, GE, -2), Constraint(0, 1, GE, -3), Constraint(1, 1, LE, 0)]
    result = solve_graphical(constraints, (1, 1), maximize=False, non_negative=False)
    min_x, max_x, min_y, max_y = view_window(result)
    assert min_x == -max_x
    assert min_y == -max_y


def _polygon_patches(fig):
    return [p for p in fig.axes[0].patches if isinstance(p, patches.Polygon)]


def test_matplotlib_plot_with_polygon(box_result):
    fig, err = plot_graphical_method_2d(box_result)
    try:
        assert err is None
        assert len(_polygon_patches(fig)) == 1
        assert fig.axes[0].get_xlim() == (0.0, 10.0)
    finally:
        plt.close(fig)


def test_matplotlib_plot_single_vertex_has_no_fill(origin_only_result):
    fig, err = plot_graphical_method_2d(origin_only_result)
    try:
        assert err is None
        assert _polygon_patches(fig) == []
    finally:
        plt.close(fig)


def test_matplotlib_plot_empty_region(empty_result):
    fig, err = plot_graphical_method_2d(empty_result)
    try:
        assert err is None
        texts = [t.get_text() for t in fig.axes[0].texts]
        assert 'No feasible region' in texts
    finally:
        plt.close(fig)


def test_plotly_traces(box_result, origin_only_result, empty_result):
    names = [trace.name for trace in plot_graphical_method_plotly(box_result).data]
    assert 'Feasible region' in names
    assert 'Vertices' in names
    assert sum(1 for n in names if n.startswith('C')) == 2
    assert any(n.startswith('Optimum (max)') for n in names)

    names = [trace.name for trace in plot_graphical_method_plotly(origin_only_result).data]
    assert 'Feasible region' not in names
    assert 'Vertices' in names

    fig = plot_graphical_method_plotly(empty_result)
    assert 'Vertices' not in [trace.name for trace in fig.data]
    assert any(a.text == 'No feasible region' for a in fig.layout.annotations)
