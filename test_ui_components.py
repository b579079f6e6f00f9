# test_ui_components.py

import sys
import os

import pytest

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

import ui_components
from export import NOTHING_TO_EXPORT
from graphical import Constraint, ConstraintOp, solve_graphical
from utils import create_example_box


class RecordingStreamlit:
    """Stands in for the streamlit module and records the calls made on it."""

    def __init__(self):
        self.calls = []

    def button(self, *args, **kwargs):
        self.calls.append(("button", args, kwargs))
        return False

    def warning(self, *args, **kwargs):
        self.calls.append(("warning", args, kwargs))

    def download_button(self, *args, **kwargs):
        self.calls.append(("download_button", args, kwargs))
        return False

    def names(self):
        return [name for name, _, _ in self.calls]


@pytest.fixture
def fake_st(monkeypatch):
    fake = RecordingStreamlit()
    monkeypatch.setattr(ui_components, "st", fake)
    return fake


def test_download_button_rendered_without_a_click(fake_st):
    constraints, objective, maximize = create_example_box()
    result = solve_graphical(constraints, objective, maximize)

    ui_components.display_export(result, objective)

    assert fake_st.names() == ["download_button"]
    _, _, kwargs = fake_st.calls[0]
    assert kwargs["file_name"] == "coordinates.csv"
    assert kwargs["data"].splitlines()[0] == "x,y,z"


def test_download_uses_objective_passed_in(fake_st):
    constraints, objective, maximize = create_example_box()
    result = solve_graphical(constraints, objective, maximize)

    ui_components.display_export(result, (0, 1))

    _, _, kwargs = fake_st.calls[0]
    assert kwargs["data"].splitlines()[1:] == ["0.0,0.0,0.0", "6.0,0.0,0.0", "6.0,4.0,4.0", "0.0,4.0,4.0"]


@pytest.mark.parametrize("result", [
    None,
    solve_graphical([Constraint(1, 0, ConstraintOp.LE, 2), Constraint(1, 0, ConstraintOp.GE, 5)], (1, 1)),
])
def test_no_vertices_shows_warning_only(fake_st, result):
    ui_components.display_export(result, (1, 1))

    assert fake_st.names() == ["warning"]
    assert fake_st.calls[0][1] == (NOTHING_TO_EXPORT,)
