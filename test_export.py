# test_export.py

import io
import sys
import os

import pytest
import pandas as pd

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from export import EXPORT_FILENAME, NOTHING_TO_EXPORT, NothingToExportError, vertices_to_csv
from graphical import Constraint, ConstraintOp, EmptyFeasibleRegionError, solve_graphical
from utils import create_example_box


def test_csv_header_and_rows():
    constraints, objective, maximize = create_example_box()
    result = solve_graphical(constraints, objective, maximize)
    text = vertices_to_csv(result.polygon)

    lines = text.splitlines()
    assert lines[0] == "x,y,z"
    assert len(lines) == 1 + len(result.polygon)
    assert text.endswith("\n")
    assert "\r" not in text

    df = pd.read_csv(io.StringIO(text))
    assert list(df.columns) == ["x", "y", "z"]
    assert df.values.tolist() == [[0, 0, 0], [6, 0, 6], [6, 4, 10], [0, 4, 4]]


def test_empty_export_is_refused():
    result = solve_graphical([Constraint(1, 0, ConstraintOp.LE, 2), Constraint(1, 0, ConstraintOp.GE, 5)], (1, 1))
    assert result.is_empty
    with pytest.raises(NothingToExportError) as excinfo:
        vertices_to_csv(result.polygon)
    assert str(excinfo.value) == NOTHING_TO_EXPORT


def test_export_error_is_an_empty_region_error():
    with pytest.raises(EmptyFeasibleRegionError):
        vertices_to_csv([])


def test_export_filename():
    assert EXPORT_FILENAME.endswith(".csv")


def test_export_uses_current_objective():
    constraints, objective, maximize = create_example_box()
    result = solve_graphical(constraints, objective, maximize)
    text = vertices_to_csv(result.polygon, objective=(2, -1))

    df = pd.read_csv(io.StringIO(text))
    assert df.values.tolist() == [[0, 0, 0], [6, 0, 12], [6, 4, 8], [0, 4, -4]]
