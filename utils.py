# utils.py
import logging
import math
from fractions import Fraction

import pandas as pd
import streamlit as st

from graphical import Constraint, ConstraintOp

logger = logging.getLogger("graphical_lp.utils")

CONSTRAINT_COLUMNS = ["a", "b", "op", "c"]
OPERATOR_CHOICES = [op.value for op in ConstraintOp]


def parse_number(value, default=0.0):
    """
    Coerce a UI field to float. Anything that is not a number (empty text,
    None, 'abc', NaN, infinity) becomes `default`.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def format_number(value, use_fractions=False, fraction_digits=3):
    """
    Format a value for display as a fraction string or a fixed-point float.

    Args:
        value: The numerical value to format.
        use_fractions: Show a fraction when one with small enough terms exists.
        fraction_digits: Max digits for numerator/denominator, or float precision.
    """
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        return str(value)
    if not use_fractions or not math.isfinite(float_value):
        return f"{float_value:.{fraction_digits}f}"

    max_value = 10 ** fraction_digits
    frac = Fraction(float_value).limit_denominator(max_value - 1)
    if abs(float(frac) - float_value) > 1e-9 or abs(frac.numerator) > max_value:
        return f"{float_value:.{fraction_digits}f}"
    return str(frac)


def constraint_from_values(a, b, op, c):
    """Build a Constraint from raw UI values; bad numbers become 0, unknown operators '<='."""
    try:
        parsed_op = ConstraintOp.parse(op)
    except ValueError:
        logger.warning("Unknown operator %r, using '<='", op)
        parsed_op = ConstraintOp.LE
    return Constraint(parse_number(a), parse_number(b), parsed_op, parse_number(c))


def constraints_to_frame(constraints):
    """Constraint list -> DataFrame for the editable table."""
    rows = [[cons.a, cons.b, cons.op.value, cons.c] for cons in constraints]
    return pd.DataFrame(rows, columns=CONSTRAINT_COLUMNS)


def constraints_from_frame(frame):
    """Editable table -> Constraint list. Rows keep their order."""
    constraints = []
    for row in frame.to_dict("records"):
        op = row.get("op")
        if op is None or (isinstance(op, float) and math.isnan(op)):
            op = ConstraintOp.LE
        constraints.append(constraint_from_values(row.get("a"), row.get("b"), op, row.get("c")))
    return constraints


def create_example_box():
    """x <= 6, y <= 4, maximize x + y. Optimal: (6, 4), z = 10"""
    constraints = [
        Constraint(1, 0, ConstraintOp.LE, 6),
        Constraint(0, 1, ConstraintOp.LE, 4),
    ]
    return constraints, (1.0, 1.0), True


def create_example_production():
    """Production mix problem (Maximize)"""
    # Maximize: z = 3x + 5y
    # Subject to:
    #   x <= 4
    #   2y <= 12  (y <= 6)
    #   3x + 2y <= 18
    #   x, y >= 0
    # Optimal: x=2, y=6, z = 36
    constraints = [
        Constraint(1, 0, ConstraintOp.LE, 4),
        Constraint(0, 2, ConstraintOp.LE, 12),
        Constraint(3, 2, ConstraintOp.LE, 18),
    ]
    return constraints, (3.0, 5.0), True


def create_example_covering():
    """Covering problem (Minimize)"""
    # Minimize: z = x + 2y
    # Subject to:
    #   x + y >= 2
    #   x <= 4, y <= 4
    #   x, y >= 0
    # Optimal: x=2, y=0, z = 2
    constraints = [
        Constraint(1, 1, ConstraintOp.GE, 2),
        Constraint(1, 0, ConstraintOp.LE, 4),
        Constraint(0, 1, ConstraintOp.LE, 4),
    ]
    return constraints, (1.0, 2.0), False


EXAMPLES = {
    "Box (max x + y)": create_example_box,
    "Production mix (max 3x + 5y)": create_example_production,
    "Covering (min x + 2y)": create_example_covering,
}


def initialize_session_state():
    """Initialize all required session state variables if they don't exist."""
    _, objective_def, maximize_def = create_example_box()

    defaults = {
        'editor_version': 0,         # bumped to reset the data_editor widget
        'obj_x': f"{objective_def[0]:g}",   # free text, parsed with parse_number
        'obj_y': f"{objective_def[1]:g}",
        'opt_type': "max" if maximize_def else "min",
        'non_negative': True,
        'result': None,
        'renderer': "Plotly",
        'use_fractions': False,
        'fraction_digits': 3,
        'auto_solve': True,          # draw the default problem on first load
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value
