# ui_components.py
import streamlit as st
import pandas as pd
import numpy as np

from graphical import evaluate_point
from export import EXPORT_FILENAME, NothingToExportError, vertices_to_csv
from utils import (
    OPERATOR_CHOICES,
    constraints_from_frame,
    constraints_to_frame,
    format_number,
    parse_number,
)

VARIABLES = ("x", "y")


def _format_terms(coefficients):
    """LaTeX for p*x + q*y, skipping zero terms and unit coefficients."""
    terms = []
    for coeff, var in zip(coefficients, VARIABLES):
        if np.isclose(coeff, 0):
            continue
        if np.isclose(abs(coeff), 1):
            term = f"{'+' if coeff > 0 else '-'}{var}"
        else:
            term = f"{coeff:+.4g}{var}"
        if not terms and coeff > 0:  # no leading '+'
            term = term[1:]
        terms.append(term)
    return " ".join(terms) if terms else "0"


def format_lp_problem(constraints, objective, maximize=True, non_negative=True):
    """Format the two-variable LP problem in LaTeX."""
    sense = r"\max" if maximize else r"\min"
    latex = r"\begin{align*}"
    latex += f"{sense} \\quad & z = {_format_terms(objective)} \\\\[1em]"
    latex += r"\text{s.t.} \quad & "

    rows = [f"\\qquad {_format_terms((cons.a, cons.b))} {cons.op.latex} {cons.c:.4g}" for cons in constraints]
    if non_negative:
        rows.append(r"\qquad x, y \geq 0")
    if not rows:
        rows.append(r"\qquad \text{(no constraints)}")
    latex += r" \\ & ".join(rows)
    latex += r"\end{align*}"
    return latex


# --- Constraint editing ---

def reset_constraint_editor(store):
    """Start a fresh editor widget from the store's current rows."""
    st.session_state.editor_base = constraints_to_frame(store)
    st.session_state.editor_version += 1


def display_constraint_editor(store):
    """Editable constraint table; edits are written back into the store."""
    if 'editor_base' not in st.session_state:
        st.session_state.editor_base = constraints_to_frame(store)

    edited = st.data_editor(
        st.session_state.editor_base,
        key=f"constraints_editor_{st.session_state.editor_version}",
        num_rows="dynamic",
        hide_index=True,
        use_container_width=True,
        column_config={
            "a": st.column_config.NumberColumn("a (x)", default=0.0, format="%g"),
            "b": st.column_config.NumberColumn("b (y)", default=0.0, format="%g"),
            "op": st.column_config.SelectboxColumn("op", options=OPERATOR_CHOICES, default="<=", required=True),
            "c": st.column_config.NumberColumn("c", default=0.0, format="%g"),
        },
    )
    store.replace(constraints_from_frame(edited))


# --- Results ---

def display_vertex_table(result, use_fractions=False, fraction_digits=3):
    """Show the polygon vertices with their objective values."""
    st.subheader("Vertices")
    if result is None or result.is_empty:
        st.warning("No feasible region: nothing to show.")
        return

    rows = []
    for i, v in enumerate(result.polygon):
        is_best = result.optimum is not None and v is result.optimum.vertex
        rows.append({
            "#": i + 1,
            "x": format_number(v.x, use_fractions, fraction_digits),
            "y": format_number(v.y, use_fractions, fraction_digits),
            "z": format_number(v.z, use_fractions, fraction_digits + 3),
            "optimal": "★" if is_best else "",
        })
    df = pd.DataFrame(rows)
    st.dataframe(df.style.set_properties(**{'text-align': 'right'}), hide_index=True, use_container_width=True)


def display_optimum(result):
    """Summary line for the selected vertex."""
    if result is None:
        return
    if result.optimum is None:
        st.error("No feasible region: the constraints cannot all be satisfied.")
        return
    best = result.optimum.vertex
    st.success(
        f"Best point ({best.x:.3f}, {best.y:.3f}) -> Z = {result.optimum.value:.6f} "
        f"({result.optimum.direction})"
    )


def display_point_checker(result):
    """Edit vertex coordinates and see the objective value and feasibility of the edited points."""
    if result is None or result.is_empty:
        return
    with st.expander("Check points", expanded=False):
        st.caption("Edit x or y to evaluate other points against the same constraints.")
        base = pd.DataFrame([{"x": v.x, "y": v.y} for v in result.polygon])
        edited = st.data_editor(base, key="point_checker", num_rows="dynamic", use_container_width=True)

        rows = []
        for record in edited.to_dict("records"):
            x, y = parse_number(record.get("x")), parse_number(record.get("y"))
            z, feasible = evaluate_point(x, y, result.constraints, result.objective, result.non_negative)
            rows.append({"x": x, "y": y, "z": z, "feasible": "yes" if feasible else "no"})
        st.dataframe(pd.DataFrame(rows, columns=["x", "y", "z", "feasible"]), hide_index=True,
                     use_container_width=True)


def display_export(result, objective=None):
    """CSV download of the current vertices; a notice instead when there are none."""
    try:
        csv_text = vertices_to_csv(result.polygon if result is not None else [], objective)
    except NothingToExportError as e:
        st.warning(str(e))
        return
    st.download_button(
        "Export CSV",
        data=csv_text,
        file_name=EXPORT_FILENAME,
        mime="text/csv",
        key="download_csv",
    )
