# graphical_solver.py
import logging

import streamlit as st

# Import from our modules
from constraint_store import ConstraintStore
from graphical import solve_graphical
from logging_config import setup_logging
from utils import EXAMPLES, create_example_box, initialize_session_state, parse_number
from ui_components import (
    format_lp_problem,
    reset_constraint_editor,
    display_constraint_editor,
    display_vertex_table,
    display_optimum,
    display_point_checker,
    display_export,
)
from plotting import plot_graphical_method_2d, plot_graphical_method_plotly

logger = logging.getLogger("graphical_lp.app")


# --- Function to load example data into session state ---
def load_example_into_state(store, constraints, objective, maximize):
    """Replaces the constraint list and objective with an example problem."""
    store.replace(constraints)
    st.session_state.obj_x = f"{objective[0]:g}"
    st.session_state.obj_y = f"{objective[1]:g}"
    st.session_state.opt_type = "max" if maximize else "min"
    st.session_state.non_negative = True
    st.session_state.result = None
    st.session_state.auto_solve = True
    reset_constraint_editor(store)
    st.toast("Example loaded!")


def get_store():
    if 'store' not in st.session_state:
        constraints, _, _ = create_example_box()
        st.session_state.store = ConstraintStore(constraints)
    return st.session_state.store


# --- Main Application Logic ---
def main():
    st.set_page_config(layout="wide")
    setup_logging()
    initialize_session_state()
    store = get_store()

    st.title("Linear Programming: Graphical Method")
    st.write("Enter constraints in two variables, then compute the feasible region, its vertices and the optimum.")

    # --- Sidebar for Input ---
    with st.sidebar:
        st.header("Problem Definition")

        st.write("Load Examples:")
        for name, factory in EXAMPLES.items():
            if st.button(name, key=f"example_{name}", use_container_width=True):
                load_example_into_state(store, *factory())

        st.markdown("---")
        st.subheader("Objective: z = p·x + q·y")
        col1, col2 = st.columns(2)
        # free text: anything that is not a number counts as 0
        col1.text_input("p (x)", key='obj_x')
        col2.text_input("q (y)", key='obj_y')
        st.radio("Direction", ["max", "min"], horizontal=True, key='opt_type')
        st.checkbox("Non-negativity (x, y ≥ 0)", key='non_negative')

        st.header("Display Options")
        st.radio("Plot engine", ["Plotly", "Matplotlib"], horizontal=True, key='renderer')
        st.checkbox("Use fractions", key='use_fractions')
        st.number_input("Max fraction digits", min_value=1, max_value=7,
                        disabled=not st.session_state.use_fractions, key='fraction_digits')

    # --- Constraints ---
    st.header("Constraints")
    st.caption("Each row is a·x + b·y (op) c. Add rows at the bottom of the table, delete them with the row selector.")
    display_constraint_editor(store)
    col_add, col_clear, _ = st.columns([1, 1, 4])
    if col_add.button("Add constraint", key='add_constraint', use_container_width=True):
        store.add()
        reset_constraint_editor(store)
        st.rerun()
    if col_clear.button("Clear constraints", key='clear_constraints', use_container_width=True):
        store.clear()
        reset_constraint_editor(store)
        st.rerun()

    objective = (parse_number(st.session_state.obj_x), parse_number(st.session_state.obj_y))
    maximize = st.session_state.opt_type == "max"

    st.header("Problem Formulation")
    try:
        st.latex(format_lp_problem(store.snapshot(), objective, maximize, st.session_state.non_negative))
    except Exception as e:
        st.warning(f"Could not display problem formulation in LaTeX: {e}")

    # --- Compute ---
    col_compute, col_reset, _ = st.columns([1, 1, 4])
    compute_pressed = col_compute.button("Compute", key='compute_button', type="primary", use_container_width=True)
    if col_reset.button("Clear results", key='clear_results', use_container_width=True):
        st.session_state.result = None

    if compute_pressed or st.session_state.auto_solve:
        st.session_state.auto_solve = False
        try:
            st.session_state.result = solve_graphical(
                store.snapshot(), objective, maximize=maximize, non_negative=st.session_state.non_negative
            )
        except Exception as e:
            logger.exception("Recompute failed")
            st.error(f"Error while computing: {e}")
            st.session_state.result = None

    result = st.session_state.result
    if result is None:
        st.info("Press Compute to draw the feasible region.")
        return

    # --- Visualization ---
    st.header("Visualization")
    if st.session_state.renderer == "Plotly":
        st.plotly_chart(plot_graphical_method_plotly(result), use_container_width=True)
    else:
        fig, err_msg = plot_graphical_method_2d(result)
        if fig:
            st.pyplot(fig)
        elif err_msg:
            st.warning(f"Could not generate plot: {err_msg}")

    # --- Table & export ---
    display_optimum(result)
    display_vertex_table(result, st.session_state.use_fractions, st.session_state.fraction_digits)
    display_point_checker(result)
    display_export(result, objective)
    with st.expander("Plain-text summary", expanded=False):
        st.code(result.to_table(), language=None)


if __name__ == "__main__":
    main()
