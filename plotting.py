# plotting.py
import logging

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as patches
import plotly.graph_objects as go

from graphical import PARALLEL_TOL, FEASIBILITY_TOL

logger = logging.getLogger("graphical_lp.plotting")

# colour theme (simple)
COLORS = {
    "axis": "#666666",
    "constraint": "#140365",
    "feasible_fill": "#16a34a",
    "vertex": "#1d4ed8",
    "vertex_text": "#000000",
    "optimum": "#dc2626",
    "grid": "#1e8de2",
}
FILL_ALPHA = 0.18
LABEL_SAMPLES = 200


def view_window(result):
    """
    Axis limits (min_x, max_x, min_y, max_y) from the estimated bounds.
    The lower limit is 0 unless some vertex is negative on that axis.
    """
    max_x, max_y = result.bounds
    min_x = -max_x if any(v.x < -FEASIBILITY_TOL for v in result.polygon) else 0.0
    min_y = -max_y if any(v.y < -FEASIBILITY_TOL for v in result.polygon) else 0.0
    return min_x, max_x, min_y, max_y


def constraint_segment(constraint, window):
    """
    Two end points of the constraint's boundary line across the window,
    or None for a degenerate constraint (a = b = 0).
    """
    min_x, max_x, min_y, max_y = window
    if constraint.is_degenerate:
        return None
    a, b, c = constraint.a, constraint.b, constraint.c
    if abs(b) > PARALLEL_TOL:
        return (min_x, (c - a * min_x) / b), (max_x, (c - a * max_x) / b)
    if abs(a) > PARALLEL_TOL:
        return (c / a, min_y), (c / a, max_y)
    return None


def _label_position(segment, window):
    """Midpoint of the part of the segment that lies inside the window, if any."""
    min_x, max_x, min_y, max_y = window
    (x1, y1), (x2, y2) = segment
    t = np.linspace(0.0, 1.0, LABEL_SAMPLES)
    xs = x1 + (x2 - x1) * t
    ys = y1 + (y2 - y1) * t
    inside = (xs >= min_x) & (xs <= max_x) & (ys >= min_y) & (ys <= max_y)
    if not np.any(inside):
        return None
    idx = np.flatnonzero(inside)
    mid = idx[len(idx) // 2]
    return float(xs[mid]), float(ys[mid])


def constraint_label(constraint, index):
    return f"C{index + 1}: {constraint}"


# --- 2D Plotting (Matplotlib) ---

def plot_graphical_method_2d(result, title="Feasible Region (Graphical Method)"):
    """
    Plot constraints, feasible polygon, vertices and optimum with Matplotlib.
    Args:
        result: GraphicalResult from solve_graphical().
        title: Plot title.
    Returns: Matplotlib figure or None, error message string or None.
    """
    try:
        window = view_window(result)
        min_x, max_x, min_y, max_y = window

        fig, ax = plt.subplots(figsize=(7.6, 4.8))

        # --- Constraint boundary lines ---
        for i, cons in enumerate(result.constraints):
            segment = constraint_segment(cons, window)
            if segment is None:
                continue
            (x1, y1), (x2, y2) = segment
            ax.plot([x1, x2], [y1, y2], linestyle='--', color=COLORS["constraint"],
                    alpha=0.8, label=constraint_label(cons, i))
            label_at = _label_position(segment, window)
            if label_at is not None:
                ax.annotate(cons.op.value, label_at, ha='center', fontsize=10, color=COLORS["constraint"])

        # --- Feasible polygon (needs an area) ---
        if result.has_fill:
            polygon = patches.Polygon([(v.x, v.y) for v in result.polygon], closed=True,
                                      facecolor=COLORS["feasible_fill"], alpha=FILL_ALPHA,
                                      label='Feasible region', zorder=1)
            ax.add_patch(polygon)

        # --- Vertices ---
        if not result.is_empty:
            ax.scatter([v.x for v in result.polygon], [v.y for v in result.polygon],
                       color=COLORS["vertex"], s=24, zorder=5, label='Vertices')
            for v in result.polygon:
                ax.annotate(f'({v.x:.3f}, {v.y:.3f})', (v.x, v.y), textcoords="offset points",
                            xytext=(8, 6), fontsize=8, color=COLORS["vertex_text"])

        # --- Optimum ---
        if result.optimum is not None:
            best = result.optimum.vertex
            ax.scatter(best.x, best.y, color=COLORS["optimum"], s=120, marker='*', zorder=10,
                       label=f'Optimum ({result.optimum.direction}): Z = {result.optimum.value:.6g}')
        else:
            ax.text(0.98, 0.02, 'No feasible region', ha='right', va='bottom',
                    transform=ax.transAxes, fontsize=9, color=COLORS["optimum"], style='italic')

        # --- Plot Configuration ---
        ax.set_xlim(min_x, max_x)
        ax.set_ylim(min_y, max_y)
        ax.grid(True, linestyle='--', alpha=0.4, color=COLORS["grid"], zorder=0)
        ax.axvline(0, color=COLORS["axis"], linewidth=1.5, zorder=0.5)
        ax.axhline(0, color=COLORS["axis"], linewidth=1.5, zorder=0.5)
        ax.set_xlabel('x')
        ax.set_ylabel('y')
        ax.set_title(title)

        handles, labels = ax.get_legend_handles_labels()
        if handles:
            by_label = dict(zip(labels, handles))
            ax.legend(by_label.values(), by_label.keys(), loc='upper center', bbox_to_anchor=(0.5, -0.15),
                      fontsize=8, ncol=3, frameon=False)
        plt.subplots_adjust(bottom=0.25)

        return fig, None

    except Exception as e:
        logger.exception("Error creating 2D plot")
        return None, f"Error creating 2D plot: {e}"


# --- 2D Plotting (Plotly) ---

def plot_graphical_method_plotly(result, title="Feasible Region (Graphical Method)"):
    """
    Interactive version of plot_graphical_method_2d.
    Returns: Plotly figure.
    """
    window = view_window(result)
    min_x, max_x, min_y, max_y = window
    fig = go.Figure()

    for i, cons in enumerate(result.constraints):
        segment = constraint_segment(cons, window)
        if segment is None:
            continue
        (x1, y1), (x2, y2) = segment
        fig.add_trace(go.Scatter(
            x=[x1, x2], y=[y1, y2],
            mode='lines',
            line=dict(color=COLORS["constraint"], dash='dash', width=1.5),
            name=constraint_label(cons, i),
            hoverinfo='name'
        ))
        label_at = _label_position(segment, window)
        if label_at is not None:
            fig.add_annotation(x=label_at[0], y=label_at[1], text=cons.op.value,
                               showarrow=False, font=dict(size=12, color=COLORS["constraint"]))

    if result.has_fill:
        xs = [v.x for v in result.polygon]
        ys = [v.y for v in result.polygon]
        fig.add_trace(go.Scatter(
            x=xs + xs[:1], y=ys + ys[:1],
            mode='lines',
            fill='toself',
            fillcolor=f'rgba(22, 163, 74, {FILL_ALPHA})',
            line=dict(color='rgba(22, 163, 74, 0.6)', width=1),
            name='Feasible region',
            hoverinfo='skip'
        ))

    if not result.is_empty:
        fig.add_trace(go.Scatter(
            x=[v.x for v in result.polygon], y=[v.y for v in result.polygon],
            mode='markers+text',
            marker=dict(color=COLORS["vertex"], size=8),
            text=[f'({v.x:.3f}, {v.y:.3f})' for v in result.polygon],
            textposition='top right',
            customdata=[v.z for v in result.polygon],
            hovertemplate='x=%{x:.6g}<br>y=%{y:.6g}<br>Z=%{customdata:.6g}<extra></extra>',
            name='Vertices'
        ))

    if result.optimum is not None:
        best = result.optimum.vertex
        fig.add_trace(go.Scatter(
            x=[best.x], y=[best.y],
            mode='markers',
            marker=dict(size=16, color=COLORS["optimum"], symbol='star'),
            name=f'Optimum ({result.optimum.direction})<br>Z={result.optimum.value:.6g}',
            hoverinfo='name'
        ))
    else:
        fig.add_annotation(x=0.98, y=0.02, xref='paper', yref='paper', text='No feasible region',
                           showarrow=False, font=dict(color=COLORS["optimum"]))

    fig.update_layout(
        title=title,
        xaxis=dict(title='x', range=[min_x, max_x], autorange=False, zeroline=True,
                   zerolinewidth=2, zerolinecolor=COLORS["axis"]),
        yaxis=dict(title='y', range=[min_y, max_y], autorange=False, zeroline=True,
                   zerolinewidth=2, zerolinecolor=COLORS["axis"]),
        legend=dict(orientation='h', yanchor='top', y=-0.15, xanchor='center', x=0.5),
        margin=dict(l=10, r=10, b=10, t=50)
    )
    return fig
