# graphical.py
import logging
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np
from tabulate import tabulate

logger = logging.getLogger("graphical_lp.engine")

# --- Numeric tolerances ---
PARALLEL_TOL = 1e-12     # |det| below this means parallel or coincident lines
FEASIBILITY_TOL = 1e-9   # slack allowed on every constraint and on x, y >= 0
ROUND_DECIMALS = 9       # intersections are rounded here; also the dedup key precision

# --- View window ---
BOUNDS_FLOOR = 10.0
BOUNDS_MARGIN = 1.2


# Custom Exception Classes
class GraphicalMethodError(Exception):
    """Base class for graphical-method errors."""
    pass

class EmptyFeasibleRegionError(GraphicalMethodError):
    """Raised when a consumer needs vertices but the feasible region is empty."""
    pass


class ConstraintOp(Enum):
    LE = "<="
    GE = ">="
    EQ = "="

    @classmethod
    def parse(cls, value):
        """Accept an operator, its symbol or its name ('<=', '≥', 'GE', ...)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        aliases = {
            "<=": cls.LE, "≤": cls.LE, "le": cls.LE,
            ">=": cls.GE, "≥": cls.GE, "ge": cls.GE,
            "=": cls.EQ, "==": cls.EQ, "eq": cls.EQ,
        }
        try:
            return aliases[text.lower()]
        except KeyError:
            raise ValueError(f"Unknown constraint operator: {value!r}") from None

    @property
    def latex(self):
        return {"<=": r"\leq", ">=": r"\geq", "=": "="}[self.value]


@dataclass(frozen=True)
class Constraint:
    """A linear constraint a*x + b*y (op) c."""
    a: float
    b: float
    op: ConstraintOp
    c: float

    def __post_init__(self):
        object.__setattr__(self, "op", ConstraintOp.parse(self.op))

    @property
    def is_degenerate(self):
        return abs(self.a) <= PARALLEL_TOL and abs(self.b) <= PARALLEL_TOL

    def lhs(self, x, y):
        return self.a * x + self.b * y

    def is_satisfied_by(self, x, y, tol=FEASIBILITY_TOL):
        val = self.lhs(x, y)
        if self.op is ConstraintOp.LE:
            return val <= self.c + tol
        if self.op is ConstraintOp.GE:
            return val >= self.c - tol
        return abs(val - self.c) < tol

    def __str__(self):
        return f"{self.a:g}x + {self.b:g}y {self.op.value} {self.c:g}"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Vertex:
    """A polygon corner together with its objective value z."""
    x: float
    y: float
    z: float

    def as_record(self):
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class Optimum:
    vertex: Vertex
    value: float
    maximize: bool = True

    @property
    def direction(self):
        return "max" if self.maximize else "min"


@dataclass(frozen=True)
class GraphicalResult:
    """Everything one recompute produces. Rendering and table code read only this."""
    constraints: tuple
    feasible_points: tuple
    polygon: tuple
    optimum: Optimum = None
    bounds: tuple = (BOUNDS_FLOOR, BOUNDS_FLOOR)
    objective: tuple = (0.0, 0.0)
    maximize: bool = True
    non_negative: bool = True

    @property
    def is_empty(self):
        return len(self.polygon) == 0

    @property
    def has_fill(self):
        return len(self.polygon) >= 3

    def vertex_records(self):
        return [v.as_record() for v in self.polygon]

    def to_table(self, floatfmt=".6f"):
        """Plain-text vertex table with the optimum row marked."""
        if self.is_empty:
            return "No feasible region."
        rows = []
        for i, v in enumerate(self.polygon):
            mark = "*" if self.optimum is not None and v is self.optimum.vertex else ""
            rows.append([i + 1, v.x, v.y, v.z, mark])
        table = tabulate(rows, headers=["#", "x", "y", "z", "opt"], floatfmt=floatfmt, tablefmt="simple")
        if self.optimum is not None:
            best = self.optimum.vertex
            table += (f"\nBest point ({best.x:.3f}, {best.y:.3f}) -> "
                      f"Z = {self.optimum.value:.6f} ({self.optimum.direction})")
        return table


# --- Intersection Engine ---

def intersect(line_a, line_b):
    """
    Intersect the boundary lines a1*x + b1*y = c1 and a2*x + b2*y = c2 (Cramer's rule).

    Returns a Point rounded to ROUND_DECIMALS, or None when the lines are
    parallel/coincident (|det| < PARALLEL_TOL) or the result is not finite.
    """
    a1, b1, c1 = line_a.a, line_a.b, line_a.c
    a2, b2, c2 = line_b.a, line_b.b, line_b.c
    det = a1 * b2 - a2 * b1
    if abs(det) < PARALLEL_TOL:
        return None
    x = (c1 * b2 - c2 * b1) / det
    y = (a1 * c2 - a2 * c1) / det
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return Point(round(x, ROUND_DECIMALS), round(y, ROUND_DECIMALS))


def axis_intercepts(constraint):
    """Points where the constraint's boundary line meets the y axis, then the x axis."""
    points = []
    if abs(constraint.b) > PARALLEL_TOL:
        points.append(Point(0.0, constraint.c / constraint.b))
    if abs(constraint.a) > PARALLEL_TOL:
        points.append(Point(constraint.c / constraint.a, 0.0))
    return points


def candidate_points(constraints):
    """Pairwise intersections, then axis intercepts, then the origin."""
    constraints = list(constraints)
    candidates = []
    for i in range(len(constraints)):
        for j in range(i + 1, len(constraints)):
            p = intersect(constraints[i], constraints[j])
            if p is None:
                logger.debug("No intersection for constraints %d and %d (parallel or non-finite)", i, j)
                continue
            candidates.append(p)
    for cons in constraints:
        candidates.extend(axis_intercepts(cons))
    candidates.append(Point(0.0, 0.0))
    return candidates


# --- Feasibility Filter ---

def _dedup_key(point):
    # adding 0.0 folds -0.0 into 0.0
    return f"{point.x + 0.0:.{ROUND_DECIMALS}f}_{point.y + 0.0:.{ROUND_DECIMALS}f}"


def filter_feasible(candidates, constraints, non_negative=True):
    """
    Deduplicate candidates and keep those satisfying every constraint.

    The first candidate with a given key wins, whether or not it turns out to
    be feasible. Output order follows input order.
    """
    constraints = list(constraints)
    seen = set()
    feasible = []
    for p in candidates:
        if not (math.isfinite(p.x) and math.isfinite(p.y)):
            logger.debug("Dropping non-finite candidate (%r, %r)", p.x, p.y)
            continue
        key = _dedup_key(p)
        if key in seen:
            continue
        seen.add(key)
        if non_negative and (p.x < -FEASIBILITY_TOL or p.y < -FEASIBILITY_TOL):
            continue
        if all(cons.is_satisfied_by(p.x, p.y) for cons in constraints):
            feasible.append(Point(float(p.x), float(p.y)))
    return feasible


# --- Polygon Orderer ---

def order_polygon(points):
    """Sort points counter-clockwise by angle around their centroid."""
    points = list(points)
    if not points:
        return []
    xs = np.array([p.x for p in points], dtype=float)
    ys = np.array([p.y for p in points], dtype=float)
    cx, cy = xs.mean(), ys.mean()
    angles = np.arctan2(ys - cy, xs - cx)
    order = np.argsort(angles, kind="stable")
    return [points[i] for i in order]


# --- Objective Evaluator ---

def evaluate_objective(points, objective):
    """Attach z = p*x + q*y to every point."""
    p, q = objective
    return [Vertex(pt.x, pt.y, p * pt.x + q * pt.y) for pt in points]


def select_optimum(vertices, maximize=True):
    """
    Pick the best vertex by a left-to-right scan.

    Only a strictly better value replaces the running best, so ties keep the
    earliest vertex. Returns None for an empty list.
    """
    best = None
    for v in vertices:
        if best is None:
            best = v
        elif maximize and v.z > best.z:
            best = v
        elif not maximize and v.z < best.z:
            best = v
    if best is None:
        return None
    return Optimum(vertex=best, value=best.z, maximize=maximize)


def evaluate_point(x, y, constraints, objective, non_negative=True):
    """Objective value of an arbitrary (e.g. user-edited) point and whether it is feasible."""
    p, q = objective
    feasible = all(cons.is_satisfied_by(x, y) for cons in constraints)
    if non_negative and (x < -FEASIBILITY_TOL or y < -FEASIBILITY_TOL):
        feasible = False
    return p * x + q * y, feasible


# --- Bounds Estimator ---

def estimate_bounds(constraints, points):
    """
    Heuristic view window (max_x, max_y) containing every intercept and vertex
    with a 20% margin. Not a bounding box, and says nothing about unboundedness.
    Extents that overflow to infinity are ignored, so the window stays finite.
    """
    xs = []
    ys = []
    for cons in constraints:
        if abs(cons.a) > PARALLEL_TOL:
            xs.append(abs(cons.c / cons.a) * BOUNDS_MARGIN)
        if abs(cons.b) > PARALLEL_TOL:
            ys.append(abs(cons.c / cons.b) * BOUNDS_MARGIN)
    for pt in points:
        xs.append(abs(pt.x) * BOUNDS_MARGIN)
        ys.append(abs(pt.y) * BOUNDS_MARGIN)
    max_x = max([BOUNDS_FLOOR] + [v for v in xs if math.isfinite(v)])
    max_y = max([BOUNDS_FLOOR] + [v for v in ys if math.isfinite(v)])
    return max_x, max_y


# --- Pipeline ---

def solve_graphical(constraints, objective=(0.0, 0.0), maximize=True, non_negative=True):
    """
    Run the graphical method once.

    :param constraints: iterable of Constraint
    :param objective: (p, q) for z = p*x + q*y
    :param maximize: True to maximize z, False to minimize
    :param non_negative: enforce x >= 0 and y >= 0
    :return: GraphicalResult; an empty polygon and optimum None mean no feasible region
    """
    constraints = tuple(constraints)
    objective = (float(objective[0]), float(objective[1]))

    candidates = candidate_points(constraints)
    feasible = filter_feasible(candidates, constraints, non_negative)
    polygon = evaluate_objective(order_polygon(feasible), objective)
    optimum = select_optimum(polygon, maximize)
    bounds = estimate_bounds(constraints, polygon)

    if not polygon:
        logger.info("No feasible region (%d constraints, %d candidates)", len(constraints), len(candidates))
    else:
        logger.debug("%d feasible vertices from %d candidates", len(polygon), len(candidates))

    return GraphicalResult(
        constraints=constraints,
        feasible_points=tuple(feasible),
        polygon=tuple(polygon),
        optimum=optimum,
        bounds=bounds,
        objective=objective,
        maximize=maximize,
        non_negative=non_negative,
    )
