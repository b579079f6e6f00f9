# constraint_store.py
import logging
from dataclasses import replace

from graphical import Constraint, ConstraintOp
from utils import parse_number

logger = logging.getLogger("graphical_lp.store")


class ConstraintStore:
    """
    Ordered, mutable list of constraints edited by the UI.

    The store is the only mutable piece; solve_graphical() receives an
    immutable snapshot(), so the order here matters for display only.
    """

    def __init__(self, constraints=None):
        self._constraints = list(constraints or [])

    def __len__(self):
        return len(self._constraints)

    def __iter__(self):
        return iter(self._constraints)

    def __getitem__(self, index):
        return self._constraints[index]

    def add(self, constraint=None):
        """Append a constraint; without one, append the blank row 0x + 0y <= 0."""
        if constraint is None:
            constraint = Constraint(0.0, 0.0, ConstraintOp.LE, 0.0)
        self._constraints.append(constraint)
        logger.debug("Added constraint #%d: %s", len(self._constraints), constraint)
        return constraint

    def remove(self, index):
        removed = self._constraints.pop(index)
        logger.debug("Removed constraint %s", removed)
        return removed

    def edit(self, index, **fields):
        """
        Replace some of a, b, op, c on the constraint at `index`.

        Numeric fields go through parse_number, so invalid input becomes 0.
        """
        unknown = set(fields) - {"a", "b", "op", "c"}
        if unknown:
            raise TypeError(f"Unknown constraint field(s): {', '.join(sorted(unknown))}")
        current = self._constraints[index]
        values = {}
        for name, value in fields.items():
            values[name] = ConstraintOp.parse(value) if name == "op" else parse_number(value)
        updated = replace(current, **values)
        self._constraints[index] = updated
        return updated

    def clear(self):
        self._constraints = []

    def replace(self, constraints):
        self._constraints = list(constraints)

    def snapshot(self):
        return tuple(self._constraints)
