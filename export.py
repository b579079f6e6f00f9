# export.py
import logging

import pandas as pd

from graphical import EmptyFeasibleRegionError, evaluate_objective

logger = logging.getLogger("graphical_lp.export")

EXPORT_FILENAME = "coordinates.csv"
EXPORT_COLUMNS = ["x", "y", "z"]
NOTHING_TO_EXPORT = "No points to export. Generate the graph first."


class NothingToExportError(EmptyFeasibleRegionError):
    """Raised when an export is requested without any vertices."""
    pass


def vertices_to_csv(vertices, objective=None):
    """
    Render vertices as an `x,y,z` CSV document, one line per vertex.

    When `objective` (p, q) is given, z is recomputed from it instead of
    taken from the vertices, so the file follows the current objective.
    Raises NothingToExportError for an empty vertex list; no document is produced.
    """
    vertices = list(vertices)
    if not vertices:
        logger.info("Export refused: no vertices")
        raise NothingToExportError(NOTHING_TO_EXPORT)
    if objective is not None:
        vertices = evaluate_objective(vertices, objective)
    df = pd.DataFrame([v.as_record() for v in vertices], columns=EXPORT_COLUMNS)
    return df.to_csv(index=False, lineterminator="\n")
