from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from kraljic.config import FRONTIER_QUADRANTS
from kraljic.data.validate import assert_same_length


def _frontier_keep_mask(y_sorted: np.ndarray, use_max: bool) -> np.ndarray:
    running = np.maximum.accumulate(y_sorted) if use_max else np.minimum.accumulate(y_sorted)
    # The running extreme is monotone, so each new value marks a frontier point.
    keep = np.ones(running.size, dtype=bool)
    keep[1:] = running[1:] != running[:-1]
    return keep


def get_frontier(x, y=None, quadrant: str = "top.right") -> pd.DataFrame:
    """Extract the points that make up the Pareto frontier.

    x may be a DataFrame, in which case its first two columns are used and y
    is ignored. quadrant names the corner of the plot the frontier bends
    towards: "top.right" maximises both coordinates, "bottom.left" minimises
    both, and the mixed quadrants maximise one while minimising the other.

    Returns a DataFrame with columns x and y in scan order. Rows with a
    missing coordinate are dropped first.
    """

    if isinstance(x, pd.DataFrame):
        if x.shape[1] < 2:
            raise ValueError("`x` must have at least two columns when a data frame is supplied")
        x, y = x.iloc[:, 0], x.iloc[:, 1]
    elif y is None:
        raise ValueError("`y` must be supplied when `x` is not a data frame")

    if quadrant not in FRONTIER_QUADRANTS:
        raise ValueError(f"`quadrant` must be one of {list(FRONTIER_QUADRANTS)}; got {quadrant!r}")
    assert_same_length(x, y)

    xv = np.asarray(x, dtype=float).reshape(-1)
    yv = np.asarray(y, dtype=float).reshape(-1)
    ok = ~(np.isnan(xv) | np.isnan(yv))
    xv, yv = xv[ok], yv[ok]

    right = quadrant.endswith(".right")
    top = quadrant.startswith("top.")

    # Scan from the preferred x edge; ties in x are broken towards the
    # preferred y so only the best point of a tie can start a new extreme.
    # np.lexsort uses the last key as primary.
    order = np.lexsort((-yv if top else yv, -xv if right else xv))
    xs, ys = xv[order], yv[order]

    keep = _frontier_keep_mask(ys, use_max=top)
    return pd.DataFrame({"x": xs[keep], "y": ys[keep]})


def frontier_mask(
    data: pd.DataFrame,
    x: str,
    y: str,
    quadrant: str = "top.right",
    *,
    name: Optional[str] = None,
) -> pd.Series:
    """Boolean Series flagging the rows of data that lie on the frontier.

    Duplicate points on the frontier are all flagged.
    """

    frontier = get_frontier(data[x], data[y], quadrant=quadrant)
    points = set(zip(frontier["x"].tolist(), frontier["y"].tolist()))
    xs = data[x].astype(float).tolist()
    ys = data[y].astype(float).tolist()
    flags = [(xi, yi) in points for xi, yi in zip(xs, ys)]
    return pd.Series(flags, index=data.index, name=name, dtype=bool)
