from __future__ import annotations

import numpy as np
import pandas as pd

from kraljic.config import QUADRANT_LABELS, QUADRANT_MIDPOINT
from kraljic.data.validate import assert_same_length


def kraljic_quadrant(x, y, *, midpoint: float = QUADRANT_MIDPOINT) -> pd.Series:
    """Assign the Kraljic purchasing matrix quadrant from the x and y value scores.

    x above the midpoint with y at or above it is Leverage, x above with y
    below is Non-critical, x at or below with y at or above is Strategic and
    the remaining corner is Bottleneck. Rows with a missing score get <NA>.
    """

    assert_same_length(x, y)
    xv = np.asarray(x, dtype=float).reshape(-1)
    yv = np.asarray(y, dtype=float).reshape(-1)

    leverage, non_critical, strategic, bottleneck = QUADRANT_LABELS
    # NaN compares False on both sides, so missing scores fall through.
    high_x, low_x = xv > midpoint, xv <= midpoint
    high_y, low_y = yv >= midpoint, yv < midpoint

    labels = np.full(xv.shape, None, dtype=object)
    labels[high_x & high_y] = leverage
    labels[high_x & low_y] = non_critical
    labels[low_x & high_y] = strategic
    labels[low_x & low_y] = bottleneck

    index = x.index if isinstance(x, pd.Series) else None
    return pd.Series(labels, index=index, name="quadrant", dtype="string")


def quadrant_counts(labels: pd.Series) -> pd.DataFrame:
    """Count rows per quadrant in fixed label order; unassigned rows are reported as <NA>."""

    n = len(labels)
    rows = []
    for label in QUADRANT_LABELS:
        count = int(labels.eq(label).fillna(False).sum())
        rows.append({"quadrant": label, "count": count})
    n_missing = int(labels.isna().sum())
    if n_missing:
        rows.append({"quadrant": "<NA>", "count": n_missing})

    out = pd.DataFrame(rows)
    out["proportion"] = (out["count"] / n).round(6) if n else np.nan
    return out
