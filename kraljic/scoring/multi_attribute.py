from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from kraljic.config import SENSITIVITY_TRIALS
from kraljic.data.coding import like_input
from kraljic.data.validate import assert_numeric_columns, assert_ordered_bounds, assert_same_length


SENSITIVITY_COLUMNS = [
    "MAVF_Min",
    "MAVF_1st_Q",
    "MAVF_Median",
    "MAVF_Mean",
    "MAVF_3rd_Q",
    "MAVF_Max",
    "MAVF_Range",
]


def mavf_score(x, y, x_wt: float, y_wt: float):
    """Multi-attribute value score of x and y given their swing weights.

    The remaining weight (1 - x_wt - y_wt) is applied to the x * y interaction.
    """

    assert_same_length(x, y)
    if np.size(x_wt) != 1 or np.size(y_wt) != 1:
        raise ValueError("x and y weights must be numeric values of length 1")
    x_wt = float(np.asarray(x_wt).reshape(-1)[0])
    y_wt = float(np.asarray(y_wt).reshape(-1)[0])

    xv = np.asarray(x, dtype=float)
    yv = np.asarray(y, dtype=float)
    value = xv * x_wt + yv * y_wt + (1.0 - x_wt - y_wt) * xv * yv
    return like_input(value, x)


def weight_draws(
    x_wt_min: float,
    x_wt_max: float,
    y_wt_min: float,
    y_wt_max: float,
    *,
    n_trials: int = SENSITIVITY_TRIALS,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Uniform swing-weight draws used by mavf_sensitivity (same seed, same draws)."""

    assert_ordered_bounds(x_wt_min, x_wt_max, "x_wt_min", "x_wt_max")
    assert_ordered_bounds(y_wt_min, y_wt_max, "y_wt_min", "y_wt_max")
    if int(n_trials) <= 0:
        raise ValueError("`n_trials` must be a positive integer")

    rng = np.random.default_rng(seed)
    x_wt = rng.uniform(x_wt_min, x_wt_max, size=int(n_trials))
    y_wt = rng.uniform(y_wt_min, y_wt_max, size=int(n_trials))
    return pd.DataFrame(
        {
            "trial": np.arange(int(n_trials)),
            "x_wt": x_wt,
            "y_wt": y_wt,
            "interaction_wt": 1.0 - x_wt - y_wt,
        }
    )


def _summary_table(scores: np.ndarray) -> pd.DataFrame:
    # scores: (n_rows, n_trials); quartiles use linear interpolation.
    q1, median, q3 = np.percentile(scores, [25, 50, 75], axis=1)
    lo = scores.min(axis=1)
    hi = scores.max(axis=1)
    return pd.DataFrame(
        {
            "MAVF_Min": lo,
            "MAVF_1st_Q": q1,
            "MAVF_Median": median,
            "MAVF_Mean": scores.mean(axis=1),
            "MAVF_3rd_Q": q3,
            "MAVF_Max": hi,
            "MAVF_Range": hi - lo,
        }
    )


def mavf_sensitivity(
    data: pd.DataFrame,
    x: str,
    y: str,
    x_wt_min: float,
    x_wt_max: float,
    y_wt_min: float,
    y_wt_max: float,
    *,
    n_trials: int = SENSITIVITY_TRIALS,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Monte Carlo sensitivity of the multi-attribute score to the swing weights.

    Each trial draws an x and a y weight uniformly between their bounds and
    scores every row with that pair. The returned copy of data carries the
    per-row summary of those trial scores: min, quartiles, median, mean, max
    and range (MAVF_* columns).
    """

    assert_ordered_bounds(x_wt_min, x_wt_max, "x_wt_min", "x_wt_max")
    assert_ordered_bounds(y_wt_min, y_wt_max, "y_wt_min", "y_wt_max")
    if x not in data.columns or y not in data.columns:
        raise ValueError("`x` and `y` must both be a variable of the supplied data frame")
    assert_numeric_columns(data, [x, y], message="data for both column inputs must be numeric")

    draws = weight_draws(x_wt_min, x_wt_max, y_wt_min, y_wt_max, n_trials=n_trials, seed=seed)
    x_wt = draws["x_wt"].to_numpy()[None, :]
    y_wt = draws["y_wt"].to_numpy()[None, :]

    xv = data[x].to_numpy(dtype=float)[:, None]
    yv = data[y].to_numpy(dtype=float)[:, None]
    scores = xv * x_wt + yv * y_wt + (1.0 - x_wt - y_wt) * xv * yv

    out = data.copy()
    summary = _summary_table(scores)
    for col in SENSITIVITY_COLUMNS:
        out[col] = summary[col].to_numpy()
    return out
