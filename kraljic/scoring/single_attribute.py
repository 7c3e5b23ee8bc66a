from __future__ import annotations

import numpy as np
import pandas as pd

from kraljic.config import RHO_GRID_STEPS
from kraljic.data.coding import like_input
from kraljic.data.validate import assert_ordered_bounds, assert_same_length, assert_scalar


def savf_score(x, x_low: float, x_high: float, rho: float):
    """Exponential single attribute value score of x.

    Scores are 0 at x_low and 1 at x_high; the anchors may lie outside the
    observed range of x. rho controls the curvature: positive rho is concave
    (diminishing returns), negative rho convex and rho == 0 linear.
    """

    assert_ordered_bounds(x_low, x_high, "x_low", "x_high")
    rho = assert_scalar(rho, "rho")

    xv = np.asarray(x, dtype=float)
    if rho == 0.0:
        value = (xv - x_low) / (x_high - x_low)
    else:
        value = np.expm1(-rho * (xv - x_low)) / np.expm1(-rho * (x_high - x_low))
    return like_input(value, x)


def rho_grid(rho_low: float, rho_high: float, steps: int = RHO_GRID_STEPS) -> np.ndarray:
    rho = np.linspace(rho_low, rho_high, steps + 1)
    # rho == 0 is the degenerate linear curve; exclude it from the search.
    return rho[~np.isclose(rho, 0.0, rtol=0.0, atol=1e-12)]


def savf_rho_error(
    desired_x,
    desired_v,
    x_low: float,
    x_high: float,
    rho_low: float = 0.0,
    rho_high: float = 1.0,
) -> pd.DataFrame:
    """Sum of squared errors between elicited values and fitted scores over the rho grid."""

    assert_ordered_bounds(x_low, x_high, "x_low", "x_high")
    assert_ordered_bounds(rho_low, rho_high, "rho_low", "rho_high")
    assert_same_length(desired_x, desired_v, names=("desired_x", "desired_v"))

    dx = np.atleast_1d(np.asarray(desired_x, dtype=float))
    dv = np.atleast_1d(np.asarray(desired_v, dtype=float))
    rho = rho_grid(rho_low, rho_high)

    # rows = rho grid, columns = elicited points
    r = rho[:, None]
    # Large |rho| overflows to inf/inf; those grid points come back as NaN.
    with np.errstate(over="ignore", invalid="ignore"):
        fitted = np.expm1(-r * (dx[None, :] - x_low)) / np.expm1(-r * (x_high - x_low))
    delta = np.sum((fitted - dv[None, :]) ** 2, axis=1)
    return pd.DataFrame({"rho": rho, "delta": delta})


def preferred_rho_index(errors: pd.DataFrame) -> int:
    """Position of the smallest finite squared error in a `savf_rho_error` table.

    Wide rho bounds overflow the exponential and leave NaN errors; those grid
    points are skipped. Ties resolve to the first (smallest) rho.
    """

    delta = errors["delta"].to_numpy(dtype=float)
    if np.isnan(delta).all():
        raise ValueError("No finite squared error on the rho grid; narrow `rho_low`/`rho_high`")
    return int(np.nanargmin(delta))


def savf_preferred_rho(
    desired_x,
    desired_v,
    x_low: float,
    x_high: float,
    rho_low: float = 0.0,
    rho_high: float = 1.0,
) -> float:
    """Return the grid rho that best fits the exponential value function to the elicited points.

    Ties resolve to the smallest rho on the grid.
    """

    errors = savf_rho_error(desired_x, desired_v, x_low, x_high, rho_low=rho_low, rho_high=rho_high)
    return float(errors["rho"].iloc[preferred_rho_index(errors)])
