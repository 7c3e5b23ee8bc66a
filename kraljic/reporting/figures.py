from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from kraljic.analysis.frontier import get_frontier
from kraljic.config import CURVE_POINTS, QUADRANT_LABELS, QUADRANT_MIDPOINT
from kraljic.data.validate import (
    assert_numeric_columns,
    assert_ordered_bounds,
    assert_required_columns,
    assert_scalar,
)
from kraljic.scoring.single_attribute import preferred_rho_index, savf_rho_error, savf_score

# Diamond marker used for elicited points and the error minimum.
_DIAMOND = dict(marker="D", s=30, facecolors="white", edgecolors="black", zorder=3)


def save_figure(fig, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=300, bbox_inches="tight")


def _axes(ax: Optional[Axes], figsize=(6, 6)) -> Axes:
    if ax is not None:
        return ax
    _, ax = plt.subplots(figsize=figsize)
    return ax


def kraljic_matrix(
    data: pd.DataFrame,
    x: str,
    y: str,
    *,
    ax: Optional[Axes] = None,
    label_quadrants: bool = False,
) -> Axes:
    """Plot each product or service in the Kraljic purchasing matrix.

    x and y name value-score columns in [0, 1]. The x axis is reversed so
    that high-x items sit on the left, and the quadrants are split at 0.5.
    """

    assert_required_columns(data, [x, y])
    assert_numeric_columns(data, [x, y], message="data for both column inputs must be numeric")

    ax = _axes(ax)
    ax.scatter(data[x], data[y], s=12, color="black")
    ax.axvline(QUADRANT_MIDPOINT, color="black", linewidth=0.8)
    ax.axhline(QUADRANT_MIDPOINT, color="black", linewidth=0.8)
    ax.set_xlim(1, 0)
    ax.set_ylim(0, 1)
    ax.set_xlabel(x)
    ax.set_ylabel(y)

    if label_quadrants:
        leverage, non_critical, strategic, bottleneck = QUADRANT_LABELS
        # Axis-fraction coordinates; the x axis is reversed, so high x is on the left.
        positions = {
            leverage: (0.25, 0.95),
            non_critical: (0.25, 0.05),
            strategic: (0.75, 0.95),
            bottleneck: (0.75, 0.05),
        }
        for label, (px, py) in positions.items():
            ax.text(px, py, label, transform=ax.transAxes, ha="center", va="center", color="0.4")
    return ax


def frontier_plot(
    data: pd.DataFrame,
    x: str,
    y: str,
    *,
    quadrant: str = "top.right",
    ax: Optional[Axes] = None,
    show_points: bool = True,
    color: str = "tab:red",
    **step_kwargs,
) -> Axes:
    """Overlay the efficient frontier of x and y as a step line.

    The step goes horizontally then vertically between frontier points sorted
    by x. Pass an existing ax (for example from kraljic_matrix) to draw the
    frontier on top of it; extra keyword arguments go to Axes.step.
    """

    assert_required_columns(data, [x, y])
    assert_numeric_columns(data, [x, y], message="data for both column inputs must be numeric")

    frontier = get_frontier(data[x], data[y], quadrant=quadrant).sort_values(["x", "y"], kind="mergesort")
    ax = _axes(ax)
    if show_points:
        ax.scatter(data[x], data[y], s=12, color="black")
    ax.step(frontier["x"], frontier["y"], where="post", color=color, **step_kwargs)
    if not ax.get_xlabel():
        ax.set_xlabel(x)
    if not ax.get_ylabel():
        ax.set_ylabel(y)
    return ax


def savf_plot(
    desired_x,
    desired_v,
    x_low: float,
    x_high: float,
    rho: float,
    *,
    ax: Optional[Axes] = None,
) -> Axes:
    """Plot the single attribute value curve with the elicited points for comparison."""

    assert_ordered_bounds(x_low, x_high, "x_low", "x_high")
    rho = assert_scalar(rho, "rho")

    xs = np.linspace(x_low, x_high, CURVE_POINTS + 1)
    v = savf_score(xs, x_low, x_high, rho)

    ax = _axes(ax, figsize=(7, 5))
    ax.plot(xs, v, color="black")
    ax.scatter(np.asarray(desired_x, dtype=float), np.asarray(desired_v, dtype=float), **_DIAMOND)
    ax.set_xlabel("x")
    ax.set_ylabel("v")
    ax.set_title(f"Single attribute value function (rho = {rho:g})")
    return ax


def savf_plot_rho_error(
    desired_x,
    desired_v,
    x_low: float,
    x_high: float,
    rho_low: float = 0.0,
    rho_high: float = 1.0,
    *,
    ax: Optional[Axes] = None,
) -> Axes:
    """Plot the squared error over the rho search space, marking the preferred rho."""

    errors = savf_rho_error(desired_x, desired_v, x_low, x_high, rho_low=rho_low, rho_high=rho_high)
    best_pos = preferred_rho_index(errors)
    best = float(errors["rho"].iloc[best_pos])

    ax = _axes(ax, figsize=(7, 5))
    ax.plot(errors["rho"], errors["delta"], color="black")
    ax.scatter([best], [float(errors["delta"].iloc[best_pos])], **_DIAMOND)
    ax.set_xlabel("rho")
    ax.set_ylabel("delta")
    ax.set_title(f"Squared error by rho (preferred rho = {best:.4f})")
    return ax
