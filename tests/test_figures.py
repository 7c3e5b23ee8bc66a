from pathlib import Path

import numpy as np
import pytest

from kraljic.analysis.frontier import get_frontier
from kraljic.reporting.figures import frontier_plot, kraljic_matrix, save_figure, savf_plot, savf_plot_rho_error
from kraljic.scoring.single_attribute import savf_preferred_rho


def test_kraljic_matrix_layout(scores):
    ax = kraljic_matrix(scores, "x_attribute", "y_attribute")
    assert ax.get_xlim() == (1.0, 0.0)
    assert ax.get_ylim() == (0.0, 1.0)
    assert len(ax.collections) == 1
    # One vertical and one horizontal reference line at the midpoint.
    assert len(ax.lines) == 2
    assert ax.get_xlabel() == "x_attribute"


def test_kraljic_matrix_quadrant_labels(scores):
    ax = kraljic_matrix(scores, "x_attribute", "y_attribute", label_quadrants=True)
    texts = sorted(t.get_text() for t in ax.texts)
    assert texts == ["Bottleneck", "Leverage", "Non-critical", "Strategic"]


def test_kraljic_matrix_rejects_bad_columns(scores):
    labelled = scores.assign(y_attribute=scores["y_attribute"].astype(str))
    with pytest.raises(ValueError, match="data for both column inputs must be numeric"):
        kraljic_matrix(labelled, "x_attribute", "y_attribute")
    with pytest.raises(ValueError, match="Missing required columns"):
        kraljic_matrix(scores, "x_attribute", "missing")


def test_frontier_plot_draws_sorted_step(scores):
    ax = kraljic_matrix(scores, "x_attribute", "y_attribute")
    frontier_plot(scores, "x_attribute", "y_attribute", ax=ax, show_points=False)
    step = ax.lines[-1]
    xs = np.asarray(step.get_xdata(), dtype=float)
    assert np.all(np.diff(xs) >= 0)
    assert step.get_drawstyle() == "steps-post"
    # Frontier overlay keeps the matrix labels.
    assert ax.get_xlabel() == "x_attribute"


def test_frontier_plot_follows_requested_quadrant(scores):
    ax = frontier_plot(scores, "x_attribute", "y_attribute", quadrant="bottom.left", show_points=False)
    step = ax.lines[-1]
    expected = get_frontier(scores["x_attribute"], scores["y_attribute"], quadrant="bottom.left").sort_values(
        ["x", "y"], kind="mergesort"
    )
    np.testing.assert_allclose(step.get_xdata(), expected["x"])
    np.testing.assert_allclose(step.get_ydata(), expected["y"])
    assert len(ax.collections) == 0


def test_savf_plot_curve():
    ax = savf_plot([3, 4, 5], [0.75, 0.9, 1], x_low=1, x_high=5, rho=0.54)
    curve = ax.lines[0]
    assert len(curve.get_xdata()) == 1001
    assert curve.get_ydata()[0] == pytest.approx(0.0)
    assert curve.get_ydata()[-1] == pytest.approx(1.0)
    assert ax.collections[0].get_offsets().shape == (3, 2)


def test_savf_plot_validates_arguments():
    with pytest.raises(ValueError, match="`x_low` must be less than `x_high`"):
        savf_plot([3], [0.5], 5, 1, 0.5)
    with pytest.raises(ValueError, match="`rho` must be a numeric value of length 1"):
        savf_plot([3], [0.5], 1, 5, [0.5, 0.6])


def test_savf_plot_rho_error_marks_minimum():
    ax = savf_plot_rho_error([3, 4, 5], [0.75, 0.9, 1], x_low=1, x_high=5)
    assert len(ax.lines[0].get_xdata()) == 10000
    marker_x, _ = ax.collections[0].get_offsets()[0]
    assert marker_x == pytest.approx(0.54, abs=0.01)


def test_savf_plot_rho_error_marker_matches_preferred_rho():
    ax = savf_plot_rho_error([3, 4, 5], [0.75, 0.9, 1], x_low=1, x_high=5, rho_low=-200, rho_high=1)
    marker_x, marker_y = ax.collections[0].get_offsets()[0]
    assert marker_x == savf_preferred_rho([3, 4, 5], [0.75, 0.9, 1], 1, 5, rho_low=-200, rho_high=1)
    assert np.isfinite(marker_y)


def test_save_figure_creates_parent_dirs(tmp_path: Path, scores):
    ax = kraljic_matrix(scores, "x_attribute", "y_attribute")
    out = tmp_path / "nested" / "figures" / "matrix.png"
    save_figure(ax.figure, out)
    assert out.exists()
    assert out.stat().st_size > 0
