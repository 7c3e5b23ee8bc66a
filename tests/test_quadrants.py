import numpy as np
import pandas as pd
import pytest

from kraljic.analysis.quadrants import kraljic_quadrant, quadrant_counts


def test_quadrant_boundaries():
    x = [0.6, 0.6, 0.5, 0.5, 0.2, 0.9]
    y = [0.5, 0.4, 0.5, 0.4, 0.1, 0.9]
    out = kraljic_quadrant(x, y)
    assert out.tolist() == ["Leverage", "Non-critical", "Strategic", "Bottleneck", "Bottleneck", "Leverage"]
    assert str(out.dtype) == "string"


def test_missing_scores_are_unassigned():
    out = kraljic_quadrant([np.nan, 0.7], [0.7, np.nan])
    assert out.isna().all()


def test_series_index_is_kept():
    x = pd.Series([0.8, 0.1], index=[10, 20])
    y = pd.Series([0.8, 0.9], index=[10, 20])
    out = kraljic_quadrant(x, y)
    assert out.index.tolist() == [10, 20]
    assert out.tolist() == ["Leverage", "Strategic"]


def test_custom_midpoint():
    out = kraljic_quadrant([0.65, 0.65], [0.7, 0.5], midpoint=0.6)
    assert out.tolist() == ["Leverage", "Non-critical"]


def test_length_mismatch_raises():
    with pytest.raises(ValueError, match="same length"):
        kraljic_quadrant([0.1, 0.2], [0.3])


def test_quadrant_counts_reports_every_quadrant():
    labels = kraljic_quadrant([0.9, 0.8, 0.1, np.nan], [0.9, 0.7, 0.9, 0.5])
    counts = quadrant_counts(labels)
    assert counts["quadrant"].tolist() == ["Leverage", "Non-critical", "Strategic", "Bottleneck", "<NA>"]
    assert counts["count"].tolist() == [2, 0, 1, 0, 1]
    assert counts["proportion"].tolist() == [0.5, 0.0, 0.25, 0.0, 0.25]
