from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from kraljic.config import PORTFOLIO_FILE
from kraljic.data.coding import coerce_numeric, like_input, summarize_missingness
from kraljic.data.ingest import load_portfolio
from kraljic.data.validate import assert_numeric_columns, assert_required_columns, assert_scalar


@pytest.fixture
def portfolio() -> pd.DataFrame:
    return pd.DataFrame({"PSC": ["A1", "B2", "C3"], "x_attribute": [1.5, 2.5, 4.0], "y_attribute": [3.0, 7.5, 9.0]})


@pytest.mark.parametrize("suffix", [".csv", ".xlsx", ".parquet"])
def test_load_portfolio_formats(tmp_path: Path, portfolio, suffix):
    path = tmp_path / f"portfolio{suffix}"
    if suffix == ".csv":
        portfolio.to_csv(path, index=False)
    elif suffix == ".xlsx":
        portfolio.to_excel(path, index=False)
    else:
        portfolio.to_parquet(path, index=False)

    df = load_portfolio(path)
    pd.testing.assert_frame_equal(df, portfolio)
    assert len(load_portfolio(path, nrows=2)) == 2


def test_load_portfolio_rejects_unknown_suffix(tmp_path: Path):
    with pytest.raises(ValueError, match="Unsupported portfolio file type"):
        load_portfolio(tmp_path / "portfolio.json")


def test_load_portfolio_rejects_legacy_excel(tmp_path: Path):
    with pytest.raises(ValueError, match="Unsupported portfolio file type: '.xls'"):
        load_portfolio(tmp_path / "portfolio.xls")


def test_bundled_portfolio_is_loadable():
    df = load_portfolio(PORTFOLIO_FILE)
    assert_required_columns(df, ["PSC", "x_attribute", "y_attribute"])
    assert_numeric_columns(df, ["x_attribute", "y_attribute"])
    assert df["PSC"].is_unique


def test_coerce_numeric_parses_text_numbers():
    df = pd.DataFrame({"x": ["1.5", "2", None], "label": ["a", "b", "c"]})
    out = coerce_numeric(df, ["x"])
    assert out["x"].dtype == float
    assert out["x"].iloc[:2].tolist() == [1.5, 2.0]
    assert np.isnan(out["x"].iloc[2])
    # Original is not modified.
    assert df["x"].iloc[0] == "1.5"


def test_coerce_numeric_rejects_unparseable_values():
    df = pd.DataFrame({"x": ["1.5", "high"]})
    with pytest.raises(ValueError, match="Non-numeric values in x"):
        coerce_numeric(df, ["x"])


def test_summarize_missingness():
    df = pd.DataFrame({"a": [1.0, np.nan], "b": ["x", "y"]})
    out = summarize_missingness(df)
    assert out["column"].tolist() == ["a", "b"]
    assert out["n_missing"].tolist() == [1, 0]
    assert out["missing_rate"].tolist() == [0.5, 0.0]


def test_assert_helpers():
    with pytest.raises(ValueError, match=r"Missing required columns: \['z'\]"):
        assert_required_columns(pd.DataFrame({"a": [1]}), ["a", "z"])
    assert assert_scalar(np.array([0.5]), "rho") == 0.5
    with pytest.raises(ValueError, match="`rho` must be a numeric value of length 1"):
        assert_scalar("0.5", "rho")
    labelled = pd.DataFrame({"x": ["low", "high"]})
    with pytest.raises(ValueError, match=r"Columns must be numeric: \['x'\]"):
        assert_numeric_columns(labelled, ["x"])
    with pytest.raises(ValueError, match="x must be a score"):
        assert_numeric_columns(labelled, ["x"], message="x must be a score")


def test_like_input_shapes():
    s = pd.Series([1, 2], index=["a", "b"], name="col")
    out = like_input(np.array([0.1, 0.2]), s)
    assert out.index.tolist() == ["a", "b"]
    assert out.name == "col"
    assert like_input(np.asarray(0.3), 3) == 0.3
    assert isinstance(like_input(np.array([0.1]), [1]), np.ndarray)
