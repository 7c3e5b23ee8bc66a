from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd


def like_input(values: np.ndarray, template):
    """Return values shaped like template.

    A Series template keeps its index and name, a scalar template yields a
    float, anything else is returned as the ndarray.
    """

    if isinstance(template, pd.Series):
        return pd.Series(values, index=template.index, name=template.name, dtype=float)
    if np.ndim(template) == 0:
        return float(values)
    return values


def coerce_numeric(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """Return a copy of df with columns parsed as floats.

    Spreadsheet exports often carry numbers as text. Values that cannot be
    parsed raise ValueError rather than silently becoming NaN.
    """

    out = df.copy()
    for col in columns:
        s = out[col]
        parsed = pd.to_numeric(s, errors="coerce")
        bad = s.loc[parsed.isna() & s.notna()].unique()
        if len(bad) > 0:
            raise ValueError(f"Non-numeric values in {col}: {sorted(map(str, bad))}")
        out[col] = parsed.astype(float)
    return out


def summarize_missingness(df: pd.DataFrame) -> pd.DataFrame:
    """Return per-column missingness summary in stable column order."""

    n = len(df)
    rows = []
    for col in df.columns.astype(str).tolist():
        n_missing = int(df[col].isna().sum())
        missing_rate = round(n_missing / n, 6) if n else np.nan
        rows.append({"column": col, "n": n, "n_missing": n_missing, "missing_rate": missing_rate})
    return pd.DataFrame(rows)
