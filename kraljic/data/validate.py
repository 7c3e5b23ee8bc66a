from typing import Iterable, Optional

import numpy as np
import pandas as pd


def assert_required_columns(df, required: Iterable[str]) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def assert_numeric_columns(df, columns: Iterable[str], message: Optional[str] = None) -> None:
    non_numeric = [c for c in columns if not pd.api.types.is_numeric_dtype(df[c])]
    if non_numeric:
        raise ValueError(message or f"Columns must be numeric: {non_numeric}")


def assert_same_length(a, b, names=("x", "y")) -> None:
    if np.size(a) != np.size(b):
        raise ValueError(f"`{names[0]}` and `{names[1]}` must be the same length")


def assert_scalar(value, name: str) -> float:
    """Return value as a float, or raise if it is not a single number."""

    arr = np.asarray(value)
    if arr.size != 1 or not np.issubdtype(arr.dtype, np.number):
        raise ValueError(f"`{name}` must be a numeric value of length 1")
    return float(arr.reshape(-1)[0])


def assert_ordered_bounds(low, high, low_name: str, high_name: str) -> None:
    if low >= high:
        raise ValueError(f"`{low_name}` must be less than `{high_name}`")
