import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import hashlib

import pandas as pd

from kraljic.analysis.frontier import frontier_mask
from kraljic.analysis.quadrants import kraljic_quadrant, quadrant_counts
from kraljic.config import (
    ANALYSIS_NAMESPACE,
    FRONTIER_COL,
    FRONTIER_QUADRANTS,
    ID_COL,
    LOGS_DIR,
    MAVF_COL,
    PORTFOLIO_FILE,
    QUADRANT_COL,
    RANDOM_SEED,
    SCORED_FILE,
    SENSITIVITY_TRIALS,
    TABLES_DIR,
    X_ATTRIBUTE_COL,
    X_HIGH,
    X_LOW,
    X_RHO,
    X_SCORE_COL,
    X_WEIGHT,
    X_WEIGHT_BOUNDS,
    Y_ATTRIBUTE_COL,
    Y_HIGH,
    Y_LOW,
    Y_RHO,
    Y_SCORE_COL,
    Y_WEIGHT,
    Y_WEIGHT_BOUNDS,
)
from kraljic.data.coding import coerce_numeric, summarize_missingness
from kraljic.data.ingest import load_portfolio
from kraljic.data.validate import assert_required_columns
from kraljic.scoring.multi_attribute import mavf_score, mavf_sensitivity
from kraljic.scoring.single_attribute import savf_score
from kraljic.utils.logging import run_metadata, write_json


def _sha256_df(df: pd.DataFrame) -> str:
    h = hashlib.sha256()
    h.update("||".join(df.columns.astype(str).tolist()).encode("utf-8"))
    h.update("||".join(map(str, df.dtypes.tolist())).encode("utf-8"))
    row_hashes = pd.util.hash_pandas_object(df, index=True).to_numpy()
    h.update(row_hashes.tobytes())
    return h.hexdigest()


def score_portfolio(df_raw: pd.DataFrame, args: argparse.Namespace) -> tuple[pd.DataFrame, dict]:
    assert_required_columns(df_raw, [ID_COL, X_ATTRIBUTE_COL, Y_ATTRIBUTE_COL])
    df = coerce_numeric(df_raw, [X_ATTRIBUTE_COL, Y_ATTRIBUTE_COL])

    decisions: dict = {
        "namespace": ANALYSIS_NAMESPACE,
        "columns": {"id": ID_COL, "x_attribute": X_ATTRIBUTE_COL, "y_attribute": Y_ATTRIBUTE_COL},
        "savf": {
            "x": {"x_low": args.x_low, "x_high": args.x_high, "rho": args.x_rho},
            "y": {"x_low": args.y_low, "x_high": args.y_high, "rho": args.y_rho},
        },
        "mavf": {"x_wt": args.x_wt, "y_wt": args.y_wt},
        "sensitivity": {
            "x_wt_bounds": list(X_WEIGHT_BOUNDS),
            "y_wt_bounds": list(Y_WEIGHT_BOUNDS),
            "n_trials": args.n_trials,
            "seed": args.seed,
        },
        "frontier_quadrant": args.frontier_quadrant,
        "row_filters": [],
    }

    # Rows without both attributes cannot be placed on the matrix.
    n_before = len(df)
    df = df.loc[df[X_ATTRIBUTE_COL].notna() & df[Y_ATTRIBUTE_COL].notna()].reset_index(drop=True)
    decisions["row_filters"].append(
        {
            "rule": "drop_missing_attribute",
            "columns": [X_ATTRIBUTE_COL, Y_ATTRIBUTE_COL],
            "dropped_rows": n_before - len(df),
        }
    )

    # Anchors outside the observed range are allowed; values outside the anchors are flagged.
    for key, col, low, high in [
        ("x", X_ATTRIBUTE_COL, args.x_low, args.x_high),
        ("y", Y_ATTRIBUTE_COL, args.y_low, args.y_high),
    ]:
        decisions["savf"][key]["rows_outside_anchors"] = int(((df[col] < low) | (df[col] > high)).sum())

    scored = df.assign(
        **{
            X_SCORE_COL: savf_score(df[X_ATTRIBUTE_COL], args.x_low, args.x_high, args.x_rho),
            Y_SCORE_COL: savf_score(df[Y_ATTRIBUTE_COL], args.y_low, args.y_high, args.y_rho),
        }
    )
    scored[QUADRANT_COL] = kraljic_quadrant(scored[X_SCORE_COL], scored[Y_SCORE_COL])
    scored[MAVF_COL] = mavf_score(scored[X_SCORE_COL], scored[Y_SCORE_COL], args.x_wt, args.y_wt)
    scored[FRONTIER_COL] = frontier_mask(scored, X_SCORE_COL, Y_SCORE_COL, quadrant=args.frontier_quadrant)

    scored = scored.pipe(
        mavf_sensitivity,
        X_SCORE_COL,
        Y_SCORE_COL,
        *X_WEIGHT_BOUNDS,
        *Y_WEIGHT_BOUNDS,
        n_trials=args.n_trials,
        seed=args.seed,
    )
    return scored, decisions


def main() -> None:
    parser = argparse.ArgumentParser(description="Score a purchasing portfolio and place it on the Kraljic matrix.")
    parser.add_argument("--input", type=Path, default=PORTFOLIO_FILE, help="Portfolio table (.csv, .xlsx, .parquet).")
    parser.add_argument("--nrows", type=int, default=None, help="Optional: read only the first N rows (for tests).")
    parser.add_argument("--x-low", type=float, default=X_LOW)
    parser.add_argument("--x-high", type=float, default=X_HIGH)
    parser.add_argument("--x-rho", type=float, default=X_RHO)
    parser.add_argument("--y-low", type=float, default=Y_LOW)
    parser.add_argument("--y-high", type=float, default=Y_HIGH)
    parser.add_argument("--y-rho", type=float, default=Y_RHO)
    parser.add_argument("--x-wt", type=float, default=X_WEIGHT, help="Swing weight for the x attribute.")
    parser.add_argument("--y-wt", type=float, default=Y_WEIGHT, help="Swing weight for the y attribute.")
    parser.add_argument("--n-trials", type=int, default=SENSITIVITY_TRIALS, help="Monte Carlo weight draws.")
    parser.add_argument("--seed", type=int, default=RANDOM_SEED)
    parser.add_argument(
        "--frontier-quadrant",
        default="top.right",
        choices=list(FRONTIER_QUADRANTS),
    )
    parser.add_argument("--out-parquet", type=Path, default=SCORED_FILE, help="Output parquet path.")
    parser.add_argument("--tables-dir", type=Path, default=TABLES_DIR, help="Directory for CSV tables.")
    parser.add_argument(
        "--decisions-json",
        type=Path,
        default=LOGS_DIR / "scoring_decisions.json",
        help="Output JSON file for scoring decisions and run metadata.",
    )
    args = parser.parse_args()

    if not args.input.exists():
        raise SystemExit(f"Input file not found: {args.input}")
    if args.nrows is not None and args.nrows <= 0:
        raise SystemExit("--nrows must be a positive integer.")
    if args.n_trials <= 0:
        raise SystemExit("--n-trials must be a positive integer.")

    df_raw = load_portfolio(args.input, nrows=args.nrows)
    try:
        scored, decisions = score_portfolio(df_raw, args)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    content_hash = _sha256_df(scored)

    args.out_parquet.parent.mkdir(parents=True, exist_ok=True)
    scored.to_parquet(args.out_parquet, index=False)

    tables_dir = args.tables_dir
    tables_dir.mkdir(parents=True, exist_ok=True)
    scored_csv = tables_dir / "portfolio_scored.csv"
    scored.to_csv(scored_csv, index=False)
    quadrant_csv = tables_dir / "quadrant_counts.csv"
    quadrant_counts(scored[QUADRANT_COL]).to_csv(quadrant_csv, index=False)
    missingness_csv = tables_dir / "missingness_portfolio.csv"
    summarize_missingness(df_raw).to_csv(missingness_csv, index=False)

    payload = run_metadata(
        **decisions,
        input_file=str(args.input),
        raw_rows=len(df_raw),
        scored_rows=len(scored),
        frontier_rows=int(scored[FRONTIER_COL].sum()),
        output_parquet=str(args.out_parquet),
        content_hash_sha256=content_hash,
    )
    write_json(args.decisions_json, payload)

    print(f"Wrote {args.out_parquet}")
    print(f"Wrote {scored_csv}")
    print(f"Wrote {quadrant_csv}")
    print(f"Wrote {missingness_csv}")
    print(f"Wrote {args.decisions_json}")


if __name__ == "__main__":
    main()
