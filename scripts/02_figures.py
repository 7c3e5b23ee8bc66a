from __future__ import annotations

import argparse
import os
import sys
import tempfile
from pathlib import Path

# Matplotlib must be configured before importing pyplot.
_mpl_cache_dir = Path(tempfile.gettempdir()) / "matplotlib"
_mpl_cache_dir.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", str(_mpl_cache_dir))

import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from kraljic.config import (  # noqa: E402
    FIGURES_DIR,
    FRONTIER_QUADRANTS,
    LOGS_DIR,
    MAVF_COL,
    QUADRANT_COL,
    SCORED_FILE,
    X_ATTRIBUTE_COL,
    X_HIGH,
    X_LOW,
    X_RHO,
    X_SCORE_COL,
    Y_ATTRIBUTE_COL,
    Y_HIGH,
    Y_LOW,
    Y_RHO,
    Y_SCORE_COL,
)
from kraljic.data.validate import assert_required_columns  # noqa: E402
from kraljic.reporting.figures import (  # noqa: E402
    frontier_plot,
    kraljic_matrix,
    save_figure,
    savf_plot,
)
from kraljic.scoring.single_attribute import savf_score  # noqa: E402
from kraljic.utils.logging import run_metadata, write_json  # noqa: E402


def _write(fig, path: Path, written: list) -> None:
    save_figure(fig, path)
    plt.close(fig)
    written.append(str(path))


def main() -> None:
    parser = argparse.ArgumentParser(description="Render Kraljic matrix, frontier and value-curve figures.")
    parser.add_argument("--input", type=Path, default=SCORED_FILE, help="Scored portfolio parquet.")
    parser.add_argument("--outdir", type=Path, default=FIGURES_DIR, help="Output directory for figures.")
    parser.add_argument("--logs-dir", type=Path, default=LOGS_DIR)
    parser.add_argument(
        "--frontier-quadrant",
        default="top.right",
        choices=list(FRONTIER_QUADRANTS),
    )
    args = parser.parse_args()

    if not args.input.exists():
        raise SystemExit(f"Scored table not found: {args.input}. Run scripts/01_score_portfolio.py first.")

    df = pd.read_parquet(args.input)
    try:
        assert_required_columns(df, [X_SCORE_COL, Y_SCORE_COL, QUADRANT_COL, MAVF_COL])
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    outdir = args.outdir
    outdir.mkdir(parents=True, exist_ok=True)
    written: list = []

    # Kraljic matrix with quadrant labels
    fig, ax = plt.subplots(figsize=(7, 7))
    kraljic_matrix(df, X_SCORE_COL, Y_SCORE_COL, ax=ax, label_quadrants=True)
    ax.set_title("Kraljic Purchasing Matrix")
    fig.tight_layout()
    _write(fig, outdir / "kraljic_matrix.png", written)

    # Same matrix with the efficient frontier overlaid
    fig, ax = plt.subplots(figsize=(7, 7))
    kraljic_matrix(df, X_SCORE_COL, Y_SCORE_COL, ax=ax)
    frontier_plot(df, X_SCORE_COL, Y_SCORE_COL, quadrant=args.frontier_quadrant, ax=ax, show_points=False)
    ax.set_title(f"Efficient Frontier ({args.frontier_quadrant})")
    fig.tight_layout()
    _write(fig, outdir / "kraljic_matrix_frontier.png", written)

    # Value curves with the scored portfolio shown as reference points
    for label, col, low, high, rho in [
        ("x", X_ATTRIBUTE_COL, X_LOW, X_HIGH, X_RHO),
        ("y", Y_ATTRIBUTE_COL, Y_LOW, Y_HIGH, Y_RHO),
    ]:
        if col not in df.columns:
            continue
        fig, ax = plt.subplots(figsize=(7, 5))
        savf_plot(df[col], savf_score(df[col], low, high, rho), low, high, rho, ax=ax)
        ax.set_xlabel(col)
        fig.tight_layout()
        _write(fig, outdir / f"savf_curve_{label}.png", written)

    # MAVF score distribution by quadrant
    fig, ax = plt.subplots(figsize=(8, 5))
    groups = [(q, g[MAVF_COL].to_numpy()) for q, g in df.groupby(QUADRANT_COL, sort=True)]
    if groups:
        ax.boxplot([g for _, g in groups])
        ax.set_xticks(range(1, len(groups) + 1))
        ax.set_xticklabels([q for q, _ in groups])
    ax.set_ylabel("MAVF score")
    ax.set_title("Multi-attribute Value by Quadrant")
    fig.tight_layout()
    _write(fig, outdir / "mavf_by_quadrant.png", written)

    write_json(
        args.logs_dir / "figures_run_metadata.json",
        run_metadata(input_parquet=str(args.input), outdir=str(outdir), figures=written),
    )
    print(f"Wrote figures to {outdir}/")


if __name__ == "__main__":
    main()
