from __future__ import annotations

import argparse
import os
import sys
import tempfile
from pathlib import Path

_mpl_cache_dir = Path(tempfile.gettempdir()) / "matplotlib"
_mpl_cache_dir.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", str(_mpl_cache_dir))

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from kraljic.config import OUTPUTS_DIR  # noqa: E402
from kraljic.reporting.figures import save_figure, savf_plot, savf_plot_rho_error  # noqa: E402
from kraljic.scoring.single_attribute import savf_preferred_rho, savf_rho_error  # noqa: E402
from kraljic.utils.logging import run_metadata, write_json  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Fit the exponential value function curvature (rho) to elicited points."
    )
    parser.add_argument("--desired-x", type=float, nargs="+", required=True, help="Elicited attribute values.")
    parser.add_argument("--desired-v", type=float, nargs="+", required=True, help="Elicited value scores.")
    parser.add_argument("--x-low", type=float, required=True)
    parser.add_argument("--x-high", type=float, required=True)
    parser.add_argument("--rho-low", type=float, default=0.0)
    parser.add_argument("--rho-high", type=float, default=1.0)
    parser.add_argument("--name", default="attribute", help="Label used in output file names.")
    parser.add_argument("--outdir", type=Path, default=OUTPUTS_DIR, help="Output directory (default: outputs/).")
    args = parser.parse_args()

    if len(args.desired_x) != len(args.desired_v):
        raise SystemExit("--desired-x and --desired-v must have the same number of values.")

    try:
        errors = savf_rho_error(
            args.desired_x, args.desired_v, args.x_low, args.x_high, rho_low=args.rho_low, rho_high=args.rho_high
        )
        rho = savf_preferred_rho(
            args.desired_x, args.desired_v, args.x_low, args.x_high, rho_low=args.rho_low, rho_high=args.rho_high
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    tables_dir = args.outdir / "tables"
    figures_dir = args.outdir / "figures"
    logs_dir = args.outdir / "logs"
    tables_dir.mkdir(parents=True, exist_ok=True)
    figures_dir.mkdir(parents=True, exist_ok=True)

    errors_csv = tables_dir / f"rho_error_{args.name}.csv"
    errors.to_csv(errors_csv, index=False)

    fig, ax = plt.subplots(figsize=(7, 5))
    savf_plot_rho_error(
        args.desired_x, args.desired_v, args.x_low, args.x_high, rho_low=args.rho_low, rho_high=args.rho_high, ax=ax
    )
    fig.tight_layout()
    save_figure(fig, figures_dir / f"rho_error_{args.name}.png")
    plt.close(fig)

    fig, ax = plt.subplots(figsize=(7, 5))
    savf_plot(args.desired_x, args.desired_v, args.x_low, args.x_high, rho, ax=ax)
    fig.tight_layout()
    save_figure(fig, figures_dir / f"savf_fit_{args.name}.png")
    plt.close(fig)

    result_json = logs_dir / f"preferred_rho_{args.name}.json"
    write_json(
        result_json,
        run_metadata(
            name=args.name,
            desired_x=args.desired_x,
            desired_v=args.desired_v,
            x_low=args.x_low,
            x_high=args.x_high,
            rho_low=args.rho_low,
            rho_high=args.rho_high,
            preferred_rho=rho,
            min_squared_error=float(errors["delta"].min()),
        ),
    )
    print(f"Preferred rho for {args.name}: {rho:.4f}")
    print(f"Wrote {errors_csv}")
    print(f"Wrote {result_json}")


if __name__ == "__main__":
    main()
