from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_DIR = PROJECT_ROOT / "data"
RAW_DIR = DATA_DIR / "raw"
PROCESSED_DIR = DATA_DIR / "processed"

OUTPUTS_DIR = PROJECT_ROOT / "outputs"
FIGURES_DIR = OUTPUTS_DIR / "figures"
TABLES_DIR = OUTPUTS_DIR / "tables"
LOGS_DIR = OUTPUTS_DIR / "logs"

# Sample purchasing portfolio: one row per product/service contract.
PORTFOLIO_FILE = RAW_DIR / "psc.csv"
SCORED_FILE = PROCESSED_DIR / "psc_scored.parquet"

# Identifier recorded in outputs/ metadata
ANALYSIS_NAMESPACE = "kraljic_portfolio_v1"

ID_COL = "PSC"
X_ATTRIBUTE_COL = "x_attribute"
Y_ATTRIBUTE_COL = "y_attribute"
X_SCORE_COL = "x_SAVF_score"
Y_SCORE_COL = "y_SAVF_score"
QUADRANT_COL = "quadrant"
MAVF_COL = "MAVF_score"
FRONTIER_COL = "on_frontier"

# Single attribute value function anchors and elicited curvature.
X_LOW, X_HIGH, X_RHO = 1.0, 5.0, 0.653
Y_LOW, Y_HIGH, Y_RHO = 1.0, 10.0, 0.7

# Multi-attribute swing weights (point values and sensitivity bounds).
X_WEIGHT = 0.65
Y_WEIGHT = 0.35
X_WEIGHT_BOUNDS = (0.55, 0.75)
Y_WEIGHT_BOUNDS = (0.25, 0.45)

# Frozen analysis protocol
QUADRANT_MIDPOINT = 0.5
QUADRANT_LABELS = ("Leverage", "Non-critical", "Strategic", "Bottleneck")
FRONTIER_QUADRANTS = ("top.right", "bottom.right", "bottom.left", "top.left")
RHO_GRID_STEPS = 10000
CURVE_POINTS = 1000
SENSITIVITY_TRIALS = 1000
RANDOM_SEED = 2026
