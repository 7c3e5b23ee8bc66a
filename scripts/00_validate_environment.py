import argparse
import platform
import sys

from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from kraljic.config import LOGS_DIR, PORTFOLIO_FILE
from kraljic.utils.logging import package_versions, write_json


def main() -> None:
    parser = argparse.ArgumentParser(description="Record interpreter and package versions.")
    parser.add_argument("--logs-dir", type=Path, default=LOGS_DIR)
    args = parser.parse_args()

    info = {
        "python_version": sys.version,
        "platform": platform.platform(),
        "portfolio_file_exists": PORTFOLIO_FILE.exists(),
        "packages": package_versions(),
    }
    out_path = args.logs_dir / "environment_check.json"
    write_json(out_path, info)
    print(f"Wrote {out_path}")


if __name__ == "__main__":
    main()
