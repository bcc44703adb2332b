"""Generate (or preview) salary slips for one month from the command line.

    python scripts/run_payroll.py --month 3 --year 2025
    python scripts/run_payroll.py --month 3 --year 2025 --user-id 7 --overwrite
    python scripts/run_payroll.py --month 3 --year 2025 --preview
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.presence_payroll.presence_payroll.container import build_container
from src.presence_payroll.presence_payroll.core.exceptions import DomainError
from src.presence_payroll.presence_payroll.main import configure_logging


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run monthly payroll from attendance records.")
    parser.add_argument("--month", type=int, required=True)
    parser.add_argument("--year", type=int, required=True)
    parser.add_argument("--user-id", type=int, default=None, help="only this employee")
    parser.add_argument("--overwrite", action="store_true", help="refresh existing unlocked slips")
    parser.add_argument("--generated-by", type=int, default=None)
    parser.add_argument("--preview", action="store_true", help="compute without saving")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG)

    try:
        if args.preview:
            report = container.payroll_service.preview(month=args.month, year=args.year, user_id=args.user_id)
        else:
            report = container.payroll_service.generate_slips(
                month=args.month,
                year=args.year,
                user_id=args.user_id,
                overwrite=args.overwrite,
                generated_by=args.generated_by,
            )
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    return 1 if report.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
