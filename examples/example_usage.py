"""Example: drive the payroll service layer directly (no Flask).

Controllers are thin; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.presence_payroll.presence_payroll.container import build_container
from src.presence_payroll.presence_payroll.main import configure_logging


def main():
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG)

    report = container.payroll_service.preview(month=3, year=2025)
    for p in report.previews:
        print(p.user_id, p.snapshot.full_name, p.snapshot.net_salary)
    for e in report.errors:
        print("error:", e.user_id, e.message)


if __name__ == "__main__":
    main()
