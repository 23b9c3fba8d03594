"""Example: generate one Nepali month's payroll through the service layer (no Flask).

Usage: python examples/example_usage.py 2081 3   (year, 0-based month)
"""

import importlib
import sys

from config import get_settings_module

from src.hr_payroll.hr_payroll.container import build_container


def main():
    bs_year, bs_month = int(sys.argv[1]), int(sys.argv[2])
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    report = container.payroll_service.generate_for_month(bs_year, bs_month)
    for row in report.rows:
        print(f"{row.employee_name:<30} {row.wage_basis.value:<8} {row.net_payment:>12,.2f}")
    print(f"{'TOTAL':<39} {report.totals['net_payment']:>12,.2f}")


if __name__ == "__main__":
    main()
