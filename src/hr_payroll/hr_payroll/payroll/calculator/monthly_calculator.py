from __future__ import annotations

from ...common.validators import as_float
from ...core.constants import BASE_DAY_HOURS
from ...employees.model import Employee
from .base import PayComponents, PayrollCalculator


class MonthlyPayrollCalculator(PayrollCalculator):
    """Monthly salary spread over the actual length of the Nepali month.

    daily = salary / days_in_month, hourly = daily / 8; each absent day deducts one daily rate.
    """

    def components(
        self,
        employee: Employee,
        *,
        regular_hours: float,
        overtime_hours: float,
        absent_days: int,
        days_in_month: int,
    ) -> PayComponents:
        salary = as_float(employee.wage_amount)
        daily_rate = salary / days_in_month if days_in_month > 0 else 0.0
        hourly_rate = daily_rate / BASE_DAY_HOURS
        return PayComponents(
            rate=hourly_rate,
            daily_rate=daily_rate,
            regular_pay=regular_hours * hourly_rate,
            ot_pay=self.overtime_pay(overtime_hours, hourly_rate),
            deduction=absent_days * daily_rate,
        )
