from __future__ import annotations

from ...common.validators import as_float
from ...core.constants import BASE_DAY_HOURS
from ...employees.model import Employee
from .base import PayComponents, PayrollCalculator


class HourlyPayrollCalculator(PayrollCalculator):
    """Paid for hours worked only; absences carry no separate deduction."""

    def components(
        self,
        employee: Employee,
        *,
        regular_hours: float,
        overtime_hours: float,
        absent_days: int,
        days_in_month: int,
    ) -> PayComponents:
        hourly_rate = as_float(employee.wage_amount)
        return PayComponents(
            rate=hourly_rate,
            daily_rate=hourly_rate * BASE_DAY_HOURS,
            regular_pay=regular_hours * hourly_rate,
            ot_pay=self.overtime_pay(overtime_hours, hourly_rate),
            deduction=0.0,
        )
