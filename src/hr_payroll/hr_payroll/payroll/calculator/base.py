from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Tuple

from ...attendance.model import AttendanceRecord
from ...common.validators import as_float
from ...core.constants import HOURS_DECIMALS, MONEY_DECIMALS, OVERTIME_MULTIPLIER, TDS_RATE
from ...employees.model import Employee
from ..model import PayrollRow

ABSENCE_STATUSES = frozenset({"ABSENT", "C/I MISS", "C/O MISS", "TRUE"})


def money(value: float) -> float:
    return round(float(value), MONEY_DECIMALS)


def settle(total_pay: float, allowance: float, deduction: float, advance: float) -> Tuple[float, float, float, float]:
    """total pay -> (salary_total, tds, gross, net_payment), all rounded."""

    salary_total = total_pay + allowance - deduction
    tds = salary_total * TDS_RATE
    gross = salary_total - tds
    net_payment = gross - advance
    return money(salary_total), money(tds), money(gross), money(net_payment)


@dataclass(frozen=True)
class PayComponents:
    rate: float
    daily_rate: float
    regular_pay: float
    ot_pay: float
    deduction: float


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern per wage basis).

    Subclasses only decide the rates and the absence deduction; hour totals,
    allowance, TDS and net payment are shared.
    """

    @abstractmethod
    def components(
        self,
        employee: Employee,
        *,
        regular_hours: float,
        overtime_hours: float,
        absent_days: int,
        days_in_month: int,
    ) -> PayComponents:
        raise NotImplementedError

    def calculate(self, employee: Employee, records: Sequence[AttendanceRecord], *, days_in_month: int) -> PayrollRow:
        regular_hours = sum(r.regular_hours for r in records)
        overtime_hours = sum(r.overtime_hours for r in records)
        absent_days = sum(1 for r in records if r.status.value.upper() in ABSENCE_STATUSES)

        parts = self.components(
            employee,
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            absent_days=absent_days,
            days_in_month=days_in_month,
        )
        total_pay = parts.regular_pay + parts.ot_pay
        allowance = as_float(employee.allowance)
        salary_total, tds, gross, net_payment = settle(total_pay, allowance, parts.deduction, 0.0)

        return PayrollRow(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            wage_basis=employee.wage_basis,
            total_hours=round(regular_hours + overtime_hours, HOURS_DECIMALS),
            regular_hours=round(regular_hours, HOURS_DECIMALS),
            overtime_hours=round(overtime_hours, HOURS_DECIMALS),
            rate=money(parts.rate),
            daily_rate=money(parts.daily_rate),
            regular_pay=money(parts.regular_pay),
            ot_pay=money(parts.ot_pay),
            total_pay=money(total_pay),
            absent_days=absent_days,
            deduction=money(parts.deduction),
            allowance=money(allowance),
            salary_total=salary_total,
            tds=tds,
            gross=gross,
            advance=0.0,
            net_payment=net_payment,
        )

    @staticmethod
    def overtime_pay(overtime_hours: float, hourly_rate: float) -> float:
        return overtime_hours * hourly_rate * OVERTIME_MULTIPLIER
