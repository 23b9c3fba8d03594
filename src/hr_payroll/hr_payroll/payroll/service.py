from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.selectors import records_by_employee, records_in_month
from ..common.nepali_calendar import bs_month_bounds, days_in_bs_month
from ..common.validators import as_float
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import money, settle
from .calculator.factory import PayrollCalculatorFactory
from .model import PayrollRow

_TOTAL_FIELDS = (
    "total_hours",
    "overtime_hours",
    "regular_hours",
    "regular_pay",
    "ot_pay",
    "total_pay",
    "absent_days",
    "deduction",
    "allowance",
    "salary_total",
    "tds",
    "gross",
    "advance",
    "net_payment",
)


@dataclass(frozen=True)
class PayrollReport:
    rows: List[PayrollRow]
    totals: Dict[str, float]


class PayrollService:
    """Payroll generation: a pure computation over a roster and a month of attendance.

    The repositories are only used by generate_for_month() to load those inputs.
    """

    def __init__(
        self,
        attendance: Optional[AttendanceRepository] = None,
        employees: Optional[EmployeeRepository] = None,
        *,
        calculator_factory: Optional[PayrollCalculatorFactory] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = calculator_factory or PayrollCalculatorFactory()

    def generate_payroll(
        self,
        bs_year: int,
        bs_month: int,
        employees: Iterable[Employee],
        attendance_records: Iterable[AttendanceRecord],
    ) -> List[PayrollRow]:
        working = [e for e in employees if e.is_working]
        month_records = records_in_month(attendance_records, bs_year, bs_month)
        grouped = records_by_employee(working, month_records)
        days_in_month = days_in_bs_month(bs_year, bs_month)

        rows: List[PayrollRow] = []
        for employee in working:
            calculator = self._factory.for_basis(employee.wage_basis)
            rows.append(calculator.calculate(employee, grouped[employee.employee_id], days_in_month=days_in_month))
        return rows

    def generate_for_month(self, bs_year: int, bs_month: int) -> PayrollReport:
        if self._attendance is None or self._employees is None:
            raise RuntimeError("PayrollService needs repositories to load a month")
        start, end = bs_month_bounds(bs_year, bs_month)
        rows = self.generate_payroll(
            bs_year,
            bs_month,
            self._employees.list_all(),
            self._attendance.list_between(start_date=start, end_date=end),
        )
        return PayrollReport(rows=rows, totals=self.totals(rows))

    def quick_adjust(
        self,
        rows: Sequence[PayrollRow],
        employee_id: int,
        *,
        allowance,
        advance,
    ) -> List[PayrollRow]:
        """View-only override of one row's allowance/advance.

        total_pay and deduction stay as computed; nothing is written back.
        """

        out: List[PayrollRow] = []
        found = False
        for row in rows:
            if row.employee_id == int(employee_id):
                found = True
                allowance_value = money(as_float(allowance))
                advance_value = money(as_float(advance))
                salary_total, tds, gross, net_payment = settle(
                    row.total_pay, allowance_value, row.deduction, advance_value
                )
                row = replace(
                    row,
                    allowance=allowance_value,
                    advance=advance_value,
                    salary_total=salary_total,
                    tds=tds,
                    gross=gross,
                    net_payment=net_payment,
                )
            out.append(row)
        if not found:
            raise NotFoundError(f"Employee {employee_id} is not in this payroll")
        return out

    def totals(self, rows: Iterable[PayrollRow]) -> Dict[str, float]:
        sums: Dict[str, float] = {f: 0.0 for f in _TOTAL_FIELDS}
        for row in rows:
            for f in _TOTAL_FIELDS:
                sums[f] += getattr(row, f) or 0
        return {f: (int(v) if f == "absent_days" else money(v)) for f, v in sums.items()}
