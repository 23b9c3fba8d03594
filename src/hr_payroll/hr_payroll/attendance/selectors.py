"""Read-side helpers shared by payroll and analytics."""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..common.nepali_calendar import is_in_bs_month
from ..common.validators import normalize_name
from ..employees.model import Employee
from .model import AttendanceRecord


def records_in_month(records: Iterable[AttendanceRecord], bs_year: int, bs_month: int) -> List[AttendanceRecord]:
    return [r for r in records if is_in_bs_month(r.work_date, bs_year, bs_month)]


def records_by_employee(
    employees: Iterable[Employee], records: Iterable[AttendanceRecord]
) -> Dict[int, List[AttendanceRecord]]:
    """Group records under employee ids, chronologically.

    A record joins by its stamped employee_id when that id is on the roster,
    otherwise by normalized employee name.
    """

    employees = list(employees)
    by_id = {e.employee_id: e for e in employees}
    by_name = {normalize_name(e.name): e for e in employees}
    grouped: Dict[int, List[AttendanceRecord]] = {e.employee_id: [] for e in employees}

    for r in records:
        employee = by_id.get(r.employee_id) if r.employee_id is not None else None
        if employee is None:
            employee = by_name.get(normalize_name(r.employee_name))
        if employee is not None:
            grouped[employee.employee_id].append(r)

    for items in grouped.values():
        items.sort(key=lambda r: r.work_date)
    return grouped
