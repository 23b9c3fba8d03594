from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from ..core.enums import AttendanceStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    employee_name is the join key used by payroll/analytics; employee_id is
    stamped when the roster lookup at write time is unambiguous.
    """

    work_date: date
    bs_date: str
    employee_name: str
    status: AttendanceStatus
    on_duty: Optional[str] = None
    off_duty: Optional[str] = None
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None
    gross_hours: float = 0.0
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    remarks: Optional[str] = None
    imported_by: Optional[str] = None
    employee_id: Optional[int] = None
    source_sheet: Optional[str] = None
    record_id: Optional[int] = None


@dataclass(frozen=True)
class ImportedRow:
    """A processed spreadsheet row: the record to persist plus import context."""

    record: AttendanceRecord
    day_of_month: int
    weekday: int
    extras: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ImportResult:
    processed_rows: List[ImportedRow]
    new_employee_names: List[str]
    new_employees: List[Employee]
    skipped_count: int

    @property
    def records(self) -> List[AttendanceRecord]:
        return [r.record for r in self.processed_rows]


@dataclass(frozen=True)
class ImportSummary:
    """What the upload flow reports back in one notification."""

    imported: int
    new_employees: List[str]
    skipped: int

    def as_dict(self) -> dict:
        return {"imported": self.imported, "new_employees": list(self.new_employees), "skipped": self.skipped}


@dataclass(frozen=True)
class RecordEdit:
    """Fields an operator may change on a stored record; None means unchanged."""

    on_duty: Optional[str] = None
    off_duty: Optional[str] = None
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None
    status: Optional[str] = None
    remarks: Optional[str] = None
