from __future__ import annotations

import logging

import pytest

from src.hr_payroll.hr_payroll.attendance.importer import (
    AttendanceImportPipeline,
    import_attendance,
    reconcile_hours,
)
from src.hr_payroll.hr_payroll.common.nepali_calendar import days_in_bs_month, resolve_bs_date
from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus
from src.hr_payroll.hr_payroll.core.exceptions import SpreadsheetFormatError
from src.hr_payroll.hr_payroll.employees.model import Employee

HEADER = ["Name", "Day", "On Duty", "Off Duty", "Clock In", "Clock Out", "Status", "Total Hours", "Remarks"]
YEAR, MONTH = 2080, 0


class FakeProvisioner:
    def __init__(self, fail_for: set[str] | None = None):
        self.calls: list[tuple[str, str]] = []
        self._fail_for = fail_for or set()
        self._next_id = 100

    def provision(self, name, created_by):
        self.calls.append((name, created_by))
        if name in self._fail_for:
            raise RuntimeError("database unavailable")
        self._next_id += 1
        return Employee(employee_id=self._next_id, name=name, created_by=created_by)


def _row(name, day, clock_in="09:00", clock_out="17:00", status="", total=8):
    return [name, day, "09:00", "17:00", clock_in, clock_out, status, total, None]


def test_new_name_is_provisioned_once_across_rows():
    provisioner = FakeProvisioner()
    roster = [Employee(employee_id=1, name="Ram Sharma")]
    rows = [_row("Sita Thapa", 1), _row("sita  thapa", 2), _row("Ram Sharma", 1)]

    result = AttendanceImportPipeline(provisioner).run(HEADER, rows, YEAR, MONTH, roster, "hr")

    assert provisioner.calls == [("Sita Thapa", "hr")]
    assert result.new_employee_names == ["Sita Thapa"]
    assert len(result.processed_rows) == 3
    sita = [r.record for r in result.processed_rows if r.record.employee_id == 101]
    assert len(sita) == 2
    assert {r.employee_name for r in sita} == {"Sita Thapa"}


def test_roster_is_not_mutated():
    roster = [Employee(employee_id=1, name="Ram Sharma")]
    import_attendance(HEADER, [_row("New Person", 1)], YEAR, MONTH, roster, "hr", provisioner=FakeProvisioner())
    assert [e.name for e in roster] == ["Ram Sharma"]


def test_invalid_day_is_skipped_and_counted_without_provisioning():
    provisioner = FakeProvisioner()
    bad_day = days_in_bs_month(YEAR, MONTH) + 1
    rows = [_row("Ghost", bad_day), _row("Ram Sharma", 1)]

    result = AttendanceImportPipeline(provisioner).run(
        HEADER, rows, YEAR, MONTH, [Employee(employee_id=1, name="Ram Sharma")], "hr"
    )

    assert result.skipped_count == 1
    assert len(result.processed_rows) == 1
    assert provisioner.calls == []
    assert result.new_employees == []


def test_missing_name_column_aborts():
    provisioner = FakeProvisioner()
    with pytest.raises(SpreadsheetFormatError):
        AttendanceImportPipeline(provisioner).run(["Employee", "Day"], [["A", 1]], YEAR, MONTH, [], "hr")
    assert provisioner.calls == []


def test_blank_names_are_dropped_silently():
    result = AttendanceImportPipeline(FakeProvisioner()).run(
        HEADER, [_row("", 1), _row(None, 2), _row("   ", 3)], YEAR, MONTH, [], "hr"
    )
    assert result.processed_rows == []
    assert result.skipped_count == 0


def test_provisioning_failure_drops_rows_and_logs(caplog):
    provisioner = FakeProvisioner(fail_for={"Broken Name"})
    rows = [_row("Broken Name", 1), _row("Broken Name", 2), _row("Good Name", 1)]

    with caplog.at_level(logging.ERROR):
        result = AttendanceImportPipeline(provisioner).run(HEADER, rows, YEAR, MONTH, [], "hr")

    assert [r.record.employee_name for r in result.processed_rows] == ["Good Name"]
    assert result.new_employee_names == ["Good Name"]
    assert result.skipped_count == 0
    assert "Broken Name" in caplog.text


def test_day_defaults_to_row_position():
    header = ["Name", "Clock In", "Clock Out", "Total Hours"]
    rows = [["Ram", "09:00", "17:00", 8], ["Ram", "09:00", "17:00", 8]]

    result = AttendanceImportPipeline(FakeProvisioner()).run(
        header, rows, YEAR, MONTH, [Employee(employee_id=1, name="Ram")], "hr"
    )

    assert [r.day_of_month for r in result.processed_rows] == [1, 2]
    assert result.processed_rows[1].record.work_date == resolve_bs_date(YEAR, MONTH, 2).ad_date


def test_non_finite_day_falls_back_to_row_position():
    header = ["Name", "Day", "Clock In", "Clock Out"]
    rows = [["Ram", "inf", "09:00", "17:00"], ["Ram", "-Infinity", "09:00", "17:00"], ["Ram", 5, "09:00", "17:00"]]

    result = AttendanceImportPipeline(FakeProvisioner()).run(
        header, rows, YEAR, MONTH, [Employee(employee_id=1, name="Ram")], "hr"
    )

    assert [r.day_of_month for r in result.processed_rows] == [1, 2, 5]
    assert result.skipped_count == 0


def test_record_fields_are_normalized():
    header = HEADER + ["Rate", "Advance"]
    row = ["Ram", 3, 0.375, "5:00 PM", "9:07", "18:30:00", "", 10, "  late bus ", "250", "1,000"]

    result = AttendanceImportPipeline(FakeProvisioner()).run(
        header, [row], YEAR, MONTH, [Employee(employee_id=1, name="Ram")], "hr", source_sheet="Sheet1"
    )
    imported = result.processed_rows[0]
    record = imported.record
    resolved = resolve_bs_date(YEAR, MONTH, 3)

    assert record.work_date == resolved.ad_date
    assert record.bs_date == resolved.bs_date
    assert (record.on_duty, record.off_duty, record.clock_in, record.clock_out) == ("09:00", "17:00", "09:07", "18:30")
    assert (record.gross_hours, record.regular_hours, record.overtime_hours) == (10.0, 8.0, 2.0)
    assert record.remarks == "late bus"
    assert record.imported_by == "hr"
    assert record.source_sheet == "Sheet1"
    assert record.employee_id == 1
    assert imported.extras == {"rate": 250.0, "advance": 1000.0}
    expected = AttendanceStatus.SATURDAY if resolved.is_saturday else AttendanceStatus.PRESENT
    assert record.status == expected


def test_unparseable_times_degrade_to_missing_punch():
    day = next(d for d in range(1, 8) if not resolve_bs_date(YEAR, MONTH, d).is_saturday)
    result = AttendanceImportPipeline(FakeProvisioner()).run(
        HEADER, [_row("Ram", day, clock_in="??", clock_out="17:00", total=0)], YEAR, MONTH,
        [Employee(employee_id=1, name="Ram")], "hr",
    )
    record = result.records[0]
    assert record.clock_in is None
    assert record.status == AttendanceStatus.CLOCK_IN_MISS


@pytest.mark.parametrize(
    "total, normal, ot, expected",
    [
        (10, 0, 0, (10.0, 8.0, 2.0)),
        (6, 0, 0, (6.0, 6.0, 0.0)),
        (0, 8, 1.5, (9.5, 8.0, 1.5)),
        (9, 8, 1, (9.0, 8.0, 1.0)),
        (9, 8, 3, (9.0, 8.0, 1.0)),
        (0, 0, 0, (0.0, 0.0, 0.0)),
        (-2, 0, 0, (0.0, 0.0, 0.0)),
    ],
)
def test_reconcile_hours(total, normal, ot, expected):
    assert reconcile_hours(total, normal, ot) == expected
