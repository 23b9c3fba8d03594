from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from src.hr_payroll.hr_payroll.attendance.importer import AttendanceImportPipeline
from src.hr_payroll.hr_payroll.attendance.reader import read_workbook
from src.hr_payroll.hr_payroll.core.exceptions import SpreadsheetFormatError
from src.hr_payroll.hr_payroll.employees.model import Employee

YEAR, MONTH = 2080, 0


class FakeProvisioner:
    def provision(self, name, created_by):
        raise AssertionError(f"unexpected provisioning of {name}")


def _days(sheet):
    result = AttendanceImportPipeline(FakeProvisioner()).run(
        sheet.header, sheet.rows, YEAR, MONTH, [Employee(employee_id=1, name="Ram")], "hr"
    )
    return [r.day_of_month for r in result.processed_rows]


def test_blank_csv_row_keeps_its_day():
    data = b"Name,Clock In,Clock Out\nRam,09:00,17:00\n\nRam,09:00,17:00\n"

    (sheet,) = read_workbook(io.BytesIO(data), filename="march.csv")

    assert sheet.header == ["Name", "Clock In", "Clock Out"]
    assert sheet.rows[1] == [None, None, None]
    assert _days(sheet) == [1, 3]


def test_blank_xlsx_row_keeps_its_day():
    wb = Workbook()
    ws = wb.active
    ws.title = "Baisakh"
    for col, value in enumerate(["Name", "Clock In", "Clock Out"], start=1):
        ws.cell(row=1, column=col, value=value)
    for row in (2, 4):
        for col, value in enumerate(["Ram", "09:00", "17:00"], start=1):
            ws.cell(row=row, column=col, value=value)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)

    (sheet,) = read_workbook(buf, filename="march.xlsx")

    assert sheet.name == "Baisakh"
    assert len(sheet.rows) == 3
    assert _days(sheet) == [1, 3]


def test_blank_rows_around_the_table_are_trimmed():
    data = b",,\nName,Clock In,Clock Out\nRam,09:00,17:00\n,,\n,,\n"

    (sheet,) = read_workbook(io.BytesIO(data), filename="march.csv")

    assert sheet.header == ["Name", "Clock In", "Clock Out"]
    assert sheet.rows == [["Ram", "09:00", "17:00"]]


def test_blank_and_unreadable_uploads_are_rejected():
    with pytest.raises(SpreadsheetFormatError):
        read_workbook(io.BytesIO(b",,\n,,\n"), filename="empty.csv")
    with pytest.raises(SpreadsheetFormatError):
        read_workbook(io.BytesIO(b"not a workbook"), filename="broken.xlsx")
