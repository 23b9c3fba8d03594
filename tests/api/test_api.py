from __future__ import annotations

import io
from dataclasses import replace

import pytest
from flask import Flask

from src.hr_payroll.hr_payroll.analytics.controller import register as register_analytics
from src.hr_payroll.hr_payroll.analytics.service import AnalyticsService
from src.hr_payroll.hr_payroll.attendance.controller import register as register_attendance
from src.hr_payroll.hr_payroll.attendance.service import AttendanceService
from src.hr_payroll.hr_payroll.common.validators import normalize_name
from src.hr_payroll.hr_payroll.container import Container
from src.hr_payroll.hr_payroll.employees.controller import register as register_employees
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.employees.service import EmployeeService
from src.hr_payroll.hr_payroll.payroll.controller import register as register_payroll
from src.hr_payroll.hr_payroll.payroll.service import PayrollService

YEAR, MONTH = 2080, 0


class FakeEmployeesRepo:
    def __init__(self):
        self._by_key = {}

    def list_all(self):
        return list(self._by_key.values())

    def create_if_absent(self, *, name, status, wage_basis, wage_amount, allowance, created_by):
        key = normalize_name(name)
        if key not in self._by_key:
            self._by_key[key] = Employee(
                employee_id=len(self._by_key) + 1,
                name=name,
                status=status,
                wage_basis=wage_basis,
                wage_amount=wage_amount,
                allowance=allowance,
                created_by=created_by,
            )
        return self._by_key[key]


class FakeAttendanceRepo:
    def __init__(self):
        self.rows = {}

    def list_between(self, *, start_date, end_date):
        return [r for r in self.rows.values() if start_date <= r.work_date <= end_date]

    def get_by_id(self, record_id):
        return self.rows.get(int(record_id))

    def write_batch(self, records):
        for r in records:
            existing = next(
                (rid for rid, x in self.rows.items() if (x.employee_name, x.work_date) == (r.employee_name, r.work_date)),
                None,
            )
            rid = existing or len(self.rows) + 1
            self.rows[rid] = replace(r, record_id=rid)
        return len(records)

    def update_record(self, record):
        if record.record_id not in self.rows:
            return False
        self.rows[record.record_id] = record
        return True

    def delete_by_id(self, record_id):
        return self.rows.pop(int(record_id), None) is not None

    def delete_between(self, *, start_date, end_date):
        doomed = [rid for rid, r in self.rows.items() if start_date <= r.work_date <= end_date]
        for rid in doomed:
            del self.rows[rid]
        return len(doomed)


@pytest.fixture()
def client():
    employees_repo = FakeEmployeesRepo()
    attendance_repo = FakeAttendanceRepo()
    employee_service = EmployeeService(employees_repo)
    container = Container(
        conn=None,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=employee_service,
        attendance_service=AttendanceService(attendance_repo, employee_service, batch_size=2),
        payroll_service=PayrollService(attendance_repo, employees_repo),
        analytics_service=AnalyticsService(attendance_repo, employees_repo),
    )
    app = Flask(__name__)
    app.config["TESTING"] = True
    register_employees(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_analytics(app, container)
    return app.test_client()


CSV = b"""Name,Day,On Duty,Off Duty,Clock In,Clock Out,Status,Total Hours
Ram Sharma,1,09:00,17:00,09:00,17:00,,8
Ram Sharma,2,09:00,17:00,09:20,17:00,,7.67
Sita Thapa,1,09:00,17:00,,,ABSENT,0
Ghost,45,09:00,17:00,09:00,17:00,,8
"""


def _upload(client, data=CSV, filename="march.csv", **form):
    fields = {"bs_year": str(YEAR), "bs_month": str(MONTH), "imported_by": "hr", **form}
    fields["file"] = (io.BytesIO(data), filename)
    return client.post("/api/attendance/import", data=fields, content_type="multipart/form-data")


def test_import_reports_summary(client):
    resp = _upload(client)

    assert resp.status_code == 200
    assert resp.get_json() == {"imported": 3, "new_employees": ["Ram Sharma", "Sita Thapa"], "skipped": 1}

    roster = client.get("/api/employees").get_json()["employees"]
    assert sorted(e["name"] for e in roster) == ["Ram Sharma", "Sita Thapa"]
    assert all(e["created_by"] == "hr" for e in roster)


def test_import_without_name_column_is_rejected(client):
    resp = _upload(client, data=b"Employee,Day\nRam,1\n")

    assert resp.status_code == 400
    assert "Name" in resp.get_json()["error"]
    assert client.get("/api/employees").get_json()["employees"] == []


def test_import_requires_valid_month(client):
    assert _upload(client, bs_month="12").status_code == 400
    assert _upload(client, bs_year="abc").status_code == 400


def test_list_edit_and_delete_attendance(client):
    _upload(client)
    records = client.get(f"/api/attendance?bs_year={YEAR}&bs_month={MONTH}").get_json()["records"]
    assert len(records) == 3
    sita = next(r for r in records if r["employee_name"] == "Sita Thapa")
    assert sita["status"] == "Absent"

    resp = client.patch(f"/api/attendance/{sita['record_id']}", json={"remarks": "sick leave"})
    assert resp.status_code == 200
    assert resp.get_json()["remarks"] == "sick leave"

    assert client.patch("/api/attendance/999", json={"status": "Present"}).status_code == 404
    assert client.delete(f"/api/attendance/{sita['record_id']}").get_json() == {"deleted": 1}
    assert client.delete(f"/api/attendance/{sita['record_id']}").status_code == 404

    resp = client.delete(f"/api/attendance/month?bs_year={YEAR}&bs_month={MONTH}")
    assert resp.get_json() == {"deleted": 2}


def test_payroll_and_adjust(client):
    client.post("/api/employees", json={"name": "Ram Sharma", "wage_basis": "Hourly", "wage_amount": 100})
    _upload(client)

    body = client.get(f"/api/payroll?bs_year={YEAR}&bs_month={MONTH}").get_json()
    ram = next(r for r in body["rows"] if r["employee_name"] == "Ram Sharma")
    assert ram["wage_basis"] == "Hourly"
    assert ram["total_pay"] == round(15.67 * 100, 2)
    assert body["totals"]["absent_days"] == 1

    resp = client.post(
        "/api/payroll/adjust",
        json={"rows": body["rows"], "employee_id": ram["employee_id"], "allowance": 100, "advance": 50},
    )
    adjusted = next(r for r in resp.get_json()["rows"] if r["employee_id"] == ram["employee_id"])
    assert adjusted["salary_total"] == round(ram["total_pay"] + 100, 2)
    assert adjusted["advance"] == 50

    missing = client.post("/api/payroll/adjust", json={"rows": body["rows"], "employee_id": 999})
    assert missing.status_code == 404


def test_analytics_endpoint(client):
    _upload(client)
    body = client.get(f"/api/analytics?bs_year={YEAR}&bs_month={MONTH}").get_json()

    assert {p["employee_name"] for p in body["punctuality"]} == {"Ram Sharma", "Sita Thapa"}
    assert len(body["day_of_week"]) == 6
    assert client.get("/api/analytics?bs_year=2080").status_code == 400


def test_create_employee_validation(client):
    assert client.post("/api/employees", json={"name": " "}).status_code == 400
    resp = client.post("/api/employees", json={"name": "Hari", "wage_amount": "30,000"})
    assert resp.status_code == 201
    assert resp.get_json()["wage_amount"] == 30000.0


def test_month_outside_calendar_range_is_bad_request(client):
    payroll = client.get("/api/payroll?bs_year=1800&bs_month=0")
    analytics = client.get("/api/analytics?bs_year=1800&bs_month=0")

    assert payroll.status_code == 400
    assert analytics.status_code == 400
    assert "1800" in payroll.get_json()["error"]
